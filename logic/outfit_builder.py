"""Randomised slot-based outfit assembly with transparent diagnostics."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from logic.contextual_filtering import FilterConfig, apply_context_filters, season_band_for_weather
from logic.outfit_naming import name_outfit
from models.clothing_item import ClothingItem
from models.outfit import Outfit
from models.taxonomy import group_by_slot
from models.weather import WeatherInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComposerConfig:
    dress_probability: float = 0.5
    second_accessory_probability: float = 0.5
    outerwear_below: float = 20.0
    min_items: int = 2
    fallback_min: int = 2
    fallback_max: int = 4


@dataclass(frozen=True)
class OutfitBuildResult:
    item_ids: List[str]
    diagnostics: Dict[str, object]


@dataclass(frozen=True)
class Recommendation:
    status: str
    outfit: Optional[Outfit]
    filters: Dict[str, object]
    diagnostics: Dict[str, object]


def _unique_by_id(items: List[ClothingItem]) -> List[ClothingItem]:
    seen = set()
    unique = []
    for item in items:
        if item.item_id not in seen:
            unique.append(item)
            seen.add(item.item_id)
    return unique


def _pick(rng: random.Random, candidates: List[ClothingItem], chosen: List[ClothingItem]) -> Optional[ClothingItem]:
    taken = {item.item_id for item in chosen}
    available = [item for item in candidates if item.item_id not in taken]
    if not available:
        return None
    return rng.choice(available)


def compose_outfit(
    pool: List[ClothingItem],
    weather: WeatherInfo | None = None,
    rng: random.Random | None = None,
    config: ComposerConfig | None = None,
) -> OutfitBuildResult:
    """Fill functional slots from the pool and return the chosen item ids.

    The result is empty only when the pool is empty. When slot filling yields
    fewer than ``config.min_items`` pieces, a random 2-4 item subset of the
    pool is returned instead.
    """

    rng = rng or random.Random()
    config = config or ComposerConfig()
    pool = _unique_by_id(pool)
    diagnostics: Dict[str, object] = {"pool_size": len(pool), "strategy": "slots", "slots": {}}
    if not pool:
        diagnostics["strategy"] = "empty"
        return OutfitBuildResult(item_ids=[], diagnostics=diagnostics)

    grouped = group_by_slot(pool)
    diagnostics["slot_counts"] = {slot: len(values) for slot, values in grouped.items()}
    chosen: List[ClothingItem] = []
    slots: Dict[str, str] = {}

    def add(slot: str) -> None:
        item = _pick(rng, grouped[slot], chosen)
        if item is not None:
            chosen.append(item)
            slots.setdefault(slot, item.item_id)

    if grouped["dress"] and rng.random() < config.dress_probability:
        add("dress")
    else:
        if grouped["top"]:
            add("top")
        if grouped["bottom"]:
            add("bottom")

    temperature = weather.temperature if weather else None
    if grouped["outerwear"] and (temperature is None or temperature < config.outerwear_below):
        add("outerwear")
    if grouped["footwear"]:
        add("footwear")
    if grouped["accessory"]:
        add("accessory")
        if len(grouped["accessory"]) > 1 and rng.random() < config.second_accessory_probability:
            second = _pick(rng, grouped["accessory"], chosen)
            if second is not None:
                chosen.append(second)
                slots["accessory_2"] = second.item_id
    diagnostics["slots"] = slots

    if len(chosen) < config.min_items:
        shuffled = list(pool)
        rng.shuffle(shuffled)
        count = min(len(shuffled), rng.randint(config.fallback_min, config.fallback_max))
        chosen = shuffled[:count]
        diagnostics["strategy"] = "fallback"
        logger.info("Slot composition produced too few items; fell back to %s random items", count)

    item_ids = [item.item_id for item in chosen]
    diagnostics["chosen_ids"] = item_ids
    logger.info("Composed outfit with %s items using %s strategy", len(item_ids), diagnostics["strategy"])
    return OutfitBuildResult(item_ids=item_ids, diagnostics=diagnostics)


def recommend_outfit(
    items: List[ClothingItem],
    weather: WeatherInfo | None = None,
    situation: str | None = None,
    rng: random.Random | None = None,
    filter_config: FilterConfig | None = None,
    composer_config: ComposerConfig | None = None,
    now: datetime | None = None,
) -> Recommendation:
    """Filter the wardrobe by context, compose an outfit and name it."""

    rng = rng or random.Random()
    if not items:
        logger.info("No wardrobe items available for recommendation")
        return Recommendation(status="empty_wardrobe", outfit=None, filters={}, diagnostics={"pool_size": 0})

    filtered = apply_context_filters(items, weather, situation, filter_config)
    built = compose_outfit(filtered.items, weather, rng, composer_config)

    band = season_band_for_weather(weather, filter_config)
    situation_key = str(situation or "").strip().lower()
    outfit = Outfit(
        outfit_id=f"generated-{rng.getrandbits(32):08x}",
        name=name_outfit(situation, weather, rng),
        items=built.item_ids,
        seasons=list(band.seasons) if band else ["all"],
        occasions=[situation_key] if situation_key and situation_key != "all" else ["casual"],
        date_added=now or datetime.now(),
    )
    return Recommendation(status="ok", outfit=outfit, filters=filtered.debug, diagnostics=built.diagnostics)


__all__ = [
    "ComposerConfig",
    "OutfitBuildResult",
    "Recommendation",
    "compose_outfit",
    "recommend_outfit",
]
