"""Deterministic filtering functions for weather-derived season bands and occasions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from models.clothing_item import ClothingItem
from models.weather import WeatherInfo

logger = logging.getLogger(__name__)

UNIVERSAL_OCCASION = "casual"
ANY_SITUATION = {"", "all", "any"}


@dataclass(frozen=True)
class FilterConfig:
    """Thresholds for the context filter."""

    min_pool_size: int = 3
    cold_below: float = 10.0
    warm_above: float = 20.0


@dataclass(frozen=True)
class SeasonBand:
    name: str
    seasons: Tuple[str, ...]

    def admits(self, seasons: List[str]) -> bool:
        return "all" in seasons or any(season in self.seasons for season in seasons)


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of a single filtering step."""

    items: List[ClothingItem]
    removed: Dict[str, str]
    debug: Dict[str, object]


def season_band_for_temperature(temperature: float, config: FilterConfig | None = None) -> SeasonBand:
    """Map an ambient temperature onto winter, spring/autumn or summer."""

    config = config or FilterConfig()
    if temperature < config.cold_below:
        return SeasonBand("winter", ("winter",))
    if temperature > config.warm_above:
        return SeasonBand("summer", ("summer",))
    return SeasonBand("spring/autumn", ("spring", "autumn"))


def season_band_for_weather(weather: WeatherInfo | None, config: FilterConfig | None = None) -> Optional[SeasonBand]:
    if weather is None or weather.temperature is None:
        return None
    return season_band_for_temperature(weather.temperature, config)


def filter_by_season_band(
    items: List[ClothingItem], weather: WeatherInfo | None, config: FilterConfig | None = None
) -> FilteringResult:
    """Keep items whose seasons suit the band derived from the temperature."""

    band = season_band_for_weather(weather, config)
    if band is None:
        return FilteringResult(
            items=list(items),
            removed={},
            debug={"input_count": len(items), "kept_count": len(items), "skipped": True},
        )

    removed: Dict[str, str] = {}
    kept: List[ClothingItem] = []
    for item in items:
        if band.admits(item.seasons):
            kept.append(item)
        else:
            removed[item.item_id] = f"not suitable for {band.name}"

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "season_band": band.name,
        "temperature": weather.temperature if weather else None,
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


def filter_by_occasion(items: List[ClothingItem], situation: str | None) -> FilteringResult:
    """Keep items tagged for the situation; ``casual`` items always pass."""

    key = str(situation or "").strip().lower()
    if key in ANY_SITUATION:
        return FilteringResult(
            items=list(items),
            removed={},
            debug={"input_count": len(items), "kept_count": len(items), "skipped": True},
        )

    removed: Dict[str, str] = {}
    kept: List[ClothingItem] = []
    for item in items:
        if key in item.occasions or UNIVERSAL_OCCASION in item.occasions:
            kept.append(item)
        else:
            removed[item.item_id] = f"not tagged for {key}"

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "situation": key,
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


def apply_context_filters(
    items: List[ClothingItem],
    weather: WeatherInfo | None = None,
    situation: str | None = None,
    config: FilterConfig | None = None,
) -> FilteringResult:
    """Run the season and occasion filters, relaxing both if too few items survive."""

    config = config or FilterConfig()
    season_result = filter_by_season_band(items, weather, config)
    occasion_result = filter_by_occasion(season_result.items, situation)
    removed = {**season_result.removed, **occasion_result.removed}

    debug: Dict[str, object] = {
        "input_count": len(items),
        "season": season_result.debug,
        "occasion": occasion_result.debug,
        "relaxed": False,
    }
    if len(occasion_result.items) < config.min_pool_size:
        logger.info(
            "Only %s items passed context filters (floor %s); using the full pool of %s",
            len(occasion_result.items),
            config.min_pool_size,
            len(items),
        )
        debug["relaxed"] = True
        debug["final_count"] = len(items)
        return FilteringResult(items=list(items), removed={}, debug=debug)

    debug["final_count"] = len(occasion_result.items)
    return FilteringResult(items=occasion_result.items, removed=removed, debug=debug)


__all__ = [
    "FilterConfig",
    "SeasonBand",
    "FilteringResult",
    "season_band_for_temperature",
    "season_band_for_weather",
    "filter_by_season_band",
    "filter_by_occasion",
    "apply_context_filters",
]
