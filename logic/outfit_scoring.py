"""Deterministic weather-affinity scoring for saved outfits."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import List, Sequence

from logic.contextual_filtering import FilterConfig, season_band_for_weather
from models.outfit import Outfit, OutfitLog
from models.weather import WeatherInfo

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class ScoredOutfit:
    outfit: Outfit
    score: int
    season_band: str


def _condition_key(condition: str | None) -> str:
    return str(condition or "").strip().lower()


def _sort_key(entry: ScoredOutfit) -> tuple:
    last_worn = entry.outfit.last_worn
    # Never-worn outfits count as the oldest within a score tie.
    return (-entry.score, last_worn is not None, last_worn or datetime.min)


def score_outfits_for_weather(
    outfits: Sequence[Outfit],
    logs: Sequence[OutfitLog],
    weather: WeatherInfo | None,
    limit: int = DEFAULT_LIMIT,
    config: FilterConfig | None = None,
) -> List[ScoredOutfit]:
    """Rank in-season outfits by how often they were worn in today's condition."""

    band = season_band_for_weather(weather, config)
    if band is None:
        logger.info("Weather unknown; skipping weather-affinity scoring")
        return []

    current = _condition_key(weather.condition)
    matches: Counter = Counter()
    if current:
        matches.update(
            log.outfit_id for log in logs or [] if _condition_key(log.weather_condition) == current
        )

    scored = [
        ScoredOutfit(outfit=outfit, score=matches[outfit.outfit_id], season_band=band.name)
        for outfit in outfits or []
        if band.admits(outfit.seasons)
    ]
    scored.sort(key=_sort_key)
    logger.info("Scored %s outfits for %s weather in the %s band", len(scored), current or "unknown", band.name)
    return scored[:limit]


__all__ = ["ScoredOutfit", "score_outfits_for_weather", "DEFAULT_LIMIT"]
