"""Usage analytics derived from the wear-log history.

Every function takes plain snapshots of outfits, logs and (where needed)
clothing items and returns new records. Empty inputs and dangling references
(logs pointing at deleted outfits, outfits pointing at deleted items) produce
empty results rather than errors.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from models.clothing_item import ClothingItem
from models.outfit import Outfit, OutfitLog
from models.taxonomy import SEASONS, season_for_month

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsConfig:
    rarely_worn_days: int = 30
    frequently_worn_threshold: int = 4
    most_worn_limit: int = 5
    suggestion_limit: int = 5
    unlogged_lookback_days: int = 30


@dataclass
class SeasonInsight:
    count: int = 0
    item_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DistributionEntry:
    key: str
    count: int
    percentage: int


def _logs_by_outfit(logs: Sequence[OutfitLog]) -> Dict[str, List[OutfitLog]]:
    grouped: Dict[str, List[OutfitLog]] = defaultdict(list)
    for log in logs or []:
        grouped[log.outfit_id].append(log)
    return grouped


def _outfit_index(outfits: Sequence[Outfit]) -> Dict[str, Outfit]:
    return {outfit.outfit_id: outfit for outfit in outfits or []}


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _distribution(counts: Dict[str, int]) -> List[DistributionEntry]:
    total = sum(counts.values())
    return [
        DistributionEntry(key=key, count=count, percentage=round(count / total * 100) if total else 0)
        for key, count in counts.items()
    ]


def rarely_worn(
    outfits: Sequence[Outfit],
    logs: Sequence[OutfitLog],
    days: int,
    now: date | datetime | None = None,
) -> List[Outfit]:
    """Outfits never logged, or last logged more than ``days`` ago."""

    outfits = list(outfits or [])
    if not logs:
        return outfits
    cutoff = _as_date(now or datetime.now()) - timedelta(days=days)
    grouped = _logs_by_outfit(logs)

    result = []
    for outfit in outfits:
        outfit_logs = grouped.get(outfit.outfit_id)
        if not outfit_logs:
            result.append(outfit)
            continue
        last_worn = max(log.date for log in outfit_logs)
        if last_worn < cutoff:
            result.append(outfit)
    return result


def frequently_worn(
    outfits: Sequence[Outfit], logs: Sequence[OutfitLog], threshold: int
) -> List[Tuple[Outfit, int]]:
    """Outfits logged more than ``threshold`` times, most worn first."""

    counts = Counter(log.outfit_id for log in logs or [])
    worn = [(outfit, counts[outfit.outfit_id]) for outfit in outfits or [] if counts[outfit.outfit_id] > threshold]
    return sorted(worn, key=lambda entry: entry[1], reverse=True)


def most_worn_items(
    outfits: Sequence[Outfit],
    logs: Sequence[OutfitLog],
    items: Sequence[ClothingItem],
    limit: Optional[int] = None,
) -> List[Tuple[ClothingItem, int]]:
    """Rank clothing items by how often an outfit containing them was logged."""

    outfit_index = _outfit_index(outfits)
    item_index = {item.item_id: item for item in items or []}
    counts: Counter = Counter()
    for log in logs or []:
        outfit = outfit_index.get(log.outfit_id)
        if outfit is None:
            continue
        counts.update(outfit.items)

    ranked = [(item_index[item_id], count) for item_id, count in counts.most_common() if item_id in item_index]
    if len(ranked) < len(counts):
        logger.info("Skipped %s worn item ids that no longer exist", len(counts) - len(ranked))
    return ranked[:limit] if limit is not None else ranked


def seasonal_insights(outfits: Sequence[Outfit], logs: Sequence[OutfitLog]) -> Dict[str, SeasonInsight]:
    """Per season: number of wear events and the flattened item ids worn."""

    outfit_index = _outfit_index(outfits)
    insights: Dict[str, SeasonInsight] = {}
    for log in logs or []:
        outfit = outfit_index.get(log.outfit_id)
        if outfit is None:
            continue
        for season in outfit.seasons:
            insight = insights.setdefault(season, SeasonInsight())
            insight.count += 1
            insight.item_ids.extend(outfit.items)
    return insights


def occasion_distribution(outfits: Sequence[Outfit], logs: Sequence[OutfitLog]) -> List[DistributionEntry]:
    outfit_index = _outfit_index(outfits)
    counts: Counter = Counter()
    for log in logs or []:
        outfit = outfit_index.get(log.outfit_id)
        if outfit is not None:
            counts.update(outfit.occasions)
    return sorted(_distribution(dict(counts)), key=lambda entry: entry.count, reverse=True)


def season_distribution(outfits: Sequence[Outfit], logs: Sequence[OutfitLog]) -> List[DistributionEntry]:
    """Share of wear events per season tag, always listing every season."""

    counts = {season: 0 for season in SEASONS}
    for season, insight in seasonal_insights(outfits, logs).items():
        counts[season] = insight.count
    return _distribution(counts)


def color_distribution(
    outfits: Sequence[Outfit], logs: Sequence[OutfitLog], items: Sequence[ClothingItem]
) -> List[DistributionEntry]:
    item_colors = {item.item_id: item.color for item in items or [] if item.color}
    outfit_index = _outfit_index(outfits)
    counts: Counter = Counter()
    for log in logs or []:
        outfit = outfit_index.get(log.outfit_id)
        if outfit is None:
            continue
        counts.update(item_colors[item_id] for item_id in outfit.items if item_id in item_colors)
    return sorted(_distribution(dict(counts)), key=lambda entry: entry.count, reverse=True)


def seasonal_suggestions(
    outfits: Sequence[Outfit],
    logs: Sequence[OutfitLog],
    days: int,
    today: date | None = None,
    limit: int = 5,
) -> List[Outfit]:
    """Rarely worn outfits that suit the current calendar season."""

    today = today or date.today()
    season = season_for_month(today.month)
    in_season = [outfit for outfit in outfits or [] if season in outfit.seasons or "all" in outfit.seasons]
    return rarely_worn(in_season, logs, days, now=today)[:limit]


def unlogged_days(
    logs: Sequence[OutfitLog],
    today: date | None = None,
    lookback_days: int = 30,
    limit: int = 5,
) -> List[date]:
    """Most recent past days with no wear log at all."""

    today = today or date.today()
    logged = {log.date for log in logs or []}
    missing = []
    for offset in range(1, lookback_days + 1):
        day = today - timedelta(days=offset)
        if day not in logged:
            missing.append(day)
        if len(missing) >= limit:
            break
    return missing


__all__ = [
    "AnalyticsConfig",
    "SeasonInsight",
    "DistributionEntry",
    "rarely_worn",
    "frequently_worn",
    "most_worn_items",
    "seasonal_insights",
    "occasion_distribution",
    "season_distribution",
    "color_distribution",
    "seasonal_suggestions",
    "unlogged_days",
]
