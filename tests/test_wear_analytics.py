from __future__ import annotations

import sys
from datetime import date, datetime
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.wear_analytics import (
    color_distribution,
    frequently_worn,
    most_worn_items,
    occasion_distribution,
    rarely_worn,
    season_distribution,
    seasonal_insights,
    seasonal_suggestions,
    unlogged_days,
)
from models.clothing_item import ClothingItem
from models.outfit import Outfit, OutfitLog

TODAY = date(2024, 7, 31)


def _items() -> List[ClothingItem]:
    return [
        ClothingItem(item_id="tee", name="Tee", type="t-shirt", color="White"),
        ClothingItem(item_id="jeans", name="Jeans", type="jeans", color="blue"),
        ClothingItem(item_id="boots", name="Boots", type="boots", color="brown"),
        ClothingItem(item_id="coat", name="Coat", type="coat", color="black"),
    ]


def _outfits() -> List[Outfit]:
    return [
        Outfit(outfit_id="o1", name="Summer casual", items=["tee", "jeans"], seasons=["summer"], occasions=["casual"]),
        Outfit(outfit_id="o2", name="Winter work", items=["coat", "boots", "gone"], seasons=["winter"], occasions=["work"]),
        Outfit(outfit_id="o3", name="Anytime", items=["tee", "boots"], seasons=["all"], occasions=["casual", "travel"]),
    ]


def _log(log_id: str, outfit_id: str, day: date) -> OutfitLog:
    return OutfitLog(log_id=log_id, outfit_id=outfit_id, date=day)


def _logs() -> List[OutfitLog]:
    return [
        _log("l1", "o1", date(2024, 7, 30)),
        _log("l2", "o1", date(2024, 7, 28)),
        _log("l3", "o2", date(2024, 1, 10)),
        _log("l4", "o1", date(2024, 7, 20)),
        _log("l5", "o1", date(2024, 7, 10)),
        _log("l6", "o1", date(2024, 7, 1)),
        _log("l7", "deleted-outfit", date(2024, 7, 29)),
    ]


def test_rarely_worn_returns_everything_without_logs() -> None:
    outfits = _outfits()
    assert rarely_worn(outfits, [], 30, now=TODAY) == outfits


def test_rarely_worn_includes_never_logged_and_stale_outfits() -> None:
    result = rarely_worn(_outfits(), _logs(), 30, now=TODAY)
    assert [outfit.outfit_id for outfit in result] == ["o2", "o3"]


def test_rarely_worn_with_zero_days_flags_anything_not_worn_today() -> None:
    result = rarely_worn(_outfits(), _logs(), 0, now=datetime(2024, 7, 30, 18, 0))
    assert [outfit.outfit_id for outfit in result] == ["o2", "o3"]
    result = rarely_worn(_outfits(), _logs(), 0, now=datetime(2024, 7, 31, 8, 0))
    assert [outfit.outfit_id for outfit in result] == ["o1", "o2", "o3"]


def test_frequently_worn_uses_strict_threshold() -> None:
    assert [(outfit.outfit_id, count) for outfit, count in frequently_worn(_outfits(), _logs(), 4)] == [("o1", 5)]
    assert frequently_worn(_outfits(), _logs(), 5) == []


def test_frequently_worn_sorts_by_count() -> None:
    logs = _logs() + [_log("l8", "o3", date(2024, 7, 2))]
    result = frequently_worn(_outfits(), logs, 0)
    assert [(outfit.outfit_id, count) for outfit, count in result] == [("o1", 5), ("o2", 1), ("o3", 1)]


def test_most_worn_items_skips_deleted_items() -> None:
    ranked = most_worn_items(_outfits(), _logs(), _items())
    assert [(item.item_id, count) for item, count in ranked] == [
        ("tee", 5),
        ("jeans", 5),
        ("coat", 1),
        ("boots", 1),
    ]
    assert all(item.item_id != "gone" for item, _ in ranked)
    assert len(most_worn_items(_outfits(), _logs(), _items(), limit=2)) == 2


def test_seasonal_insights_flatten_item_ids() -> None:
    insights = seasonal_insights(_outfits(), _logs())
    assert insights["summer"].count == 5
    assert insights["summer"].item_ids.count("tee") == 5
    assert insights["winter"].count == 1
    assert insights["winter"].item_ids == ["coat", "boots", "gone"]
    assert "all" not in insights


def test_season_distribution_lists_every_season() -> None:
    distribution = {entry.key: entry for entry in season_distribution(_outfits(), _logs())}
    assert set(distribution) == {"spring", "summer", "autumn", "winter", "all"}
    assert distribution["summer"].count == 5
    assert distribution["summer"].percentage == 83
    assert distribution["spring"].percentage == 0


def test_occasion_and_color_distributions() -> None:
    occasions = occasion_distribution(_outfits(), _logs())
    assert [(entry.key, entry.count, entry.percentage) for entry in occasions] == [
        ("casual", 5, 83),
        ("work", 1, 17),
    ]

    colors = color_distribution(_outfits(), _logs(), _items())
    assert colors[0].count == 5
    assert {entry.key for entry in colors} == {"white", "blue", "black", "brown"}


def test_distributions_are_empty_without_logs() -> None:
    assert occasion_distribution(_outfits(), []) == []
    assert color_distribution(_outfits(), [], _items()) == []
    assert all(entry.percentage == 0 for entry in season_distribution(_outfits(), []))


def test_seasonal_suggestions_match_calendar_season() -> None:
    suggestions = seasonal_suggestions(_outfits(), _logs(), 30, today=TODAY)
    assert [outfit.outfit_id for outfit in suggestions] == ["o3"]
    winter = seasonal_suggestions(_outfits(), _logs(), 30, today=date(2024, 12, 15))
    assert [outfit.outfit_id for outfit in winter] == ["o2", "o3"]


@pytest.mark.parametrize("limit", [1, 3, 5])
def test_unlogged_days_are_most_recent_first(limit: int) -> None:
    days = unlogged_days(_logs(), today=TODAY, lookback_days=30, limit=limit)
    assert len(days) == limit
    assert days[0] == date(2024, 7, 27)
    assert date(2024, 7, 28) not in days
    assert days == sorted(days, reverse=True)
