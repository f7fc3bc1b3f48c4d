from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_scoring import score_outfits_for_weather
from models.outfit import Outfit, OutfitLog
from models.weather import WeatherInfo


def _outfits() -> List[Outfit]:
    return [
        Outfit(outfit_id="rain-old", name="A", items=["a"], seasons=["winter"], last_worn=datetime(2024, 1, 2)),
        Outfit(outfit_id="rain-new", name="B", items=["b"], seasons=["all"], last_worn=datetime(2024, 2, 20)),
        Outfit(outfit_id="never", name="C", items=["c"], seasons=["winter"]),
        Outfit(outfit_id="dry", name="D", items=["d"], seasons=["winter"], last_worn=datetime(2023, 12, 1)),
        Outfit(outfit_id="summer", name="E", items=["e"], seasons=["summer"]),
    ]


def _logs() -> List[OutfitLog]:
    return [
        OutfitLog(log_id="1", outfit_id="rain-old", date=date(2024, 1, 2), weather_condition="Rain"),
        OutfitLog(log_id="2", outfit_id="rain-old", date=date(2023, 12, 5), weather_condition="rain"),
        OutfitLog(log_id="3", outfit_id="rain-new", date=date(2024, 2, 20), weather_condition="rain"),
        OutfitLog(log_id="4", outfit_id="dry", date=date(2023, 12, 1), weather_condition="clear"),
        OutfitLog(log_id="5", outfit_id="summer", date=date(2023, 7, 1), weather_condition="rain"),
    ]


def test_scores_count_matching_conditions_and_drop_out_of_season() -> None:
    scored = score_outfits_for_weather(_outfits(), _logs(), WeatherInfo(temperature=3, condition="Rain"))
    assert [(entry.outfit.outfit_id, entry.score) for entry in scored] == [
        ("rain-old", 2),
        ("rain-new", 1),
        ("never", 0),
        ("dry", 0),
    ]
    assert {entry.season_band for entry in scored} == {"winter"}


def test_never_worn_outfits_lead_a_tie_then_oldest_first() -> None:
    scored = score_outfits_for_weather(_outfits(), _logs(), WeatherInfo(temperature=3, condition="snow"))
    assert [entry.outfit.outfit_id for entry in scored] == ["never", "dry", "rain-old", "rain-new"]
    assert all(entry.score == 0 for entry in scored)


def test_scoring_truncates_to_limit() -> None:
    scored = score_outfits_for_weather(_outfits(), _logs(), WeatherInfo(temperature=3, condition="rain"), limit=2)
    assert [entry.outfit.outfit_id for entry in scored] == ["rain-old", "rain-new"]


def test_unknown_weather_scores_nothing() -> None:
    assert score_outfits_for_weather(_outfits(), _logs(), None) == []
    assert score_outfits_for_weather(_outfits(), _logs(), WeatherInfo(condition="rain")) == []


def test_missing_condition_still_ranks_by_recency() -> None:
    scored = score_outfits_for_weather(_outfits(), _logs(), WeatherInfo(temperature=30))
    assert [entry.outfit.outfit_id for entry in scored] == ["summer", "rain-new"]
    assert [entry.score for entry in scored] == [0, 0]


def test_mixed_aware_and_naive_last_worn_sort_oldest_first() -> None:
    outfits = [
        Outfit(outfit_id="naive", name="A", items=["a"], seasons=["winter"], last_worn=datetime(2024, 2, 1)),
        Outfit(
            outfit_id="aware",
            name="B",
            items=["b"],
            seasons=["winter"],
            last_worn=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
        Outfit(outfit_id="iso", name="C", items=["c"], seasons=["winter"], last_worn="2024-01-15T00:00:00+02:00"),
    ]
    scored = score_outfits_for_weather(outfits, [], WeatherInfo(temperature=5, condition="rain"))
    assert [entry.outfit.outfit_id for entry in scored] == ["aware", "iso", "naive"]
