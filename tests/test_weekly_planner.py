from __future__ import annotations

import random
import sys
from datetime import date
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_naming import WEEKEND_TIPS
from logic.weekly_planner import PlannerConfig, PlannerPreconditionError, plan_week
from models.outfit import Outfit, OutfitLog

MONDAY = date(2024, 6, 3)


def _belt_wardrobe() -> List[Outfit]:
    outfits = [Outfit(outfit_id=f"o{i}", name=f"Look {i}", items=[f"shoes-{i}"]) for i in range(8)]
    outfits[2].items.append("belt")
    outfits[5].items.append("belt")
    return outfits


def test_plan_requires_seven_outfits() -> None:
    with pytest.raises(PlannerPreconditionError) as excinfo:
        plan_week(_belt_wardrobe()[:6], start_date=MONDAY, rng=random.Random(1))
    assert excinfo.value.required == 7
    assert excinfo.value.available == 6
    assert "at least 7 outfits" in str(excinfo.value)


def test_plan_precondition_writes_no_logs() -> None:
    written: List[OutfitLog] = []
    with pytest.raises(PlannerPreconditionError):
        plan_week([], start_date=MONDAY, rng=random.Random(1), log_writer=written.extend)
    assert written == []


@pytest.mark.parametrize("seed", range(20))
def test_plan_never_repeats_an_item(seed: int) -> None:
    plan = plan_week(_belt_wardrobe(), start_date=MONDAY, rng=random.Random(seed))
    assigned_ids = [day.outfit.outfit_id for day in plan.assigned]
    assert not {"o2", "o5"} <= set(assigned_ids)
    assert len(assigned_ids) == len(set(assigned_ids))

    seen_items: set = set()
    for day in plan.assigned:
        assert seen_items.isdisjoint(day.outfit.items)
        seen_items.update(day.outfit.items)
    # Six belt-free outfits plus one belt outfit always fill the week.
    assert len(plan.assigned) == 7


def test_plan_covers_consecutive_days_with_logs() -> None:
    written: List[OutfitLog] = []
    plan = plan_week(_belt_wardrobe(), start_date=MONDAY, rng=random.Random(7), log_writer=written.extend)

    assert [day.date for day in plan.days] == [date(2024, 6, 3 + offset) for offset in range(7)]
    assert plan.days[0].day_name == "Monday"
    assert plan.days[5].day_name == "Saturday"
    assert written == plan.logs
    for day in plan.assigned:
        assert day.log.outfit_id == day.outfit.outfit_id
        assert day.log.date == day.date
        assert day.log.ai_suggested is True
        assert day.log.time_of_day == "all-day"
        assert day.log.notes == f"Auto-planned for {day.day_name}"
    assert plan.days[6].tip in WEEKEND_TIPS


def test_plan_leaves_days_empty_when_items_run_out() -> None:
    outfits = [Outfit(outfit_id=f"o{i}", name=f"Look {i}", items=["same-shoes", f"top-{i}"]) for i in range(7)]
    written: List[OutfitLog] = []
    plan = plan_week(outfits, start_date=MONDAY, rng=random.Random(3), log_writer=written.extend)
    assert len(plan.assigned) == 1
    assert len(plan.unassigned_dates) == 6
    assert len(written) == 1


def test_empty_outfits_are_not_reused_across_days() -> None:
    outfits = [Outfit(outfit_id=f"o{i}", name=f"Look {i}", items=[]) for i in range(7)]
    plan = plan_week(outfits, start_date=MONDAY, rng=random.Random(9))
    assert sorted(day.outfit.outfit_id for day in plan.assigned) == [f"o{i}" for i in range(7)]


def test_plan_is_repeatable_with_seed() -> None:
    first = plan_week(_belt_wardrobe(), start_date=MONDAY, rng=random.Random(11))
    second = plan_week(_belt_wardrobe(), start_date=MONDAY, rng=random.Random(11))
    assert first == second


def test_planner_config_controls_horizon_and_minimum() -> None:
    plan = plan_week(
        _belt_wardrobe()[:3], start_date=MONDAY, rng=random.Random(2), config=PlannerConfig(days=3, min_outfits=3)
    )
    assert len(plan.days) == 3
    assert len(plan.assigned) == 3


def test_planned_logs_are_written_once_for_the_whole_week() -> None:
    batches: List[List[OutfitLog]] = []
    plan = plan_week(_belt_wardrobe(), start_date=MONDAY, rng=random.Random(4), log_writer=batches.append)
    assert len(batches) == 1
    assert batches[0] == plan.logs
    assert len(batches[0]) == 7


def test_failing_log_writer_sees_a_complete_week() -> None:
    received: List[List[OutfitLog]] = []

    def failing_writer(logs: List[OutfitLog]) -> None:
        received.append(list(logs))
        raise RuntimeError("storage unavailable")

    with pytest.raises(RuntimeError):
        plan_week(_belt_wardrobe(), start_date=MONDAY, rng=random.Random(4), log_writer=failing_writer)
    assert len(received) == 1
    assert [log.date for log in received[0]] == [date(2024, 6, 3 + offset) for offset in range(7)]


def test_plan_week_leaves_outfit_list_untouched() -> None:
    outfits = _belt_wardrobe()
    snapshot = [(outfit.outfit_id, list(outfit.items)) for outfit in outfits]
    plan_week(outfits, start_date=MONDAY, rng=random.Random(13))
    assert [(outfit.outfit_id, list(outfit.items)) for outfit in outfits] == snapshot
