"""Greedy seven-day outfit planning without repeating clothing items."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, List, Optional, Sequence

from logic.outfit_naming import style_tip_for_day
from models.outfit import Outfit, OutfitLog

logger = logging.getLogger(__name__)

# Receives every planned log of the week in a single call.
LogWriter = Callable[[List[OutfitLog]], object]


@dataclass(frozen=True)
class PlannerConfig:
    days: int = 7
    min_outfits: int = 7


class PlannerPreconditionError(Exception):
    """Raised when the wardrobe has too few outfits to plan a week."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"You need at least {required} outfits in your wardrobe to auto-plan a week "
            f"(found {available})."
        )


@dataclass(frozen=True)
class PlannedDay:
    date: date
    day_name: str
    outfit: Optional[Outfit] = None
    log: Optional[OutfitLog] = None
    tip: Optional[str] = None


@dataclass
class WeeklyPlan:
    days: List[PlannedDay] = field(default_factory=list)

    @property
    def assigned(self) -> List[PlannedDay]:
        return [day for day in self.days if day.outfit is not None]

    @property
    def logs(self) -> List[OutfitLog]:
        return [day.log for day in self.days if day.log is not None]

    @property
    def unassigned_dates(self) -> List[date]:
        return [day.date for day in self.days if day.outfit is None]


def plan_week(
    outfits: Sequence[Outfit],
    start_date: date | None = None,
    rng: random.Random | None = None,
    log_writer: LogWriter | None = None,
    config: PlannerConfig | None = None,
) -> WeeklyPlan:
    """Assign at most one outfit per day so no item repeats across days.

    This is a single first-fit pass over a shuffled outfit list. It can leave a
    day empty even when a complete assignment exists.
    The synthetic logs are handed to ``log_writer`` together, after every day
    has been planned.
    """

    config = config or PlannerConfig()
    rng = rng or random.Random()
    outfits = list(outfits or [])
    if len(outfits) < config.min_outfits:
        raise PlannerPreconditionError(required=config.min_outfits, available=len(outfits))

    start_date = start_date or date.today()
    candidates = list(outfits)
    rng.shuffle(candidates)

    used_item_ids: set = set()
    assigned_outfit_ids: set = set()
    plan = WeeklyPlan()
    for offset in range(config.days):
        day = start_date + timedelta(days=offset)
        day_name = day.strftime("%A")
        choice = next(
            (
                outfit
                for outfit in candidates
                if outfit.outfit_id not in assigned_outfit_ids and used_item_ids.isdisjoint(outfit.items)
            ),
            None,
        )
        if choice is None:
            logger.info("No non-overlapping outfit left for %s", day.isoformat())
            plan.days.append(PlannedDay(date=day, day_name=day_name))
            continue

        used_item_ids.update(choice.items)
        assigned_outfit_ids.add(choice.outfit_id)
        log = OutfitLog(
            log_id=f"planned-{day.isoformat()}-{choice.outfit_id}",
            outfit_id=choice.outfit_id,
            date=day,
            time_of_day="all-day",
            notes=f"Auto-planned for {day_name}",
            ai_suggested=True,
        )
        plan.days.append(
            PlannedDay(date=day, day_name=day_name, outfit=choice, log=log, tip=style_tip_for_day(day_name, rng))
        )

    if log_writer is not None and plan.logs:
        log_writer(plan.logs)

    logger.info("Planned %s of %s days from %s outfits", len(plan.assigned), config.days, len(outfits))
    return plan


__all__ = ["PlannerConfig", "PlannerPreconditionError", "PlannedDay", "WeeklyPlan", "plan_week"]
