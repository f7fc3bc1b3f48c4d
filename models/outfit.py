"""Outfit and wear-log schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from models.clothing_item import ClothingItem
from models.coercion import ensure_list, lowered_unique, parse_date, parse_datetime, pick
from models.taxonomy import SEASONS, TIMES_OF_DAY, normalise_tags


def _distinct(values: List[Any]) -> List[str]:
    ordered = []
    seen = set()
    for value in values:
        key = str(value)
        if key not in seen:
            ordered.append(key)
            seen.add(key)
    return ordered


@dataclass
class Outfit:
    """A saved combination of clothing item ids.

    ``items`` may reference pieces that were deleted from the wardrobe; callers
    resolve them against the current item pool instead of failing.
    """

    outfit_id: str
    name: str
    items: List[str] = field(default_factory=list)
    seasons: List[str] = field(default_factory=list)
    occasions: List[str] = field(default_factory=list)
    favorite: bool = False
    times_worn: int = 0
    last_worn: Optional[datetime] = None
    date_added: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.items = _distinct(ensure_list(self.items))
        self.seasons = normalise_tags(ensure_list(self.seasons), SEASONS) or ["all"]
        self.occasions = lowered_unique(ensure_list(self.occasions))
        self.times_worn = int(self.times_worn or 0)
        # Naive datetimes only, so recency sorts never mix aware and naive values.
        self.last_worn = parse_datetime(self.last_worn)
        self.date_added = parse_datetime(self.date_added)


@dataclass
class OutfitLog:
    """A wear event: outfit ``outfit_id`` was worn on ``date``."""

    log_id: str
    outfit_id: str
    date: date
    time_of_day: Optional[str] = None
    weather_condition: Optional[str] = None
    temperature: Optional[float] = None
    activity: Optional[str] = None
    notes: Optional[str] = None
    ai_suggested: bool = False

    def __post_init__(self) -> None:
        parsed = parse_date(self.date)
        if parsed is None:
            raise ValueError(f"Outfit log '{self.log_id}' requires a date")
        self.date = parsed
        if self.time_of_day:
            key = str(self.time_of_day).strip().lower()
            self.time_of_day = key if key in TIMES_OF_DAY else None
        if self.temperature is not None and self.temperature != "":
            self.temperature = float(self.temperature)
        else:
            self.temperature = None


def resolve_items(outfit: Outfit, item_index: Mapping[str, ClothingItem]) -> List[ClothingItem]:
    """Return the outfit's items that still exist, in outfit order."""

    return [item_index[item_id] for item_id in outfit.items if item_id in item_index]


def is_displayable(outfit: Outfit, item_index: Mapping[str, ClothingItem]) -> bool:
    """An outfit with zero resolvable items is kept but not rendered."""

    return bool(resolve_items(outfit, item_index))


def outfit_from_raw(metadata: Dict[str, Any]) -> Outfit:
    """Factory to build an :class:`Outfit` from a loose storage payload."""

    outfit_id = pick(metadata, "outfit_id", "id")
    if not outfit_id:
        raise ValueError("Missing required field for Outfit: outfit_id")

    return Outfit(
        outfit_id=str(outfit_id),
        name=str(pick(metadata, "name", default="")),
        items=ensure_list(pick(metadata, "items")),
        seasons=ensure_list(pick(metadata, "seasons", "season")),
        occasions=ensure_list(pick(metadata, "occasions", "occasion")),
        favorite=bool(pick(metadata, "favorite", default=False)),
        times_worn=int(pick(metadata, "times_worn", "timesWorn", default=0)),
        last_worn=parse_datetime(pick(metadata, "last_worn", "lastWorn")),
        date_added=parse_datetime(pick(metadata, "date_added", "dateAdded")),
    )


def outfit_log_from_raw(metadata: Dict[str, Any]) -> OutfitLog:
    """Factory to build an :class:`OutfitLog` from a loose storage payload."""

    required = {
        "log_id": pick(metadata, "log_id", "id"),
        "outfit_id": pick(metadata, "outfit_id", "outfitId"),
        "date": pick(metadata, "date"),
    }
    missing = [key for key, value in required.items() if not value]
    if missing:
        raise ValueError(f"Missing required fields for OutfitLog: {missing}")

    return OutfitLog(
        log_id=str(required["log_id"]),
        outfit_id=str(required["outfit_id"]),
        date=required["date"],
        time_of_day=pick(metadata, "time_of_day", "timeOfDay"),
        weather_condition=pick(metadata, "weather_condition", "weatherCondition"),
        temperature=pick(metadata, "temperature"),
        activity=pick(metadata, "activity"),
        notes=pick(metadata, "notes"),
        ai_suggested=bool(pick(metadata, "ai_suggested", "aiSuggested", default=False)),
    )


__all__ = [
    "Outfit",
    "OutfitLog",
    "resolve_items",
    "is_displayable",
    "outfit_from_raw",
    "outfit_log_from_raw",
]
