"""Clothing item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from models.coercion import ensure_list, lowered_unique, parse_datetime, pick
from models.taxonomy import SEASONS, classify_slot, normalise_tags


@dataclass
class ClothingItem:
    """Represents a single piece in the user's wardrobe."""

    item_id: str
    name: str
    type: str
    color: Optional[str] = None
    material: Optional[str] = None
    seasons: List[str] = field(default_factory=list)
    occasions: List[str] = field(default_factory=list)
    favorite: bool = False
    times_worn: int = 0
    date_added: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.type = str(self.type or "").strip().lower()
        if not self.type:
            raise ValueError(f"Clothing item '{self.item_id}' requires a non-empty type")
        self.seasons = normalise_tags(ensure_list(self.seasons), SEASONS) or ["all"]
        self.occasions = lowered_unique(ensure_list(self.occasions))
        if self.color:
            self.color = str(self.color).strip().lower()
        self.times_worn = int(self.times_worn or 0)
        self.date_added = parse_datetime(self.date_added)

    @property
    def slot(self) -> Optional[str]:
        return classify_slot(self.type)


def clothing_item_from_raw(metadata: Dict[str, Any]) -> ClothingItem:
    """Factory to build a :class:`ClothingItem` from a loose storage payload."""

    item_id = pick(metadata, "item_id", "id")
    if not item_id:
        raise ValueError("Missing required field for ClothingItem: item_id")

    return ClothingItem(
        item_id=str(item_id),
        name=str(pick(metadata, "name", default="")),
        type=str(pick(metadata, "type", "category", default="")),
        color=pick(metadata, "color"),
        material=pick(metadata, "material"),
        seasons=ensure_list(pick(metadata, "seasons", "season")),
        occasions=ensure_list(pick(metadata, "occasions")),
        favorite=bool(pick(metadata, "favorite", default=False)),
        times_worn=int(pick(metadata, "times_worn", "timesWorn", default=0)),
        date_added=parse_datetime(pick(metadata, "date_added", "dateAdded")),
    )


__all__ = ["ClothingItem", "clothing_item_from_raw"]
