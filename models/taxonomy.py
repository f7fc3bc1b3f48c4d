"""Canonical taxonomy definitions for clothing items.

This module centralises the fixed lookup tables used by the recommendation
engine: functional slots, seasons, occasions and weather conditions. Helper
functions keep classification consistent across filters, the composer and the
analytics code.
"""

from typing import Dict, Iterable, List, Optional

SLOT_KEYWORDS: Dict[str, List[str]] = {
    "top": ["shirt", "t-shirt", "blouse", "sweater", "hoodie", "top"],
    "bottom": ["pants", "jeans", "shorts", "skirt", "leggings"],
    "dress": ["dress", "jumpsuit"],
    "outerwear": ["jacket", "coat", "blazer", "cardigan"],
    "footwear": ["shoes", "sneakers", "boots", "sandals", "heels"],
    "accessory": [
        "hat",
        "scarf",
        "gloves",
        "belt",
        "bag",
        "jewelry",
        "sunglasses",
        "accessory",
        "accessories",
    ],
}
SLOTS = list(SLOT_KEYWORDS)

# Substrings that mark a type as a generic accessory when no synonym matches.
ACCESSORY_HINTS = ("accessor", "bag", "jewel", "scarf", "belt")

SEASONS = ["spring", "summer", "autumn", "winter", "all"]
OCCASIONS = ["casual", "formal", "business", "party", "date", "travel", "work", "sport", "special"]
TIMES_OF_DAY = ["morning", "afternoon", "evening", "night", "all-day"]
WEATHER_CONDITIONS = ["clear", "cloudy", "rain", "snow", "windy"]

_CONDITION_HINTS = [
    ("snow", ("snow", "sleet", "blizzard")),
    ("rain", ("rain", "drizzle", "shower", "thunder", "storm")),
    ("windy", ("wind", "gust")),
    ("cloudy", ("cloud", "overcast", "fog", "mist")),
    ("clear", ("clear", "sun", "hot", "fair")),
]


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return str(value).strip().lower()


def classify_slot(item_type: str | None) -> Optional[str]:
    """Return the functional slot for a raw clothing type.

    Unknown types return ``None``; absence from every slot is the signal that
    the item cannot take part in slot-based composition.
    """

    if not item_type:
        return None
    key = _normalize_key(item_type)
    for slot, synonyms in SLOT_KEYWORDS.items():
        if key in synonyms:
            return slot
    if any(hint in key for hint in ACCESSORY_HINTS):
        return "accessory"
    return None


def group_by_slot(items: Iterable) -> Dict[str, list]:
    """Bucket items by slot, skipping anything the classifier does not know."""

    grouped: Dict[str, list] = {slot: [] for slot in SLOTS}
    for item in items:
        slot = classify_slot(getattr(item, "type", None))
        if slot:
            grouped[slot].append(item)
    return grouped


def normalize_condition(raw_condition: str | None) -> Optional[str]:
    """Map a free-form weather description onto a canonical condition key."""

    if not raw_condition:
        return None
    key = _normalize_key(raw_condition)
    if key in WEATHER_CONDITIONS:
        return key
    for condition, hints in _CONDITION_HINTS:
        if any(hint in key for hint in hints):
            return condition
    return None


def season_for_month(month: int) -> str:
    """Northern hemisphere season for a calendar month (1-12)."""

    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    if 9 <= month <= 11:
        return "autumn"
    return "winter"


def normalise_tags(values: Iterable[str], allowed: List[str]) -> List[str]:
    """Normalise and deduplicate tags against an allowed set."""

    normalised = []
    seen = set()
    for value in values:
        key = _normalize_key(value)
        if key in allowed and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "SLOT_KEYWORDS",
    "SLOTS",
    "SEASONS",
    "OCCASIONS",
    "TIMES_OF_DAY",
    "WEATHER_CONDITIONS",
    "classify_slot",
    "group_by_slot",
    "normalize_condition",
    "season_for_month",
    "normalise_tags",
]
