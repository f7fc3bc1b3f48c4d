"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_item import ClothingItem, clothing_item_from_raw
from models.outfit import Outfit, OutfitLog, outfit_from_raw, outfit_log_from_raw
from models.weather import WeatherInfo

__all__ = [
    "ClothingItem",
    "clothing_item_from_raw",
    "Outfit",
    "OutfitLog",
    "outfit_from_raw",
    "outfit_log_from_raw",
    "WeatherInfo",
]
