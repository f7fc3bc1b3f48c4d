"""Phrase tables for naming generated outfits and planned days."""

from __future__ import annotations

import random
from typing import Dict, List

from models.taxonomy import normalize_condition
from models.weather import WeatherInfo

SITUATION_PHRASES: Dict[str, List[str]] = {
    "casual": ["Easygoing Ensemble", "Relaxed Layers", "Weekend Casual"],
    "formal": ["Refined Elegance", "Black-Tie Polish", "Classic Formal"],
    "business": ["Boardroom Ready", "Polished Professional", "Office Sharp"],
    "party": ["Night Out Glam", "Party Statement", "Dance Floor Edit"],
    "date": ["Date Night Charm", "Romantic Edit", "Dinner Date Chic"],
    "travel": ["Jet-Set Comfort", "Wanderer's Kit", "Travel Day Essentials"],
}
WEATHER_PHRASES: Dict[str, List[str]] = {
    "clear": ["Sunny Days", "Clear Skies", "Bright Afternoons"],
    "cloudy": ["Overcast Days", "Cloudy Skies"],
    "rain": ["Rainy Days", "Drizzly Weather", "Wet Commutes"],
    "snow": ["Snowy Days", "Winter Flurries"],
    "windy": ["Breezy Days", "Gusty Weather"],
}
DEFAULT_SITUATION_PHRASE = "Versatile Look"
DEFAULT_WEATHER_PHRASE = "All-Weather"
NO_WEATHER_PHRASE = "Seasonal Style"

WEEKDAY_TIPS = [
    "Perfect for {day}! This outfit balances comfort with style.",
    "The color combination will make you feel confident all day.",
    "Great choice for transitioning from day to evening activities.",
    "This look captures the perfect seasonal vibe.",
    "These pieces work beautifully together for any occasion.",
    "A versatile outfit that can be dressed up or down.",
]
WEEKEND_TIPS = [
    "Weekend vibes! This relaxed look is perfect for your day off.",
    "Comfortable yet stylish, ideal for weekend adventures.",
    "A laid-back look that still keeps you looking put-together.",
]
WEEKEND_DAYS = {"saturday", "sunday"}


def name_outfit(
    situation: str | None = None,
    weather: WeatherInfo | None = None,
    rng: random.Random | None = None,
) -> str:
    """Return ``"<Situation Phrase> for <Weather Phrase>"``."""

    rng = rng or random.Random()
    situation_key = str(situation or "").strip().lower()
    situation_phrase = (
        rng.choice(SITUATION_PHRASES[situation_key])
        if situation_key in SITUATION_PHRASES
        else DEFAULT_SITUATION_PHRASE
    )

    if weather is None:
        weather_phrase = NO_WEATHER_PHRASE
    else:
        condition = normalize_condition(weather.condition)
        weather_phrase = (
            rng.choice(WEATHER_PHRASES[condition]) if condition in WEATHER_PHRASES else DEFAULT_WEATHER_PHRASE
        )
    return f"{situation_phrase} for {weather_phrase}"


def style_tip_for_day(day_name: str, rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    if day_name.strip().lower() in WEEKEND_DAYS:
        return rng.choice(WEEKEND_TIPS)
    return rng.choice(WEEKDAY_TIPS).format(day=day_name)


__all__ = ["name_outfit", "style_tip_for_day", "SITUATION_PHRASES", "WEATHER_PHRASES"]
