"""Weather provider abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests
from pydantic import BaseModel, ValidationError

from models.weather import WeatherInfo

LOGGER = logging.getLogger(__name__)

CURRENT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


class _WeatherCondition(BaseModel):
    main: str = ""
    description: str = ""


class _Main(BaseModel):
    temp: float


class _Sys(BaseModel):
    country: Optional[str] = None


class _CurrentWeatherResponse(BaseModel):
    name: Optional[str] = None
    main: _Main
    weather: List[_WeatherCondition] = []
    sys: _Sys = _Sys()


class WeatherProvider(ABC):
    """Abstract weather provider interface.

    Implementations return ``None`` when the weather cannot be determined so
    that callers never act on a guessed condition.
    """

    @abstractmethod
    def get_current_weather(self, city: str, country: str) -> Optional[WeatherInfo]:
        """Return the current weather for a city/country pair."""


class OpenWeatherProvider(WeatherProvider):
    """OpenWeather current-conditions provider with schema validation."""

    def __init__(self, api_key: str | None = None, timeout_seconds: float = 5.0, units: str = "metric") -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.units = units

    def get_current_weather(self, city: str, country: str) -> Optional[WeatherInfo]:
        if not city or not country:
            raise ValueError("city and country are required for weather lookups")

        if not self.api_key:
            LOGGER.warning("Weather lookup skipped", extra={"reason": "missing_api_key"})
            return None

        LOGGER.info("Fetching current weather", extra={"city": city, "country": country})
        params = {
            "q": f"{city},{country}",
            "appid": self.api_key,
            "units": self.units,
        }

        try:
            response = requests.get(CURRENT_WEATHER_URL, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            parsed = _CurrentWeatherResponse.model_validate(response.json())
        except requests.RequestException as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return None
        except (ValidationError, ValueError) as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return None

        condition = None
        if parsed.weather:
            condition = parsed.weather[0].description or parsed.weather[0].main or None
        return WeatherInfo(
            temperature=parsed.main.temp,
            condition=condition,
            city=parsed.name or city,
            country=parsed.sys.country or country,
        )


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests and local demos."""

    def __init__(self, weather: WeatherInfo | None = None) -> None:
        self.weather = weather

    def get_current_weather(self, city: str, country: str) -> Optional[WeatherInfo]:
        LOGGER.info("Returning mock weather", extra={"city": city, "country": country})
        if self.weather is None:
            return None
        return WeatherInfo(
            temperature=self.weather.temperature,
            condition=self.weather.condition,
            city=city,
            country=country,
        )


__all__ = ["WeatherProvider", "OpenWeatherProvider", "MockWeatherProvider", "CURRENT_WEATHER_URL"]
