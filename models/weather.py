"""Weather snapshot consumed by the filters, composer and scorer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WeatherInfo:
    """Current weather for a city; ``city`` and ``country`` are display only."""

    temperature: Optional[float] = None
    condition: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @property
    def has_temperature(self) -> bool:
        return self.temperature is not None


__all__ = ["WeatherInfo"]
