"""Pydantic schemas and helpers for validating engine requests and responses."""

from __future__ import annotations

from datetime import date as dt_date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from models.taxonomy import TIMES_OF_DAY


class WeatherInput(BaseModel):
    """Weather snapshot supplied by the caller instead of a provider lookup."""

    temperature: Optional[float] = None
    condition: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class LocationInput(BaseModel):
    city: str = Field(min_length=1)
    country: str = Field(min_length=1)


class RecommendationRequest(BaseModel):
    """Input contract for a single outfit recommendation."""

    user_id: str = Field(min_length=1)
    situation: Optional[str] = None
    weather: Optional[WeatherInput] = None
    location: Optional[LocationInput] = None
    seed: Optional[int] = None


class TodaysPicksRequest(BaseModel):
    """Input contract for ranking saved outfits against the current weather."""

    model_config = ConfigDict(extra="forbid")

    user_id: str = Field(min_length=1)
    weather: Optional[WeatherInput] = None
    location: Optional[LocationInput] = None


class InsightsRequest(BaseModel):
    """Input contract for wardrobe usage analytics."""

    user_id: str = Field(min_length=1)
    rarely_worn_days: Optional[int] = Field(default=None, ge=0)
    frequently_worn_threshold: Optional[int] = Field(default=None, ge=0)
    today: Optional[dt_date] = None


class PlanWeekRequest(BaseModel):
    user_id: str = Field(min_length=1)
    start_date: Optional[dt_date] = None
    seed: Optional[int] = None


class LogWearRequest(BaseModel):
    """Input contract for recording that an outfit was worn."""

    user_id: str = Field(min_length=1)
    outfit_id: str = Field(min_length=1)
    date: dt_date
    time_of_day: Optional[str] = None
    weather_condition: Optional[str] = None
    temperature: Optional[float] = None
    activity: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("time_of_day")
    @classmethod
    def _validate_time_of_day(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        key = value.strip().lower()
        if key not in TIMES_OF_DAY:
            raise ValueError(f"time_of_day must be one of {TIMES_OF_DAY}")
        return key


class EngineResponse(BaseModel):
    """Minimal structure expected from every engine entry point."""

    status: Literal["ok", "empty_wardrobe", "unknown_weather", "planner_precondition", "needs_review"]
    message: Optional[str] = None
    data: Dict[str, Any] = {}


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_url=False, include_context=False)).model_dump()


__all__ = [
    "WeatherInput",
    "LocationInput",
    "RecommendationRequest",
    "TodaysPicksRequest",
    "InsightsRequest",
    "PlanWeekRequest",
    "LogWearRequest",
    "EngineResponse",
    "ValidationResult",
    "validation_failure",
]
