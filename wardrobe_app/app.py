"""Wardrobe engine application bootstrap."""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import asdict
from datetime import date as dt_date
from typing import Any, Dict, Optional

from pydantic import ValidationError

from logic.outfit_builder import recommend_outfit
from logic.outfit_scoring import score_outfits_for_weather
from logic.validation import (
    EngineResponse,
    InsightsRequest,
    LogWearRequest,
    PlanWeekRequest,
    RecommendationRequest,
    TodaysPicksRequest,
    validation_failure,
)
from logic.wear_analytics import (
    color_distribution,
    frequently_worn,
    most_worn_items,
    occasion_distribution,
    rarely_worn,
    season_distribution,
    seasonal_insights,
    seasonal_suggestions,
    unlogged_days,
)
from logic.weekly_planner import PlannerPreconditionError, plan_week
from models.outfit import OutfitLog
from models.weather import WeatherInfo
from tools.observability import instrument_operation
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.weather_provider import OpenWeatherProvider, WeatherProvider
from wardrobe_app.config import EngineConfig
from wardrobe_app.logging_config import configure_logging, get_logger, log_event, operation_context


LOGGER = get_logger(__name__)


def _invalid_request(exc: ValidationError) -> Dict[str, Any]:
    return validation_failure("Invalid request payload", exc)


def _respond(status: str, message: str | None = None, **data: Any) -> Dict[str, Any]:
    response = {"status": status, "message": message, "data": data}
    try:
        EngineResponse.model_validate(response)
    except ValidationError as exc:
        LOGGER.warning("Engine response failed schema checks: %s", exc)
        return validation_failure("Engine response failed schema checks", exc)
    return response


class WardrobeEngineApp:
    """Wires the store and weather provider to the recommendation engine."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        store: WardrobeStore | None = None,
        weather_provider: WeatherProvider | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or EngineConfig.from_env()
        configure_logging()
        self.store = store or SQLiteWardrobeStore(self.config.wardrobe_db_path)
        self.weather_provider = weather_provider or OpenWeatherProvider(api_key=self.config.weather_api_key)
        self.rng = rng or random.Random(self.config.random_seed)

    def _rng_for(self, seed: Optional[int]) -> random.Random:
        return random.Random(seed) if seed is not None else self.rng

    def current_weather(
        self, weather: Dict[str, Any] | None = None, location: Dict[str, Any] | None = None
    ) -> Optional[WeatherInfo]:
        """Use caller-supplied weather, else look it up for the location or the configured default."""

        if weather:
            return WeatherInfo(**weather)
        city = (location or {}).get("city") or self.config.default_city
        country = (location or {}).get("country") or self.config.default_country
        if not city or not country:
            return None
        return self.weather_provider.get_current_weather(city=city, country=country)

    @instrument_operation("recommend_outfit", RecommendationRequest, on_invalid=_invalid_request)
    def recommend_outfit(
        self,
        *,
        user_id: str,
        situation: str | None = None,
        weather: Dict[str, Any] | None = None,
        location: Dict[str, Any] | None = None,
        seed: int | None = None,
    ) -> Dict[str, Any]:
        """Compose a fresh outfit from the wardrobe for the given context."""

        with operation_context("app:recommend_outfit") as correlation_id:
            items = self.store.list_items(user_id)
            current = self.current_weather(weather, location)
            recommendation = recommend_outfit(
                items,
                weather=current,
                situation=situation,
                rng=self._rng_for(seed),
                filter_config=self.config.filter_config(),
                composer_config=self.config.composer_config(),
            )
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                method="recommend_outfit",
                correlation_id=correlation_id,
                user_id=user_id,
                status=recommendation.status,
                relaxed=recommendation.filters.get("relaxed"),
            )
            if recommendation.outfit is None:
                return _respond("empty_wardrobe", "Add items to your wardrobe first.")
            return _respond(
                "ok",
                outfit=asdict(recommendation.outfit),
                weather=asdict(current) if current else None,
                debug_summary={"filters": recommendation.filters, "composer": recommendation.diagnostics},
            )

    @instrument_operation("todays_picks", TodaysPicksRequest, on_invalid=_invalid_request)
    def todays_picks(
        self,
        *,
        user_id: str,
        weather: Dict[str, Any] | None = None,
        location: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        """Rank saved outfits by how often they were worn in today's weather."""

        with operation_context("app:todays_picks") as correlation_id:
            current = self.current_weather(weather, location)
            if current is None or current.temperature is None:
                return _respond("unknown_weather", "Weather is unavailable, so no picks can be scored.")
            outfits = self.store.list_outfits(user_id)
            if not outfits:
                return _respond("empty_wardrobe", "Save a few outfits first.")
            scored = score_outfits_for_weather(
                outfits,
                self.store.list_logs(user_id),
                current,
                limit=self.config.top_n,
                config=self.config.filter_config(),
            )
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                method="todays_picks",
                correlation_id=correlation_id,
                user_id=user_id,
                pick_count=len(scored),
            )
            return _respond(
                "ok",
                weather=asdict(current),
                picks=[
                    {"outfit": asdict(entry.outfit), "score": entry.score, "season_band": entry.season_band}
                    for entry in scored
                ],
            )

    @instrument_operation("wardrobe_insights", InsightsRequest, on_invalid=_invalid_request)
    def wardrobe_insights(
        self,
        *,
        user_id: str,
        rarely_worn_days: int | None = None,
        frequently_worn_threshold: int | None = None,
        today: dt_date | None = None,
    ) -> Dict[str, Any]:
        """Aggregate the wear history into usage statistics."""

        with operation_context("app:wardrobe_insights"):
            settings = self.config.analytics_config()
            days = settings.rarely_worn_days if rarely_worn_days is None else rarely_worn_days
            threshold = (
                settings.frequently_worn_threshold if frequently_worn_threshold is None else frequently_worn_threshold
            )
            today = today or dt_date.today()
            outfits = self.store.list_outfits(user_id)
            if not outfits:
                return _respond("empty_wardrobe", "Save a few outfits first.")
            logs = self.store.list_logs(user_id)
            items = self.store.list_items(user_id)

            return _respond(
                "ok",
                rarely_worn=[asdict(outfit) for outfit in rarely_worn(outfits, logs, days, now=today)],
                frequently_worn=[
                    {"outfit": asdict(outfit), "count": count}
                    for outfit, count in frequently_worn(outfits, logs, threshold)
                ],
                most_worn_items=[
                    {"item": asdict(item), "count": count}
                    for item, count in most_worn_items(outfits, logs, items, limit=settings.most_worn_limit)
                ],
                seasonal_insights={
                    season: asdict(insight) for season, insight in seasonal_insights(outfits, logs).items()
                },
                season_distribution=[asdict(entry) for entry in season_distribution(outfits, logs)],
                occasion_distribution=[asdict(entry) for entry in occasion_distribution(outfits, logs)],
                color_distribution=[asdict(entry) for entry in color_distribution(outfits, logs, items)],
                seasonal_suggestions=[
                    asdict(outfit)
                    for outfit in seasonal_suggestions(
                        outfits, logs, days, today=today, limit=settings.suggestion_limit
                    )
                ],
                unlogged_days=[
                    day.isoformat()
                    for day in unlogged_days(logs, today=today, lookback_days=settings.unlogged_lookback_days)
                ],
            )

    @instrument_operation("plan_week", PlanWeekRequest, on_invalid=_invalid_request)
    def plan_week(
        self,
        *,
        user_id: str,
        start_date: dt_date | None = None,
        seed: int | None = None,
    ) -> Dict[str, Any]:
        """Plan seven days of non-overlapping outfits and record them as wear logs."""

        with operation_context("app:plan_week") as correlation_id:
            outfits = self.store.list_outfits(user_id)
            try:
                plan = plan_week(
                    outfits,
                    start_date=start_date,
                    rng=self._rng_for(seed),
                    log_writer=lambda logs: self.store.save_logs(user_id, logs),
                    config=self.config.planner_config(),
                )
            except PlannerPreconditionError as exc:
                log_event(
                    LOGGER,
                    level=logging.INFO,
                    event="planner_precondition_failed",
                    correlation_id=correlation_id,
                    required=exc.required,
                    available=exc.available,
                )
                return _respond("planner_precondition", str(exc), required=exc.required, available=exc.available)

            return _respond(
                "ok",
                days=[
                    {
                        "date": day.date.isoformat(),
                        "day_name": day.day_name,
                        "outfit": asdict(day.outfit) if day.outfit else None,
                        "tip": day.tip,
                    }
                    for day in plan.days
                ],
                unassigned=[day.isoformat() for day in plan.unassigned_dates],
            )

    @instrument_operation("log_wear", LogWearRequest, on_invalid=_invalid_request)
    def log_wear(
        self,
        *,
        user_id: str,
        outfit_id: str,
        date: dt_date,
        time_of_day: str | None = None,
        weather_condition: str | None = None,
        temperature: float | None = None,
        activity: str | None = None,
        notes: str | None = None,
    ) -> Dict[str, Any]:
        """Record that an outfit was worn."""

        if self.store.get_outfit(user_id, outfit_id) is None:
            return _respond("needs_review", f"Unknown outfit '{outfit_id}'")
        log = OutfitLog(
            log_id=uuid.uuid4().hex,
            outfit_id=outfit_id,
            date=date,
            time_of_day=time_of_day,
            weather_condition=weather_condition,
            temperature=temperature,
            activity=activity,
            notes=notes,
        )
        stored = self.store.save_log(user_id, log)
        return _respond("ok", log=asdict(stored))


__all__ = ["WardrobeEngineApp"]
