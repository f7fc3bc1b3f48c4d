"""FastAPI server exposing the wardrobe engine."""

from typing import Any, Dict

from fastapi import FastAPI, HTTPException

from logic.validation import (
    InsightsRequest,
    LogWearRequest,
    PlanWeekRequest,
    RecommendationRequest,
    TodaysPicksRequest,
)
from wardrobe_app.app import WardrobeEngineApp
from wardrobe_app.logging_config import configure_logging

configure_logging()

app = FastAPI(title="Wardrobe Engine", version="0.1.0")
_engine: WardrobeEngineApp | None = None

# Engine statuses that map onto HTTP errors; everything else is a 200 payload.
_ERROR_STATUS_CODES = {"planner_precondition": 409, "needs_review": 400}


def get_engine() -> WardrobeEngineApp:
    """Return the process-wide engine, creating it on first use."""

    global _engine
    if _engine is None:
        _engine = WardrobeEngineApp()
    return _engine


def set_engine(engine: WardrobeEngineApp | None) -> None:
    global _engine
    _engine = engine


def _unwrap(response: Dict[str, Any]) -> Dict[str, Any]:
    status_code = _ERROR_STATUS_CODES.get(response.get("status"))
    if status_code:
        raise HTTPException(status_code=status_code, detail=response.get("message") or response.get("status"))
    return response


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness check."""

    engine = get_engine()
    return {
        "status": "ok",
        "service": "wardrobe-engine",
        "environment": engine.config.environment or "local",
    }


@app.post("/outfits/recommend")
def recommend(request: RecommendationRequest) -> dict:
    """Compose a new outfit for the situation and current weather."""

    return _unwrap(get_engine().recommend_outfit(**request.model_dump(exclude_unset=True)))


@app.post("/outfits/today")
def todays_picks(request: TodaysPicksRequest) -> dict:
    """Rank saved outfits by affinity with today's weather."""

    return _unwrap(get_engine().todays_picks(**request.model_dump(exclude_unset=True)))


@app.post("/analytics/insights")
def insights(request: InsightsRequest) -> dict:
    return _unwrap(get_engine().wardrobe_insights(**request.model_dump(exclude_unset=True)))


@app.post("/planner/week")
def plan_week(request: PlanWeekRequest) -> dict:
    """Plan a week of outfits; fewer than seven saved outfits yields HTTP 409."""

    return _unwrap(get_engine().plan_week(**request.model_dump(exclude_unset=True)))


@app.post("/logs")
def log_wear(request: LogWearRequest) -> dict:
    return _unwrap(get_engine().log_wear(**request.model_dump(exclude_unset=True)))


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
