"""Instrumentation for engine entry points.

``instrument_operation`` validates keyword arguments against a pydantic
request model before the wrapped call runs, then reports the call as
structured ``engine_call_*`` events that include the returned status.
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from wardrobe_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _summarise_arguments(kwargs: dict) -> dict:
    """Keep scalars, reduce containers to their size."""

    summary: dict = {}
    for key, value in kwargs.items():
        if isinstance(value, (str, int, float, bool, type(None))):
            summary[key] = value
        elif isinstance(value, (list, tuple, set, dict)):
            summary[key] = f"{type(value).__name__}[{len(value)}]"
        else:
            summary[key] = type(value).__name__
    return summary


def _result_status(result: Any) -> Any:
    return result.get("status") if isinstance(result, dict) else None


def instrument_operation(
    operation: str,
    request_model: type[BaseModel] | None = None,
    on_invalid: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorate an engine method with request validation and call logging.

    Validated keyword arguments are re-dumped with ``exclude_unset`` so the
    wrapped method sees coerced values (dates, floats) and its own defaults
    for anything the caller left out. With ``on_invalid`` a validation error
    is turned into a return value; otherwise it propagates.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            started = time.perf_counter()

            def elapsed_ms() -> float:
                return round((time.perf_counter() - started) * 1000, 2)

            if request_model is not None:
                try:
                    kwargs = request_model.model_validate(kwargs).model_dump(exclude_unset=True)
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "engine_call_rejected",
                        operation=operation,
                        correlation_id=correlation_id,
                        error_count=exc.error_count(),
                        fields=sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]}),
                    )
                    if on_invalid is None:
                        raise
                    return on_invalid(exc)

            log_event(
                LOGGER,
                logging.INFO,
                "engine_call_started",
                operation=operation,
                correlation_id=correlation_id,
                arguments=_summarise_arguments(kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "engine_call_failed",
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=elapsed_ms(),
                    exc_info=True,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "engine_call_completed",
                operation=operation,
                correlation_id=correlation_id,
                duration_ms=elapsed_ms(),
                result_status=_result_status(result),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_operation"]
