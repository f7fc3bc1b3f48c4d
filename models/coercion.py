"""Helpers for coercing loose payload values into model field types."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional


def ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def lowered_unique(values: Iterable[Any]) -> List[str]:
    """Strip, lower-case and de-duplicate string tags preserving order."""

    result = []
    seen = set()
    for value in values:
        key = str(value).strip().lower()
        if key and key not in seen:
            result.append(key)
            seen.add(key)
    return result


def _naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None) if value.tzinfo else value


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse ISO strings, dates or datetimes into a naive ``datetime``.

    Aware values are converted to UTC before the offset is dropped.
    """

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    return _naive_utc(parsed)


def parse_date(value: Any) -> Optional[date]:
    """Parse a calendar date from a string, ``date`` or ``datetime``."""

    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def pick(metadata: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, so camelCase and snake_case payloads both work."""

    for key in keys:
        if key in metadata and metadata[key] is not None:
            return metadata[key]
    return default


__all__ = ["ensure_list", "lowered_unique", "parse_datetime", "parse_date", "pick"]
