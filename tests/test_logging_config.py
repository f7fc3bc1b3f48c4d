from __future__ import annotations

import io
import json
import logging
import sys
from datetime import date
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from wardrobe_app.logging_config import (
    configure_logging,
    correlation_context,
    get_logger,
    log_event,
    redact_for_log,
)


def test_redact_for_log_masks_personal_fields() -> None:
    scrubbed = redact_for_log(
        {
            "user_id": "u-42",
            "location": {"city": "Oslo", "country": "NO"},
            "weather": {"city": "Oslo", "temperature": 3.5},
            "contact": "someone@example.com",
            "worn_on": date(2024, 2, 1),
            "items": ("tee", "jeans"),
        }
    )
    assert scrubbed["user_id"] == "[redacted]"
    assert scrubbed["location"] == "[redacted]"
    assert scrubbed["weather"] == {"city": "[redacted]", "temperature": 3.5}
    assert scrubbed["contact"] == "[redacted-email]"
    assert scrubbed["worn_on"] == "2024-02-01"
    assert scrubbed["items"] == ["tee", "jeans"]


def test_log_event_emits_json_with_correlation_id() -> None:
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    logger = get_logger("tests.logging")

    with correlation_context("corr-1"):
        log_event(logger, logging.INFO, "plan_created", user_id="u-1", planned_days=7, notes="gym day")

    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["event"] == "plan_created"
    assert payload["service"] == "wardrobe-engine"
    assert payload["correlation_id"] == "corr-1"
    assert payload["planned_days"] == 7
    assert payload["user_id"] == "[redacted]"
    assert payload["notes"] == "[redacted]"
    configure_logging()
