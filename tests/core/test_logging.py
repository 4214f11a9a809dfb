from __future__ import annotations

import json
import logging
import sys

from app.core.logging import JsonFormatter, build_logging_config


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.analysis",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg="OpenAI API error",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_tolerates_missing_extras() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert payload["message"] == "OpenAI API error"
    assert payload["logger"] == "app.analysis"
    assert payload["level"] == "ERROR"
    assert payload["request_id"] is None
    assert "upstream_status_code" not in payload


def test_formatter_maps_http_fields_and_upstream_error() -> None:
    record = _record(
        request_id="req-1",
        http_method="POST",
        request_path="/api/generate-analysis",
        status_code=429,
        upstream_status_code=429,
        upstream_error={"error": {"message": "rate limited"}},
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["method"] == "POST"
    assert payload["path"] == "/api/generate-analysis"
    assert payload["status_code"] == 429
    assert payload["upstream_status_code"] == 429
    assert payload["upstream_error"] == {"error": {"message": "rate limited"}}


def test_formatter_includes_exception() -> None:
    try:
        raise ValueError("bad payload")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))
    assert "ValueError: bad payload" in payload["exception"]


def test_logging_config_levels() -> None:
    config = build_logging_config("debug")
    assert config["root"]["level"] == "DEBUG"
    assert config["loggers"]["httpx"]["level"] == "WARNING"
    assert config["disable_existing_loggers"] is False


def test_formatter_emits_analysis_outcome_fields() -> None:
    record = _record(request_id="req-2", source_count=2, has_deadline=False)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["source_count"] == 2
    assert payload["has_deadline"] is False
    assert "upstream_status_code" not in payload
