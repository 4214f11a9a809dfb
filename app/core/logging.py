"""JSON logging to stdout.

Research requests often describe unpublished stories. Log records carry request
metadata only; bodies, prompts and model output never reach a handler from our code.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import UTC, datetime
from typing import Any

# Output key -> record attributes tried in order. Middleware uses `http_method` and
# `request_path` because `method`/`path` read ambiguously on third-party records.
_CONTEXT_FIELDS: dict[str, tuple[str, ...]] = {
    "request_id": ("request_id",),
    "method": ("method", "http_method"),
    "path": ("path", "request_path"),
    "status_code": ("status_code",),
    "duration_ms": ("duration_ms",),
}

# Only emitted when present: upstream failures and analysis outcome details.
_OPTIONAL_FIELDS = ("upstream_status_code", "upstream_error", "source_count", "has_deadline")


def _lookup(record: logging.LogRecord, names: tuple[str, ...]) -> Any:
    for name in names:
        value = getattr(record, name, None)
        if value is not None:
            return value
    return None


class JsonFormatter(logging.Formatter):
    """One JSON object per record; never raises on missing `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, names in _CONTEXT_FIELDS.items():
            payload[key] = _lookup(record, names)
        for key in _OPTIONAL_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # default=str: upstream error payloads are arbitrary JSON, or text when not JSON.
        return json.dumps(payload, ensure_ascii=False, default=str)


def build_logging_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": JsonFormatter}},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level.upper(), "handlers": ["stdout"]},
        # httpx logs every outbound request URL at INFO.
        "loggers": {"httpx": {"level": "WARNING"}},
    }


def setup_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(build_logging_config(level))
