"""Access log middleware: one structured record per request, keyed by X-Request-ID.

Research requests describe unpublished stories, so only the method, route template,
status and timing are recorded.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.http")

REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def _get_or_create_request_id(*, request: Request) -> str:
    # Caller ids outside a narrow alphabet would end up verbatim in log lines.
    candidate = request.headers.get(REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def route_label(request: Request) -> str:
    """Route template for logs and metrics, or "unmatched" when routing did not match."""

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


def _access_fields(
    *, request: Request, request_id: str, status_code: int, started: float
) -> dict[str, Any]:
    return {
        "request_id": request_id,
        "http_method": request.method,
        "request_path": route_label(request),
        "status_code": status_code,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
    }


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _get_or_create_request_id(request=request)
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - logged with stack trace, then re-raised
            logger.exception(
                "Unhandled exception while processing request",
                extra=_access_fields(
                    request=request, request_id=request_id, status_code=500, started=started
                ),
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            extra=_access_fields(
                request=request,
                request_id=request_id,
                status_code=response.status_code,
                started=started,
            ),
        )
        return response
