"""Prometheus request metrics and the `/metrics` exposition route."""

from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.middleware.http_logging import route_label

metrics_router = APIRouter(tags=["metrics"])

_LABELS = ("method", "route", "status_code")

# Analysis requests wait on the LLM provider; the upper buckets cover its latency.
_LATENCY_BUCKETS = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0)

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=_LABELS,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=_LABELS,
    buckets=_LATENCY_BUCKETS,
)


def _observe(*, request: Request, status_code: int, elapsed: float) -> None:
    labels = {
        "method": request.method,
        "route": route_label(request),
        "status_code": str(int(status_code)),
    }
    http_requests_total.labels(**labels).inc()
    http_request_duration_seconds.labels(**labels).observe(elapsed)


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    """Counts every request, including OPTIONS answered by the CORS layer."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            _observe(
                request=request, status_code=status_code, elapsed=time.perf_counter() - started
            )


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return Response(content=cast(bytes, generate_latest()), media_type=CONTENT_TYPE_LATEST)
