from __future__ import annotations

from fastapi import FastAPI
from fastapi.openapi.docs import get_redoc_html

from app.analysis.router import router as analysis_router
from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.cors import CorsHeadersMiddleware
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings

setup_logging(get_settings().log_level)

_REDOC_JS_URL = "https://cdn.jsdelivr.net/npm/redoc@2.1.4/bundles/redoc.standalone.js"


def create_app() -> FastAPI:
    # OPENAI_API_KEY is resolved per request (see app.core.llm.deps), not here.
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description=(
            "Turns a journalist's research request into a sourced data analysis using an "
            "OpenAI chat model.\n\n"
            "Design principles:\n"
            "- Stateless: one request, one model call, no storage.\n"
            "- Every error is a JSON object with a single `error` field.\n"
            "- Logs carry metadata only; story details and model output are never logged."
        ),
        docs_url="/swagger",  # Swagger UI ("Try it out")
        redoc_url=None,  # custom ReDoc page at /docs
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "analysis",
                "description": "Generate data analysis with verifiable sources for a story.",
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    # Last added runs first: metrics wraps logging, logging wraps CORS. Metrics sits
    # outermost so short-circuited OPTIONS requests are counted too.
    app.add_middleware(CorsHeadersMiddleware)
    app.add_middleware(HttpLoggingMiddleware)
    app.add_middleware(PrometheusMetricsMiddleware)

    register_exception_handlers(app)

    @app.get("/docs", include_in_schema=False)
    async def redoc_docs():
        return get_redoc_html(
            openapi_url=app.openapi_url or "/openapi.json",
            title=f"{app.title} - ReDoc",
            redoc_js_url=_REDOC_JS_URL,
        )

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "Does not call the LLM provider, so it is safe for frequent uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(analysis_router)
    return app


app = create_app()
