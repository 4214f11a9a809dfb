from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.exceptions import AnalysisError

logger = logging.getLogger("app.errors")

# Framework-level errors reuse the same `{"error": ...}` shape as the analysis route.
_HTTP_ERROR_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(AnalysisError)
    async def handle_analysis_error(request: Request, exc: AnalysisError) -> JSONResponse:
        # Do not log request bodies or query values; the message is already caller-safe.
        logger.info(
            "Analysis request rejected",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": exc.status_code,
                "error": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        message = _HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )
