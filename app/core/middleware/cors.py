"""CORS headers for browser-based newsroom clients.

Starlette's CORSMiddleware only answers preflights that carry `Origin` and
`Access-Control-Request-Method`, and echoes headers back selectively. Clients of this
API expect a fixed header set on every response and a bare 200 for any OPTIONS call,
so this middleware applies the headers unconditionally instead.
"""

from __future__ import annotations

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


class CorsHeadersMiddleware(BaseHTTPMiddleware):
    """Set permissive CORS headers and short-circuit preflight requests."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            # Preflight: no routing, no body.
            return Response(status_code=200, headers=CORS_HEADERS)

        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
