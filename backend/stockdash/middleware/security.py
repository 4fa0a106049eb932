"""
Stockdash — Security & Caching Headers Middleware

Browser hardening headers on every response, HSTS in production, and cache
policy per route: live market status must never be served from a cache,
while the static suffix and holiday reference data may be.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from stockdash.config import get_settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Injects security and cache-control headers into every response."""

    COMMON_HEADERS: dict[str, str] = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }

    PRODUCTION_HEADERS: dict[str, str] = {
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    }

    # Status responses carry a live countdown
    LIVE_CACHE_CONTROL = "no-store"
    REFERENCE_CACHE_CONTROL = "public, max-age=3600"

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for header, value in self.COMMON_HEADERS.items():
            response.headers[header] = value

        if get_settings().is_production:
            for header, value in self.PRODUCTION_HEADERS.items():
                response.headers[header] = value

        path = request.url.path
        if path.endswith("/status") or path == "/health":
            response.headers["Cache-Control"] = self.LIVE_CACHE_CONTROL
        elif response.status_code == 200 and path.startswith("/v1/api/"):
            response.headers["Cache-Control"] = self.REFERENCE_CACHE_CONTROL

        return response
