"""
Stockdash — Request Logger Middleware

Structured request/response logging via structlog. Each request gets an id
(echoed from ``X-Request-ID`` or generated) and, on suffix routes, the
suffix being queried, so market-clock log lines can be traced back to the
exchange a client asked about.
"""

from __future__ import annotations

import re
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

log = structlog.get_logger(__name__)

# Liveness probes poll every few seconds
_SKIP_PATHS = frozenset({"/health"})

_SUFFIX_PATH_RE = re.compile(r"/suffixes/([^/]+)")

# Client-supplied ids longer than this are replaced
_MAX_REQUEST_ID_LEN = 64


def _request_id(request: Request) -> str:
    supplied = request.headers.get("X-Request-ID", "").strip()
    if supplied and len(supplied) <= _MAX_REQUEST_ID_LEN:
        return supplied
    return str(uuid.uuid4())


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """Log every request with method, path, status, and latency."""

    async def dispatch(self, request: Request, call_next):
        request_id = _request_id(request)
        request.state.request_id = request_id

        if request.url.path in _SKIP_PATHS:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        start = time.perf_counter()
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        match = _SUFFIX_PATH_RE.search(request.url.path)
        if match:
            structlog.contextvars.bind_contextvars(suffix=match.group(1).upper())

        log.info(
            "request.start",
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
        except Exception:
            log.error(
                "request.error",
                method=request.method,
                path=request.url.path,
                latency_ms=round((time.perf_counter() - start) * 1000, 1),
            )
            raise

        log.info(
            "request.complete",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency_ms=round((time.perf_counter() - start) * 1000, 1),
        )

        response.headers["X-Request-ID"] = request_id
        return response
