"""
Stockdash — FastAPI Application Entry Point

Serves the ticker-suffix registry, live market status per exchange and the
exchange holiday calendar.
"""

import time as _time
from datetime import date, datetime, timedelta, timezone
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

from stockdash.config import get_settings
from stockdash.data.market_holidays import HOLIDAYS_COVERED_THROUGH
from stockdash.data.suffix_mappings import SUFFIX_MAPPINGS
from stockdash.error_handlers import register_error_handlers
from stockdash.logging_config import configure_logging
from stockdash.middleware import RequestLoggerMiddleware, SecurityHeadersMiddleware
from stockdash.routes import health_router, market_router

log = structlog.get_logger("stockdash.startup")

# Track server start time for uptime calculations
APP_START_TIME: float = _time.monotonic()


def _validate_config(settings, today: date | None = None) -> None:
    """Warn on settings that are legal but probably unintended."""
    if settings.is_production and settings.app_debug:
        log.warning("config.debug_in_production", detail="APP_DEBUG should be false in production")
    if not settings.cors_origin_list:
        log.warning("config.no_cors_origins", impact="browser clients will be rejected")

    # ── Holiday table coverage ──
    today = today or datetime.now(timezone.utc).date()
    if today > HOLIDAYS_COVERED_THROUGH:
        log.warning(
            "holidays.table_expired",
            covered_through=HOLIDAYS_COVERED_THROUGH.isoformat(),
            impact="market status ignores exchange holidays",
        )
    elif today + timedelta(days=settings.holiday_lookahead_days) > HOLIDAYS_COVERED_THROUGH:
        log.warning(
            "holidays.table_ending",
            covered_through=HOLIDAYS_COVERED_THROUGH.isoformat(),
            lookahead_days=settings.holiday_lookahead_days,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    settings = get_settings()
    log.info(
        "startup",
        env=settings.app_env,
        suffixes=len(SUFFIX_MAPPINGS),
        scheduled=sum(1 for s in SUFFIX_MAPPINGS.values() if s.market_hours is not None),
        honor_half_days=settings.market_honor_half_days,
    )
    _validate_config(settings)

    yield

    log.info("shutdown")


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    configure_logging(settings.log_level, format_json=settings.log_json)

    app = FastAPI(
        title="Stockdash",
        description="""# Stockdash API

Exchange reference data for the charting dashboard.

## Features
- **Suffix Guide** — Bloomberg-style ticker suffixes with exchange and currency
- **Market Clock** — Open/closed state and countdown for each exchange
- **Holiday Calendar** — Upcoming closures and early-close days
""",
        version="1.0.0",
        debug=settings.app_debug,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "Health", "description": "Service health checks"},
            {"name": "Markets", "description": "Suffixes, market status and holidays"},
        ],
    )

    # ── Global Error Handlers ──
    register_error_handlers(app)

    # ── CORS (configurable from settings) ──
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ── Custom Middleware ──
    app.add_middleware(RequestLoggerMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    # ── GZip Response Compression ──
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # ── Routes (unversioned) ──
    app.include_router(health_router, tags=["Health"])

    # ── Routes (v1 API) ──
    API_V1 = "/v1/api"
    app.include_router(market_router, prefix=API_V1, tags=["Markets"])

    # ── API Version Header ──
    @app.middleware("http")
    async def add_api_version_header(request, call_next):
        response = await call_next(request)
        response.headers["X-API-Version"] = "v1"
        return response

    return app


app = create_app()
