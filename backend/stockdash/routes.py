"""
Stockdash — API Routes

All HTTP endpoints. Thin layer — delegates to the suffix registry, the
holiday calendar and the market-hours engine.
"""

from __future__ import annotations

import time as _time
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from stockdash.config import get_settings
from stockdash.data.market_holidays import (
    get_market_from_exchange,
    get_upcoming_holidays,
    is_market_holiday,
)
from stockdash.data.suffix_mappings import (
    POPULAR_SUFFIXES,
    SUFFIX_MAPPINGS,
    get_all_suffixes,
    get_exchange_info_from_suffix,
    search_suffix,
)
from stockdash.engines.market_hours_engine import compute_market_status
from stockdash.models import (
    ExchangeInfo,
    HolidayCheck,
    HolidayList,
    MarketStatus,
    SuffixInfo,
    SuffixList,
)
from stockdash.utils import parse_iso_date, validate_suffix, validate_symbol

# ──────────────────────────────────────────────
# Health
# ──────────────────────────────────────────────

health_router = APIRouter()


@health_router.get("/health")
async def health_check():
    """Liveness probe with registry size and process uptime."""
    from stockdash.main import APP_START_TIME

    settings = get_settings()
    return {
        "status": "ok",
        "version": "1.0.0",
        "environment": settings.app_env,
        "uptime_seconds": round(_time.monotonic() - APP_START_TIME, 1),
        "suffix_count": len(SUFFIX_MAPPINGS),
    }


# ──────────────────────────────────────────────
# Suffix Registry & Market Clock
# ──────────────────────────────────────────────

market_router = APIRouter()


def _lookup(suffix: str) -> SuffixInfo:
    try:
        key = validate_suffix(suffix)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    info = search_suffix(key)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Unknown suffix {key}")
    return info


@market_router.get("/suffixes", response_model=SuffixList)
async def list_suffixes():
    """Every registered suffix plus the quick-pick list."""
    suffixes = get_all_suffixes()
    return SuffixList(suffixes=suffixes, count=len(suffixes), popular=list(POPULAR_SUFFIXES))


@market_router.get("/suffixes/{suffix}", response_model=SuffixInfo)
async def get_suffix(suffix: str):
    """Exchange details for one suffix (leading dot optional)."""
    return _lookup(suffix)


@market_router.get("/suffixes/{suffix}/status", response_model=MarketStatus)
async def get_market_status(suffix: str):
    """Live open/closed state and countdown for the suffix's exchange."""
    info = _lookup(suffix)
    if info.market_hours is None:
        raise HTTPException(
            status_code=404,
            detail=f"No trading schedule for {info.suffix} ({info.exchange})",
        )

    settings = get_settings()
    return compute_market_status(
        info.market_hours,
        honor_half_days=settings.market_honor_half_days,
    )


@market_router.get("/exchange-info/{symbol}", response_model=ExchangeInfo)
async def get_exchange_info(symbol: str):
    """Exchange and currency for a suffixed ticker such as ``VOLV-B.SE``."""
    try:
        ticker = validate_symbol(symbol)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    info = get_exchange_info_from_suffix(ticker)
    if info is None:
        raise HTTPException(status_code=404, detail=f"No known exchange suffix on {ticker}")
    return info


# ──────────────────────────────────────────────
# Holidays
# ──────────────────────────────────────────────

@market_router.get("/holidays", response_model=HolidayList)
async def list_holidays(
    market: Optional[str] = Query(None, description="Market or exchange name, e.g. US, LSE"),
    days_ahead: Optional[int] = Query(None, ge=1, le=366),
):
    """Upcoming exchange holidays, soonest first."""
    settings = get_settings()
    window = days_ahead or settings.holiday_lookahead_days
    key = (get_market_from_exchange(market) or market) if market else None

    holidays = get_upcoming_holidays(
        market=key,
        days_ahead=window,
        limit=settings.holiday_limit,
    )
    return HolidayList(market=key, days_ahead=window, holidays=holidays)


@market_router.get("/holidays/{market}/{day}", response_model=HolidayCheck)
async def check_holiday(market: str, day: str):
    """Whether *day* (YYYY-MM-DD) is a holiday or early close on *market*."""
    try:
        parsed = parse_iso_date(day)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    key = get_market_from_exchange(market) or market
    return HolidayCheck(market=key, date=parsed, holiday=is_market_holiday(parsed, key))
