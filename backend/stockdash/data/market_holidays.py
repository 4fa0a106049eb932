"""
Stockdash — Market Holidays

Exchange holidays and early closes for the major markets, 2024-2026.
Feeds both the holiday endpoints and the trading schedules attached to
suffixes in ``stockdash.data.suffix_mappings``.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from stockdash.models import HalfDay, MarketHoliday


def _h(name: str, day: str, market: str, country: str, early_close: Optional[str] = None) -> MarketHoliday:
    return MarketHoliday(
        name=name,
        date=date.fromisoformat(day),
        market=market,
        country=country,
        is_half_day=early_close is not None,
        early_close_time=time.fromisoformat(early_close) if early_close else None,
    )


_US = ("US", "United States")
_UK = ("UK", "United Kingdom")
_DE = ("Germany", "Germany")
_JP = ("Japan", "Japan")

MARKET_HOLIDAYS: list[MarketHoliday] = [
    # ── United States ──
    _h("New Year's Day", "2024-01-01", *_US),
    _h("Martin Luther King Jr. Day", "2024-01-15", *_US),
    _h("Presidents' Day", "2024-02-19", *_US),
    _h("Good Friday", "2024-03-29", *_US),
    _h("Memorial Day", "2024-05-27", *_US),
    _h("Juneteenth", "2024-06-19", *_US),
    _h("Independence Day", "2024-07-04", *_US),
    _h("Labor Day", "2024-09-02", *_US),
    _h("Thanksgiving Day", "2024-11-28", *_US),
    _h("Christmas Day", "2024-12-25", *_US),
    _h("Black Friday", "2024-11-29", *_US, early_close="13:00"),
    _h("Christmas Eve", "2024-12-24", *_US, early_close="13:00"),

    _h("New Year's Day", "2025-01-01", *_US),
    _h("Martin Luther King Jr. Day", "2025-01-20", *_US),
    _h("Presidents' Day", "2025-02-17", *_US),
    _h("Good Friday", "2025-04-18", *_US),
    _h("Memorial Day", "2025-05-26", *_US),
    _h("Juneteenth", "2025-06-19", *_US),
    _h("Independence Day", "2025-07-04", *_US),
    _h("Labor Day", "2025-09-01", *_US),
    _h("Thanksgiving Day", "2025-11-27", *_US),
    _h("Christmas Day", "2025-12-25", *_US),
    _h("Black Friday", "2025-11-28", *_US, early_close="13:00"),
    _h("Christmas Eve", "2025-12-24", *_US, early_close="13:00"),

    _h("New Year's Day", "2026-01-01", *_US),
    _h("Martin Luther King Jr. Day", "2026-01-19", *_US),
    _h("Presidents' Day", "2026-02-16", *_US),
    _h("Good Friday", "2026-04-03", *_US),
    _h("Memorial Day", "2026-05-25", *_US),
    _h("Juneteenth", "2026-06-19", *_US),
    _h("Independence Day (observed)", "2026-07-03", *_US),
    _h("Labor Day", "2026-09-07", *_US),
    _h("Thanksgiving Day", "2026-11-26", *_US),
    _h("Christmas Day", "2026-12-25", *_US),
    _h("Black Friday", "2026-11-27", *_US, early_close="13:00"),
    _h("Christmas Eve", "2026-12-24", *_US, early_close="13:00"),

    # ── United Kingdom ──
    _h("New Year's Day", "2024-01-01", *_UK),
    _h("Good Friday", "2024-03-29", *_UK),
    _h("Easter Monday", "2024-04-01", *_UK),
    _h("Early May Bank Holiday", "2024-05-06", *_UK),
    _h("Spring Bank Holiday", "2024-05-27", *_UK),
    _h("Summer Bank Holiday", "2024-08-26", *_UK),
    _h("Christmas Day", "2024-12-25", *_UK),
    _h("Boxing Day", "2024-12-26", *_UK),

    _h("New Year's Day", "2025-01-01", *_UK),
    _h("Good Friday", "2025-04-18", *_UK),
    _h("Easter Monday", "2025-04-21", *_UK),
    _h("Early May Bank Holiday", "2025-05-05", *_UK),
    _h("Spring Bank Holiday", "2025-05-26", *_UK),
    _h("Summer Bank Holiday", "2025-08-25", *_UK),
    _h("Christmas Day", "2025-12-25", *_UK),
    _h("Boxing Day", "2025-12-26", *_UK),

    _h("New Year's Day", "2026-01-01", *_UK),
    _h("Good Friday", "2026-04-03", *_UK),
    _h("Easter Monday", "2026-04-06", *_UK),
    _h("Early May Bank Holiday", "2026-05-04", *_UK),
    _h("Spring Bank Holiday", "2026-05-25", *_UK),
    _h("Summer Bank Holiday", "2026-08-31", *_UK),
    _h("Christmas Day", "2026-12-25", *_UK),
    _h("Boxing Day (substitute)", "2026-12-28", *_UK),

    # ── Germany ──
    _h("New Year's Day", "2024-01-01", *_DE),
    _h("Good Friday", "2024-03-29", *_DE),
    _h("Easter Monday", "2024-04-01", *_DE),
    _h("Labour Day", "2024-05-01", *_DE),
    _h("Christmas Eve", "2024-12-24", *_DE),
    _h("Christmas Day", "2024-12-25", *_DE),
    _h("Boxing Day", "2024-12-26", *_DE),
    _h("New Year's Eve", "2024-12-31", *_DE),

    _h("New Year's Day", "2025-01-01", *_DE),
    _h("Good Friday", "2025-04-18", *_DE),
    _h("Easter Monday", "2025-04-21", *_DE),
    _h("Labour Day", "2025-05-01", *_DE),
    _h("Christmas Eve", "2025-12-24", *_DE),
    _h("Christmas Day", "2025-12-25", *_DE),
    _h("Boxing Day", "2025-12-26", *_DE),
    _h("New Year's Eve", "2025-12-31", *_DE),

    _h("New Year's Day", "2026-01-01", *_DE),
    _h("Good Friday", "2026-04-03", *_DE),
    _h("Easter Monday", "2026-04-06", *_DE),
    _h("Labour Day", "2026-05-01", *_DE),
    _h("Christmas Eve", "2026-12-24", *_DE),
    _h("Christmas Day", "2026-12-25", *_DE),
    _h("New Year's Eve", "2026-12-31", *_DE),

    # ── Japan ──
    _h("New Year's Day", "2024-01-01", *_JP),
    _h("New Year Holiday", "2024-01-02", *_JP),
    _h("New Year Holiday", "2024-01-03", *_JP),
    _h("Coming of Age Day", "2024-01-08", *_JP),
    _h("National Foundation Day", "2024-02-11", *_JP),
    _h("Emperor's Birthday", "2024-02-23", *_JP),
    _h("Vernal Equinox Day", "2024-03-20", *_JP),
    _h("Showa Day", "2024-04-29", *_JP),
    _h("Constitution Memorial Day", "2024-05-03", *_JP),
    _h("Greenery Day", "2024-05-04", *_JP),
    _h("Children's Day", "2024-05-05", *_JP),
    _h("Marine Day", "2024-07-15", *_JP),
    _h("Mountain Day", "2024-08-11", *_JP),
    _h("Respect for the Aged Day", "2024-09-16", *_JP),
    _h("Autumnal Equinox Day", "2024-09-22", *_JP),
    _h("Sports Day", "2024-10-14", *_JP),
    _h("Culture Day", "2024-11-03", *_JP),
    _h("Labour Thanksgiving Day", "2024-11-23", *_JP),
    _h("New Year's Eve", "2024-12-31", *_JP),

    _h("New Year's Day", "2025-01-01", *_JP),
    _h("New Year Holiday", "2025-01-02", *_JP),
    _h("New Year Holiday", "2025-01-03", *_JP),
    _h("Coming of Age Day", "2025-01-13", *_JP),
    _h("National Foundation Day", "2025-02-11", *_JP),
    _h("Emperor's Birthday", "2025-02-23", *_JP),
    _h("Vernal Equinox Day", "2025-03-20", *_JP),
    _h("Showa Day", "2025-04-29", *_JP),
    _h("Constitution Memorial Day", "2025-05-03", *_JP),
    _h("Greenery Day", "2025-05-04", *_JP),
    _h("Children's Day", "2025-05-05", *_JP),
    _h("Marine Day", "2025-07-21", *_JP),
    _h("Mountain Day", "2025-08-11", *_JP),
    _h("Respect for the Aged Day", "2025-09-15", *_JP),
    _h("Autumnal Equinox Day", "2025-09-23", *_JP),
    _h("Sports Day", "2025-10-13", *_JP),
    _h("Culture Day", "2025-11-03", *_JP),
    _h("Labour Thanksgiving Day", "2025-11-23", *_JP),
    _h("New Year's Eve", "2025-12-31", *_JP),

    _h("New Year's Day", "2026-01-01", *_JP),
    _h("New Year Holiday", "2026-01-02", *_JP),
    _h("Coming of Age Day", "2026-01-12", *_JP),
    _h("National Foundation Day", "2026-02-11", *_JP),
    _h("Emperor's Birthday", "2026-02-23", *_JP),
    _h("Vernal Equinox Day", "2026-03-20", *_JP),
    _h("Showa Day", "2026-04-29", *_JP),
    _h("Constitution Memorial Day (substitute)", "2026-05-06", *_JP),
    _h("Greenery Day", "2026-05-04", *_JP),
    _h("Children's Day", "2026-05-05", *_JP),
    _h("Marine Day", "2026-07-20", *_JP),
    _h("Mountain Day", "2026-08-11", *_JP),
    _h("Respect for the Aged Day", "2026-09-21", *_JP),
    _h("Citizens' Holiday", "2026-09-22", *_JP),
    _h("Autumnal Equinox Day", "2026-09-23", *_JP),
    _h("Sports Day", "2026-10-12", *_JP),
    _h("Culture Day", "2026-11-03", *_JP),
    _h("Labour Thanksgiving Day", "2026-11-23", *_JP),
    _h("New Year's Eve", "2026-12-31", *_JP),
]

# Last date the table above has entries for; schedules know no closures after it
HOLIDAYS_COVERED_THROUGH: date = max(h.date for h in MARKET_HOLIDAYS)

# Exchange names and bare suffixes to the market keys used above
EXCHANGE_TO_MARKET_MAP: dict[str, str] = {
    # US
    "NYSE": "US",
    "NASDAQ": "US",
    "AMEX": "US",
    "New York Stock Exchange": "US",
    "NASDAQ Global Select": "US",
    "NASDAQ Global Select Market": "US",
    "NASDAQ Global Market": "US",
    "NASDAQ Capital Market": "US",
    "NYSE American": "US",
    "US": "US",
    # UK
    "LSE": "UK",
    "L": "UK",
    "London Stock Exchange": "UK",
    "LSE Main Market": "UK",
    "AIM": "UK",
    "UK": "UK",
    # Germany
    "XETRA": "Germany",
    "FWB": "Germany",
    "Frankfurt": "Germany",
    "Frankfurt Stock Exchange": "Germany",
    "Stuttgart Stock Exchange": "Germany",
    "Munich Stock Exchange": "Germany",
    "Germany": "Germany",
    # Japan
    "TSE": "Japan",
    "T": "Japan",
    "Tokyo Stock Exchange": "Japan",
    "Japan Exchange Group": "Japan",
    "Osaka Exchange": "Japan",
    "Japan": "Japan",
    # No holiday data yet, kept so callers can resolve the market name
    "Euronext Paris": "France",
    "PA": "France",
    "Euronext Amsterdam": "Netherlands",
    "Euronext Brussels": "Belgium",
    "SIX Swiss Exchange": "Switzerland",
    "Toronto Stock Exchange": "Canada",
    "TO": "Canada",
    "Australian Securities Exchange": "Australia",
    "AX": "Australia",
    "Hong Kong Stock Exchange": "Hong Kong",
    "HK": "Hong Kong",
}


def get_market_from_exchange(exchange: str) -> str | None:
    """Market key for an exchange name or bare suffix, if known."""
    return EXCHANGE_TO_MARKET_MAP.get(exchange)


def get_upcoming_holidays(
    market: str | None = None,
    days_ahead: int = 30,
    today: date | None = None,
    limit: int = 5,
) -> list[MarketHoliday]:
    """Holidays between *today* and *today + days_ahead*, inclusive.

    Args:
        market: Optional market filter (e.g. 'US', 'UK', 'Germany', 'Japan').
        days_ahead: Size of the look-ahead window in days.
        today: Window start; defaults to the current UTC date.
        limit: Maximum number of holidays returned.
    """
    start = today or datetime.now(timezone.utc).date()
    end = start + timedelta(days=days_ahead)

    upcoming = [
        h for h in MARKET_HOLIDAYS
        if start <= h.date <= end and (market is None or h.market == market)
    ]
    upcoming.sort(key=lambda h: (h.date, h.market))
    return upcoming[:limit]


def is_market_holiday(day: date, market: str) -> MarketHoliday | None:
    """Holiday entry for *day* on *market*, or None on a regular day."""
    for holiday in MARKET_HOLIDAYS:
        if holiday.date == day and holiday.market == market:
            return holiday
    return None


def holiday_dates(market: str) -> frozenset[date]:
    """Full-day closures of *market*."""
    return frozenset(h.date for h in MARKET_HOLIDAYS if h.market == market and not h.is_half_day)


def half_days(market: str) -> tuple[HalfDay, ...]:
    """Early-close days of *market*, in date order."""
    return tuple(
        HalfDay(date=h.date, close=h.early_close_time)
        for h in sorted(MARKET_HOLIDAYS, key=lambda h: h.date)
        if h.market == market and h.is_half_day
    )
