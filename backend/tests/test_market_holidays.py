"""
Stockdash — Holiday Calendar Tests
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from stockdash.data.market_holidays import (
    MARKET_HOLIDAYS,
    get_market_from_exchange,
    get_upcoming_holidays,
    half_days,
    holiday_dates,
    is_market_holiday,
)


class TestUpcomingHolidays:

    def test_window_is_inclusive(self):
        result = get_upcoming_holidays(market="US", days_ahead=20, today=date(2024, 12, 31))
        assert [(h.date, h.name) for h in result] == [
            (date(2025, 1, 1), "New Year's Day"),
            (date(2025, 1, 20), "Martin Luther King Jr. Day"),
        ]

    def test_window_excludes_past(self):
        result = get_upcoming_holidays(market="US", days_ahead=10, today=date(2025, 1, 2))
        assert result == []

    def test_sorted_by_date_then_market_and_capped(self):
        result = get_upcoming_holidays(days_ahead=30, today=date(2025, 1, 1), limit=5)
        assert [(h.date, h.market) for h in result] == [
            (date(2025, 1, 1), "Germany"),
            (date(2025, 1, 1), "Japan"),
            (date(2025, 1, 1), "UK"),
            (date(2025, 1, 1), "US"),
            (date(2025, 1, 2), "Japan"),
        ]

    def test_market_filter(self):
        result = get_upcoming_holidays(market="Japan", days_ahead=30, today=date(2025, 1, 1), limit=10)
        assert {h.market for h in result} == {"Japan"}
        assert len(result) == 4

    def test_defaults_to_today(self):
        today = datetime.now(timezone.utc).date()
        result = get_upcoming_holidays(days_ahead=366, limit=50)
        assert all(today <= h.date <= today + timedelta(days=366) for h in result)


class TestHolidayLookup:

    def test_is_market_holiday(self):
        holiday = is_market_holiday(date(2025, 7, 4), "US")
        assert holiday is not None
        assert holiday.name == "Independence Day"
        assert holiday.country == "United States"

    def test_regular_day(self):
        assert is_market_holiday(date(2025, 7, 7), "US") is None

    def test_other_market(self):
        assert is_market_holiday(date(2025, 7, 4), "UK") is None

    def test_half_day_entry(self):
        holiday = is_market_holiday(date(2025, 11, 28), "US")
        assert holiday.is_half_day is True
        assert holiday.early_close_time == time(13, 0)
        assert holiday.model_dump()["early_close_time"] == "13:00"


class TestScheduleEnrichment:

    def test_holiday_dates_exclude_half_days(self):
        closed = holiday_dates("US")
        assert date(2025, 12, 25) in closed
        assert date(2025, 12, 24) not in closed

    def test_half_days_ordered(self):
        days = half_days("US")
        assert [d.date for d in days] == sorted(d.date for d in days)
        assert all(d.close == time(13, 0) for d in days)

    def test_unknown_market_is_empty(self):
        assert holiday_dates("Narnia") == frozenset()
        assert half_days("Narnia") == ()

    def test_covers_four_markets(self):
        assert {h.market for h in MARKET_HOLIDAYS} == {"US", "UK", "Germany", "Japan"}


class TestExchangeToMarket:

    def test_exchange_names(self):
        assert get_market_from_exchange("NYSE") == "US"
        assert get_market_from_exchange("London Stock Exchange") == "UK"
        assert get_market_from_exchange("XETRA") == "Germany"
        assert get_market_from_exchange("TSE") == "Japan"

    def test_unknown_exchange(self):
        assert get_market_from_exchange("Moon Exchange") is None
