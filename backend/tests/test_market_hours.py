"""
Stockdash — Market Hours Engine Tests

Open/closed state, next transition and display strings across DST changes,
lunch breaks, weekends, holidays and early closes.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest
from pydantic import ValidationError

from stockdash.data.suffix_mappings import search_suffix
from stockdash.engines.market_hours_engine import (
    MAX_DAY_SCAN,
    compute_market_status,
    format_countdown,
    format_market_hours_gmt,
    is_trading_day,
    next_trading_day,
    sessions_for_day,
)
from stockdash.exceptions import MarketScheduleError
from stockdash.models import HalfDay, MarketSchedule, TradingSession, TransitionType


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def nyse():
    return MarketSchedule(
        timezone="America/New_York",
        sessions=[{"open": "09:30", "close": "16:00"}],
    )


@pytest.fixture
def tokyo():
    return MarketSchedule(
        timezone="Asia/Tokyo",
        sessions=[
            {"open": "09:00", "close": "11:30"},
            {"open": "12:30", "close": "15:00"},
        ],
    )


# ──────────────────────────────────────────────
# Single-session market
# ──────────────────────────────────────────────


class TestSingleSession:

    def test_inside_session_is_open(self, nyse):
        status = compute_market_status(nyse, _utc(2025, 1, 15, 15, 0))
        assert status.is_open is True
        assert status.next_transition_type == TransitionType.CLOSE
        assert status.next_transition == _utc(2025, 1, 15, 21, 0)
        assert status.current_session_close == _utc(2025, 1, 15, 21, 0)
        assert status.formatted_countdown == "Closes in 06:00:00"

    def test_open_boundary_is_open(self, nyse):
        status = compute_market_status(nyse, _utc(2025, 1, 15, 14, 30))
        assert status.is_open is True
        assert status.formatted_countdown == "Closes in 06:30:00"

    def test_close_boundary_is_closed(self, nyse):
        status = compute_market_status(nyse, _utc(2025, 1, 15, 21, 0))
        assert status.is_open is False
        assert status.current_session_close is None
        assert status.next_transition_type == TransitionType.OPEN
        assert status.next_transition == _utc(2025, 1, 16, 14, 30)
        assert status.formatted_countdown == "Opens in 17:30:00 (Thu 14:30 GMT)"

    def test_before_open_same_day_has_no_weekday_suffix(self, nyse):
        status = compute_market_status(nyse, _utc(2025, 7, 15, 12, 0))
        assert status.is_open is False
        assert status.next_transition == _utc(2025, 7, 15, 13, 30)
        assert status.formatted_countdown == "Opens in 01:30:00"

    def test_idempotent(self, nyse):
        now = _utc(2025, 1, 15, 18, 12, 7)
        assert compute_market_status(nyse, now) == compute_market_status(nyse, now)

    def test_naive_now_is_utc(self, nyse):
        naive = compute_market_status(nyse, datetime(2025, 1, 15, 15, 0))
        aware = compute_market_status(nyse, _utc(2025, 1, 15, 15, 0))
        assert naive == aware

    def test_aware_non_utc_now(self, nyse):
        est = timezone(timedelta(hours=-5))
        status = compute_market_status(nyse, datetime(2025, 1, 15, 10, 0, tzinfo=est))
        assert status.is_open is True
        assert status.next_transition == _utc(2025, 1, 15, 21, 0)

    def test_defaults_to_current_time(self, nyse):
        status = compute_market_status(nyse)
        assert status.next_transition > datetime.now(timezone.utc) - timedelta(seconds=5)


# ──────────────────────────────────────────────
# DST
# ──────────────────────────────────────────────


class TestDaylightSaving:

    def test_gmt_hours_in_winter(self, nyse):
        assert format_market_hours_gmt(nyse, _utc(2025, 1, 15, 12)) == "Market hours (GMT): 14:30–21:00"

    def test_gmt_hours_in_summer(self, nyse):
        assert format_market_hours_gmt(nyse, _utc(2025, 7, 15, 12)) == "Market hours (GMT): 13:30–20:00"

    def test_next_open_across_dst_start(self, nyse):
        # Friday close → Monday open, clocks moved forward on Sunday 9 March
        status = compute_market_status(nyse, _utc(2025, 3, 7, 21, 30))
        assert status.next_transition == _utc(2025, 3, 10, 13, 30)
        assert status.formatted_countdown == "Opens in 64:00:00 (Mon 13:30 GMT)"

    def test_status_carries_gmt_hours(self, nyse):
        status = compute_market_status(nyse, _utc(2025, 7, 15, 15, 0))
        assert status.market_hours_gmt == "Market hours (GMT): 13:30–20:00"


# ──────────────────────────────────────────────
# Multi-session market
# ──────────────────────────────────────────────


class TestMultiSession:

    def test_lunch_break_is_closed(self, tokyo):
        # 11:45 JST
        status = compute_market_status(tokyo, _utc(2025, 1, 15, 2, 45))
        assert status.is_open is False
        assert status.next_transition_type == TransitionType.OPEN
        assert status.next_transition == _utc(2025, 1, 15, 3, 30)
        assert status.formatted_countdown == "Opens in 45:00"

    def test_morning_session_closes_for_lunch(self, tokyo):
        # 10:00 JST
        status = compute_market_status(tokyo, _utc(2025, 1, 15, 1, 0))
        assert status.is_open is True
        assert status.next_transition == _utc(2025, 1, 15, 2, 30)

    def test_afternoon_session_is_open(self, tokyo):
        # 13:00 JST
        status = compute_market_status(tokyo, _utc(2025, 1, 15, 4, 0))
        assert status.is_open is True
        assert status.next_transition == _utc(2025, 1, 15, 6, 0)

    def test_gmt_hours_lists_every_session(self, tokyo):
        assert format_market_hours_gmt(tokyo, _utc(2025, 1, 15, 2)) == (
            "Market hours (GMT): 00:00–02:30, 03:30–06:00"
        )


# ──────────────────────────────────────────────
# Weekends & holidays
# ──────────────────────────────────────────────


class TestWeekendAndHolidays:

    def test_saturday_skips_to_monday(self, nyse):
        status = compute_market_status(nyse, _utc(2025, 1, 18, 12, 0))
        assert status.is_open is False
        assert status.next_transition == _utc(2025, 1, 20, 14, 30)
        assert status.formatted_countdown == "Opens in 50:30:00 (Mon 14:30 GMT)"

    def test_saturday_skips_monday_holiday(self, nyse):
        schedule = nyse.model_copy(update={"holidays": frozenset({date(2025, 1, 20)})})
        status = compute_market_status(schedule, _utc(2025, 1, 18, 12, 0))
        assert status.next_transition == _utc(2025, 1, 21, 14, 30)
        assert status.formatted_countdown == "Opens in 74:30:00 (Tue 14:30 GMT)"

    def test_holiday_during_session_hours_is_closed(self, nyse):
        schedule = nyse.model_copy(update={"holidays": frozenset({date(2025, 1, 15)})})
        status = compute_market_status(schedule, _utc(2025, 1, 15, 15, 0))
        assert status.is_open is False
        assert status.next_transition == _utc(2025, 1, 16, 14, 30)

    def test_registry_schedule_knows_mlk_day(self):
        schedule = search_suffix(".UW").market_hours
        status = compute_market_status(schedule, _utc(2025, 1, 18, 12, 0))
        assert status.next_transition == _utc(2025, 1, 21, 14, 30)

    def test_sunday_evening_names_monday_open(self, nyse):
        # Sun 21:00 EST, already Monday in UTC
        status = compute_market_status(nyse, _utc(2025, 1, 20, 2, 0))
        assert status.next_transition == _utc(2025, 1, 20, 14, 30)
        assert status.formatted_countdown == "Opens in 12:30:00 (Mon 14:30 GMT)"

    def test_holiday_evening_names_next_open(self, nyse):
        schedule = nyse.model_copy(update={"holidays": frozenset({date(2025, 1, 15)})})
        status = compute_market_status(schedule, _utc(2025, 1, 16, 2, 0))
        assert status.formatted_countdown == "Opens in 12:30:00 (Thu 14:30 GMT)"

    def test_trading_day_evening_same_utc_date_has_no_suffix(self, nyse):
        # Wed 21:00 EST after the close
        status = compute_market_status(nyse, _utc(2025, 1, 16, 2, 0))
        assert status.next_transition == _utc(2025, 1, 16, 14, 30)
        assert status.formatted_countdown == "Opens in 12:30:00"

    def test_next_trading_day_is_strictly_after(self, nyse):
        assert next_trading_day(nyse, date(2025, 1, 13)) == date(2025, 1, 14)
        assert next_trading_day(nyse, date(2025, 1, 17)) == date(2025, 1, 20)

    def test_is_trading_day(self, nyse):
        assert is_trading_day(nyse, date(2025, 1, 15)) is True
        assert is_trading_day(nyse, date(2025, 1, 18)) is False


# ──────────────────────────────────────────────
# Half days
# ──────────────────────────────────────────────


class TestHalfDays:

    @pytest.fixture
    def nyse_black_friday(self, nyse):
        return nyse.model_copy(
            update={"half_days": (HalfDay(date=date(2025, 11, 28), close=time(13, 0)),)}
        )

    def test_ignored_by_default(self, nyse_black_friday):
        # 12:30 EST
        status = compute_market_status(nyse_black_friday, _utc(2025, 11, 28, 17, 30))
        assert status.next_transition == _utc(2025, 11, 28, 21, 0)

    def test_early_close_when_honored(self, nyse_black_friday):
        status = compute_market_status(
            nyse_black_friday, _utc(2025, 11, 28, 17, 30), honor_half_days=True,
        )
        assert status.is_open is True
        assert status.next_transition == _utc(2025, 11, 28, 18, 0)
        assert status.formatted_countdown == "Closes in 30:00"

    def test_closed_after_early_close(self, nyse_black_friday):
        status = compute_market_status(
            nyse_black_friday, _utc(2025, 11, 28, 18, 30), honor_half_days=True,
        )
        assert status.is_open is False
        assert status.next_transition == _utc(2025, 12, 1, 14, 30)
        assert status.formatted_countdown == "Opens in 68:00:00 (Mon 14:30 GMT)"

    def test_afternoon_session_dropped(self, tokyo):
        schedule = tokyo.model_copy(
            update={"half_days": (HalfDay(date=date(2025, 1, 15), close=time(11, 0)),)}
        )
        sessions = sessions_for_day(schedule, date(2025, 1, 15), honor_half_days=True)
        assert sessions == [TradingSession(open=time(9, 0), close=time(11, 0))]
        assert len(sessions_for_day(schedule, date(2025, 1, 15))) == 2

    def test_registry_carries_us_half_days(self):
        schedule = search_suffix(".UN").market_hours
        assert schedule.half_day_close(date(2025, 12, 24)) == time(13, 0)
        assert schedule.half_day_close(date(2025, 12, 23)) is None


# ──────────────────────────────────────────────
# Misconfigured schedules
# ──────────────────────────────────────────────


class TestScheduleErrors:

    @pytest.fixture
    def all_holidays(self, nyse):
        start = date(2025, 1, 1)
        days = frozenset(start + timedelta(days=n) for n in range(MAX_DAY_SCAN + 2))
        return nyse.model_copy(update={"holidays": days})

    def test_day_scan_is_bounded(self, all_holidays):
        with pytest.raises(MarketScheduleError) as exc_info:
            next_trading_day(all_holidays, date(2025, 1, 1))
        assert exc_info.value.timezone == "America/New_York"

    def test_status_raises_on_unreachable_trading_day(self, all_holidays):
        with pytest.raises(MarketScheduleError):
            compute_market_status(all_holidays, _utc(2025, 1, 1, 15, 0))

    def test_schedule_error_is_value_error(self):
        assert issubclass(MarketScheduleError, ValueError)

    @pytest.mark.parametrize("kwargs", [
        {"timezone": "Mars/Olympus_Mons", "sessions": [{"open": "09:00", "close": "17:00"}]},
        {"timezone": "Europe/London", "sessions": []},
        {"timezone": "Europe/London", "sessions": [{"open": "17:00", "close": "09:00"}]},
        {"timezone": "Europe/London", "sessions": [{"open": "09:00", "close": "09:00"}]},
        {"timezone": "Europe/London", "sessions": [
            {"open": "09:00", "close": "12:00"}, {"open": "11:00", "close": "16:00"},
        ]},
        {"timezone": "Europe/London", "sessions": [{"open": "09:00", "close": "17:00"}],
         "trading_days": []},
        {"timezone": "Europe/London", "sessions": [{"open": "09:00", "close": "17:00"}],
         "trading_days": [0, 1]},
    ])
    def test_invalid_schedule_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            MarketSchedule(**kwargs)


# ──────────────────────────────────────────────
# Countdown
# ──────────────────────────────────────────────


class TestCountdown:

    def test_truncates_partial_seconds(self):
        now = _utc(2025, 1, 15, 12, 0, 0)
        assert format_countdown(now, now + timedelta(seconds=59, milliseconds=900)) == "00:59"

    def test_past_target_is_zero(self):
        now = _utc(2025, 1, 15, 12, 0, 0)
        assert format_countdown(now, now - timedelta(minutes=5)) == "00:00"

    def test_hours_not_wrapped(self):
        now = _utc(2025, 1, 15, 12, 0, 0)
        assert format_countdown(now, now + timedelta(hours=30, seconds=5)) == "30:00:05"
