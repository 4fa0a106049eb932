"""
Stockdash — Market Hours Engine

Derives whether an exchange is open right now, when it next opens or
closes, and the countdown strings the suffix guide displays.

Session times are exchange-local wall-clock times. They are converted to
UTC per calendar date with ``pytz.localize``, so a daylight-saving change
shows up on the day it happens instead of using a cached offset.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import structlog

from stockdash.exceptions import MarketScheduleError
from stockdash.models import MarketSchedule, MarketStatus, TradingSession, TransitionType
from stockdash.utils.formatters import format_clock, format_gmt_weekday_time

log = structlog.get_logger(__name__)

# Upper bound for the next-trading-day search
MAX_DAY_SCAN = 400

_EN_DASH = "–"


# ── Helpers ──────────────────────────────────────


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def _local_to_utc(schedule: MarketSchedule, day: date, wall: time) -> datetime:
    """Exchange-local wall-clock time on *day* as a UTC instant."""
    return schedule.tz.localize(datetime.combine(day, wall)).astimezone(timezone.utc)


def is_trading_day(schedule: MarketSchedule, day: date) -> bool:
    """True when *day* (exchange-local) is a weekday the market trades and not a holiday."""
    return day.isoweekday() in schedule.trading_days and day not in schedule.holidays


def sessions_for_day(
    schedule: MarketSchedule,
    day: date,
    honor_half_days: bool = False,
) -> list[TradingSession]:
    """Sessions in effect on *day*.

    With *honor_half_days*, an early close clips every session to the early
    close time and drops sessions that would open at or after it.
    """
    sessions = list(schedule.sessions)
    if not honor_half_days:
        return sessions

    early_close = schedule.half_day_close(day)
    if early_close is None:
        return sessions

    return [
        TradingSession(open=s.open, close=min(s.close, early_close))
        for s in sessions
        if s.open < early_close
    ]


def next_trading_day(
    schedule: MarketSchedule,
    after: date,
    honor_half_days: bool = False,
) -> date:
    """First trading day strictly after *after*.

    Raises:
        MarketScheduleError: no trading day within ``MAX_DAY_SCAN`` days.
    """
    day = after
    for _ in range(MAX_DAY_SCAN):
        day += timedelta(days=1)
        if is_trading_day(schedule, day) and sessions_for_day(schedule, day, honor_half_days):
            return day

    log.error(
        "market_hours.no_trading_day",
        timezone=schedule.timezone,
        after=after.isoformat(),
        max_days=MAX_DAY_SCAN,
    )
    raise MarketScheduleError(
        f"No trading day within {MAX_DAY_SCAN} days after {after.isoformat()}",
        timezone=schedule.timezone,
    )


# ── Formatting ───────────────────────────────────


def format_countdown(now: datetime, target: datetime) -> str:
    """Whole-second countdown from *now* to *target*, truncated not rounded."""
    remaining = max(target - now, timedelta(0))
    return format_clock(remaining // timedelta(seconds=1))


def format_market_hours_gmt(schedule: MarketSchedule, now: Optional[datetime] = None) -> str:
    """Regular sessions in UTC on the exchange-local date of *now*.

    >>> from stockdash.models import MarketSchedule
    >>> nyse = MarketSchedule(timezone="America/New_York",
    ...                       sessions=[{"open": "09:30", "close": "16:00"}])
    >>> format_market_hours_gmt(nyse, datetime(2025, 1, 15, 12, tzinfo=timezone.utc))
    'Market hours (GMT): 14:30–21:00'
    """
    local_day = _as_utc(now).astimezone(schedule.tz).date()
    windows = [
        f"{_local_to_utc(schedule, local_day, s.open):%H:%M}"
        f"{_EN_DASH}"
        f"{_local_to_utc(schedule, local_day, s.close):%H:%M}"
        for s in schedule.sessions
    ]
    return f"Market hours (GMT): {', '.join(windows)}"


# ── Status ───────────────────────────────────────


def compute_market_status(
    schedule: MarketSchedule,
    now: Optional[datetime] = None,
    *,
    honor_half_days: bool = False,
) -> MarketStatus:
    """Open/closed state and next transition of *schedule* at *now*.

    Args:
        schedule: Exchange trading schedule.
        now: Query instant; naive values are taken as UTC. Defaults to the
            current time.
        honor_half_days: Apply early closes from ``schedule.half_days``.

    Returns:
        MarketStatus with UTC instants and the display strings.

    Raises:
        MarketScheduleError: the schedule never reaches a trading day.
    """
    now_utc = _as_utc(now)
    local_now = now_utc.astimezone(schedule.tz)
    today = local_now.date()
    wall = local_now.time()

    session_close: Optional[datetime] = None
    next_open: Optional[datetime] = None

    trading_today = is_trading_day(schedule, today)
    if trading_today:
        # Sessions are ordered: the first one not yet closed either holds
        # *wall* or is the next to open today.
        for session in sessions_for_day(schedule, today, honor_half_days):
            if session.open <= wall < session.close:
                session_close = _local_to_utc(schedule, today, session.close)
                break
            if wall < session.open:
                next_open = _local_to_utc(schedule, today, session.open)
                break

    if session_close is not None:
        transition, kind = session_close, TransitionType.CLOSE
    else:
        if next_open is None:
            day = next_trading_day(schedule, today, honor_half_days)
            first = sessions_for_day(schedule, day, honor_half_days)[0]
            next_open = _local_to_utc(schedule, day, first.open)
        transition, kind = next_open, TransitionType.OPEN

    countdown = format_countdown(now_utc, transition)
    if kind is TransitionType.CLOSE:
        formatted = f"Closes in {countdown}"
    else:
        formatted = f"Opens in {countdown}"
        # Weekends and holidays always name the day of the next open
        if not trading_today or transition.date() != now_utc.date():
            formatted += f" ({format_gmt_weekday_time(transition)} GMT)"

    status = MarketStatus(
        is_open=session_close is not None,
        next_transition=transition,
        next_transition_type=kind,
        current_session_close=session_close,
        formatted_countdown=formatted,
        market_hours_gmt=format_market_hours_gmt(schedule, now_utc),
    )

    log.debug(
        "market_status.computed",
        timezone=schedule.timezone,
        local_time=local_now.isoformat(),
        is_open=status.is_open,
        next_transition=transition.isoformat(),
    )
    return status
