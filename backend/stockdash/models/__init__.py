"""
Stockdash — Pydantic Models

All I/O schemas for the application. The registry and engines return these,
API routes serialize these.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

import pytz
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from stockdash.exceptions import MarketScheduleError


# ──────────────────────────────────────────────
# Enums
# ──────────────────────────────────────────────

class TransitionType(str, Enum):
    """Kind of the next open/close boundary."""
    OPEN = "open"
    CLOSE = "close"


# ──────────────────────────────────────────────
# Trading Schedule
# ──────────────────────────────────────────────

class TradingSession(BaseModel):
    """Contiguous trading window in exchange-local wall-clock time."""
    model_config = ConfigDict(frozen=True)

    open: dt.time
    close: dt.time

    @model_validator(mode="after")
    def _open_before_close(self) -> TradingSession:
        if self.open >= self.close:
            raise MarketScheduleError(
                f"Session open {self.open:%H:%M} must be before close {self.close:%H:%M}"
            )
        return self

    @field_serializer("open", "close")
    def _hhmm(self, value: dt.time) -> str:
        return value.strftime("%H:%M")


class HalfDay(BaseModel):
    """Early-close trading day."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    close: dt.time

    @field_serializer("close")
    def _hhmm(self, value: dt.time) -> str:
        return value.strftime("%H:%M")


class MarketSchedule(BaseModel):
    """Weekly trading schedule of one exchange.

    Sessions are ordered and non-overlapping; a lunch break is modelled as
    two sessions. Trading days use ISO weekdays (1=Monday .. 7=Sunday).
    """
    model_config = ConfigDict(frozen=True)

    timezone: str
    sessions: tuple[TradingSession, ...]
    trading_days: frozenset[int] = frozenset({1, 2, 3, 4, 5})
    holidays: frozenset[dt.date] = frozenset()
    half_days: tuple[HalfDay, ...] = ()

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise MarketScheduleError(f"Unknown timezone '{value}'", timezone=value)
        return value

    @field_validator("trading_days")
    @classmethod
    def _iso_weekdays(cls, value: frozenset[int]) -> frozenset[int]:
        if not value:
            raise MarketScheduleError("Schedule needs at least one trading day")
        bad = sorted(d for d in value if d < 1 or d > 7)
        if bad:
            raise MarketScheduleError(f"Trading days must be 1..7, got {bad}")
        return value

    @model_validator(mode="after")
    def _ordered_sessions(self) -> MarketSchedule:
        if not self.sessions:
            raise MarketScheduleError("Schedule needs at least one session", timezone=self.timezone)
        for prev, nxt in zip(self.sessions, self.sessions[1:]):
            if nxt.open < prev.close:
                raise MarketScheduleError(
                    f"Sessions overlap or are out of order: "
                    f"{prev.close:%H:%M} > {nxt.open:%H:%M}",
                    timezone=self.timezone,
                )
        return self

    @property
    def tz(self):
        return pytz.timezone(self.timezone)

    def half_day_close(self, day: dt.date) -> Optional[dt.time]:
        """Early close time on *day*, if it is a half day."""
        for half_day in self.half_days:
            if half_day.date == day:
                return half_day.close
        return None

    @field_serializer("trading_days")
    def _sorted_days(self, value: frozenset[int]) -> list[int]:
        return sorted(value)

    @field_serializer("holidays")
    def _sorted_holidays(self, value: frozenset[dt.date]) -> list[str]:
        return [d.isoformat() for d in sorted(value)]


class MarketStatus(BaseModel):
    """Open/closed state and countdown, recomputed on every request."""
    is_open: bool
    next_transition: dt.datetime
    next_transition_type: TransitionType
    current_session_close: Optional[dt.datetime] = None
    formatted_countdown: str
    market_hours_gmt: str


# ──────────────────────────────────────────────
# Exchange Registry
# ──────────────────────────────────────────────

class SuffixInfo(BaseModel):
    """Bloomberg-style ticker suffix and the exchange behind it."""
    model_config = ConfigDict(frozen=True)

    suffix: str
    country: str
    exchange: str
    full_exchange_name: str
    currency: Optional[str] = None
    notes: Optional[str] = None
    market_hours: Optional[MarketSchedule] = None


class ExchangeInfo(BaseModel):
    """Exchange and currency resolved from a ticker symbol's suffix."""
    symbol: str
    suffix: str
    exchange: str
    currency: str


class SuffixList(BaseModel):
    """All registered suffixes plus the UI quick-pick list."""
    suffixes: list[str]
    count: int
    popular: list[str]


# ──────────────────────────────────────────────
# Holidays
# ──────────────────────────────────────────────

class MarketHoliday(BaseModel):
    """Exchange holiday or early-close day."""
    model_config = ConfigDict(frozen=True)

    name: str
    date: dt.date
    market: str
    country: str
    is_half_day: bool = False
    early_close_time: Optional[dt.time] = None

    @field_serializer("early_close_time")
    def _hhmm(self, value: Optional[dt.time]) -> Optional[str]:
        return value.strftime("%H:%M") if value is not None else None


class HolidayList(BaseModel):
    """Upcoming holidays, optionally for a single market."""
    market: Optional[str] = None
    days_ahead: int
    holidays: list[MarketHoliday] = Field(default_factory=list)


class HolidayCheck(BaseModel):
    """Answer to "is this date a holiday on this market"."""
    market: str
    date: dt.date
    holiday: Optional[MarketHoliday] = None
