"""
Stockdash — Shared Formatters

Human-readable formatting for tickers, countdown clocks and GMT times.
Used by the market-hours engine and the API routes.
"""

from __future__ import annotations

from datetime import datetime, timezone

# Fixed English abbreviations; strftime("%a") follows the process locale.
_WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_ticker(raw: str) -> str:
    """Normalize a ticker symbol to uppercase, stripped of whitespace.

    >>> format_ticker('  volv-b.se ')
    'VOLV-B.SE'
    """
    return raw.strip().upper()


def format_clock(total_seconds: int) -> str:
    """Render a non-negative duration as ``HH:MM:SS``, or ``MM:SS`` under an hour.

    Hours are not wrapped at 24, so a weekend countdown reads ``62:10:05``.

    >>> format_clock(3725)
    '01:02:05'
    >>> format_clock(59)
    '00:59'
    """
    total_seconds = max(0, int(total_seconds))
    hours, rem = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def format_gmt_weekday_time(dt: datetime) -> str:
    """Weekday abbreviation and ``HH:MM`` of *dt* in UTC, e.g. ``'Thu 14:30'``."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    utc = dt.astimezone(timezone.utc)
    return f"{_WEEKDAY_ABBR[utc.weekday()]} {utc:%H:%M}"
