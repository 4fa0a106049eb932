"""
Stockdash — Domain Exceptions

Raised by the registry and market-hours engine; mapped to JSON error
responses by ``stockdash.error_handlers``.
"""

from __future__ import annotations


class StockdashError(Exception):
    """Base class for application errors."""


class MarketScheduleError(StockdashError, ValueError):
    """Raised when a trading schedule is malformed or can never open."""

    def __init__(self, message: str, timezone: str | None = None):
        self.timezone = timezone
        super().__init__(message)
