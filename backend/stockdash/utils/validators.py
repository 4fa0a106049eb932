"""
Stockdash — Input Validators

Reusable validation helpers for suffixes, ticker symbols and dates.
Raise ValueError on invalid input so callers can map to 400 responses.
"""

from __future__ import annotations

import re
from datetime import date

# Bloomberg-style suffix: optional dot, 1-4 letters
_SUFFIX_RE = re.compile(r"^\.?[A-Z]{1,4}$")

# Root symbol (letters, digits, dash for share classes) plus optional suffix
_SYMBOL_RE = re.compile(r"^[A-Z0-9][A-Z0-9\-]{0,14}(\.[A-Z]{1,4})?$")


def validate_suffix(raw: str) -> str:
    """Clean and validate a ticker suffix; returns it with a leading dot.

    >>> validate_suffix('se')
    '.SE'
    >>> validate_suffix('.UW')
    '.UW'
    """
    suffix = raw.strip().upper()
    if not suffix:
        raise ValueError("Suffix cannot be empty")
    if not _SUFFIX_RE.match(suffix):
        raise ValueError(
            f"Invalid suffix '{raw.strip()}'. Expected 1-4 letters, "
            f"optionally prefixed with a dot (e.g. UW, .SE)"
        )
    return suffix if suffix.startswith(".") else f".{suffix}"


def validate_symbol(raw: str) -> str:
    """Clean and validate a ticker symbol such as ``AAPL`` or ``VOLV-B.SE``.

    >>> validate_symbol(' volv-b.se ')
    'VOLV-B.SE'
    """
    symbol = raw.strip().upper()
    if not symbol:
        raise ValueError("Symbol cannot be empty")
    if not _SYMBOL_RE.match(symbol):
        raise ValueError(
            f"Invalid symbol '{symbol}'. Expected letters/digits, "
            f"optionally followed by an exchange suffix (e.g. VOLV-B.SE)"
        )
    return symbol


def parse_iso_date(s: str) -> date:
    """Parse a ``YYYY-MM-DD`` string."""
    try:
        return date.fromisoformat(s.strip())
    except ValueError:
        raise ValueError(f"Cannot parse date string: '{s}'. Expected YYYY-MM-DD.")
