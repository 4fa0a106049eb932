# Shared utilities — formatters, validators
from stockdash.utils.formatters import format_clock, format_gmt_weekday_time, format_ticker
from stockdash.utils.validators import parse_iso_date, validate_suffix, validate_symbol

__all__ = [
    "format_clock",
    "format_gmt_weekday_time",
    "format_ticker",
    "parse_iso_date",
    "validate_suffix",
    "validate_symbol",
]
