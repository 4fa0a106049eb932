"""
Stockdash — Ticker Suffix Registry

Bloomberg-style ticker suffixes (``.UW``, ``.L``, ``.T`` ...) mapped to
country, exchange, currency and, where known, the exchange's trading
schedule. One table serves the suffix guide, the market clock and the
symbol → exchange lookup.
"""

from __future__ import annotations

import re

import structlog

from stockdash.data.market_holidays import get_market_from_exchange, half_days, holiday_dates
from stockdash.models import ExchangeInfo, MarketSchedule, SuffixInfo
from stockdash.utils.formatters import format_ticker

log = structlog.get_logger(__name__)


def _hours(timezone: str, *sessions: tuple[str, str]) -> dict:
    """Monday-to-Friday schedule from (open, close) pairs."""
    return {
        "timezone": timezone,
        "sessions": [{"open": o, "close": c} for o, c in sessions],
        "trading_days": [1, 2, 3, 4, 5],
    }


_NY = _hours("America/New_York", ("09:30", "16:00"))

_RAW_SUFFIXES: list[dict] = [
    # ── United States ──
    {
        "suffix": ".UW",
        "country": "United States",
        "exchange": "NASDAQ Global Select Market",
        "full_exchange_name": "NASDAQ Global Select Market",
        "currency": "USD",
        "notes": "Top tier of NASDAQ for large-cap companies with the most stringent listing requirements",
        "market_hours": _NY,
    },
    {
        "suffix": ".UF",
        "country": "United States",
        "exchange": "NASDAQ Global Market",
        "full_exchange_name": "NASDAQ Global Market",
        "currency": "USD",
        "notes": "Middle tier of NASDAQ for mid-cap companies with strict financial and liquidity requirements",
        "market_hours": _NY,
    },
    {
        "suffix": ".UQ",
        "country": "United States",
        "exchange": "NASDAQ Capital Market",
        "full_exchange_name": "NASDAQ Capital Market",
        "currency": "USD",
        "notes": "NASDAQ Capital Market for smaller companies with less stringent listing requirements",
    },
    {
        "suffix": ".UN",
        "country": "United States",
        "exchange": "NYSE",
        "full_exchange_name": "New York Stock Exchange",
        "currency": "USD",
        "notes": "NYSE-listed securities in Bloomberg terminal notation",
        "market_hours": _NY,
    },

    # ── Europe ──
    {
        "suffix": ".SE",
        "country": "Sweden",
        "exchange": "OMX Stockholm",
        "full_exchange_name": "Nasdaq Stockholm (OMX Stockholm)",
        "currency": "SEK",
        "notes": "Swedish stocks listed on Nasdaq Stockholm",
        "market_hours": _hours("Europe/Stockholm", ("09:00", "17:30")),
    },
    {
        "suffix": ".MC",
        "country": "Spain",
        "exchange": "BME",
        "full_exchange_name": "Bolsas y Mercados Españoles (Madrid Stock Exchange)",
        "currency": "EUR",
        "notes": "Spanish stocks listed on the Madrid Stock Exchange",
        "market_hours": _hours("Europe/Madrid", ("09:00", "17:30")),
    },
    {
        "suffix": ".PA",
        "country": "France",
        "exchange": "Euronext Paris",
        "full_exchange_name": "Euronext Paris",
        "currency": "EUR",
        "notes": "French stocks listed on Euronext Paris",
        "market_hours": _hours("Europe/Paris", ("09:00", "17:30")),
    },
    {
        "suffix": ".DE",
        "country": "Germany",
        "exchange": "XETRA",
        "full_exchange_name": "Deutsche Börse XETRA",
        "currency": "EUR",
        "notes": "German stocks listed on XETRA electronic trading system",
    },
    {
        "suffix": ".L",
        "country": "United Kingdom",
        "exchange": "LSE",
        "full_exchange_name": "London Stock Exchange",
        "currency": "GBP",
        "notes": "UK stocks listed on the London Stock Exchange",
        "market_hours": _hours("Europe/London", ("08:00", "16:30")),
    },
    {
        "suffix": ".AS",
        "country": "Netherlands",
        "exchange": "Euronext Amsterdam",
        "full_exchange_name": "Euronext Amsterdam",
        "currency": "EUR",
        "notes": "Dutch stocks listed on Euronext Amsterdam",
    },
    {
        "suffix": ".SW",
        "country": "Switzerland",
        "exchange": "SIX",
        "full_exchange_name": "SIX Swiss Exchange",
        "currency": "CHF",
        "notes": "Swiss stocks listed on SIX Swiss Exchange",
    },
    {
        "suffix": ".MI",
        "country": "Italy",
        "exchange": "Borsa Italiana",
        "full_exchange_name": "Borsa Italiana (Milan Stock Exchange)",
        "currency": "EUR",
        "notes": "Italian stocks listed on Borsa Italiana",
    },
    {
        "suffix": ".F",
        "country": "Germany",
        "exchange": "Frankfurt",
        "full_exchange_name": "Frankfurt Stock Exchange",
        "currency": "EUR",
    },
    {
        "suffix": ".BE",
        "country": "Germany",
        "exchange": "Berlin",
        "full_exchange_name": "Berlin Stock Exchange",
        "currency": "EUR",
    },
    {
        "suffix": ".DU",
        "country": "Germany",
        "exchange": "Dusseldorf",
        "full_exchange_name": "Dusseldorf Stock Exchange",
        "currency": "EUR",
    },

    # ── Asia Pacific ──
    {
        "suffix": ".T",
        "country": "Japan",
        "exchange": "TSE",
        "full_exchange_name": "Tokyo Stock Exchange",
        "currency": "JPY",
        "notes": "Japanese stocks listed on the Tokyo Stock Exchange",
        "market_hours": _hours("Asia/Tokyo", ("09:00", "11:30"), ("12:30", "15:00")),
    },
    {
        "suffix": ".HK",
        "country": "Hong Kong",
        "exchange": "HKEX",
        "full_exchange_name": "Hong Kong Exchanges and Clearing",
        "currency": "HKD",
        "notes": "Hong Kong stocks listed on HKEX",
        "market_hours": _hours("Asia/Hong_Kong", ("09:30", "12:00"), ("13:00", "16:00")),
    },
    {
        "suffix": ".SS",
        "country": "China",
        "exchange": "SSE",
        "full_exchange_name": "Shanghai Stock Exchange",
        "currency": "CNY",
        "notes": "Chinese A-shares listed on Shanghai Stock Exchange",
    },
    {
        "suffix": ".SZ",
        "country": "China",
        "exchange": "SZSE",
        "full_exchange_name": "Shenzhen Stock Exchange",
        "currency": "CNY",
        "notes": "Chinese A-shares listed on Shenzhen Stock Exchange",
    },
    {
        "suffix": ".AX",
        "country": "Australia",
        "exchange": "ASX",
        "full_exchange_name": "Australian Securities Exchange",
        "currency": "AUD",
        "notes": "Australian stocks listed on the ASX",
        "market_hours": _hours("Australia/Sydney", ("10:00", "16:00")),
    },
    {
        "suffix": ".KS",
        "country": "South Korea",
        "exchange": "KOSPI",
        "full_exchange_name": "Korea Composite Stock Price Index",
        "currency": "KRW",
        "notes": "South Korean stocks listed on KOSPI",
    },
    {
        "suffix": ".SI",
        "country": "Singapore",
        "exchange": "SGX",
        "full_exchange_name": "Singapore Exchange",
        "currency": "SGD",
        "notes": "Singapore stocks listed on SGX",
        "market_hours": _hours("Asia/Singapore", ("09:00", "17:00")),
    },
    {
        "suffix": ".NZ",
        "country": "New Zealand",
        "exchange": "NZX",
        "full_exchange_name": "New Zealand Exchange",
        "currency": "NZD",
        "notes": "New Zealand stocks listed on NZX",
    },
    {
        "suffix": ".TW",
        "country": "Taiwan",
        "exchange": "TWSE",
        "full_exchange_name": "Taiwan Stock Exchange",
        "currency": "TWD",
        "notes": "Taiwanese stocks listed on TWSE",
    },
    {
        "suffix": ".KL",
        "country": "Malaysia",
        "exchange": "Bursa Malaysia",
        "full_exchange_name": "Bursa Malaysia",
        "currency": "MYR",
        "notes": "Malaysian stocks listed on Bursa Malaysia",
    },
    {
        "suffix": ".JK",
        "country": "Indonesia",
        "exchange": "IDX",
        "full_exchange_name": "Indonesia Stock Exchange",
        "currency": "IDR",
        "notes": "Indonesian stocks listed on IDX",
    },
    {
        "suffix": ".BK",
        "country": "Thailand",
        "exchange": "SET",
        "full_exchange_name": "Stock Exchange of Thailand",
        "currency": "THB",
        "notes": "Thai stocks listed on SET",
    },

    # ── Canada ──
    {
        "suffix": ".TO",
        "country": "Canada",
        "exchange": "TSX",
        "full_exchange_name": "Toronto Stock Exchange",
        "currency": "CAD",
        "notes": "Canadian stocks listed on the Toronto Stock Exchange",
        "market_hours": _hours("America/Toronto", ("09:30", "16:00")),
    },
    {
        "suffix": ".V",
        "country": "Canada",
        "exchange": "TSXV",
        "full_exchange_name": "TSX Venture Exchange",
        "currency": "CAD",
        "notes": "Canadian venture stocks listed on TSX Venture Exchange",
    },

    # ── Nordic ──
    {
        "suffix": ".NO",
        "country": "Norway",
        "exchange": "OSE",
        "full_exchange_name": "Oslo Stock Exchange (Euronext Oslo)",
        "currency": "NOK",
        "notes": "Norwegian stocks listed on Oslo Stock Exchange",
    },
    {
        "suffix": ".CO",
        "country": "Denmark",
        "exchange": "OMXC",
        "full_exchange_name": "Nasdaq Copenhagen (OMX Copenhagen)",
        "currency": "DKK",
        "notes": "Danish stocks listed on Nasdaq Copenhagen",
    },
    {
        "suffix": ".HE",
        "country": "Finland",
        "exchange": "OMXH",
        "full_exchange_name": "Nasdaq Helsinki (OMX Helsinki)",
        "currency": "EUR",
        "notes": "Finnish stocks listed on Nasdaq Helsinki",
    },
    {
        "suffix": ".IS",
        "country": "Iceland",
        "exchange": "Nasdaq Iceland",
        "full_exchange_name": "Nasdaq Iceland",
        "currency": "ISK",
        "notes": "Icelandic stocks listed on Nasdaq Iceland",
    },

    # ── Latin America ──
    {
        "suffix": ".MX",
        "country": "Mexico",
        "exchange": "BMV",
        "full_exchange_name": "Bolsa Mexicana de Valores (Mexican Stock Exchange)",
        "currency": "MXN",
        "notes": "Mexican stocks listed on the Mexican Stock Exchange's Global Market",
        "market_hours": _hours("America/Mexico_City", ("08:30", "15:00")),
    },
    {
        "suffix": ".SA",
        "country": "Brazil",
        "exchange": "B3",
        "full_exchange_name": "B3 - Brasil Bolsa Balcão",
        "currency": "BRL",
        "notes": "Brazilian stocks listed on B3",
        "market_hours": _hours("America/Sao_Paulo", ("10:00", "17:00")),
    },

    # ── Middle East ──
    {
        "suffix": ".TA",
        "country": "Israel",
        "exchange": "TASE",
        "full_exchange_name": "Tel Aviv Stock Exchange",
        "currency": "ILS",
        "notes": "Israeli stocks listed on TASE",
    },

    # ── Other Europe ──
    {
        "suffix": ".VI",
        "country": "Austria",
        "exchange": "Vienna",
        "full_exchange_name": "Vienna Stock Exchange",
        "currency": "EUR",
        "notes": "Austrian stocks listed on Vienna Stock Exchange",
    },
    {
        "suffix": ".IR",
        "country": "Ireland",
        "exchange": "Euronext Dublin",
        "full_exchange_name": "Euronext Dublin",
        "currency": "EUR",
        "notes": "Irish stocks listed on Euronext Dublin",
    },
    {
        "suffix": ".WA",
        "country": "Poland",
        "exchange": "WSE",
        "full_exchange_name": "Warsaw Stock Exchange",
        "currency": "PLN",
        "notes": "Polish stocks listed on WSE",
    },
    {
        "suffix": ".LS",
        "country": "Portugal",
        "exchange": "Euronext Lisbon",
        "full_exchange_name": "Euronext Lisbon",
        "currency": "EUR",
        "notes": "Portuguese stocks listed on Euronext Lisbon",
    },
    {
        "suffix": ".AT",
        "country": "Greece",
        "exchange": "ATHEX",
        "full_exchange_name": "Athens Stock Exchange",
        "currency": "EUR",
        "notes": "Greek stocks listed on ATHEX",
    },
    {
        "suffix": ".PR",
        "country": "Czech Republic",
        "exchange": "Prague Stock Exchange",
        "full_exchange_name": "Prague Stock Exchange",
        "currency": "CZK",
        "notes": "Czech stocks listed on Prague Stock Exchange",
    },
]

# Quick picks shown above the suffix search box
POPULAR_SUFFIXES: tuple[str, ...] = (".UW", ".UN", ".L", ".T", ".HK", ".MC", ".PA", ".SE", ".TO", ".AX")

_SYMBOL_SUFFIX_RE = re.compile(r"(\.[A-Z]+)$")


def _build(raw: dict) -> SuffixInfo:
    """Validate one raw entry and attach its market's holiday calendar."""
    entry = dict(raw)
    hours = entry.pop("market_hours", None)
    if hours is not None:
        market = get_market_from_exchange(entry["exchange"])
        if market is not None:
            hours = {**hours, "holidays": holiday_dates(market), "half_days": half_days(market)}
        entry["market_hours"] = MarketSchedule(**hours)
    return SuffixInfo(**entry)


SUFFIX_MAPPINGS: dict[str, SuffixInfo] = {raw["suffix"]: _build(raw) for raw in _RAW_SUFFIXES}


def _normalize(query: str) -> str:
    key = query.strip().upper()
    return key if key.startswith(".") else f".{key}"


def search_suffix(query: str) -> SuffixInfo | None:
    """Look up a suffix; the leading dot and letter case are optional.

    >>> search_suffix("se").country
    'Sweden'
    >>> search_suffix("zzz") is None
    True
    """
    if not query or not query.strip():
        return None
    return SUFFIX_MAPPINGS.get(_normalize(query))


def get_all_suffixes() -> list[str]:
    """Every registered suffix, sorted."""
    return sorted(SUFFIX_MAPPINGS)


def get_exchange_info_from_suffix(symbol: str) -> ExchangeInfo | None:
    """Resolve exchange and currency from a full ticker such as ``VOLV-B.SE``.

    Returns None when the symbol carries no suffix or the suffix is unknown;
    un-suffixed symbols are usually US listings and are left to the caller.
    """
    ticker = format_ticker(symbol)
    match = _SYMBOL_SUFFIX_RE.search(ticker)
    if not match:
        return None

    info = SUFFIX_MAPPINGS.get(match.group(1))
    if info is None:
        log.debug("suffix.unknown", symbol=ticker, suffix=match.group(1))
        return None

    return ExchangeInfo(
        symbol=ticker,
        suffix=info.suffix,
        exchange=info.exchange,
        currency=info.currency or "USD",
    )
