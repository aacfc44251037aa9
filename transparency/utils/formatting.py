# transparency/utils/formatting.py
from datetime import date, datetime
from typing import Optional, Union

from ..config import settings

DateLike = Union[str, date, datetime, None]

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def parse_date(value: DateLike) -> Optional[datetime]:
    """Parse an ISO date/datetime string or pass through date objects; None when unusable"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def plain_number(amount: Optional[float]) -> str:
    """Render a number without a trailing .0 for whole values"""
    amount = amount or 0
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def format_currency(amount: Optional[float], currency: Optional[str] = None) -> str:
    """Whole-unit currency string, e.g. $1,235"""
    currency = currency or settings.CURRENCY
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    amount = round(amount or 0)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,}"


def format_date(value: DateLike, fallback: str = "Recently") -> str:
    """Long date, e.g. January 5, 2024"""
    parsed = parse_date(value)
    if parsed is None:
        return fallback
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_month_year(value: DateLike, fallback: str = "") -> str:
    parsed = parse_date(value)
    if parsed is None:
        return fallback
    return f"{parsed:%B %Y}"


def format_short_date(value: DateLike, fallback: str = "") -> str:
    """Abbreviated date, e.g. Jan 5, 2024"""
    parsed = parse_date(value)
    if parsed is None:
        return fallback
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def format_numeric_date(value: DateLike, fallback: str = "") -> str:
    """Month/day/year without padding, e.g. 1/5/2024"""
    parsed = parse_date(value)
    if parsed is None:
        return fallback
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def iso_date(value: Optional[DateLike] = None) -> str:
    """YYYY-MM-DD for the given value, today when omitted"""
    parsed = parse_date(value) if value is not None else datetime.now()
    return (parsed or datetime.now()).date().isoformat()
