"""Display formatting for money and dates. Never renders raw floats.

Cents are converted to a decimal string with integer arithmetic only, so the
exact aggregated value is what gets printed.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from condo_reports.dates import parse_date

MISSING_DATE = "Sin fecha"


def to_cents(value: Any) -> int:
    """Coerce *value* to integer cents; missing or malformed input is 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def format_cents(cents: Any, symbol: str = "$") -> str:
    """``150000`` -> ``$1,500.00``; negatives keep a leading minus."""
    value = to_cents(cents)
    sign = "-" if value < 0 else ""
    units, minor = divmod(abs(value), 100)
    return f"{sign}{symbol}{units:,}.{minor:02d}"


def format_date(value: Any) -> str:
    day = parse_date(value)
    if day is None:
        return MISSING_DATE
    return day.strftime("%d/%m/%Y")


def format_datetime(value: datetime | date) -> str:
    if isinstance(value, datetime):
        return value.strftime("%d/%m/%Y %H:%M:%S")
    return value.strftime("%d/%m/%Y")
