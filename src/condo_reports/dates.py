"""Lenient date parsing for records coming from the data-access layer."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

_STRING_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%Y/%m/%d", "%d-%m-%Y")


def parse_date(value: Any) -> date | None:
    """Return the calendar day of *value*, or ``None`` when it cannot be parsed.

    Accepts ``date``/``datetime`` objects, ISO-8601 strings (with or without a
    time part and offset), a few day-first formats, and Firestore timestamp
    payloads (``{"seconds": ..., "nanoseconds": ...}``).
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, dict) and "seconds" in value:
        try:
            return datetime.fromtimestamp(int(value["seconds"]), tz=timezone.utc).date()
        except (TypeError, ValueError, OverflowError):
            return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _STRING_FORMATS:
        try:
            return datetime.strptime(text[:10], fmt).date()
        except ValueError:
            continue
    return None
