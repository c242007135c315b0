"""Group-by reducers over domain record collections.

Records may be pydantic models or plain mappings; fields are looked up by
name.  Money is summed as integer cents and never converted here.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, Field

from condo_reports.aggregation.months import month_key
from condo_reports.dates import parse_date
from condo_reports.formatting import to_cents
from condo_reports.models import AggregateRow, DateRange

T = TypeVar("T")

TOTAL_KEY = "Total"


class MonthBreakdown(BaseModel):
    """One ``YYYY-MM`` group: record count, summed amount and a per-status split.

    ``by_status`` holds counts, or cents when the breakdown was built with an
    amount field.
    """

    month_key: str
    count: int = 0
    total: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)


def field_value(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def filter_by_date_range(records: Iterable[T], field: str, date_range: DateRange) -> list[T]:
    """Keep records whose *field* falls inside the inclusive range. Unparseable dates are dropped."""
    return [r for r in records if date_range.contains(parse_date(field_value(r, field)))]


def group_by_month(records: Iterable[T], field: str) -> dict[str, list[T]]:
    """Group by ``YYYY-MM`` of *field*, in first-seen order."""
    grouped: dict[str, list[T]] = {}
    for record in records:
        day = parse_date(field_value(record, field))
        if day is None:
            continue
        grouped.setdefault(month_key(day), []).append(record)
    return grouped


def sum_cents(records: Iterable[Any], amount_field: str) -> int:
    return sum(to_cents(field_value(r, amount_field)) for r in records)


def group_by_dimension(
    records: Sequence[Any],
    field: str,
    amount_field: str | None = None,
    key_fn: Callable[[Any], str] | None = None,
) -> list[AggregateRow]:
    """Tally (or sum *amount_field*) per distinct *field* value, plus a ``Total`` row.

    Without *amount_field* each row's ``total`` is its record count.  Missing
    values group under ``""`` so the renderer can label them.
    """
    totals: dict[str, int] = {}
    counts: dict[str, int] = {}
    for record in records:
        raw = field_value(record, field)
        key = key_fn(raw) if key_fn else ("" if raw is None else str(raw))
        amount = to_cents(field_value(record, amount_field)) if amount_field else 1
        totals[key] = totals.get(key, 0) + amount
        counts[key] = counts.get(key, 0) + 1

    rows = [AggregateRow(group_key=k, total=totals[k], count=counts[k]) for k in totals]
    grand_total = sum_cents(records, amount_field) if amount_field else len(records)
    rows.append(AggregateRow(group_key=TOTAL_KEY, total=grand_total, count=len(records)))
    return rows


def breakdown_by_month(
    records: Sequence[Any],
    date_field: str,
    status_field: str | None = None,
    statuses: Sequence[str] = (),
    amount_field: str | None = None,
) -> list[MonthBreakdown]:
    """Per-month count/amount with a split over the listed *statuses*.

    Statuses not listed still count toward ``count`` and ``total``.
    """
    breakdowns: list[MonthBreakdown] = []
    for key, group in group_by_month(records, date_field).items():
        split = {status: 0 for status in statuses}
        if status_field:
            for record in group:
                status = field_value(record, status_field)
                if status in split:
                    split[status] += to_cents(field_value(record, amount_field)) if amount_field else 1
        breakdowns.append(
            MonthBreakdown(
                month_key=key,
                count=len(group),
                total=sum_cents(group, amount_field) if amount_field else len(group),
                by_status=split,
            )
        )
    return breakdowns


def total_row(breakdowns: Sequence[MonthBreakdown], statuses: Sequence[str] = ()) -> MonthBreakdown:
    """Synthetic ``Total`` breakdown summing every month."""
    return MonthBreakdown(
        month_key=TOTAL_KEY,
        count=sum(b.count for b in breakdowns),
        total=sum(b.total for b in breakdowns),
        by_status={s: sum(b.by_status.get(s, 0) for b in breakdowns) for s in statuses},
    )
