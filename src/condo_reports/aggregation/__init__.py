"""Date-range filtering and group-by reducers over domain records."""

from __future__ import annotations

from condo_reports.aggregation.aggregators import (
    TOTAL_KEY,
    MonthBreakdown,
    breakdown_by_month,
    filter_by_date_range,
    group_by_dimension,
    group_by_month,
    sum_cents,
    total_row,
)
from condo_reports.aggregation.months import localize_month_label, month_key_label

__all__ = [
    "TOTAL_KEY",
    "MonthBreakdown",
    "breakdown_by_month",
    "filter_by_date_range",
    "group_by_dimension",
    "group_by_month",
    "sum_cents",
    "total_row",
    "localize_month_label",
    "month_key_label",
]
