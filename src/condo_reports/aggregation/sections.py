"""Per-domain section aggregates.

Each ``summarize_*`` function filters one collection by the request's date
range and reduces it by the dimensions its report section prints.  The
results are plain numbers and raw grouping keys; labels are applied later by
the composer.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from condo_reports.aggregation.aggregators import (
    MonthBreakdown,
    breakdown_by_month,
    filter_by_date_range,
    group_by_dimension,
    sum_cents,
)
from condo_reports.models import (
    AggregateRow,
    DateRange,
    ExpenseRecord,
    MaintenanceAppointment,
    MaintenanceContract,
    MaintenanceCost,
    MaintenanceReport,
    Ticket,
)

log = logging.getLogger(__name__)

TICKET_STATUSES = ("abierto", "en_progreso", "cerrado")
APPOINTMENT_STATUSES = ("pending", "in_progress", "completed", "cancelled")
COST_STATUSES = ("paid", "pending")


class SectionAggregate(BaseModel):
    """Filtered records of one section and their group-by reductions."""

    records: list[Any] = Field(default_factory=list)
    by_dimension: dict[str, list[AggregateRow]] = Field(default_factory=dict)
    by_month: list[MonthBreakdown] = Field(default_factory=list)
    total_cents: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def record_count(self) -> int:
        return len(self.records)


def summarize_reports(reports: list[MaintenanceReport], date_range: DateRange) -> SectionAggregate:
    filtered = filter_by_date_range(reports, "report_date", date_range)
    log.debug("Maintenance reports in range: %d of %d", len(filtered), len(reports))
    if not filtered:
        return SectionAggregate()
    return SectionAggregate(
        records=filtered,
        by_dimension={"area": group_by_dimension(filtered, "area")},
        by_month=breakdown_by_month(filtered, "report_date"),
    )


def summarize_tickets(tickets: list[Ticket], date_range: DateRange) -> SectionAggregate:
    filtered = filter_by_date_range(tickets, "created_at", date_range)
    log.debug("Tickets in range: %d of %d", len(filtered), len(tickets))
    if not filtered:
        return SectionAggregate()
    return SectionAggregate(
        records=filtered,
        by_dimension={
            "status": group_by_dimension(filtered, "status"),
            "priority": group_by_dimension(filtered, "priority"),
        },
        by_month=breakdown_by_month(filtered, "created_at", "status", TICKET_STATUSES),
    )


def summarize_appointments(
    appointments: list[MaintenanceAppointment], date_range: DateRange
) -> SectionAggregate:
    filtered = filter_by_date_range(appointments, "scheduled_date", date_range)
    log.debug("Appointments in range: %d of %d", len(filtered), len(appointments))
    if not filtered:
        return SectionAggregate()
    return SectionAggregate(
        records=filtered,
        by_dimension={"status": group_by_dimension(filtered, "status")},
        by_month=breakdown_by_month(filtered, "scheduled_date", "status", APPOINTMENT_STATUSES),
    )


def summarize_contracts(
    contracts: list[MaintenanceContract], date_range: DateRange
) -> SectionAggregate:
    filtered = filter_by_date_range(contracts, "start_date", date_range)
    log.debug("Contracts in range: %d of %d", len(filtered), len(contracts))
    if not filtered:
        return SectionAggregate()
    return SectionAggregate(
        records=filtered,
        by_dimension={
            "status": group_by_dimension(filtered, "status"),
            "provider": group_by_dimension(filtered, "provider_name", amount_field="value_cents"),
        },
        total_cents=sum_cents(filtered, "value_cents"),
    )


def summarize_costs(costs: list[MaintenanceCost], date_range: DateRange) -> SectionAggregate:
    filtered = filter_by_date_range(costs, "cost_date", date_range)
    log.debug("Costs in range: %d of %d", len(filtered), len(costs))
    if not filtered:
        return SectionAggregate()
    return SectionAggregate(
        records=filtered,
        by_dimension={
            "category": group_by_dimension(filtered, "category", amount_field="amount_cents"),
            "provider": group_by_dimension(filtered, "provider_id", amount_field="amount_cents"),
        },
        by_month=breakdown_by_month(
            filtered, "cost_date", "status", COST_STATUSES, amount_field="amount_cents"
        ),
        total_cents=sum_cents(filtered, "amount_cents"),
    )


def year_range(year: int) -> DateRange:
    return DateRange(start=date(year, 1, 1), end=date(year, 12, 31))


def summarize_expenses(expenses: list[ExpenseRecord], date_range: DateRange) -> SectionAggregate:
    """Expenses by concept (largest first, ``Total`` last) and by month in calendar order."""
    filtered = filter_by_date_range(expenses, "expense_date", date_range)
    log.debug("Expenses in range: %d of %d", len(filtered), len(expenses))
    if not filtered:
        return SectionAggregate()
    by_concept = group_by_dimension(filtered, "concept", amount_field="amount_cents")
    *groups, total = by_concept
    groups.sort(key=lambda row: row.total, reverse=True)
    by_month = sorted(
        breakdown_by_month(filtered, "expense_date", amount_field="amount_cents"),
        key=lambda b: b.month_key,
    )
    return SectionAggregate(
        records=filtered,
        by_dimension={"concept": [*groups, total]},
        by_month=by_month,
        total_cents=total.total,
    )
