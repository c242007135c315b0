"""Document composers: one per report kind, sharing ``DocumentComposer``."""

from __future__ import annotations

from condo_reports.composer.base import (
    DocumentComposer,
    default_surface,
    expense_filename,
    income_filename,
    maintenance_filename,
)
from condo_reports.composer.expenses import ExpenseReportComposer
from condo_reports.composer.income import IncomeReportComposer
from condo_reports.composer.maintenance import MaintenanceComposer, MaintenanceSections

__all__ = [
    "DocumentComposer",
    "default_surface",
    "expense_filename",
    "income_filename",
    "maintenance_filename",
    "ExpenseReportComposer",
    "IncomeReportComposer",
    "MaintenanceComposer",
    "MaintenanceSections",
]
