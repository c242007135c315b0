"""condo-reports: paginated PDF reports for condominium administration.

Public API::

    from condo_reports import (
        AppSettings,
        ReportService,
        MaintenanceComposer, IncomeReportComposer, ExpenseReportComposer,
        MaintenanceDataset, ExpenseDataset, ReportContent, DateRange,
    )
"""

from __future__ import annotations

from condo_reports.composer.expenses import ExpenseReportComposer
from condo_reports.composer.income import IncomeReportComposer
from condo_reports.composer.maintenance import MaintenanceComposer
from condo_reports.core.config import AppSettings
from condo_reports.exceptions import (
    CondoReportError,
    DataSourceError,
    ImageDecodeError,
    ImageFetchError,
    PersistenceError,
    ReportGenerationError,
)
from condo_reports.models import (
    AdminContact,
    BrandingAssets,
    DateRange,
    ExpenseDataset,
    ExpenseRecord,
    GeneratedReport,
    KPISnapshot,
    MaintenanceAppointment,
    MaintenanceContract,
    MaintenanceCost,
    MaintenanceDataset,
    MaintenanceReport,
    ReportContent,
    Ticket,
)
from condo_reports.services.report_service import ReportService

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AppSettings",
    "ReportService",
    "MaintenanceComposer",
    "IncomeReportComposer",
    "ExpenseReportComposer",
    "CondoReportError",
    "DataSourceError",
    "ImageDecodeError",
    "ImageFetchError",
    "PersistenceError",
    "ReportGenerationError",
    "AdminContact",
    "BrandingAssets",
    "DateRange",
    "ExpenseDataset",
    "ExpenseRecord",
    "GeneratedReport",
    "KPISnapshot",
    "MaintenanceAppointment",
    "MaintenanceContract",
    "MaintenanceCost",
    "MaintenanceDataset",
    "MaintenanceReport",
    "ReportContent",
    "Ticket",
]
