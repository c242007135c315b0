"""Application services."""

from __future__ import annotations

from condo_reports.services.data_source import JsonDataSource
from condo_reports.services.report_service import ReportService

__all__ = ["JsonDataSource", "ReportService"]
