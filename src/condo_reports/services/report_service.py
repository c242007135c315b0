"""Report service: resolves branding images, composes a document and persists it.

Image fetches are awaited one after the other before composition starts;
composition itself is synchronous.  The artifact is stored only after the
composer returns, so a failed request leaves nothing behind.
"""

from __future__ import annotations

import logging

from condo_reports.composer.base import SurfaceFactory
from condo_reports.composer.expenses import ExpenseReportComposer
from condo_reports.composer.income import IncomeReportComposer
from condo_reports.composer.maintenance import MaintenanceComposer
from condo_reports.core.config import AppSettings
from condo_reports.images.preprocessor import ImageCache, ImagePreprocessor
from condo_reports.models import (
    BrandingAssets,
    DateRange,
    ExpenseDataset,
    GeneratedReport,
    MaintenanceDataset,
    ReportContent,
    ResolvedAssets,
)
from condo_reports.persistence.factory import create_artifact_store
from condo_reports.persistence.protocols import IArtifactStore

log = logging.getLogger(__name__)


class ReportService:
    """Generate and store maintenance, income and expense reports."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        store: IArtifactStore | None = None,
        preprocessor: ImagePreprocessor | None = None,
        surface_factory: SurfaceFactory | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._store = store or create_artifact_store(self._settings.persistence)
        self._preprocessor = preprocessor
        layout, image = self._settings.layout, self._settings.image
        self._maintenance = MaintenanceComposer(layout, image, surface_factory)
        self._income = IncomeReportComposer(layout, image, surface_factory)
        self._expenses = ExpenseReportComposer(layout, image, surface_factory)

    @property
    def store(self) -> IArtifactStore:
        return self._store

    async def resolve_assets(self, branding: BrandingAssets | None) -> ResolvedAssets:
        """Fetch the logo, then the signature.  Either may come back ``None``."""
        if branding is None:
            return ResolvedAssets()
        preprocessor = self._preprocessor or ImagePreprocessor(self._settings.image)
        # Conversions are cached for one request only
        preprocessor.cache = ImageCache()
        logo = await preprocessor.resolve_optional(branding.logo_url)
        signature = await preprocessor.resolve_optional(branding.signature_url)
        return ResolvedAssets(logo=logo, signature=signature)

    def _persist(self, report: GeneratedReport) -> GeneratedReport:
        location = self._store.save(report.filename, report.content, report.content_type)
        log.info("Stored %s at %s", report.filename, location)
        return report.model_copy(update={"location": location})

    async def generate_maintenance(
        self,
        dataset: MaintenanceDataset,
        date_range: DateRange,
        content: ReportContent | None = None,
        branding: BrandingAssets | None = None,
    ) -> GeneratedReport:
        assets = await self.resolve_assets(branding)
        report = self._maintenance.compose(dataset, date_range, content, assets)
        return self._persist(report)

    async def generate_income(
        self,
        content: ReportContent,
        year: int | None = None,
        branding: BrandingAssets | None = None,
    ) -> GeneratedReport:
        assets = await self.resolve_assets(branding)
        report = self._income.compose(content, year, assets)
        return self._persist(report)

    async def generate_expenses(
        self,
        dataset: ExpenseDataset,
        year: int,
        content: ReportContent | None = None,
        branding: BrandingAssets | None = None,
    ) -> GeneratedReport:
        assets = await self.resolve_assets(branding)
        report = self._expenses.compose(dataset, year, content, assets)
        return self._persist(report)
