"""Tests for ReportService orchestration and the JSON data source."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from condo_reports.exceptions import DataSourceError, PersistenceError, ReportGenerationError
from condo_reports.images.preprocessor import ImagePreprocessor
from condo_reports.models import BrandingAssets
from condo_reports.services import JsonDataSource, ReportService
from tests.fakes.fake_images import image_transport, png_bytes
from tests.fakes.fake_persistence import FakeArtifactStore

LOGO_URL = "https://cdn.example.com/logo.png"
SIGNATURE_URL = "https://cdn.example.com/firma.png"


def _images(surface) -> list:
    return [op for op in surface.ops if op.kind == "image"]


class TestReportServicePersistence:
    @pytest.mark.asyncio
    async def test_persists_after_compose(self, surface_factory, maintenance_dataset, first_quarter) -> None:
        store = FakeArtifactStore()
        service = ReportService(store=store, surface_factory=surface_factory)

        report = await service.generate_maintenance(maintenance_dataset, first_quarter)

        assert store.saves == [report.filename]
        assert report.location == f"fake://{report.filename}"
        assert store.load(report.filename) == report.content

    @pytest.mark.asyncio
    async def test_failed_compose_stores_nothing(self, maintenance_dataset, first_quarter) -> None:
        def broken(_config):
            raise RuntimeError("canvas exploded")

        store = FakeArtifactStore()
        service = ReportService(store=store, surface_factory=broken)

        with pytest.raises(ReportGenerationError):
            await service.generate_maintenance(maintenance_dataset, first_quarter)
        assert store.saves == []

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, surface_factory, expense_dataset) -> None:
        service = ReportService(store=FakeArtifactStore(fail=True), surface_factory=surface_factory)
        with pytest.raises(PersistenceError):
            await service.generate_expenses(expense_dataset, 2024)

    @pytest.mark.asyncio
    async def test_income_and_expenses(self, surface_factory, report_content, expense_dataset) -> None:
        store = FakeArtifactStore()
        service = ReportService(store=store, surface_factory=surface_factory)

        income = await service.generate_income(report_content, year=2024)
        expenses = await service.generate_expenses(expense_dataset, 2024)

        assert store.saves == ["reporte-ia-ingresos-2024.pdf", "reporte_egresos_2024.pdf"]
        assert income.metadata["kind"] == "income"
        assert expenses.metadata["kind"] == "expenses"


class TestReportServiceImages:
    @pytest.mark.asyncio
    async def test_unreachable_signature_is_omitted(
        self, surface_factory, recording_surfaces, maintenance_dataset, first_quarter
    ) -> None:
        transport = image_transport({LOGO_URL: (200, png_bytes(), "image/png")})
        async with httpx.AsyncClient(transport=transport) as client:
            service = ReportService(
                store=FakeArtifactStore(),
                preprocessor=ImagePreprocessor(client=client),
                surface_factory=surface_factory,
            )
            report = await service.generate_maintenance(
                maintenance_dataset,
                first_quarter,
                branding=BrandingAssets(logo_url=LOGO_URL, signature_url=SIGNATURE_URL),
            )

        assert report.page_count >= 4
        images = _images(recording_surfaces[0])
        assert len(images) == 1
        assert images[0].page == 1
        assert transport.calls == [LOGO_URL, SIGNATURE_URL]

    @pytest.mark.asyncio
    async def test_http_error_is_omitted(self, surface_factory, recording_surfaces, report_content) -> None:
        transport = image_transport({LOGO_URL: (404, b"", "text/html")})
        async with httpx.AsyncClient(transport=transport) as client:
            service = ReportService(
                store=FakeArtifactStore(),
                preprocessor=ImagePreprocessor(client=client),
                surface_factory=surface_factory,
            )
            await service.generate_income(report_content, branding=BrandingAssets(logo_url=LOGO_URL))

        assert _images(recording_surfaces[0]) == []

    @pytest.mark.asyncio
    async def test_undecodable_image_embeds_raw_bytes(self, surface_factory) -> None:
        transport = image_transport({LOGO_URL: (200, b"GIF89a-not-really", "image/gif")})
        async with httpx.AsyncClient(transport=transport) as client:
            service = ReportService(
                store=FakeArtifactStore(),
                preprocessor=ImagePreprocessor(client=client),
                surface_factory=surface_factory,
            )
            assets = await service.resolve_assets(BrandingAssets(logo_url=LOGO_URL))

        assert assets.logo is not None
        assert not assets.logo.optimized
        assert assets.signature is None

    @pytest.mark.asyncio
    async def test_cache_lives_for_one_request(self, surface_factory, expense_dataset) -> None:
        transport = image_transport({LOGO_URL: (200, png_bytes(), "image/png")})
        branding = BrandingAssets(logo_url=LOGO_URL, signature_url=LOGO_URL)
        async with httpx.AsyncClient(transport=transport) as client:
            service = ReportService(
                store=FakeArtifactStore(),
                preprocessor=ImagePreprocessor(client=client),
                surface_factory=surface_factory,
            )
            await service.generate_expenses(expense_dataset, 2024, branding=branding)
            assert len(transport.calls) == 1
            await service.generate_expenses(expense_dataset, 2024, branding=branding)
            assert len(transport.calls) == 2

    @pytest.mark.asyncio
    async def test_no_branding_fetches_nothing(self) -> None:
        service = ReportService(store=FakeArtifactStore())
        assets = await service.resolve_assets(None)
        assert assets.logo is None and assets.signature is None


class TestJsonDataSource:
    @pytest.mark.asyncio
    async def test_load_maintenance(self, tmp_path: Path) -> None:
        path = tmp_path / "mantenimiento.json"
        path.write_text(
            json.dumps(
                {
                    "tickets": [{"id": "t1", "created_at": {"seconds": 1705000000}, "status": "abierto"}],
                    "costs": [{"id": "c1", "cost_date": "2024-01-05", "amount_cents": 1500}],
                    "providers": {"prov-1": "Plomería López"},
                }
            ),
            encoding="utf-8",
        )
        dataset = await JsonDataSource().load_maintenance(path)
        assert len(dataset.tickets) == 1
        assert dataset.costs[0].amount_cents == 1500
        assert dataset.reports == []

    @pytest.mark.asyncio
    async def test_load_kpis(self, tmp_path: Path) -> None:
        path = tmp_path / "kpis.json"
        path.write_text(json.dumps({"opening_balance": 100000}), encoding="utf-8")
        kpis = await JsonDataSource().load_kpis(path)
        assert kpis.opening_balance == 100000

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataSourceError):
            await JsonDataSource().load_expenses(tmp_path / "nope.json")

    @pytest.mark.asyncio
    async def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "egresos.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DataSourceError):
            await JsonDataSource().load_expenses(path)

    @pytest.mark.asyncio
    async def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "egresos.json"
        path.write_text(json.dumps({"expenses": [{"amount_cents": "mucho"}]}), encoding="utf-8")
        with pytest.raises(DataSourceError):
            await JsonDataSource().load_expenses(path)

    @pytest.mark.asyncio
    async def test_narrative(self, tmp_path: Path) -> None:
        path = tmp_path / "narrativa.md"
        path.write_text("# Resumen\n", encoding="utf-8")
        assert await JsonDataSource().load_narrative(path) == "# Resumen\n"
        with pytest.raises(DataSourceError):
            await JsonDataSource().load_narrative(tmp_path / "missing.md")

