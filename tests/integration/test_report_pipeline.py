"""Integration tests: JSON data on disk through the CLI and service to PDF files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("reportlab")

from typer.testing import CliRunner  # noqa: E402

from condo_reports.cli.main import app  # noqa: E402
from condo_reports.models import MaintenanceDataset  # noqa: E402
from condo_reports.persistence import MemoryArtifactStore  # noqa: E402
from condo_reports.services import JsonDataSource, ReportService  # noqa: E402

runner = CliRunner()


@pytest.fixture
def maintenance_file(tmp_path: Path, maintenance_dataset: MaintenanceDataset) -> Path:
    path = tmp_path / "mantenimiento.json"
    path.write_text(maintenance_dataset.model_dump_json(), encoding="utf-8")
    return path


@pytest.fixture
def expenses_file(tmp_path: Path, expense_dataset) -> Path:
    path = tmp_path / "egresos.json"
    path.write_text(expense_dataset.model_dump_json(), encoding="utf-8")
    return path


class TestServicePipeline:
    @pytest.mark.asyncio
    async def test_maintenance_from_json(self, maintenance_file: Path, first_quarter) -> None:
        store = MemoryArtifactStore()
        dataset = await JsonDataSource().load_maintenance(maintenance_file)

        report = await ReportService(store=store).generate_maintenance(dataset, first_quarter)

        assert report.location == f"memory://{report.filename}"
        assert store.load(report.filename).startswith(b"%PDF-")
        assert report.metadata["reports"] == 2
        assert report.metadata["cost_total_cents"] == 150000

    @pytest.mark.asyncio
    async def test_income_from_narrative(self, tmp_path: Path, report_content) -> None:
        narrative = tmp_path / "narrativa.md"
        narrative.write_text(
            "# Resumen ejecutivo\n\n"
            "Los **ingresos** crecieron frente al periodo anterior.\n\n"
            "## Detalle\n\n"
            "| Concepto | Monto |\n|---|---|\n| Cuotas | $5,500.00 |\n| Multas | $120.00 |\n\n"
            "- Morosidad estable\n- Sin egresos extraordinarios\n",
            encoding="utf-8",
        )
        store = MemoryArtifactStore()
        content = report_content.model_copy(
            update={"narrative": await JsonDataSource().load_narrative(narrative)}
        )

        report = await ReportService(store=store).generate_income(content, year=2024)

        assert store.list_keys() == ["reporte-ia-ingresos-2024.pdf"]
        assert report.content.startswith(b"%PDF-")


class TestCLI:
    def test_maintenance_command(self, maintenance_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            [
                "maintenance",
                str(maintenance_file),
                "--start",
                "2024-01-01",
                "--end",
                "2024-03-31",
                "--output-dir",
                str(out),
                "--admin-company",
                "Admin Condominal",
            ],
        )
        assert result.exit_code == 0, result.output
        files = list(out.glob("reporte_mantenimiento_*.pdf"))
        assert len(files) == 1
        assert files[0].read_bytes().startswith(b"%PDF-")

    def test_expenses_command(self, expenses_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(app, ["expenses", str(expenses_file), "--year", "2024", "--output-dir", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "reporte_egresos_2024.pdf").read_bytes().startswith(b"%PDF-")

    def test_income_command(self, tmp_path: Path) -> None:
        narrative = tmp_path / "narrativa.md"
        narrative.write_text("# Resumen\n\nTodo en orden.\n", encoding="utf-8")
        kpis = tmp_path / "kpis.json"
        kpis.write_text(json.dumps({"opening_balance": 100000, "period_income": 25000}), encoding="utf-8")
        out = tmp_path / "out"

        result = runner.invoke(app, ["income", str(narrative), "--kpis", str(kpis), "--output-dir", str(out)])

        assert result.exit_code == 0, result.output
        assert (out / "reporte-ia-ingresos-all-years.pdf").exists()

    def test_reversed_range_rejected(self, maintenance_file: Path, tmp_path: Path) -> None:
        args = ["maintenance", str(maintenance_file), "--start", "2024-03-31", "--end", "2024-01-01"]
        result = runner.invoke(app, [*args, "--output-dir", str(tmp_path / "out")])
        assert result.exit_code == 2

    def test_bad_date_rejected(self, maintenance_file: Path, tmp_path: Path) -> None:
        args = ["maintenance", str(maintenance_file), "--start", "01/01/2024", "--end", "2024-03-31"]
        result = runner.invoke(app, [*args, "--output-dir", str(tmp_path / "out")])
        assert result.exit_code == 2

    def test_missing_data_file(self, tmp_path: Path) -> None:
        out = tmp_path / "out"
        args = ["expenses", str(tmp_path / "nope.json"), "--year", "2024"]
        result = runner.invoke(app, [*args, "--output-dir", str(out)])
        assert result.exit_code == 2
        assert not list(out.glob("*.pdf"))
