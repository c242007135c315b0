"""Shared fixtures for condo-reports tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from condo_reports.core.config import ImageConfig, LayoutConfig
from condo_reports.models import (
    AdminContact,
    DateRange,
    ExpenseDataset,
    ExpenseRecord,
    KPISnapshot,
    MaintenanceAppointment,
    MaintenanceContract,
    MaintenanceCost,
    MaintenanceDataset,
    MaintenanceReport,
    ReportContent,
    Ticket,
)
from tests.fakes.fake_surface import RecordingSurface


@pytest.fixture
def layout() -> LayoutConfig:
    return LayoutConfig()


@pytest.fixture
def image_config() -> ImageConfig:
    return ImageConfig()


@pytest.fixture
def recording_surfaces() -> list[RecordingSurface]:
    """Every surface created through ``surface_factory`` in creation order."""
    return []


@pytest.fixture
def surface_factory(recording_surfaces: list[RecordingSurface]):
    def factory(_config: LayoutConfig) -> RecordingSurface:
        surface = RecordingSurface()
        recording_surfaces.append(surface)
        return surface

    return factory


@pytest.fixture
def first_quarter() -> DateRange:
    return DateRange(start=date(2024, 1, 1), end=date(2024, 3, 31))


@pytest.fixture
def sample_costs() -> list[MaintenanceCost]:
    """10 costs across Jan-Mar 2024: 4 Materiales, 6 Servicios, 150000 cents total."""
    rows = [
        ("2024-01-05", 10000, "Materiales", "paid", "prov-1"),
        ("2024-01-18", 20000, "Servicios", "pending", "prov-2"),
        ("2024-01-30", 5000, "Servicios", "paid", "prov-2"),
        ("2024-02-02", 15000, "Materiales", "paid", "prov-1"),
        ("2024-02-14", 25000, "Servicios", "paid", None),
        ("2024-02-28", 7500, "Servicios", "pending", "prov-2"),
        ("2024-03-01", 12500, "Materiales", "pending", "prov-1"),
        ("2024-03-11", 30000, "Servicios", "paid", "prov-2"),
        ("2024-03-20", 5000, "Materiales", "paid", None),
        ("2024-03-31", 20000, "Servicios", "paid", "prov-2"),
    ]
    return [
        MaintenanceCost(
            id=f"cost-{i}",
            cost_date=day,
            amount_cents=amount,
            category=category,
            status=status,
            provider_id=provider,
        )
        for i, (day, amount, category, status, provider) in enumerate(rows)
    ]


@pytest.fixture
def maintenance_dataset(sample_costs: list[MaintenanceCost]) -> MaintenanceDataset:
    return MaintenanceDataset(
        reports=[
            MaintenanceReport(
                id="r1",
                report_date="2024-01-10",
                area="Alberca",
                responsible="Luis",
                detail="<p>Limpieza <b>profunda</b> del filtro</p>",
                evidence_url="https://example.com/e1.jpg",
            ),
            MaintenanceReport(id="r2", report_date="2024-02-03", area="Jardín", detail="Poda"),
            MaintenanceReport(id="r3", report_date="2023-12-30", area="Alberca", detail="Fuera de rango"),
        ],
        tickets=[
            Ticket(
                id="t1",
                created_at={"seconds": 1705000000},
                folio="T-001",
                title="Fuga de agua en el estacionamiento subterráneo",
                description="Se detecta fuga",
                status="abierto",
                priority="alta",
                area="Estacionamiento",
                provider_id="prov-1",
            ),
            Ticket(id="t2", created_at="2024-03-02", folio="T-002", title="Luz", status="cerrado"),
        ],
        appointments=[
            MaintenanceAppointment(
                id="a1", scheduled_date="2024-02-20", time="10:00", title="Revisión", status="completed"
            ),
        ],
        contracts=[
            MaintenanceContract(
                id="contract-000123",
                provider_name="Aguas SA",
                service_type="Bombas",
                value_cents=1250000,
                start_date="2024-01-01",
                end_date="2024-12-31",
                status="active",
            ),
        ],
        costs=sample_costs,
        providers={"prov-1": "Plomería López", "prov-2": "Servicios Integrales"},
    )


@pytest.fixture
def expense_dataset() -> ExpenseDataset:
    return ExpenseDataset(
        expenses=[
            ExpenseRecord(id="e1", expense_date="2024-01-15", concept="Luz", amount_cents=120000),
            ExpenseRecord(id="e2", expense_date="2024-01-20", concept="Agua", amount_cents=45000),
            ExpenseRecord(id="e3", expense_date="2024-03-05", concept="Luz", amount_cents=110000),
            ExpenseRecord(id="e4", expense_date="2024-03-09", concept="Vigilancia", amount_cents=300000),
            ExpenseRecord(id="e5", expense_date="2023-12-31", concept="Luz", amount_cents=99999),
        ]
    )


@pytest.fixture
def report_content() -> ReportContent:
    return ReportContent(
        narrative="# Resumen\n\nIngresos estables.\n",
        template_label="Ingresos",
        generated_at=datetime(2024, 4, 2, 9, 30, 15),
        admin=AdminContact(company="Admin Condominal", phone="555-0100", email="admin@example.com"),
        kpis=KPISnapshot(
            opening_balance=100000,
            period_income=550000,
            period_expenses=230000,
            period_net_flow=320000,
            consolidated_balance=420000,
            period_charges=600000,
            outstanding_balance=50000,
        ),
    )
