"""Maintenance report: reports, tickets, appointments, contracts and costs for a date range."""

from __future__ import annotations

import logging
from datetime import datetime

from condo_reports.aggregation.aggregators import TOTAL_KEY, MonthBreakdown, total_row
from condo_reports.aggregation.months import month_key_label
from condo_reports.aggregation.sections import (
    APPOINTMENT_STATUSES,
    COST_STATUSES,
    TICKET_STATUSES,
    SectionAggregate,
    summarize_appointments,
    summarize_contracts,
    summarize_costs,
    summarize_reports,
    summarize_tickets,
)
from condo_reports.composer.base import DocumentComposer, maintenance_filename
from condo_reports.formatting import format_date, format_datetime
from condo_reports.models import (
    DateRange,
    GeneratedReport,
    MaintenanceDataset,
    ReportContent,
    ResolvedAssets,
)
from condo_reports.rendering.flow import FlowController
from condo_reports.rendering.styles import (
    APPOINTMENT_STATUS_LABELS,
    CONTRACT_STATUS_LABELS,
    COST_STATUS_LABELS,
    TICKET_PRIORITY_LABELS,
    TICKET_STATUS_LABELS,
    label_for,
)
from condo_reports.text.sanitize import clean_html, truncate

log = logging.getLogger(__name__)

CONTRACT_DESCRIPTION_MM = 40.0


class MaintenanceSections:
    """The five filtered and aggregated sections of one maintenance request."""

    def __init__(self, dataset: MaintenanceDataset, date_range: DateRange) -> None:
        self.reports = summarize_reports(dataset.reports, date_range)
        self.tickets = summarize_tickets(dataset.tickets, date_range)
        self.appointments = summarize_appointments(dataset.appointments, date_range)
        self.contracts = summarize_contracts(dataset.contracts, date_range)
        self.costs = summarize_costs(dataset.costs, date_range)

    def counts(self) -> dict[str, int]:
        return {
            "reports": self.reports.record_count,
            "tickets": self.tickets.record_count,
            "appointments": self.appointments.record_count,
            "contracts": self.contracts.record_count,
            "costs": self.costs.record_count,
        }


class MaintenanceComposer(DocumentComposer):
    """Composes the maintenance report.

    Layout: title block and general summary, then one section per
    collection.  A conditional break follows reports and appointments; a
    forced break precedes appointments, costs and the signature page.
    """

    report_kind = "maintenance"

    def compose(
        self,
        dataset: MaintenanceDataset,
        date_range: DateRange,
        content: ReportContent | None = None,
        assets: ResolvedAssets | None = None,
    ) -> GeneratedReport:
        content = content or ReportContent()
        assets = assets or ResolvedAssets()
        sections = MaintenanceSections(dataset, date_range)
        providers = dataset.providers
        log.debug("Maintenance sections for %s..%s: %s", date_range.start, date_range.end, sections.counts())

        def draw(flow: FlowController) -> None:
            self._header(flow, date_range, content.generated_at, sections, assets)
            self._reports_section(flow, sections.reports)
            flow.break_if_low(self._config.section_break_reserve_mm)
            self._tickets_section(flow, sections.tickets, providers)
            flow.page_break()
            self._appointments_section(flow, sections.appointments)
            flow.break_if_low(self._config.section_break_reserve_mm)
            self._contracts_section(flow, sections.contracts)
            flow.page_break()
            self._costs_section(flow, sections.costs, providers)
            self._signature_page(flow, content.admin, assets.signature)

        return self._generate(
            maintenance_filename(content.generated_at),
            draw,
            metadata={
                "start": date_range.start.isoformat(),
                "end": date_range.end.isoformat(),
                **sections.counts(),
                "cost_total_cents": sections.costs.total_cents,
            },
        )

    # ── Header ───────────────────────────────────────────────────────

    def _header(
        self,
        flow: FlowController,
        date_range: DateRange,
        generated_at: datetime,
        sections: MaintenanceSections,
        assets: ResolvedAssets,
    ) -> None:
        start, end = format_date(date_range.start), format_date(date_range.end)
        self._title_block(
            flow,
            f"Reporte de Mantenimiento ({start} - {end})",
            [("Fecha de generación:", format_datetime(generated_at)), ("Periodo:", f"{start} al {end}")],
            assets.logo,
        )
        self._heading(flow, "Resumen General")
        flow.advance(4)
        self._bullets(
            flow,
            [
                f"Reportes de mantenimiento: {sections.reports.record_count}",
                f"Tickets generados: {sections.tickets.record_count}",
                f"Citas agendadas: {sections.appointments.record_count}",
                f"Contratos activos: {sections.contracts.record_count}",
                f"Costo total de mantenimiento: {self._money(sections.costs.total_cents)}",
            ],
        )
        flow.advance(5)

    # ── Helpers ──────────────────────────────────────────────────────

    def _detail_text(self, value: str) -> str:
        return clean_html(value, self._config.detail_text_budget)

    def _detail_pins(self, column: int = 3, width: float | None = None) -> dict[int, float]:
        return {column: width or self._config.wide_column_mm}

    def _month_count_rows(self, months: list[MonthBreakdown], statuses: tuple[str, ...]) -> list[list[str]]:
        return [
            [month_key_label(b.month_key), str(b.count), *(str(b.by_status.get(s, 0)) for s in statuses)]
            for b in months
        ]

    def _section_start(self, flow: FlowController, title: str, section: SectionAggregate, empty: str) -> bool:
        """Draw the section title; returns False (after the placeholder) when there is nothing to show."""
        if section.is_empty:
            self._heading(flow, title)
            self._placeholder(flow, empty)
            return False
        self._heading(flow, title, keep_with=self._config.table_min_space_mm)
        return True

    # ── Sections ─────────────────────────────────────────────────────

    def _reports_section(self, flow: FlowController, section: SectionAggregate) -> None:
        if not self._section_start(
            flow, "Reportes de Mantenimiento", section, "No hay reportes en el periodo seleccionado"
        ):
            return
        self._table(
            flow,
            self._spec(
                ["Área", "Cantidad de Reportes"],
                self._aggregate_rows(section.by_dimension["area"], lambda k: k or "Sin área"),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Reportes por Mes", keep_with=self._config.table_min_space_mm)
        self._table(
            flow,
            self._spec(["Mes", "Cantidad de Reportes"], self._month_count_rows(section.by_month, ())),
        )
        self._heading(flow, "Detalle de Reportes", keep_with=self._config.table_min_space_mm)
        rows = [
            [
                format_date(r.report_date),
                r.area or "Sin área",
                r.responsible or "Sin responsable",
                self._detail_text(r.detail),
                "Con evidencia" if r.evidence_url else "Sin evidencia",
            ]
            for r in section.records
        ]
        self._table(
            flow,
            self._spec(
                ["Fecha", "Área", "Encargado", "Detalle", "Evidencia"],
                rows,
                font_size=self._config.detail_table_font_size,
                pinned=self._detail_pins(),
            ),
        )

    def _tickets_section(self, flow: FlowController, section: SectionAggregate, providers: dict[str, str]) -> None:
        if not self._section_start(
            flow, "Tickets de Mantenimiento", section, "No hay tickets en el periodo seleccionado"
        ):
            return
        self._table(
            flow,
            self._spec(
                ["Estado", "Cantidad"],
                self._aggregate_rows(section.by_dimension["status"], lambda k: label_for(k, TICKET_STATUS_LABELS)),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Tickets por Prioridad", keep_with=self._config.table_min_space_mm)
        self._table(
            flow,
            self._spec(
                ["Prioridad", "Cantidad"],
                self._aggregate_rows(
                    section.by_dimension["priority"],
                    lambda k: label_for(k, TICKET_PRIORITY_LABELS, missing="Normal"),
                ),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Tickets por Mes", keep_with=self._config.table_min_space_mm)
        self._table(
            flow,
            self._spec(
                ["Mes", "Total", "Abiertos", "En Progreso", "Cerrados"],
                self._month_count_rows(section.by_month, TICKET_STATUSES),
            ),
        )
        self._heading(flow, "Detalle de Tickets", keep_with=self._config.table_min_space_mm)
        rows = []
        for t in section.records:
            if t.provider_id:
                provider = providers.get(t.provider_id, "Proveedor no encontrado")
            else:
                provider = "No asignado"
            rows.append(
                [
                    format_date(t.created_at),
                    t.folio or "N/A",
                    truncate(t.title, self._config.title_text_budget) if t.title else "Sin título",
                    self._detail_text(t.description),
                    label_for(t.status, TICKET_STATUS_LABELS),
                    t.area or "No especificada",
                    provider,
                    label_for(t.priority, TICKET_PRIORITY_LABELS, missing="Normal"),
                ]
            )
        self._table(
            flow,
            self._spec(
                ["Fecha", "Núm. Ticket", "Título", "Descripción", "Estado", "Área Común", "Proveedor", "Prioridad"],
                rows,
                font_size=self._config.detail_table_font_size,
                pinned=self._detail_pins(),
            ),
        )

    def _appointments_section(self, flow: FlowController, section: SectionAggregate) -> None:
        if not self._section_start(
            flow, "Citas de Mantenimiento", section, "No hay citas en el periodo seleccionado"
        ):
            return
        self._table(
            flow,
            self._spec(
                ["Estado", "Cantidad"],
                self._aggregate_rows(
                    section.by_dimension["status"], lambda k: label_for(k, APPOINTMENT_STATUS_LABELS)
                ),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Citas por Mes", keep_with=self._config.table_min_space_mm)
        self._table(
            flow,
            self._spec(
                ["Mes", "Total", "Pendientes", "En Progreso", "Completadas", "Canceladas"],
                self._month_count_rows(section.by_month, APPOINTMENT_STATUSES),
            ),
        )
        self._heading(flow, "Detalle de Citas", keep_with=self._config.table_min_space_mm)
        rows = [
            [
                format_date(a.scheduled_date),
                a.time or "No especificada",
                a.title or "Sin título",
                self._detail_text(a.description),
                label_for(a.status, APPOINTMENT_STATUS_LABELS),
                a.location or "No especificada",
                a.technician or "No asignado",
                a.contact_phone or "No especificado",
            ]
            for a in section.records
        ]
        self._table(
            flow,
            self._spec(
                ["Fecha", "Hora", "Título", "Descripción", "Estado", "Ubicación", "Técnico", "Teléfono"],
                rows,
                font_size=self._config.detail_table_font_size,
                pinned=self._detail_pins(),
            ),
        )

    def _contracts_section(self, flow: FlowController, section: SectionAggregate) -> None:
        if not self._section_start(
            flow, "Contratos de Mantenimiento", section, "No hay contratos en el periodo seleccionado"
        ):
            return
        self._table(
            flow,
            self._spec(
                ["Estado", "Cantidad"],
                self._aggregate_rows(section.by_dimension["status"], lambda k: label_for(k, CONTRACT_STATUS_LABELS)),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Valor por Proveedor", keep_with=self._config.table_min_space_mm)
        self._table(
            flow,
            self._spec(
                ["Proveedor", "Valor"],
                self._aggregate_rows(section.by_dimension["provider"], lambda k: k or "No especificado", money=True),
                right=(1,),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Detalle de Contratos", keep_with=self._config.table_min_space_mm)
        rows = [
            [
                c.id[:8] or "N/A",
                c.provider_name,
                c.service_type,
                self._money(c.value_cents),
                format_date(c.start_date),
                format_date(c.end_date),
                label_for(c.status, CONTRACT_STATUS_LABELS),
                self._detail_text(c.description),
                c.contact_name or "No especificado",
                self._detail_text(c.notes) or "No especificado",
            ]
            for c in section.records
        ]
        self._table(
            flow,
            self._spec(
                ["#ID", "Proveedor", "Servicio", "Valor", "Inicio", "Fin", "Estado", "Descripción", "Contacto", "Notas"],
                rows,
                font_size=self._config.detail_table_font_size,
                pinned=self._detail_pins(7, CONTRACT_DESCRIPTION_MM),
            ),
        )

    def _costs_section(self, flow: FlowController, section: SectionAggregate, providers: dict[str, str]) -> None:
        if not self._section_start(
            flow, "Costos de Mantenimiento", section, "No hay costos en el periodo seleccionado"
        ):
            return
        self._table(
            flow,
            self._spec(
                ["Categoría", "Monto"],
                self._aggregate_rows(section.by_dimension["category"], lambda k: k or "Sin categoría", money=True),
                right=(1,),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Costos por Mes", keep_with=self._config.table_min_space_mm)
        months = [*section.by_month, total_row(section.by_month, COST_STATUSES)]
        rows = [
            [
                b.month_key if b.month_key == TOTAL_KEY else month_key_label(b.month_key),
                self._money(b.total),
                *(self._money(b.by_status.get(s, 0)) for s in COST_STATUSES),
            ]
            for b in months
        ]
        self._table(
            flow,
            self._spec(
                ["Mes", "Total", *(COST_STATUS_LABELS[s] for s in COST_STATUSES)],
                rows,
                right=(1, 2, 3),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Costos por Proveedor", keep_with=self._config.table_min_space_mm)
        self._table(
            flow,
            self._spec(
                ["Proveedor", "Monto"],
                self._aggregate_rows(
                    section.by_dimension["provider"],
                    lambda k: providers.get(k, k) if k else "Sin proveedor",
                    money=True,
                ),
                right=(1,),
                emphasize_last_row=True,
            ),
        )
        self._heading(flow, "Detalle de Costos", keep_with=self._config.table_min_space_mm)
        rows = [
            [
                format_date(c.cost_date),
                c.category or "Sin categoría",
                self._detail_text(c.description),
                providers.get(c.provider_id, "Proveedor no encontrado") if c.provider_id else "No asignado",
                label_for(c.status, COST_STATUS_LABELS),
                self._money(c.amount_cents),
            ]
            for c in section.records
        ]
        self._table(
            flow,
            self._spec(
                ["Fecha", "Categoría", "Descripción", "Proveedor", "Estado", "Monto"],
                rows,
                font_size=self._config.detail_table_font_size,
                pinned=self._detail_pins(2),
                right=(5,),
            ),
        )
