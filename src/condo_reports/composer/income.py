"""Income report: letterhead, context block, canonical KPI table and the AI-written narrative."""

from __future__ import annotations

import logging

from condo_reports.composer.base import NOT_AVAILABLE, DocumentComposer, income_filename
from condo_reports.formatting import format_datetime
from condo_reports.models import GeneratedReport, ReportContent, ResolvedAssets
from condo_reports.rendering.flow import FlowController
from condo_reports.rendering.narrative import NarrativeRenderer
from condo_reports.rendering.styles import (
    LETTERHEAD_BG_COLOR,
    LETTERHEAD_RULE_COLOR,
    TITLE_SIZE,
)

log = logging.getLogger(__name__)

LETTERHEAD_HEIGHT_MM = 34.0
KPI_TABLE_Y_MM = 74.0


class IncomeReportComposer(DocumentComposer):
    """Composes the narrative income report from a ``ReportContent``."""

    report_kind = "income"

    def compose(
        self,
        content: ReportContent,
        year: int | None = None,
        assets: ResolvedAssets | None = None,
    ) -> GeneratedReport:
        assets = assets or ResolvedAssets()

        def draw(flow: FlowController) -> None:
            self._letterhead(flow, content, assets)
            self._context(flow, content, year)
            flow.move_to(KPI_TABLE_Y_MM)
            self._kpi_table(flow, content.kpis)
            NarrativeRenderer(flow, self._config).render_text(content.narrative)

        return self._generate(
            income_filename(year),
            draw,
            metadata={"year": year, "template": content.template_label},
        )

    def _letterhead(self, flow: FlowController, content: ReportContent, assets: ResolvedAssets) -> None:
        surface = flow.surface
        margin = self._config.margin_mm
        width = surface.page_width
        surface.fill_rect(0, 0, width, LETTERHEAD_HEIGHT_MM, LETTERHEAD_BG_COLOR)
        surface.fill_rect(0, LETTERHEAD_HEIGHT_MM - 3, width, 3, LETTERHEAD_RULE_COLOR)
        self._draw_image(surface, assets.logo, width - 38, 7, self._image_config.logo_box_mm, 20)

        self._text(surface, content.title, margin, 14, size=TITLE_SIZE, bold=True)
        self._text(surface, f"Tipo: {content.template_label or NOT_AVAILABLE}", margin, 21)
        self._text(surface, "Resumen ejecutivo de ingresos y salud financiera", margin, 27)

    def _context(self, flow: FlowController, content: ReportContent, year: int | None) -> None:
        surface = flow.surface
        margin = self._config.margin_mm
        size = self._config.body_font_size
        self._text(surface, "Contexto del reporte", margin, 42, size=11, bold=True)

        period = content.period_label or (str(year) if year else "Todos los años")
        lines = [f"Periodo: {period}", f"Generado: {format_datetime(content.generated_at)}"]
        admin = content.admin
        if admin.has_any:
            lines += [
                f"Administración: {admin.company or NOT_AVAILABLE}",
                f"Tel: {admin.phone or NOT_AVAILABLE}",
                f"Email: {admin.email or NOT_AVAILABLE}",
            ]
        for offset, line in enumerate(lines):
            self._text(surface, line, margin, 48 + offset * self._config.line_height_mm, size=size)
