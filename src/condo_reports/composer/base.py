"""Shared document composition: surface setup, headers, KPI table, signature page, footers.

Each concrete composer draws its body through a ``FlowController`` and hands
the finished surface back to ``DocumentComposer._generate``, which stamps
footers, names the artifact and converts any failure into
``ReportGenerationError``.  A composer instance holds configuration only;
all per-request state lives in the surface and flow controller created for
that request.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from condo_reports.core.config import ImageConfig, LayoutConfig
from condo_reports.core.logging_config import report_context
from condo_reports.exceptions import ReportGenerationError
from condo_reports.formatting import format_cents
from condo_reports.models import AdminContact, AggregateRow, GeneratedReport, ImageAsset, KPISnapshot
from condo_reports.rendering.flow import FlowController
from condo_reports.rendering.styles import (
    ACCENT_COLOR,
    BODY_SIZE,
    FOOTER_SIZE,
    KPI_HEADER_COLOR,
    MUTED_TEXT_COLOR,
    SECTION_TITLE_SIZE,
)
from condo_reports.rendering.surface import IDrawingSurface, ReportLabSurface
from condo_reports.rendering.table_renderer import TableRenderer
from condo_reports.rendering.types import TableSpec
from condo_reports.text.sanitize import sanitize

log = logging.getLogger(__name__)

SurfaceFactory = Callable[[LayoutConfig], IDrawingSurface]

NOT_AVAILABLE = "N/A"


def default_surface(config: LayoutConfig) -> IDrawingSurface:
    return ReportLabSurface(page_size=config.page_size, font_family=config.font_family)


# ── Artifact names ───────────────────────────────────────────────────


def maintenance_filename(generated_at: datetime) -> str:
    return f"reporte_mantenimiento_{generated_at:%Y%m%d_%H%M%S}.pdf"


def income_filename(year: int | str | None) -> str:
    return f"reporte-ia-ingresos-{year or 'all-years'}.pdf"


def expense_filename(year: int | str) -> str:
    return f"reporte_egresos_{year}.pdf"


# ── Composer base ────────────────────────────────────────────────────


class DocumentComposer:
    """Base class for the report composers."""

    content_type = "application/pdf"
    report_kind = "document"

    def __init__(
        self,
        config: LayoutConfig | None = None,
        image_config: ImageConfig | None = None,
        surface_factory: SurfaceFactory | None = None,
    ) -> None:
        self._config = config or LayoutConfig()
        self._image_config = image_config or ImageConfig()
        self._surface_factory = surface_factory or default_surface

    @property
    def config(self) -> LayoutConfig:
        return self._config

    # ── Request lifecycle ────────────────────────────────────────────

    def _generate(
        self,
        filename: str,
        draw: Callable[[FlowController], None],
        metadata: dict[str, Any] | None = None,
    ) -> GeneratedReport:
        """Run *draw* on a fresh surface and package the result.

        Raises:
            ReportGenerationError: If anything fails while composing.  No
                partial document is returned.
        """
        with report_context(self.report_kind, filename):
            try:
                surface = self._surface_factory(self._config)
                flow = FlowController.for_surface(
                    surface, self._config.top_margin_mm, self._config.bottom_margin_mm
                )
                draw(flow)
                content = surface.finish(self._footer_stamp(surface))
            except ReportGenerationError:
                raise
            except Exception as exc:
                log.error("Failed to compose %s: %s", filename, exc)
                raise ReportGenerationError(f"Failed to compose {filename}: {exc}") from exc

            log.info(
                "Composed %s report %s (%d pages, %d bytes)",
                self.report_kind,
                filename,
                surface.page_count,
                len(content),
            )
        return GeneratedReport(
            filename=filename,
            content=content,
            page_count=surface.page_count,
            content_type=self.content_type,
            metadata={"kind": self.report_kind, **(metadata or {})},
        )

    def _footer_stamp(self, surface: IDrawingSurface) -> Callable[[int, int], None]:
        margin = self._config.margin_mm
        attribution = sanitize(self._config.footer_attribution)

        def stamp(page: int, total: int) -> None:
            y = surface.page_height - 8
            surface.draw_text(attribution, margin, y, size=FOOTER_SIZE, color=MUTED_TEXT_COLOR)
            surface.draw_text(
                f"Página {page} de {total}",
                surface.page_width - margin,
                y,
                size=FOOTER_SIZE,
                color=MUTED_TEXT_COLOR,
                align="right",
            )

        return stamp

    # ── Drawing helpers ──────────────────────────────────────────────

    def _text(
        self,
        surface: IDrawingSurface,
        text: str,
        x: float,
        y: float,
        *,
        size: float = BODY_SIZE,
        bold: bool = False,
        **kwargs: Any,
    ) -> None:
        surface.draw_text(sanitize(text), x, y, size=size, bold=bold, **kwargs)

    def _labeled(
        self, surface: IDrawingSurface, label: str, value: str, x: float, y: float, size: float = SECTION_TITLE_SIZE
    ) -> None:
        """Bold *label* followed by *value* in the regular weight."""
        self._text(surface, label, x, y, size=size, bold=True)
        offset = surface.text_width(sanitize(label), size=size, bold=True) + 2
        self._text(surface, value, x + offset, y, size=size)

    def _draw_image(
        self, surface: IDrawingSurface, image: ImageAsset | None, x: float, y: float, width: float, height: float
    ) -> bool:
        """Embed *image* if present.  Undecodable images are logged and skipped."""
        if image is None:
            return False
        try:
            surface.embed_image(image, x, y, width, height)
        except Exception as exc:
            log.warning("Skipping image that could not be embedded (%s): %s", image.mime_type, exc)
            return False
        return True

    def _heading(self, flow: FlowController, text: str, keep_with: float = 0.0) -> None:
        """Section heading; *keep_with* reserves room for the block that follows it."""
        flow.ensure_space(6 + keep_with)
        self._text(flow.surface, text, self._config.margin_mm, flow.y, size=SECTION_TITLE_SIZE, bold=True)
        flow.advance(6)

    def _placeholder(self, flow: FlowController, text: str) -> None:
        flow.ensure_space(self._config.line_height_mm)
        self._text(flow.surface, text, self._config.margin_mm, flow.y, size=BODY_SIZE)
        flow.advance(10)

    def _bullets(self, flow: FlowController, items: Sequence[str], indent: float = 6, step: float = 8) -> None:
        x = self._config.margin_mm + indent
        for item in items:
            flow.ensure_space(step)
            flow.surface.draw_text(f"\u2022 {sanitize(item)}", x, flow.y, size=BODY_SIZE)
            flow.advance(step)

    def _table(self, flow: FlowController, spec: TableSpec, gap: float = 10) -> float:
        """Render *spec* at full content width and leave *gap* below it."""
        margin = self._config.margin_mm
        renderer = TableRenderer(
            flow, margin, flow.surface.page_width - 2 * margin, self._config.table_min_space_mm
        )
        renderer.render(spec)
        flow.advance(gap)
        return flow.y

    def _spec(
        self,
        head: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        font_size: float = BODY_SIZE,
        header_fill: str = ACCENT_COLOR,
        pinned: dict[int, float] | None = None,
        right: Sequence[int] = (),
        emphasize_last_row: bool = False,
    ) -> TableSpec:
        """Build a ``TableSpec`` with every cell sanitized for the page font."""
        return TableSpec(
            head=[sanitize(h) for h in head],
            body=[[sanitize(str(cell)) for cell in row] for row in rows],
            font_size=font_size,
            pinned_widths=dict(pinned or {}),
            right_aligned=frozenset(right),
            header_fill=header_fill,
            emphasize_last_row=emphasize_last_row,
        )

    def _money(self, cents: int) -> str:
        return format_cents(cents, self._config.currency_symbol)

    def _aggregate_rows(
        self,
        rows: Sequence[AggregateRow],
        label: Callable[[str], str],
        money: bool = False,
    ) -> list[list[str]]:
        """Two-column rows for an aggregate; the ``Total`` row keeps its key."""
        body: list[list[str]] = []
        for row in rows:
            key = row.group_key if row.is_total else label(row.group_key)
            body.append([key, self._money(row.total) if money else str(row.total)])
        return body

    # ── Shared page regions ──────────────────────────────────────────

    def _title_block(
        self,
        flow: FlowController,
        title: str,
        fields: Sequence[tuple[str, str]],
        logo: ImageAsset | None,
    ) -> None:
        """Title with a square logo at the top right and bold-labelled fields below."""
        surface = flow.surface
        margin = self._config.margin_mm
        box = self._image_config.logo_box_mm
        self._draw_image(surface, logo, surface.page_width - margin - box, 10, box, box)
        self._text(surface, title, margin, 20, size=14, bold=True)
        y = 30.0
        for label, value in fields:
            self._labeled(surface, label, value, margin, y)
            y += 10
        flow.move_to(y)

    def _kpi_table(self, flow: FlowController, kpis: KPISnapshot) -> None:
        rows = [
            ["Saldo inicial histórico", self._money(kpis.opening_balance)],
            ["Ingresos del período", self._money(kpis.period_income)],
            ["Egresos del período", self._money(kpis.period_expenses)],
            ["Flujo neto del período", self._money(kpis.period_net_flow)],
            ["Saldo actual consolidado", self._money(kpis.consolidated_balance)],
            ["Cargos del período", self._money(kpis.period_charges)],
            ["Saldo (cargos - abonado)", self._money(kpis.outstanding_balance)],
        ]
        spec = self._spec(
            ["KPI", "Valor"],
            rows,
            font_size=9,
            header_fill=KPI_HEADER_COLOR,
            pinned={0: 78, 1: 52},
            right=(1,),
        )
        self._table(flow, spec, gap=8)

    def _signature_page(self, flow: FlowController, admin: AdminContact, signature: ImageAsset | None) -> None:
        """Final page: signature image over the signature line, admin contact, service attribution."""
        flow.page_break()
        surface = flow.surface
        margin = self._config.margin_mm
        admin_y = surface.page_height - 80
        width = self._image_config.signature_width_mm
        height = self._image_config.signature_height_mm
        self._draw_image(surface, signature, margin, admin_y - height, width, height)

        self._text(surface, "Firma del Administrador", margin, admin_y, size=SECTION_TITLE_SIZE)
        contact = (
            ("Administradora:", admin.company),
            ("Teléfono:", admin.phone),
            ("Contacto:", admin.email),
        )
        for offset, (label, value) in enumerate(contact, start=1):
            y = admin_y + 10 * offset
            self._text(surface, label, margin, y, size=SECTION_TITLE_SIZE, bold=True)
            self._text(surface, value or NOT_AVAILABLE, margin + 40, y, size=SECTION_TITLE_SIZE)

        footer_y = surface.page_height - 15
        self._text(surface, self._config.service_name, margin, footer_y - 10, size=11)
        self._text(surface, f"Correo: {self._config.service_email}", margin, footer_y - 5, size=11)