"""Yearly expense report: monthly totals, totals by concept and a detail table per month."""

from __future__ import annotations

import logging

from condo_reports.aggregation.aggregators import TOTAL_KEY
from condo_reports.aggregation.months import MONTH_NAMES_BY_NUMBER, month_key_label
from condo_reports.aggregation.sections import SectionAggregate, summarize_expenses, year_range
from condo_reports.composer.base import DocumentComposer, expense_filename
from condo_reports.formatting import format_date, format_datetime
from condo_reports.models import ExpenseDataset, GeneratedReport, ReportContent, ResolvedAssets
from condo_reports.rendering.flow import FlowController
from condo_reports.rendering.styles import EXPENSE_HEADER_COLOR, SECTION_TITLE_SIZE
from condo_reports.text.sanitize import clean_html

log = logging.getLogger(__name__)


class ExpenseReportComposer(DocumentComposer):
    """Composes the yearly expense summary."""

    report_kind = "expenses"

    def compose(
        self,
        dataset: ExpenseDataset,
        year: int,
        content: ReportContent | None = None,
        assets: ResolvedAssets | None = None,
    ) -> GeneratedReport:
        content = content or ReportContent()
        assets = assets or ResolvedAssets()
        section = summarize_expenses(dataset.expenses, year_range(year))

        def draw(flow: FlowController) -> None:
            self._title_block(
                flow,
                "Reporte General de Egresos",
                [
                    ("Fecha:", format_datetime(content.generated_at)),
                    ("Año:", str(year)),
                    ("Total Egresos:", self._money(section.total_cents)),
                ],
                assets.logo,
            )
            if section.is_empty:
                self._heading(flow, "Resumen anual")
                self._placeholder(flow, f"No hay egresos registrados en {year}")
            else:
                self._summary_tables(flow, section)
                self._monthly_details(flow, section)
            self._signature_page(flow, content.admin, assets.signature)

        return self._generate(
            expense_filename(year),
            draw,
            metadata={"year": year, "expenses": section.record_count, "total_cents": section.total_cents},
        )

    def _summary_tables(self, flow: FlowController, section: SectionAggregate) -> None:
        self._heading(flow, "Resumen anual", keep_with=self._config.table_min_space_mm)
        rows = [[month_key_label(b.month_key), self._money(b.total)] for b in section.by_month]
        rows.append([TOTAL_KEY, self._money(section.total_cents)])
        self._table(
            flow,
            self._spec(
                ["Mes", "Total Gastado"],
                rows,
                header_fill=EXPENSE_HEADER_COLOR,
                right=(1,),
                emphasize_last_row=True,
            ),
        )

        self._heading(flow, "Totales por concepto", keep_with=self._config.table_min_space_mm)
        self._table(
            flow,
            self._spec(
                ["Concepto", "Total"],
                self._aggregate_rows(section.by_dimension["concept"], lambda k: k or "Sin concepto", money=True),
                header_fill=EXPENSE_HEADER_COLOR,
                right=(1,),
                emphasize_last_row=True,
            ),
        )

    def _monthly_details(self, flow: FlowController, section: SectionAggregate) -> None:
        by_month: dict[str, list] = {}
        for record in section.records:
            by_month.setdefault(f"{record.expense_date.month:02d}", []).append(record)

        for number, name in MONTH_NAMES_BY_NUMBER.items():
            records = by_month.get(number)
            if not records:
                continue
            flow.ensure_space(6 + self._config.table_min_space_mm)
            self._text(
                flow.surface, f"Mes: {name}", self._config.margin_mm, flow.y, size=SECTION_TITLE_SIZE, bold=True
            )
            flow.advance(6)

            rows = [
                [
                    str(index),
                    format_date(r.expense_date),
                    r.concept,
                    clean_html(r.description, self._config.detail_text_budget),
                    self._money(r.amount_cents),
                    "",
                ]
                for index, r in enumerate(records, start=1)
            ]
            month_total = sum(r.amount_cents for r in records)
            rows.append(["", "", "", TOTAL_KEY, "", self._money(month_total)])
            log.debug("Expense detail %s: %d records", name, len(records))
            self._table(
                flow,
                self._spec(
                    ["#", "Fecha", "Concepto", "Descripción", "Monto", "Total"],
                    rows,
                    header_fill=EXPENSE_HEADER_COLOR,
                    right=(4, 5),
                    emphasize_last_row=True,
                ),
            )
