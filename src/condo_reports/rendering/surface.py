"""Drawing surface: the low-level primitive the layout engine orchestrates.

``IDrawingSurface`` is the contract; ``ReportLabSurface`` implements it on a
reportlab canvas.  Coordinates everywhere above this module are millimetres
measured from the top-left corner of the page, with ``y`` growing downwards.
Conversion to PDF points (origin bottom-left) happens only here.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Callable
from io import BytesIO
from typing import Any, Literal, Protocol, runtime_checkable
from xml.sax.saxutils import escape

from reportlab.lib import colors as rl_colors
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from condo_reports.models import ImageAsset
from condo_reports.rendering.styles import ALT_ROW_COLOR, GRID_COLOR, TEXT_COLOR
from condo_reports.rendering.types import TableSpec

log = logging.getLogger(__name__)

Align = Literal["left", "right"]
FooterStamp = Callable[[int, int], None]

PAGE_SIZES = {"a4": A4, "letter": LETTER}


@runtime_checkable
class IDrawingSurface(Protocol):
    """Protocol for drawing backends (reportlab, test recorders, etc.)."""

    @property
    def page_width(self) -> float: ...

    @property
    def page_height(self) -> float: ...

    @property
    def page_count(self) -> int: ...

    def add_page(self) -> None:
        """Close the current page and start a new one."""
        ...

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        size: float,
        bold: bool = False,
        color: str = TEXT_COLOR,
        align: Align = "left",
    ) -> None:
        """Draw one line with its baseline at *y*."""
        ...

    def text_width(self, text: str, *, size: float, bold: bool = False) -> float: ...

    def wrap_text(self, text: str, width: float, *, size: float, bold: bool = False) -> list[str]:
        """Split *text* into lines no wider than *width*."""
        ...

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None: ...

    def embed_image(self, image: ImageAsset, x: float, y: float, width: float, height: float) -> None:
        """Draw *image* inside the box whose top-left corner is (*x*, *y*). Raises on undecodable data."""
        ...

    def draw_table(
        self,
        spec: TableSpec,
        x: float,
        y: float,
        widths: list[float],
        max_height: float,
        min_rows: int = 0,
    ) -> tuple[float, TableSpec | None]:
        """Draw the header plus as many body rows as fit in *max_height*.

        Returns the height used and a spec holding the undrawn rows, or
        ``None`` when the table is complete.  At least *min_rows* body rows
        are drawn even if they overflow.
        """
        ...

    def finish(self, stamp: FooterStamp | None = None) -> bytes:
        """Run *stamp(page, total)* on every page and return the document bytes."""
        ...


class NumberedCanvas(canvas.Canvas):
    """Canvas that defers page emission so footers can print the final page total."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._saved_page_states: list[dict] = []
        self.footer_stamp: FooterStamp | None = None

    def showPage(self) -> None:  # noqa: N802
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    @property
    def pages_started(self) -> int:
        return len(self._saved_page_states) + 1

    def save(self) -> None:
        # Saved page states predate the stamp, so read it before restoring them
        stamp = self.footer_stamp
        states = self._saved_page_states
        total_pages = len(states)
        for number, state in enumerate(states, start=1):
            self.__dict__.update(state)
            if stamp is not None:
                stamp(number, total_pages)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)


class ReportLabSurface:
    """``IDrawingSurface`` over a reportlab ``NumberedCanvas`` writing to memory."""

    def __init__(self, page_size: str = "a4", font_family: str = "Helvetica") -> None:
        self._buffer = BytesIO()
        self._pagesize = PAGE_SIZES.get(page_size, A4)
        self._canvas = NumberedCanvas(self._buffer, pagesize=self._pagesize)
        self._font = font_family
        self._final_page_count: int | None = None

    # ── Geometry ─────────────────────────────────────────────────────

    @property
    def page_width(self) -> float:
        return float(self._pagesize[0]) / mm

    @property
    def page_height(self) -> float:
        return float(self._pagesize[1]) / mm

    @property
    def page_count(self) -> int:
        if self._final_page_count is not None:
            return self._final_page_count
        return self._canvas.pages_started

    def _pdf_y(self, y: float) -> float:
        return float(self._pagesize[1]) - y * mm

    def _font_name(self, bold: bool) -> str:
        return f"{self._font}-Bold" if bold else self._font

    # ── Primitives ───────────────────────────────────────────────────

    def add_page(self) -> None:
        self._canvas.showPage()

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        size: float,
        bold: bool = False,
        color: str = TEXT_COLOR,
        align: Align = "left",
    ) -> None:
        c = self._canvas
        c.setFont(self._font_name(bold), size)
        c.setFillColor(HexColor(color))
        if align == "right":
            c.drawRightString(x * mm, self._pdf_y(y), text)
        else:
            c.drawString(x * mm, self._pdf_y(y), text)

    def text_width(self, text: str, *, size: float, bold: bool = False) -> float:
        return stringWidth(text, self._font_name(bold), size) / mm

    def wrap_text(self, text: str, width: float, *, size: float, bold: bool = False) -> list[str]:
        return simpleSplit(text, self._font_name(bold), size, width * mm) or [""]

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        c = self._canvas
        c.saveState()
        c.setFillColor(HexColor(color))
        c.rect(x * mm, self._pdf_y(y + height), width * mm, height * mm, stroke=0, fill=1)
        c.restoreState()

    def embed_image(self, image: ImageAsset, x: float, y: float, width: float, height: float) -> None:
        reader = ImageReader(BytesIO(base64.b64decode(image.base64)))
        self._canvas.drawImage(
            reader,
            x * mm,
            self._pdf_y(y + height),
            width * mm,
            height * mm,
            preserveAspectRatio=True,
            anchor="nw",
            mask="auto",
        )

    # ── Tables ───────────────────────────────────────────────────────

    def _cell_styles(self, spec: TableSpec) -> tuple[ParagraphStyle, ParagraphStyle, ParagraphStyle]:
        leading = spec.font_size * 1.2
        body = ParagraphStyle(
            "cell", fontName=self._font, fontSize=spec.font_size, leading=leading,
            textColor=HexColor(TEXT_COLOR),
        )
        bold = ParagraphStyle("cell_bold", parent=body, fontName=self._font_name(True))
        header = ParagraphStyle(
            "cell_header", parent=bold, textColor=HexColor(spec.header_text),
        )
        return body, bold, header

    def _build_table(self, spec: TableSpec, widths: list[float]) -> Table:
        body_style, bold_style, header_style = self._cell_styles(spec)
        last = len(spec.body) - 1
        rows: list[list[Any]] = [[Paragraph(escape(h), header_style) for h in spec.head]]
        for index, row in enumerate(spec.body):
            style = bold_style if spec.emphasize_last_row and index == last else body_style
            rows.append([Paragraph(escape(cell), style) for cell in row])

        table = Table(rows, colWidths=[w * mm for w in widths], repeatRows=1)
        commands: list[tuple] = [
            ("BACKGROUND", (0, 0), (-1, 0), HexColor(spec.header_fill)),
            ("GRID", (0, 0), (-1, -1), 0.5, HexColor(GRID_COLOR)),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("TOPPADDING", (0, 0), (-1, -1), 2),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [rl_colors.white, HexColor(ALT_ROW_COLOR)]),
        ]
        for column in spec.right_aligned:
            commands.append(("ALIGN", (column, 0), (column, -1), "RIGHT"))
        table.setStyle(TableStyle(commands))
        return table

    def _measure(self, spec: TableSpec, widths: list[float]) -> tuple[Table, float]:
        table = self._build_table(spec, widths)
        _, height = table.wrapOn(self._canvas, sum(widths) * mm, self._pagesize[1])
        return table, height / mm

    def _rows_that_fit(self, spec: TableSpec, widths: list[float], max_height: float) -> int:
        lo, hi = 0, len(spec.body)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            _, height = self._measure(spec.with_body(spec.body[:mid], False), widths)
            if height <= max_height:
                lo = mid
            else:
                hi = mid - 1
        return lo

    def draw_table(
        self,
        spec: TableSpec,
        x: float,
        y: float,
        widths: list[float],
        max_height: float,
        min_rows: int = 0,
    ) -> tuple[float, TableSpec | None]:
        table, height = self._measure(spec, widths)
        if height <= max_height:
            table.drawOn(self._canvas, x * mm, self._pdf_y(y + height))
            return height, None

        fit = max(self._rows_that_fit(spec, widths, max_height), min(min_rows, len(spec.body)))
        if fit == 0 and not min_rows:
            return 0.0, spec
        chunk, height = self._measure(spec.with_body(spec.body[:fit], False), widths)
        chunk.drawOn(self._canvas, x * mm, self._pdf_y(y + height))
        rest = spec.body[fit:]
        log.debug("Table split after %d rows, %d continue on next page", fit, len(rest))
        return height, (spec.with_body(rest) if rest else None)

    # ── Output ───────────────────────────────────────────────────────

    def finish(self, stamp: FooterStamp | None = None) -> bytes:
        if self._final_page_count is not None:
            return self._buffer.getvalue()
        self._final_page_count = self._canvas.pages_started
        self._canvas.footer_stamp = stamp
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()
