"""Recording drawing surface for layout tests; no PDF library needed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from condo_reports.models import ImageAsset
from condo_reports.rendering.types import TableSpec

A4_MM = (210.0, 297.0)

# Glyph width as a fraction of the font size, in mm per pt
CHAR_WIDTH = 0.18


@dataclass
class DrawOp:
    page: int
    kind: str
    text: str = ""
    x: float = 0.0
    y: float = 0.0
    extra: dict[str, Any] = field(default_factory=dict)


class RecordingSurface:
    """``IDrawingSurface`` that records every call with deterministic metrics.

    Text is ``len(text) * size * CHAR_WIDTH`` mm wide.  Table rows are
    ``row_height`` mm tall regardless of content.
    """

    def __init__(self, size: tuple[float, float] = A4_MM, row_height: float = 7.0) -> None:
        self._size = size
        self.row_height = row_height
        self.ops: list[DrawOp] = []
        self.tables: list[tuple[int, TableSpec]] = []
        self._page = 1
        self.finished = False
        self.fail_on_image = False

    @property
    def page_width(self) -> float:
        return self._size[0]

    @property
    def page_height(self) -> float:
        return self._size[1]

    @property
    def page_count(self) -> int:
        return self._page

    def add_page(self) -> None:
        self._page += 1
        self.ops.append(DrawOp(self._page, "page"))

    def draw_text(self, text: str, x: float, y: float, *, size: float, bold: bool = False, **kwargs: Any) -> None:
        self.ops.append(DrawOp(self._page, "text", text, x, y, {"size": size, "bold": bold, **kwargs}))

    def text_width(self, text: str, *, size: float, bold: bool = False) -> float:
        return len(text) * size * CHAR_WIDTH

    def wrap_text(self, text: str, width: float, *, size: float, bold: bool = False) -> list[str]:
        lines: list[str] = []
        current = ""
        for word in text.split():
            candidate = f"{current} {word}" if current else word
            if current and self.text_width(candidate, size=size) > width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
        return lines

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.ops.append(DrawOp(self._page, "rect", "", x, y, {"width": width, "height": height, "color": color}))

    def embed_image(self, image: ImageAsset, x: float, y: float, width: float, height: float) -> None:
        if self.fail_on_image:
            raise OSError("cannot identify image file")
        self.ops.append(DrawOp(self._page, "image", image.mime_type, x, y, {"width": width, "height": height}))

    def draw_table(
        self,
        spec: TableSpec,
        x: float,
        y: float,
        widths: list[float],
        max_height: float,
        min_rows: int = 0,
    ) -> tuple[float, TableSpec | None]:
        capacity = int(max_height // self.row_height) - 1
        fit = max(min(capacity, len(spec.body)), min(min_rows, len(spec.body)))
        if fit < len(spec.body) and fit <= 0 and not min_rows:
            return 0.0, spec
        drawn = spec.with_body(spec.body[:fit], spec.emphasize_last_row and fit == len(spec.body))
        self.tables.append((self._page, drawn))
        self.ops.append(DrawOp(self._page, "table", "", x, y, {"rows": fit, "widths": list(widths)}))
        rest = spec.body[fit:]
        return (fit + 1) * self.row_height, (spec.with_body(rest) if rest else None)

    def finish(self, stamp: Callable[[int, int], None] | None = None) -> bytes:
        total = self._page
        if stamp is not None:
            current = self._page
            for number in range(1, total + 1):
                self._page = number
                stamp(number, total)
            self._page = current
        self.finished = True
        return b"%PDF-fake"

    # ── Query helpers ────────────────────────────────────────────────

    def texts(self, page: int | None = None) -> list[str]:
        return [op.text for op in self.ops if op.kind == "text" and (page is None or op.page == page)]

    def table_heads(self) -> list[list[str]]:
        return [spec.head for _, spec in self.tables]

    def pages_with(self, text: str) -> list[int]:
        return sorted({op.page for op in self.ops if op.kind == "text" and text in op.text})
