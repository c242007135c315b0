"""Renders classified markdown-lite blocks through the flow controller."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from condo_reports.core.config import LayoutConfig
from condo_reports.models import Block, BlockKind
from condo_reports.rendering.flow import FlowController
from condo_reports.rendering.styles import KPI_HEADER_COLOR
from condo_reports.rendering.table_renderer import TableRenderer
from condo_reports.rendering.types import TableSpec
from condo_reports.text.blocks import iter_blocks
from condo_reports.text.sanitize import to_plain_text
from condo_reports.text.tables import parse_table

log = logging.getLogger(__name__)

# kind -> (font size pt, space required mm, advance mm)
HEADING_METRICS: dict[BlockKind, tuple[float, float, float]] = {
    BlockKind.HEADING1: (13, 12, 7),
    BlockKind.HEADING2: (12, 11, 6),
    BlockKind.HEADING3: (11, 10, 6),
}

BULLET_GLYPH = "•"


class NarrativeRenderer:
    """Draws headings, bullets, paragraphs, spacers and pipe tables in order."""

    def __init__(self, flow: FlowController, config: LayoutConfig) -> None:
        self._flow = flow
        self._config = config
        self._x = config.margin_mm
        self._width = flow.surface.page_width - 2 * config.margin_mm
        self._tables = TableRenderer(flow, self._x, self._width, config.table_min_space_mm)

    def render_text(self, text: str) -> float:
        return self.render(iter_blocks(text))

    def render(self, blocks: Iterable[Block]) -> float:
        drawn = 0
        for block in blocks:
            self._render_block(block)
            drawn += 1
        log.debug("Rendered %d narrative blocks over %d page breaks", drawn, self._flow.page_breaks)
        return self._flow.y

    def _render_block(self, block: Block) -> None:
        if block.kind is BlockKind.SPACER:
            self._flow.advance(self._config.blank_line_mm)
        elif block.kind is BlockKind.TABLE:
            self._render_table(block)
        elif block.kind in HEADING_METRICS:
            self._render_heading(block)
        elif block.kind is BlockKind.BULLET:
            self._render_lines(f"{BULLET_GLYPH} {to_plain_text(block.raw[2:])}")
        else:
            self._render_lines(to_plain_text(block.raw))

    def _render_heading(self, block: Block) -> None:
        size, required, advance = HEADING_METRICS[block.kind]
        self._flow.ensure_space(required)
        self._flow.surface.draw_text(to_plain_text(block.raw), self._x, self._flow.y, size=size, bold=True)
        self._flow.advance(advance)

    def _render_lines(self, text: str) -> None:
        surface = self._flow.surface
        size = self._config.body_font_size
        line_height = self._config.line_height_mm
        lines = surface.wrap_text(text, self._width, size=size)
        # Keep short runs together; longer runs continue line by line onto new pages
        if self._flow.cursor.usable_height >= len(lines) * line_height:
            self._flow.ensure_space(len(lines) * line_height)
        for line in lines:
            self._flow.ensure_space(line_height)
            surface.draw_text(line, self._x, self._flow.y, size=size)
            self._flow.advance(line_height)

    def _render_table(self, block: Block) -> None:
        parsed = parse_table(block.lines)
        if parsed.is_empty:
            log.debug("Skipping malformed table block (%d lines)", len(block.lines))
            return
        spec = TableSpec(
            head=parsed.head,
            body=parsed.body,
            font_size=self._config.table_font_size,
            header_fill=KPI_HEADER_COLOR,
        )
        self._tables.render(spec)
        self._flow.advance(self._config.block_gap_mm)
