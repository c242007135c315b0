"""Tests for the page cursor, flow controller and narrative rendering."""

from __future__ import annotations

import math

from condo_reports.core.config import LayoutConfig
from condo_reports.rendering.flow import FlowController, PageCursor
from condo_reports.rendering.narrative import NarrativeRenderer
from tests.fakes.fake_surface import RecordingSurface


def _flow(surface: RecordingSurface, layout: LayoutConfig) -> FlowController:
    return FlowController.for_surface(surface, layout.top_margin_mm, layout.bottom_margin_mm)


class TestPageCursor:
    def test_geometry(self) -> None:
        cursor = PageCursor(y=18, page_height=297, top_margin=18, bottom_margin=16)
        assert cursor.limit == 281
        assert cursor.usable_height == 263
        assert cursor.at_top
        assert cursor.fits(263)
        assert not cursor.fits(264)

    def test_reset(self) -> None:
        cursor = PageCursor(y=200, page_height=297, top_margin=18, bottom_margin=16)
        cursor.reset()
        assert cursor.y == 18


class TestFlowController:
    def test_ensure_space_breaks_before_overflow(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        flow.move_to(270)
        assert flow.ensure_space(20) is True
        assert surface.page_count == 2
        assert flow.y == layout.top_margin_mm

    def test_ensure_space_no_break_when_fits(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        assert flow.ensure_space(100) is False
        assert surface.page_count == 1

    def test_oversize_block_at_top_does_not_loop(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        assert flow.ensure_space(1000) is False
        assert surface.page_count == 1

    def test_break_if_low(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        flow.move_to(240)
        assert flow.break_if_low(layout.section_break_reserve_mm) is True
        assert flow.page_breaks == 1

    def test_advance_with_gap(self, layout: LayoutConfig) -> None:
        flow = _flow(RecordingSurface(), layout)
        flow.advance(10, gap=6)
        assert flow.y == layout.top_margin_mm + 16


class TestNarrativeRenderer:
    def test_long_stream_paginates(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        lines = 200
        NarrativeRenderer(flow, layout).render_text("\n".join(f"Linea {i}" for i in range(lines)))

        usable = flow.cursor.usable_height
        expected = math.ceil(lines * layout.line_height_mm / usable)
        assert flow.page_breaks >= 1
        assert abs(surface.page_count - expected) <= 1

    def test_nothing_drawn_below_bottom_margin(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        text = "\n".join(["# Titulo", "- punto " * 30, "parrafo " * 80, ""] * 15)
        NarrativeRenderer(flow, layout).render_text(text)
        limit = surface.page_height - layout.bottom_margin_mm
        assert all(op.y <= limit for op in surface.ops if op.kind == "text")

    def test_paragraph_longer_than_a_page_continues(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        NarrativeRenderer(flow, layout).render_text("Intro\n" + "palabra " * 3000)

        limit = surface.page_height - layout.bottom_margin_mm
        text_ops = [op for op in surface.ops if op.kind == "text"]
        assert max(op.y for op in text_ops) <= limit
        assert surface.page_count > 2
        # Every wrapped line is drawn once, none discarded
        words = sum(len(op.text.split()) for op in text_ops)
        assert words == 3001

    def test_short_paragraph_kept_together(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        flow.move_to(surface.page_height - layout.bottom_margin_mm - layout.line_height_mm * 2)
        NarrativeRenderer(flow, layout).render_text("palabra " * 100)
        assert {op.page for op in surface.ops if op.kind == "text"} == {2}

    def test_heading_and_bullet_text(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        NarrativeRenderer(_flow(surface, layout), layout).render_text("## **Ingresos**\n- uno `dos`")
        texts = surface.texts()
        assert texts[0] == "Ingresos"
        assert texts[1] == "• uno dos"

    def test_table_block_rendered_with_parsed_cells(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        NarrativeRenderer(_flow(surface, layout), layout).render_text("| A | B |\n|---|---|\n| **1** | 2 |")
        assert surface.table_heads() == [["A", "B"]]
        assert surface.tables[0][1].body == [["1", "2"]]

    def test_spacer_advances_without_drawing(self, layout: LayoutConfig) -> None:
        surface = RecordingSurface()
        flow = _flow(surface, layout)
        NarrativeRenderer(flow, layout).render_text("\n\n")
        assert surface.ops == []
        assert flow.y == layout.top_margin_mm + 2 * layout.blank_line_mm
