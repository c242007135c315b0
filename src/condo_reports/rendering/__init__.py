"""Layout engine: drawing surface, flow control, tables and narrative blocks."""

from __future__ import annotations

from condo_reports.rendering.flow import FlowController, PageCursor
from condo_reports.rendering.narrative import NarrativeRenderer
from condo_reports.rendering.surface import IDrawingSurface, ReportLabSurface
from condo_reports.rendering.table_renderer import TableRenderer, resolve_column_widths
from condo_reports.rendering.types import TableSpec

__all__ = [
    "FlowController",
    "PageCursor",
    "NarrativeRenderer",
    "IDrawingSurface",
    "ReportLabSurface",
    "TableRenderer",
    "resolve_column_widths",
    "TableSpec",
]
