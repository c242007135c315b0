"""Table rendering with page continuation.

The surface draws the grid; this module decides column widths and loops over
page breaks until every body row is placed, repeating the styled header on
each continuation page.
"""

from __future__ import annotations

import logging

from condo_reports.rendering.flow import FlowController
from condo_reports.rendering.types import TableSpec

log = logging.getLogger(__name__)


def resolve_column_widths(column_count: int, total_width: float, pinned: dict[int, float]) -> list[float]:
    """Apply pinned widths and share the remaining width equally among the other columns.

    Pinned widths that overflow *total_width* are scaled down to fit.
    """
    if column_count <= 0:
        return []
    pins = {i: w for i, w in pinned.items() if 0 <= i < column_count and w > 0}
    pinned_total = sum(pins.values())
    free = column_count - len(pins)
    # Keep a little room for unpinned columns when pins would take everything
    budget = total_width if free == 0 else total_width * 0.8
    if pinned_total > budget:
        scale = budget / pinned_total
        pins = {i: w * scale for i, w in pins.items()}
        pinned_total = budget
    share = (total_width - pinned_total) / free if free else 0.0
    return [pins.get(i, share) for i in range(column_count)]


class TableRenderer:
    """Draws ``TableSpec`` grids through a ``FlowController``."""

    def __init__(self, flow: FlowController, x: float, width: float, min_space: float) -> None:
        self._flow = flow
        self._x = x
        self._width = width
        self._min_space = min_space

    def render(self, spec: TableSpec) -> float:
        """Draw *spec* starting at the cursor and return the y position below it."""
        if not spec.head:
            return self._flow.y

        self._flow.ensure_space(self._min_space)
        widths = resolve_column_widths(len(spec.head), self._width, spec.pinned_widths)
        pending: TableSpec | None = spec
        while pending is not None:
            height, pending = self._flow.surface.draw_table(
                pending,
                self._x,
                self._flow.y,
                widths,
                self._flow.remaining,
                min_rows=1 if self._flow.at_top else 0,
            )
            self._flow.advance(height)
            if pending is not None:
                self._flow.page_break()
        return self._flow.y
