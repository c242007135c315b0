"""Vertical flow and pagination control.

``FlowController`` is the layout context threaded through every draw call of
one generation request.  It owns the ``PageCursor``; all cursor movement goes
through ``ensure_space``, ``advance`` and ``page_break``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from condo_reports.rendering.surface import IDrawingSurface

log = logging.getLogger(__name__)


@dataclass
class PageCursor:
    """Top-down vertical position on the current page, in millimetres."""

    y: float
    page_height: float
    top_margin: float
    bottom_margin: float

    @property
    def limit(self) -> float:
        return self.page_height - self.bottom_margin

    @property
    def usable_height(self) -> float:
        return self.limit - self.top_margin

    @property
    def remaining(self) -> float:
        return max(self.limit - self.y, 0.0)

    @property
    def at_top(self) -> bool:
        return self.y <= self.top_margin

    def fits(self, height: float) -> bool:
        return self.y + height <= self.limit

    def reset(self) -> None:
        self.y = self.top_margin


class FlowController:
    """Decides when content must continue on a new page."""

    def __init__(self, surface: IDrawingSurface, cursor: PageCursor) -> None:
        self.surface = surface
        self.cursor = cursor
        self.page_breaks = 0

    @classmethod
    def for_surface(
        cls, surface: IDrawingSurface, top_margin: float, bottom_margin: float, start_y: float | None = None
    ) -> FlowController:
        cursor = PageCursor(
            y=top_margin if start_y is None else start_y,
            page_height=surface.page_height,
            top_margin=top_margin,
            bottom_margin=bottom_margin,
        )
        return cls(surface, cursor)

    @property
    def y(self) -> float:
        return self.cursor.y

    @property
    def remaining(self) -> float:
        return self.cursor.remaining

    @property
    def at_top(self) -> bool:
        return self.cursor.at_top

    def page_break(self) -> None:
        self.surface.add_page()
        self.cursor.reset()
        self.page_breaks += 1
        log.debug("Page break -> page %d", self.surface.page_count)

    def ensure_space(self, required: float) -> bool:
        """Break the page first if *required* millimetres do not fit below the cursor.

        A block taller than a whole page is left at the top of a fresh page
        rather than breaking again.  Returns whether a break happened.
        """
        if self.cursor.fits(required) or self.cursor.at_top:
            return False
        self.page_break()
        return True

    def break_if_low(self, reserve: float) -> bool:
        """Conditional section break: start a new page when less than *reserve* is left."""
        return self.ensure_space(reserve)

    def advance(self, height: float, gap: float = 0.0) -> None:
        self.cursor.y += height + gap

    def move_to(self, y: float) -> None:
        """Jump to an absolute position on the current page (fixed-layout regions)."""
        self.cursor.y = y
