"""Value types shared by the drawing surface and the renderers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from condo_reports.rendering.styles import ACCENT_COLOR, HEADER_TEXT_COLOR


@dataclass(frozen=True)
class TableSpec:
    """A styled grid ready to draw.

    ``pinned_widths`` maps column index to a fixed width in millimetres; the
    other columns share what is left.  ``emphasize_last_row`` bolds the final
    body row (used for synthetic ``Total`` rows).
    """

    head: list[str]
    body: list[list[str]]
    font_size: float = 10.0
    pinned_widths: dict[int, float] = field(default_factory=dict)
    right_aligned: frozenset[int] = frozenset()
    header_fill: str = ACCENT_COLOR
    header_text: str = HEADER_TEXT_COLOR
    emphasize_last_row: bool = False

    def with_body(self, body: list[list[str]], emphasize_last_row: bool | None = None) -> TableSpec:
        if emphasize_last_row is None:
            emphasize_last_row = self.emphasize_last_row
        return replace(self, body=body, emphasize_last_row=emphasize_last_row)
