"""Pipe-table parsing for markdown-lite narrative text."""

from __future__ import annotations

from condo_reports.models import TableBlock
from condo_reports.text.sanitize import to_plain_text


def _split_row(line: str) -> list[str]:
    cells = line.strip().split("|")
    # Leading/trailing pipes produce an empty edge cell each
    if cells and not cells[0].strip():
        cells = cells[1:]
    if cells and not cells[-1].strip():
        cells = cells[:-1]
    return [to_plain_text(cell) for cell in cells]


def parse_table(lines: list[str]) -> TableBlock:
    """Parse header, separator and body rows into a ``TableBlock``.

    Row 0 is the header and row 1 (the separator) is discarded.  Fewer than
    two non-blank rows yields an empty block, which callers must not render.
    """
    rows = [line for line in lines if line.strip()]
    if len(rows) < 2:
        return TableBlock()
    head = _split_row(rows[0])
    body = [_split_row(row) for row in rows[2:]]
    return TableBlock(head=head, body=body)
