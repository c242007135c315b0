"""Markdown-lite block classifier.

Scans narrative text line by line into an ordered list of ``Block`` objects.
Table runs are recognised by look-ahead: a pipe row immediately followed by a
separator row (``|---|``) opens a table, and every following contiguous
pipe-prefixed line belongs to it.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from condo_reports.models import Block, BlockKind

TABLE_SEPARATOR = re.compile(r"^\|\s*:?-{3,}")

# Most specific prefix first.
_HEADING_PREFIXES: tuple[tuple[str, BlockKind], ...] = (
    ("### ", BlockKind.HEADING3),
    ("## ", BlockKind.HEADING2),
    ("# ", BlockKind.HEADING1),
)
_BULLET_PREFIXES = ("- ", "* ")


class LineCursor:
    """Forward-only cursor over the lines of a text with one-line look-ahead."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = lines
        self._pos = 0

    @classmethod
    def from_text(cls, text: str) -> LineCursor:
        return cls(text.splitlines())

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._lines)

    def peek(self, offset: int = 0) -> str | None:
        """Return the line *offset* positions ahead without consuming it."""
        index = self._pos + offset
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def advance(self) -> str:
        if self.exhausted:
            raise IndexError("cursor exhausted")
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def take_while(self, predicate) -> list[str]:
        taken: list[str] = []
        while not self.exhausted and predicate(self._lines[self._pos]):
            taken.append(self.advance())
        return taken


def _is_table_row(line: str | None) -> bool:
    return line is not None and line.strip().startswith("|")


def _opens_table(cursor: LineCursor) -> bool:
    current = cursor.peek()
    following = cursor.peek(1)
    return (
        _is_table_row(current)
        and following is not None
        and TABLE_SEPARATOR.match(following.strip()) is not None
    )


def _classify_line(line: str) -> BlockKind:
    for prefix, kind in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return kind
    if line.startswith(_BULLET_PREFIXES):
        return BlockKind.BULLET
    return BlockKind.PARAGRAPH


def _scan(cursor: LineCursor) -> Iterator[Block]:
    while not cursor.exhausted:
        if _opens_table(cursor):
            lines = [cursor.advance(), cursor.advance()]
            lines.extend(cursor.take_while(_is_table_row))
            yield Block(kind=BlockKind.TABLE, raw="\n".join(lines), lines=lines)
            continue

        line = cursor.advance().strip()
        if not line:
            yield Block(kind=BlockKind.SPACER)
            continue
        yield Block(kind=_classify_line(line), raw=line)


def iter_blocks(text: str) -> Iterator[Block]:
    """Yield blocks lazily. Each call starts a fresh scan over *text*."""
    return _scan(LineCursor.from_text(text))


def classify_blocks(text: str) -> list[Block]:
    return list(iter_blocks(text))
