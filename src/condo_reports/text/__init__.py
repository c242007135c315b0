"""Narrative text handling: sanitizing, block classification, table parsing."""

from __future__ import annotations

from condo_reports.text.blocks import LineCursor, classify_blocks, iter_blocks
from condo_reports.text.sanitize import clean_html, sanitize, to_plain_text, truncate
from condo_reports.text.tables import parse_table

__all__ = [
    "LineCursor",
    "classify_blocks",
    "iter_blocks",
    "clean_html",
    "sanitize",
    "to_plain_text",
    "truncate",
    "parse_table",
]
