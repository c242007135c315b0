"""Text sanitization for the built-in PDF fonts.

The standard Type 1 fonts only carry glyphs for printable ASCII and the
Latin-1 supplement, so every string is reduced to that range before it is
drawn.  Common typographic punctuation is transliterated first so that
quotes and dashes survive as their ASCII equivalents instead of vanishing.
"""

from __future__ import annotations

import html
import re

_PUNCTUATION_REPLACEMENTS: dict[str, str] = {
    # Dashes / hyphens
    "\u2010": "-",       # hyphen
    "\u2011": "-",       # non-breaking hyphen
    "\u2012": "-",       # figure dash
    "\u2013": "-",       # en-dash
    "\u2014": "-",       # em-dash
    "\u2015": "-",       # horizontal bar
    # Spaces
    "\u2009": " ",       # thin space
    "\u200a": " ",       # hair space
    "\u202f": " ",       # narrow no-break space
    # Quotes
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    # Misc punctuation
    "\u2022": "-",       # bullet
    "\u2026": "...",     # ellipsis
}

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_OUTSIDE_FONT_RANGE = re.compile(r"[^\x20-\x7e\xa0-\xff]")
_WHITESPACE_RUN = re.compile(r"\s+")

_HEADING_MARKER = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.*?)\*\*")
_BOLD_UNDERSCORE = re.compile(r"__(.*?)__")
_ITALIC = re.compile(r"\*(.*?)\*")
_INLINE_CODE = re.compile(r"`([^`]+)`")
_HTML_TAG = re.compile(r"<[^>]+>")


def sanitize(text: str) -> str:
    """Reduce *text* to a single trimmed line the base fonts can render.

    Control characters become spaces, anything outside printable ASCII and
    Latin-1 is dropped, and whitespace runs collapse to one space.
    Idempotent: ``sanitize(sanitize(x)) == sanitize(x)``.
    """
    for char, replacement in _PUNCTUATION_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    text = _CONTROL_CHARS.sub(" ", text)
    text = _OUTSIDE_FONT_RANGE.sub("", text)
    return _WHITESPACE_RUN.sub(" ", text).strip()


def to_plain_text(fragment: str) -> str:
    """Strip markdown-lite markup, then sanitize.

    Marker stripping must run first: sanitizing collapses newlines, which
    would hide line-anchored heading markers.
    """
    text = _HEADING_MARKER.sub("", fragment)
    text = _BOLD.sub(r"\1", text)
    text = _BOLD_UNDERSCORE.sub(r"\1", text)
    text = _ITALIC.sub(r"\1", text)
    text = _INLINE_CODE.sub(r"\1", text)
    return sanitize(text.strip())


def truncate(text: str, budget: int) -> str:
    """Cut *text* to *budget* characters, appending ``...`` when anything was removed."""
    if len(text) > budget:
        return text[:budget] + "..."
    return text


def clean_html(markup: str | None, budget: int = 250) -> str:
    """Flatten rich-text HTML to plain text bounded by *budget* characters."""
    if not markup:
        return ""
    text = _HTML_TAG.sub(" ", markup)
    text = _WHITESPACE_RUN.sub(" ", html.unescape(text)).strip()
    return truncate(text, budget)
