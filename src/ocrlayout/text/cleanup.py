"""Whitespace and line-break normalisation."""

from __future__ import annotations

import re

_RE_SPACES = re.compile(r" +")
_RE_NEWLINES = re.compile(r"\n+")
_RE_LINE_BREAK_CHARS = re.compile(r"[\r\n]")


def collapse_spaces(text: str) -> str:
    """Replace runs of literal spaces with one space."""
    if not text:
        return ""
    return _RE_SPACES.sub(" ", text)


def collapse_newlines(text: str) -> str:
    """Replace runs of newlines with one newline."""
    if not text:
        return ""
    return _RE_NEWLINES.sub("\n", text)


def trim_edges(text: str) -> str:
    if not text:
        return ""
    return text.strip()


def clean_text_spaces(text: str) -> str:
    """Collapse spaces, then newlines, then strip both edges."""
    return trim_edges(collapse_newlines(collapse_spaces(text)))


def strip_line_breaks(text: str) -> str:
    """Remove every ``\\r`` and ``\\n`` character."""
    if not text:
        return ""
    return _RE_LINE_BREAK_CHARS.sub("", text)
