"""Shared test fixtures for ocrlayout."""

from __future__ import annotations

import pytest

from ocrlayout.config import LayoutConfig
from ocrlayout.models import (
    Block,
    BoundingPolygon,
    BreakType,
    DetectedBreak,
    DetectedLanguage,
    Page,
    Paragraph,
    Symbol,
    SymbolRecord,
    TextAnnotation,
    Vertex,
    Word,
)

# ── Helpers ────────────────────────────────────────────────────────────


def make_poly(x: float, y: float, w: float, h: float) -> BoundingPolygon:
    """Axis-aligned rectangle, clockwise from the top-left corner."""
    return BoundingPolygon(
        vertices=[
            Vertex(x, y),
            Vertex(x + w, y),
            Vertex(x + w, y + h),
            Vertex(x, y + h),
        ]
    )


def make_symbol(
    text: str,
    x: float,
    y: float,
    w: float = 10.0,
    h: float = 10.0,
    brk: str | None = None,
) -> Symbol:
    """Create a Symbol with a rectangular polygon and an optional break."""
    return Symbol(
        text=text,
        bounding_poly=make_poly(x, y, w, h),
        detected_break=DetectedBreak(type=BreakType(brk)) if brk else None,
    )


def make_paragraph(
    words: list[list[Symbol]], poly: BoundingPolygon | None = None
) -> Paragraph:
    return Paragraph(words=[Word(symbols=list(w)) for w in words], bounding_poly=poly)


def make_annotation(
    paragraphs: list[Paragraph],
    text: str | None = None,
    language: str | None = None,
) -> TextAnnotation:
    """One page, one block holding *paragraphs*."""
    langs = [DetectedLanguage(language_code=language, confidence=0.9)] if language else []
    page = Page(blocks=[Block(paragraphs=list(paragraphs))], detected_languages=langs)
    return TextAnnotation(text=text, pages=[page])


def line_of_symbols(
    text: str,
    x: float = 0.0,
    y: float = 0.0,
    w: float = 10.0,
    h: float = 10.0,
    gap: float = 2.0,
) -> list[list[Symbol]]:
    """Split *text* on spaces into words laid out left-to-right on one line.

    The last symbol of each word gets a SPACE break, the very last symbol a
    LINE_BREAK.
    """
    words: list[list[Symbol]] = []
    cx = x
    parts = text.split(" ")
    for wi, part in enumerate(parts):
        syms = []
        for ci, ch in enumerate(part):
            brk = None
            if ci == len(part) - 1:
                brk = "LINE_BREAK" if wi == len(parts) - 1 else "SPACE"
            syms.append(make_symbol(ch, cx, y, w, h, brk))
            cx += w + gap
        words.append(syms)
        cx += w
    return words


def make_record(
    text: str,
    x: float,
    y: float,
    w: float = 10.0,
    h: float = 10.0,
    included: bool = True,
    brk: str | None = None,
    index: int = 0,
) -> SymbolRecord:
    """Create a SymbolRecord from a top-left corner and size."""
    return SymbolRecord(
        text=text,
        is_included=included,
        detected_break=BreakType(brk) if brk else None,
        centroid_x=x + w / 2,
        centroid_y=y + h / 2,
        width=w,
        height=h,
        top_left_x=x,
        top_left_y=y,
        original_index=index,
    )


# ── Fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def default_cfg() -> LayoutConfig:
    """Return a default LayoutConfig."""
    return LayoutConfig()


@pytest.fixture
def hello_world() -> TextAnnotation:
    """Two paragraphs: "Hello, World." on top, "Bye." below.

    Layout (approx):
        H e l l o ,   W o r l d .     (y=10)
        B y e .                        (y=60)
    """
    top = make_paragraph(line_of_symbols("Hello, World.", x=10, y=10), make_poly(10, 10, 250, 10))
    bottom = make_paragraph(line_of_symbols("Bye.", x=10, y=60), make_poly(10, 60, 60, 10))
    return make_annotation([top, bottom], text="Hello, World.\nBye.\n", language="en")


@pytest.fixture
def vertical_two_columns() -> TextAnnotation:
    """Vertical text in two columns, read right column first.

    Right column (x=100): 縦 書 き
    Left column  (x=60):  文 字
    """
    right = [make_symbol(ch, 100, 10 + i * 22, 20, 20) for i, ch in enumerate("縦書き")]
    left = [make_symbol(ch, 60, 10 + i * 22, 20, 20) for i, ch in enumerate("文字")]
    para = make_paragraph([right, left], make_poly(60, 10, 60, 70))
    return make_annotation([para], language="ja")
