"""Flatten the annotation tree into per-symbol geometric records.

Public API
----------
- :func:`flatten_symbols` — one :class:`~ocrlayout.models.SymbolRecord` per
  symbol, in document order
- :func:`boundaries` — outline polygons for blocks / paragraphs / words /
  symbols, for drawing and inspection
- :func:`text_at` — text of one addressed node
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from .config import LayoutConfig
from .models import BoundingPolygon, SymbolRecord, TextAnnotation

log = logging.getLogger(__name__)

IncludedSpec = Union[None, Sequence[bool], Callable[[SymbolRecord], bool]]


def _geometry(
    poly: Optional[BoundingPolygon], cfg: LayoutConfig
) -> Optional[tuple[float, float, float, float]]:
    if poly is None or len(poly) < cfg.min_symbol_vertices:
        return None
    return poly.extents(cfg.missing_coordinate_as_zero)


def flatten_symbols(
    annotation: Optional[TextAnnotation],
    included: IncludedSpec = None,
    cfg: LayoutConfig | None = None,
) -> List[SymbolRecord]:
    """Walk pages → blocks → paragraphs → words → symbols once.

    Args:
        annotation: Annotation tree; ``None`` yields an empty list.
        included: ``None`` marks every symbol included.  A sequence of
            booleans is consumed in document order (entries beyond its end
            count as not included).  A callable is evaluated on each
            geometric record.
        cfg: Layout tunables (vertex minimum, missing-coordinate policy).

    Returns:
        Records in document order.  Symbols with too few vertices keep
        their slot with zeroed geometry so positional alignment holds.
    """
    cfg = cfg or LayoutConfig()
    if annotation is None:
        return []

    records: List[SymbolRecord] = []
    degenerate = 0
    for pi, page in enumerate(annotation.pages):
        for bi, block in enumerate(page.blocks):
            for qi, para in enumerate(block.paragraphs):
                for wi, word in enumerate(para.words):
                    for si, symbol in enumerate(word.symbols):
                        rec = SymbolRecord(
                            text=symbol.text,
                            detected_break=symbol.break_type,
                            page_index=pi,
                            block_index=bi,
                            paragraph_index=qi,
                            word_index=wi,
                            symbol_index=si,
                            original_index=len(records),
                        )
                        ext = _geometry(symbol.bounding_poly, cfg)
                        if ext is None:
                            degenerate += 1
                        else:
                            x0, y0, x1, y1 = ext
                            rec.top_left_x = x0
                            rec.top_left_y = y0
                            rec.width = x1 - x0
                            rec.height = y1 - y0
                            rec.centroid_x = (x0 + x1) / 2
                            rec.centroid_y = (y0 + y1) / 2
                        records.append(rec)

    _apply_included(records, included)

    if degenerate:
        log.debug("Flattened %d symbols, %d with degenerate geometry", len(records), degenerate)
    return records


def _apply_included(records: List[SymbolRecord], included: IncludedSpec) -> None:
    if included is None:
        return
    if callable(included):
        for rec in records:
            rec.is_included = bool(included(rec))
        return
    flags = list(included)
    if len(flags) != len(records):
        log.warning(
            "Included-flag count (%d) differs from symbol count (%d)",
            len(flags),
            len(records),
        )
    for i, rec in enumerate(records):
        rec.is_included = bool(flags[i]) if i < len(flags) else False


# ---------------------------------------------------------------------------
# Boundaries and level text
# ---------------------------------------------------------------------------


class Level(str, Enum):
    """Granularity of the annotation tree."""

    blocks = "blocks"
    paragraphs = "paragraphs"
    words = "words"
    symbols = "symbols"


@dataclass
class Boundary:
    """Outline of one tree node, ready for drawing."""

    points: List[tuple[float, float]]
    label: str
    text: str
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def tooltip(self) -> str:
        return f"{self.label}\n{self.text}"

    def bbox(self) -> tuple[float, float, float, float]:
        """Bounding box as ``(x0, y0, x1, y1)``."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def svg_points(self) -> str:
        """Polygon points in SVG ``points`` attribute syntax."""
        return " ".join(f"{x:g},{y:g}" for x, y in self.points)


def _boundary(
    poly: Optional[BoundingPolygon], label: str, text: str, cfg: LayoutConfig
) -> Optional[Boundary]:
    if poly is None or len(poly) < cfg.min_boundary_vertices:
        return None
    points = [
        (v.x if v.x is not None else 0.0, v.y if v.y is not None else 0.0)
        for v in poly.vertices
    ]
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return Boundary(
        points=points,
        label=label,
        text=text,
        min_x=min(xs),
        min_y=min(ys),
        max_x=max(xs),
        max_y=max(ys),
    )


def boundaries(
    annotation: Optional[TextAnnotation],
    level: Union[Level, str],
    cfg: LayoutConfig | None = None,
) -> List[Boundary]:
    """List outlines of every node at *level*, skipping degenerate polygons.

    Block, paragraph, and word indices restart on each page, matching the
    labels the OCR provider's tree implies.
    """
    cfg = cfg or LayoutConfig()
    level = Level(level)
    if annotation is None:
        return []

    out: List[Boundary] = []

    def add(poly, label, text):
        b = _boundary(poly, label, text, cfg)
        if b is not None:
            out.append(b)

    for page in annotation.pages:
        for bi, block in enumerate(page.blocks):
            if level is Level.blocks:
                add(block.bounding_poly, f"Block {bi}", block.text())
                continue
            for qi, para in enumerate(block.paragraphs):
                if level is Level.paragraphs:
                    add(para.bounding_poly, f"Para {bi}-{qi}", para.text())
                    continue
                for wi, word in enumerate(para.words):
                    if level is Level.words:
                        add(word.bounding_poly, f"Word {bi}-{qi}-{wi}", word.text())
                        continue
                    for si, sym in enumerate(word.symbols):
                        add(sym.bounding_poly, f"Sym {bi}-{qi}-{wi}-{si}", sym.text)
    return out


def text_at(
    annotation: Optional[TextAnnotation],
    level: Union[Level, str],
    block: int,
    paragraph: int = 0,
    word: int = 0,
    symbol: int = 0,
) -> str:
    """Text of the node addressed by the given indices at *level*.

    Pages are searched in order; the first page holding the address wins.
    Returns ``""`` when nothing matches.
    """
    level = Level(level)
    if annotation is None:
        return ""

    def _get(items, idx):
        return items[idx] if 0 <= idx < len(items) else None

    for page in annotation.pages:
        blk = _get(page.blocks, block)
        if blk is None:
            continue
        if level is Level.blocks:
            return blk.text()
        para = _get(blk.paragraphs, paragraph)
        if para is None:
            continue
        if level is Level.paragraphs:
            return para.text()
        wrd = _get(para.words, word)
        if wrd is None:
            continue
        if level is Level.words:
            return wrd.text()
        sym = _get(wrd.symbols, symbol)
        return sym.text if sym is not None else ""
    return ""
