"""Join tree symbols to independently flattened records by text and position.

The filtering pass and the layout pass may flatten the tree separately, so
records are matched on ``(text, |Δx| < tol, |Δy| < tol)`` rather than by
index.  When several records qualify, the first in document order wins.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from ..config import LayoutConfig
from ..models import Symbol, SymbolRecord

log = logging.getLogger(__name__)


class RecordIndex:
    """Records bucketed by text, each bucket kept in document order."""

    def __init__(self, records: Iterable[SymbolRecord]) -> None:
        self._by_text: Dict[str, List[SymbolRecord]] = defaultdict(list)
        for rec in records:
            self._by_text[rec.text].append(rec)
        self.lookups = 0
        self.misses = 0

    def _find(
        self, text: str, x: float, y: float, tol: float, use_top_left: bool
    ) -> Optional[SymbolRecord]:
        self.lookups += 1
        for rec in self._by_text.get(text, ()):
            rx = rec.top_left_x if use_top_left else rec.centroid_x
            ry = rec.top_left_y if use_top_left else rec.centroid_y
            if abs(rx - x) < tol and abs(ry - y) < tol:
                return rec
        self.misses += 1
        log.debug("No record matches %r at (%.1f, %.1f) within %.1f px", text, x, y, tol)
        return None

    def match_centroid(
        self, text: str, x: float, y: float, tol: float
    ) -> Optional[SymbolRecord]:
        """First record with equal text whose centroid lies within *tol*."""
        return self._find(text, x, y, tol, use_top_left=False)

    def match_top_left(
        self, text: str, x: float, y: float, tol: float
    ) -> Optional[SymbolRecord]:
        """First record with equal text whose top-left lies within *tol*."""
        return self._find(text, x, y, tol, use_top_left=True)


def symbol_centroid(
    symbol: Symbol, cfg: LayoutConfig | None = None
) -> Optional[tuple[float, float]]:
    """Min/max-extent midpoint of a tree symbol, or None without geometry."""
    cfg = cfg or LayoutConfig()
    if symbol.bounding_poly is None:
        return None
    ext = symbol.bounding_poly.extents(cfg.missing_coordinate_as_zero)
    if ext is None:
        return None
    x0, y0, x1, y1 = ext
    return ((x0 + x1) / 2, (y0 + y1) / 2)


def symbol_anchor(symbol: Symbol) -> tuple[float, float]:
    """First vertex of a tree symbol; absent coordinates read as ``-1``."""
    first = symbol.bounding_poly.first_vertex() if symbol.bounding_poly else None
    if first is None:
        return (-1.0, -1.0)
    return (
        first.x if first.x is not None else -1.0,
        first.y if first.y is not None else -1.0,
    )
