"""Column clustering for vertical scripts.

Symbols are grouped into reading-order columns with a single greedy pass:

1. Estimate the average glyph width and derive ``column_threshold``.
2. Sort with a pairwise comparator: records further apart horizontally than
   the threshold order right-to-left, otherwise top-to-bottom.
3. Walk the sorted records, appending to the current column while the
   record's centroid x stays within the threshold of the column's running
   mean x (recomputed from every member on each append).
4. Sort each column top-to-bottom, then order columns right-to-left by
   their mean centroid x.

The pass is order-sensitive and intentionally not a global optimum; small
changes to the threshold or ordering reassign symbols between columns.
"""

from __future__ import annotations

import logging
import math
from functools import cmp_to_key
from typing import List, Optional, Sequence

from ..config import LayoutConfig
from ..models import SymbolRecord

log = logging.getLogger(__name__)


def _mean_x(column: Sequence[SymbolRecord]) -> float:
    return sum(r.centroid_x for r in column) / len(column)


def average_char_width(
    records: Sequence[SymbolRecord], default: float = 15.0
) -> float:
    """Average per-character glyph width over records with usable geometry.

    Records with a positive finite width contribute ``width / len(text)``.
    If none of them carry text, their raw widths are averaged instead; with
    no usable width at all, *default* is returned.
    """
    valid = [r for r in records if r.width > 0 and math.isfinite(r.width)]
    per_char = [r.width / len(r.text) for r in valid if r.text]
    if per_char:
        return sum(per_char) / len(per_char)
    if valid:
        return sum(r.width for r in valid) / len(valid)
    return default


def column_threshold(avg_char_width: float, mult: float = 0.75) -> float:
    return avg_char_width * mult


def sort_for_columns(
    records: Sequence[SymbolRecord], threshold: float
) -> List[SymbolRecord]:
    """Sort right-to-left across columns, top-to-bottom within reach."""

    def _cmp(a: SymbolRecord, b: SymbolRecord) -> float:
        if abs(a.centroid_x - b.centroid_x) > threshold:
            return b.centroid_x - a.centroid_x
        return a.centroid_y - b.centroid_y

    return sorted(records, key=cmp_to_key(_cmp))


def _by_y(column: List[SymbolRecord]) -> List[SymbolRecord]:
    return sorted(column, key=lambda r: r.centroid_y)


def cluster_columns(
    records: Sequence[SymbolRecord],
    cfg: LayoutConfig | None = None,
    avg_char_width: Optional[float] = None,
) -> List[List[SymbolRecord]]:
    """Group records into columns ordered right-to-left.

    Args:
        records: Position-annotated records; the input is not modified.
        cfg: Supplies the default glyph width and threshold multiplier.
        avg_char_width: Override for the estimated glyph width.

    Returns:
        Columns, each sorted top-to-bottom by centroid y.
    """
    cfg = cfg or LayoutConfig()
    if not records:
        return []

    avg = (
        avg_char_width
        if avg_char_width is not None
        else average_char_width(records, cfg.default_char_width)
    )
    threshold = column_threshold(avg, cfg.column_threshold_mult)
    ordered = sort_for_columns(records, threshold)

    columns: List[List[SymbolRecord]] = []
    current = [ordered[0]]
    last_x = ordered[0].centroid_x

    for rec in ordered[1:]:
        if abs(rec.centroid_x - last_x) < threshold:
            current.append(rec)
            last_x = _mean_x(current)
        else:
            columns.append(_by_y(current))
            current = [rec]
            last_x = rec.centroid_x
    columns.append(_by_y(current))

    columns.sort(key=_mean_x, reverse=True)

    log.debug(
        "Clustered %d symbols into %d columns (avg width %.2f, threshold %.2f)",
        len(records),
        len(columns),
        avg,
        threshold,
    )
    return columns
