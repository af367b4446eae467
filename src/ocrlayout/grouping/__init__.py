"""Geometric grouping — column clustering and cross-list symbol matching.

Public API
----------
- :func:`cluster_columns` — greedy right-to-left column clustering
- :func:`average_char_width` / :func:`column_threshold` — clustering inputs
- :class:`RecordIndex` — join tree symbols to flattened records
"""

from .clustering import (
    average_char_width,
    cluster_columns,
    column_threshold,
    sort_for_columns,
)
from .matching import RecordIndex, symbol_anchor, symbol_centroid

__all__ = [
    "average_char_width",
    "cluster_columns",
    "column_threshold",
    "sort_for_columns",
    "RecordIndex",
    "symbol_anchor",
    "symbol_centroid",
]
