"""The four text-layout strategies.

=====================  ===========================================================
Mode                   Output
=====================  ===========================================================
horizontal-parallel    included symbols in document order, spaces and line breaks
                       from break annotations, whitespace collapsed
horizontal-paragraph   one cleaned line-run per paragraph, paragraphs ordered
                       top-to-bottom and separated by a blank line
vertical-parallel      included symbols clustered into columns, columns ordered
                       right-to-left and separated by a newline
vertical-paragraph     columns clustered per paragraph and concatenated,
                       paragraphs ordered right-to-left, separated by a blank line
=====================  ===========================================================

Every strategy takes ``(annotation, records, language_code)`` where
*records* are the caller's flattened, filter-annotated symbols.  Paragraph
modes re-walk the tree and join each symbol to a record by text and
position; unmatched symbols count as not included.  Empty or absent input
yields ``""``.  Pass a dict as *diagnostics* to collect per-pass counters.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import LayoutConfig
from .grouping.clustering import cluster_columns
from .grouping.matching import RecordIndex, symbol_anchor, symbol_centroid
from .models import SymbolRecord, TextAnnotation
from .text.cleanup import clean_text_spaces, strip_line_breaks
from .text.language import substitute_punctuation, uses_spaces
from .text.tokens import LINE_BREAKS, process_symbol_text, should_skip_symbol

log = logging.getLogger(__name__)

Diagnostics = Optional[Dict[str, Any]]


def _record(diagnostics: Diagnostics, **values: Any) -> None:
    if diagnostics is not None:
        diagnostics.update(values)


def _join_columns(columns: List[List[SymbolRecord]], separator: str) -> str:
    return separator.join("".join(r.text for r in col) for col in columns)


# ---------------------------------------------------------------------------
# Horizontal
# ---------------------------------------------------------------------------


def horizontal_parallel_text(
    annotation: Optional[TextAnnotation],
    records: Optional[Sequence[SymbolRecord]],
    language_code: Optional[str],
    cfg: LayoutConfig | None = None,
    diagnostics: Diagnostics = None,
) -> str:
    """Join included symbols in document order.

    When the annotation carries full text and no record is included, that
    text is returned as-is (punctuation-substituted for no-space languages).
    """
    if not records:
        return ""

    full_text = annotation.text if annotation is not None else None
    if full_text and all(not r.is_included for r in records):
        _record(diagnostics, fast_path=True, symbols_included=0)
        if not uses_spaces(language_code):
            return substitute_punctuation(full_text, language_code)
        return full_text

    parts: List[str] = []
    included = 0
    for rec in records:
        if not rec.is_included:
            continue
        included += 1
        token = process_symbol_text(rec.text, language_code, rec.detected_break)
        parts.append(token.text)
        if token.needs_space:
            parts.append(" ")
        if rec.detected_break in LINE_BREAKS:
            parts.append("\n")

    _record(diagnostics, fast_path=False, symbols_included=included)
    return clean_text_spaces("".join(parts))


def horizontal_paragraph_text(
    annotation: Optional[TextAnnotation],
    records: Optional[Sequence[SymbolRecord]],
    language_code: Optional[str],
    cfg: LayoutConfig | None = None,
    diagnostics: Diagnostics = None,
) -> str:
    """Assemble each paragraph separately and order paragraphs by top edge."""
    cfg = cfg or LayoutConfig()
    if annotation is None or not annotation.pages or records is None:
        return ""

    index = RecordIndex(records)
    tol = cfg.horizontal_match_tol
    paragraphs: List[Tuple[float, str]] = []
    included = 0

    for _, _, _, para in annotation.iter_paragraphs():
        touched = False
        parts: List[str] = []
        poly = para.bounding_poly
        sort_key = poly.min_y() if poly is not None else math.inf

        for word in para.words:
            for sym in word.symbols:
                centroid = symbol_centroid(sym, cfg) or (-math.inf, -math.inf)
                rec = index.match_centroid(sym.text, centroid[0], centroid[1], tol)
                if rec is None or not rec.is_included:
                    continue
                included += 1
                touched = True
                if should_skip_symbol(sym.text, language_code, rec.detected_break):
                    continue
                token = process_symbol_text(sym.text, language_code, rec.detected_break)
                parts.append(token.text)
                if token.needs_space:
                    parts.append(" ")

        if touched:
            cleaned = clean_text_spaces("".join(parts))
            if cleaned:
                paragraphs.append((sort_key, cleaned))

    _record(
        diagnostics,
        symbols_included=included,
        match_lookups=index.lookups,
        match_misses=index.misses,
        paragraphs=len(paragraphs),
    )
    if index.misses:
        log.debug("horizontal-paragraph: %d symbols had no matching record", index.misses)

    paragraphs.sort(key=lambda p: p[0])
    return cfg.paragraph_separator.join(text for _, text in paragraphs)


# ---------------------------------------------------------------------------
# Vertical
# ---------------------------------------------------------------------------


def vertical_parallel_text(
    annotation: Optional[TextAnnotation],
    records: Optional[Sequence[SymbolRecord]],
    language_code: Optional[str],
    cfg: LayoutConfig | None = None,
    diagnostics: Diagnostics = None,
    only_included: bool = True,
) -> str:
    """Cluster symbols into right-to-left columns, one output line per column.

    Break annotations never add spaces here; only punctuation substitution
    is applied to each symbol.  *annotation* is accepted for signature
    symmetry and not consulted.
    """
    cfg = cfg or LayoutConfig()
    if not records:
        return ""

    processed = [
        rec.with_text(
            process_symbol_text(rec.text, language_code, rec.detected_break).text
        )
        for rec in records
        if not only_included or rec.is_included
    ]
    columns = cluster_columns(processed, cfg)

    _record(diagnostics, symbols_included=len(processed), columns=len(columns))
    return _join_columns(columns, cfg.column_separator)


def vertical_paragraph_text(
    annotation: Optional[TextAnnotation],
    records: Optional[Sequence[SymbolRecord]],
    language_code: Optional[str],
    cfg: LayoutConfig | None = None,
    diagnostics: Diagnostics = None,
) -> str:
    """Cluster columns per paragraph; order paragraphs by left edge, descending.

    Symbols join to records on their first vertex versus the record's
    top-left corner, a tighter match than horizontal-paragraph mode uses.
    Columns inside a paragraph are concatenated without separators.
    """
    cfg = cfg or LayoutConfig()
    if annotation is None or not annotation.pages or records is None:
        return ""

    index = RecordIndex(records)
    tol = cfg.vertical_match_tol
    paragraphs: List[Tuple[float, str]] = []
    included = 0
    total_columns = 0

    for _, _, _, para in annotation.iter_paragraphs():
        poly = para.bounding_poly
        sort_key = poly.min_x() if poly is not None else math.inf
        collected: List[SymbolRecord] = []

        for word in para.words:
            for sym in word.symbols:
                ax, ay = symbol_anchor(sym)
                rec = index.match_top_left(sym.text, ax, ay, tol)
                if rec is None or not rec.is_included:
                    continue
                token = process_symbol_text(
                    strip_line_breaks(rec.text), language_code, rec.detected_break
                )
                collected.append(rec.with_text(token.text))

        if not collected:
            continue
        included += len(collected)
        columns = cluster_columns(collected, cfg)
        total_columns += len(columns)
        paragraphs.append((sort_key, _join_columns(columns, "")))

    _record(
        diagnostics,
        symbols_included=included,
        match_lookups=index.lookups,
        match_misses=index.misses,
        paragraphs=len(paragraphs),
        columns=total_columns,
    )
    if index.misses:
        log.debug("vertical-paragraph: %d symbols had no matching record", index.misses)

    paragraphs.sort(key=lambda p: p[0], reverse=True)
    return cfg.paragraph_separator.join(text for _, text in paragraphs)
