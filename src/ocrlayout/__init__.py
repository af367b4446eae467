"""Reading-order text reconstruction from hierarchical OCR output.

Frequently-used symbols are re-exported here for convenience.
For specialised imports (clustering internals, token rules, overlays)
import directly from the relevant submodule — e.g.::

    from ocrlayout.grouping.clustering import cluster_columns
    from ocrlayout.text.tokens import process_symbol_text
    from ocrlayout.export.overlay import draw_columns_overlay
"""

# ── Core models & config ──────────────────────────────────────────────

from .config import ConfigValidationError, LayoutConfig
from .flatten import Boundary, Level, boundaries, flatten_symbols, text_at
from .grouping import cluster_columns
from .ingest import IngestError, load_annotation, parse_annotation
from .layout import (
    horizontal_paragraph_text,
    horizontal_parallel_text,
    vertical_paragraph_text,
    vertical_parallel_text,
)
from .models import (
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
from .pipeline import (
    LayoutMode,
    ReconstructionResult,
    reconstruct,
    reconstruct_text,
    select_mode,
)
from .text import detected_language_code, is_rtl, uses_spaces

__all__ = [
    # Models & config
    "ConfigValidationError",
    "LayoutConfig",
    "Block",
    "BoundingPolygon",
    "BreakType",
    "DetectedBreak",
    "DetectedLanguage",
    "Page",
    "Paragraph",
    "Symbol",
    "SymbolRecord",
    "TextAnnotation",
    "Vertex",
    "Word",
    # Flattening
    "Boundary",
    "Level",
    "boundaries",
    "flatten_symbols",
    "text_at",
    # Grouping
    "cluster_columns",
    # Layout
    "horizontal_paragraph_text",
    "horizontal_parallel_text",
    "vertical_paragraph_text",
    "vertical_parallel_text",
    # Pipeline
    "LayoutMode",
    "ReconstructionResult",
    "reconstruct",
    "reconstruct_text",
    "select_mode",
    # Language
    "detected_language_code",
    "is_rtl",
    "uses_spaces",
    # Ingest
    "IngestError",
    "load_annotation",
    "parse_annotation",
]
