"""Ingest stage — load completed OCR annotations from JSON.

Public API
----------
- :func:`load_annotation` — read + parse a Vision JSON file
- :func:`parse_annotation` — parse an in-memory JSON value
- :class:`IngestError` — raised on validation failures
"""

from .ingest import IngestError, load_annotation, parse_annotation

__all__ = [
    "IngestError",
    "load_annotation",
    "parse_annotation",
]
