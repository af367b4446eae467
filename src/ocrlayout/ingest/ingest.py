"""Ingest stage — load a completed OCR annotation from JSON.

Accepts the three shapes a Vision ``images:annotate`` result is commonly
stored in, so runner scripts never have to unwrap responses themselves:

- a batch response: ``{"responses": [{"fullTextAnnotation": {...}}, ...]}``
- a single response: ``{"fullTextAnnotation": {...}}``
- a bare annotation: ``{"text": ..., "pages": [...]}``

Public API
----------
- :func:`load_annotation` — read + parse a JSON file
- :func:`parse_annotation` — parse an already-decoded JSON value
- :class:`IngestError` — raised on validation failures
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..models import TextAnnotation

log = logging.getLogger(__name__)


class IngestError(Exception):
    """Raised when an annotation file cannot be ingested."""


def _validate_path(path: Path) -> None:
    """Raise :class:`IngestError` for missing / empty files."""
    if not path.exists():
        raise IngestError(f"File not found: {path}")
    if not path.is_file():
        raise IngestError(f"Not a file: {path}")
    if path.stat().st_size == 0:
        raise IngestError(f"Empty file: {path}")


def _unwrap_response(data: dict) -> dict:
    """Return the first response of a batch, or *data* itself."""
    responses = data.get("responses")
    if isinstance(responses, list):
        if not responses:
            return {}
        if len(responses) > 1:
            log.warning("Batch holds %d responses; using the first", len(responses))
        first = responses[0]
        if not isinstance(first, dict):
            raise IngestError("First response is not a JSON object")
        return first
    return data


def parse_annotation(data: Any) -> TextAnnotation:
    """Build a :class:`TextAnnotation` from a decoded Vision JSON value.

    Raises
    ------
    IngestError
        When *data* is not an object or the response reports an API error.
    """
    if not isinstance(data, dict):
        raise IngestError(
            f"Expected a JSON object at top level, got {type(data).__name__}"
        )
    response = _unwrap_response(data)

    error = response.get("error")
    if isinstance(error, dict) and error:
        message = error.get("message") or "unknown error"
        raise IngestError(f"OCR response reports an error: {message}")

    if "fullTextAnnotation" in response:
        return TextAnnotation.from_dict(response["fullTextAnnotation"])
    if "pages" in response or "text" in response:
        return TextAnnotation.from_dict(response)
    # A response for an image with no detected text.
    return TextAnnotation()


def load_annotation(path: Path | str) -> TextAnnotation:
    """Read and parse an annotation JSON file.

    Raises
    ------
    IngestError
        When the file is missing, empty, not valid JSON, or not an
        annotation-shaped object.
    """
    path = Path(path)
    _validate_path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise IngestError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise IngestError(f"Invalid JSON in {path}: {exc}") from exc

    annotation = parse_annotation(data)
    n_symbols = sum(
        len(word.symbols)
        for _, _, _, para in annotation.iter_paragraphs()
        for word in para.words
    )
    log.info(
        "Ingested %s: %d pages, %d symbols",
        path.name,
        len(annotation.pages),
        n_symbols,
    )
    return annotation
