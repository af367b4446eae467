"""Mode selection and the single-call reconstruction entry point.

:func:`reconstruct_text` dispatches an already-flattened record list to one
of the four layout strategies.  :func:`reconstruct` additionally flattens
the tree, resolves the language, and returns a
:class:`ReconstructionResult` carrying timing and diagnostics counters,
without performing any file I/O.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence, Union

from .config import LayoutConfig
from .flatten import IncludedSpec, flatten_symbols
from .layout import (
    horizontal_paragraph_text,
    horizontal_parallel_text,
    vertical_paragraph_text,
    vertical_parallel_text,
)
from .models import SymbolRecord, TextAnnotation
from .text.language import detected_language_code

logger = logging.getLogger("ocrlayout.pipeline")


class LayoutMode(str, Enum):
    """Reconstruction strategy, named ``<direction>-<grouping>``."""

    horizontal_parallel = "horizontal-parallel"
    horizontal_paragraph = "horizontal-paragraph"
    vertical_parallel = "vertical-parallel"
    vertical_paragraph = "vertical-paragraph"

    @property
    def direction(self) -> str:
        return self.value.split("-", 1)[0]

    @property
    def grouping(self) -> str:
        return self.value.split("-", 1)[1]


DIRECTIONS = ("horizontal", "vertical")
GROUPINGS = ("parallel", "paragraph")

_STRATEGIES: Dict[LayoutMode, Callable[..., str]] = {
    LayoutMode.horizontal_parallel: horizontal_parallel_text,
    LayoutMode.horizontal_paragraph: horizontal_paragraph_text,
    LayoutMode.vertical_parallel: vertical_parallel_text,
    LayoutMode.vertical_paragraph: vertical_paragraph_text,
}


def select_mode(direction: str, grouping: str) -> LayoutMode:
    """Map a ``(direction, grouping)`` pair to its :class:`LayoutMode`."""
    if direction not in DIRECTIONS:
        raise ValueError(f"direction={direction!r} must be one of {DIRECTIONS}")
    if grouping not in GROUPINGS:
        raise ValueError(f"grouping={grouping!r} must be one of {GROUPINGS}")
    return LayoutMode(f"{direction}-{grouping}")


def _coerce_mode(mode: Union[LayoutMode, str]) -> LayoutMode:
    try:
        return LayoutMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in LayoutMode)
        raise ValueError(f"mode={mode!r} is not one of: {valid}") from None


def _check_cfg(cfg: Any) -> LayoutConfig:
    if cfg is None:
        return LayoutConfig()
    if not isinstance(cfg, LayoutConfig):
        raise TypeError(f"cfg must be a LayoutConfig, got {type(cfg).__name__}")
    return cfg


def reconstruct_text(
    annotation: Optional[TextAnnotation],
    records: Optional[Sequence[SymbolRecord]],
    language_code: Optional[str],
    mode: Union[LayoutMode, str],
    cfg: LayoutConfig | None = None,
    diagnostics: Optional[Dict[str, Any]] = None,
) -> str:
    """Run the strategy for *mode* over caller-flattened *records*.

    Raises:
        ValueError: *mode* is not a known layout mode.
        TypeError: *cfg* is not a :class:`LayoutConfig`.
    """
    strategy = _STRATEGIES[_coerce_mode(mode)]
    return strategy(annotation, records, language_code, _check_cfg(cfg), diagnostics)


@dataclass
class ReconstructionResult:
    """Output of :func:`reconstruct`."""

    text: str
    mode: LayoutMode
    language: str
    records: list[SymbolRecord] = field(default_factory=list)
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict (records omitted)."""
        return {
            "text": self.text,
            "mode": self.mode.value,
            "language": self.language,
            "diagnostics": dict(self.diagnostics),
        }


def reconstruct(
    annotation: Optional[TextAnnotation],
    included: IncludedSpec = None,
    language_code: Optional[str] = None,
    mode: Union[LayoutMode, str] = LayoutMode.horizontal_parallel,
    cfg: LayoutConfig | None = None,
) -> ReconstructionResult:
    """Flatten *annotation*, apply inclusion flags, and reconstruct text.

    *language_code* defaults to the first page's primary detected language,
    then to ``cfg.default_language``.
    """
    layout_mode = _coerce_mode(mode)
    cfg = _check_cfg(cfg)
    language = language_code or detected_language_code(annotation, cfg.default_language)

    t0 = time.perf_counter()
    records = flatten_symbols(annotation, included, cfg)
    diagnostics: Dict[str, Any] = {
        "mode": layout_mode.value,
        "language": language,
        "symbols_total": len(records),
    }
    text = reconstruct_text(annotation, records, language, layout_mode, cfg, diagnostics)
    diagnostics["duration_ms"] = int((time.perf_counter() - t0) * 1000)

    logger.info(
        "Reconstructed %d chars from %d symbols (%s, %s)",
        len(text),
        len(records),
        layout_mode.value,
        language,
    )
    return ReconstructionResult(
        text=text,
        mode=layout_mode,
        language=language,
        records=records,
        diagnostics=diagnostics,
    )
