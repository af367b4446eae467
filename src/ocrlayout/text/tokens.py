"""Per-symbol token joining: emitted text, trailing space, hyphen suppression."""

from __future__ import annotations

from typing import NamedTuple, Optional, Union

from ..models import BreakType
from .language import substitute_punctuation, uses_spaces

BreakLike = Union[BreakType, str, None]

# Break types after which a space-using language gets a trailing space.
SPACE_BREAKS = frozenset({BreakType.SPACE, BreakType.EOL_SURE_SPACE})
# Break types that terminate a line in horizontal-parallel output.
LINE_BREAKS = frozenset({BreakType.LINE_BREAK, BreakType.HYPHEN})
# Break types under which a lone "-" is a line-continuation hyphen.
HYPHEN_BREAKS = frozenset({BreakType.HYPHEN, BreakType.EOL_SURE_SPACE})


class ProcessedToken(NamedTuple):
    text: str
    needs_space: bool


def process_symbol_text(
    text: str, language_code: Optional[str], break_type: BreakLike = None
) -> ProcessedToken:
    """Return the text to emit for one symbol and whether a space follows it.

    Punctuation substitution applies to no-space languages only, and those
    languages never request a trailing space.
    """
    if not text:
        return ProcessedToken("", False)
    emitted = substitute_punctuation(text, language_code)
    needs_space = uses_spaces(language_code) and BreakType.parse(break_type) in SPACE_BREAKS
    return ProcessedToken(emitted, needs_space)


def should_skip_symbol(
    text: str, language_code: Optional[str], break_type: BreakLike = None
) -> bool:
    """True for an end-of-line ``-`` in a space-using language."""
    return (
        uses_spaces(language_code)
        and text == "-"
        and BreakType.parse(break_type) in HYPHEN_BREAKS
    )
