"""Language rules, token joining, and whitespace cleanup.

Public API
----------
- :func:`uses_spaces` / :func:`is_rtl` / :func:`in_category` — language policy
- :func:`substitute_punctuation` — full-width punctuation for no-space languages
- :func:`detected_language_code` — primary language of an annotation
- :func:`process_symbol_text` / :func:`should_skip_symbol` — token joining
- :func:`clean_text_spaces` / :func:`strip_line_breaks` — final cleanup
"""

from .cleanup import (
    clean_text_spaces,
    collapse_newlines,
    collapse_spaces,
    strip_line_breaks,
    trim_edges,
)
from .language import (
    CJK,
    NO_SPACE,
    PUNCTUATION_MAP,
    RTL,
    SOUTHEAST_ASIAN,
    base_language,
    detected_language_code,
    in_category,
    is_cjk,
    is_rtl,
    is_southeast_asian,
    substitute_punctuation,
    uses_spaces,
)
from .tokens import ProcessedToken, process_symbol_text, should_skip_symbol

__all__ = [
    "CJK",
    "NO_SPACE",
    "PUNCTUATION_MAP",
    "RTL",
    "SOUTHEAST_ASIAN",
    "base_language",
    "detected_language_code",
    "in_category",
    "is_cjk",
    "is_rtl",
    "is_southeast_asian",
    "substitute_punctuation",
    "uses_spaces",
    "ProcessedToken",
    "process_symbol_text",
    "should_skip_symbol",
    "clean_text_spaces",
    "collapse_newlines",
    "collapse_spaces",
    "strip_line_breaks",
    "trim_edges",
]
