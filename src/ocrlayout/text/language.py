"""Language-keyed spacing, direction, and punctuation rules.

All lookups use the base language tag: the region suffix is dropped and
case is ignored, so ``"zh-Hant"``, ``"ZH"`` and ``"zh_TW"`` all resolve to
``"zh"``.  Unknown or empty codes behave like a space-using, left-to-right
language.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Optional

from ..models import TextAnnotation

CJK: FrozenSet[str] = frozenset({"zh", "ja", "ko"})
SOUTHEAST_ASIAN: FrozenSet[str] = frozenset({"th", "lo", "my"})
NO_SPACE: FrozenSet[str] = CJK | SOUTHEAST_ASIAN
RTL: FrozenSet[str] = frozenset(
    {"ar", "he", "iw", "fa", "ur", "ps", "dv", "syr", "yi"}
)

_CATEGORIES: Dict[str, FrozenSet[str]] = {
    "cjk": CJK,
    "southeast_asian": SOUTHEAST_ASIAN,
    "no_space": NO_SPACE,
    "rtl": RTL,
}

# ASCII punctuation → full-width forms, used only for no-space languages.
PUNCTUATION_MAP: Dict[str, str] = {
    ",": "，",
    "-": "——",
    ";": "；",
    "!": "！",
    "?": "？",
    ":": "：",
    "(": "（",
    ")": "）",
    "[": "【",
    "]": "】",
    "/": "／",
    "\\": "＼",
    ".": "。",
}

_RE_PUNCT = re.compile("[" + re.escape("".join(PUNCTUATION_MAP)) + "]")
_RE_TAG_SPLIT = re.compile(r"[-_]")


def base_language(language_code: Optional[str]) -> str:
    """Return the lower-cased primary subtag of *language_code*."""
    if not language_code:
        return ""
    return _RE_TAG_SPLIT.split(language_code.strip(), maxsplit=1)[0].lower()


def in_category(language_code: Optional[str], category: str) -> bool:
    """True if the language belongs to *category*.

    Categories: ``"cjk"``, ``"southeast_asian"``, ``"no_space"``, ``"rtl"``.
    Unknown categories answer False.
    """
    members = _CATEGORIES.get(category)
    if members is None:
        return False
    return base_language(language_code) in members


def is_cjk(language_code: Optional[str]) -> bool:
    return base_language(language_code) in CJK


def is_southeast_asian(language_code: Optional[str]) -> bool:
    return base_language(language_code) in SOUTHEAST_ASIAN


def uses_spaces(language_code: Optional[str]) -> bool:
    """True unless the language is written without inter-word spaces."""
    return base_language(language_code) not in NO_SPACE


def is_rtl(language_code: Optional[str]) -> bool:
    return base_language(language_code) in RTL


def substitute_punctuation(text: str, language_code: Optional[str]) -> str:
    """Replace ASCII punctuation with full-width forms for no-space languages.

    Every occurrence is replaced; the table has no overlapping keys, so the
    result does not depend on replacement order.  Space-using languages get
    *text* back unchanged.
    """
    if not text or uses_spaces(language_code):
        return text
    return _RE_PUNCT.sub(lambda m: PUNCTUATION_MAP[m.group(0)], text)


def detected_language_code(
    annotation: Optional[TextAnnotation], default: str = "en"
) -> str:
    """Primary language of the first page, or *default* when none is reported."""
    if annotation is None or not annotation.pages:
        return default
    languages = annotation.pages[0].detected_languages
    if languages and languages[0].language_code:
        return languages[0].language_code
    return default
