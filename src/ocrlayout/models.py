"""Typed OCR annotation tree and the flattened per-symbol record.

The tree mirrors the Google Cloud Vision ``fullTextAnnotation`` layout::

    TextAnnotation → Page → Block → Paragraph → Word → Symbol

Every child collection is a (possibly empty) list and every optional scalar
is ``None`` when absent, so traversal never needs truthiness checks on
containers.  ``from_dict`` accepts the camelCase JSON the Vision API returns
and tolerates missing keys at every level; ``to_dict`` produces the same
shape.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, List, Optional, Tuple


class BreakType(str, Enum):
    """OCR-reported hint about what follows a symbol."""

    UNKNOWN = "UNKNOWN"
    NONE = "NONE"
    SPACE = "SPACE"
    SURE_SPACE = "SURE_SPACE"
    EOL_SURE_SPACE = "EOL_SURE_SPACE"
    HYPHEN = "HYPHEN"
    LINE_BREAK = "LINE_BREAK"

    @classmethod
    def parse(cls, value: Any) -> Optional["BreakType"]:
        """Coerce a raw value to a member; absent → None, unrecognised → UNKNOWN."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN


def _opt_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Vertex:
    """A point in image pixel space; either coordinate may be absent."""

    x: Optional[float] = None
    y: Optional[float] = None

    def to_dict(self) -> dict:
        """Serialize, omitting absent coordinates."""
        d: dict = {}
        if self.x is not None:
            d["x"] = self.x
        if self.y is not None:
            d["y"] = self.y
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "Vertex":
        if not isinstance(d, dict):
            return cls()
        return cls(x=_opt_float(d.get("x")), y=_opt_float(d.get("y")))


@dataclass
class BoundingPolygon:
    """Ordered vertices of a region.  Fewer than 3 vertices is degenerate."""

    vertices: List[Vertex] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.vertices)

    def is_degenerate(self) -> bool:
        return len(self.vertices) < 3

    def xs(self, missing_as_zero: bool = False) -> List[float]:
        """Present x coordinates (absent ones read as 0 when requested)."""
        if missing_as_zero:
            return [v.x if v.x is not None else 0.0 for v in self.vertices]
        return [v.x for v in self.vertices if v.x is not None]

    def ys(self, missing_as_zero: bool = False) -> List[float]:
        """Present y coordinates (absent ones read as 0 when requested)."""
        if missing_as_zero:
            return [v.y if v.y is not None else 0.0 for v in self.vertices]
        return [v.y for v in self.vertices if v.y is not None]

    def extents(
        self, missing_as_zero: bool = False
    ) -> Optional[Tuple[float, float, float, float]]:
        """Return ``(min_x, min_y, max_x, max_y)`` or None if an axis is empty."""
        xs = self.xs(missing_as_zero)
        ys = self.ys(missing_as_zero)
        if not xs or not ys:
            return None
        return (min(xs), min(ys), max(xs), max(ys))

    def min_x(self) -> float:
        """Smallest present x, or ``+inf`` when none is present."""
        xs = self.xs()
        return min(xs) if xs else math.inf

    def min_y(self) -> float:
        """Smallest present y, or ``+inf`` when none is present."""
        ys = self.ys()
        return min(ys) if ys else math.inf

    def first_vertex(self) -> Optional[Vertex]:
        return self.vertices[0] if self.vertices else None

    def to_dict(self) -> dict:
        return {"vertices": [v.to_dict() for v in self.vertices]}

    @classmethod
    def from_dict(cls, d: Any) -> Optional["BoundingPolygon"]:
        """Parse ``{"vertices": [...]}``; None when the key is absent."""
        if not isinstance(d, dict) or not isinstance(d.get("vertices"), list):
            return None
        return cls(vertices=[Vertex.from_dict(v) for v in d["vertices"]])


def _poly_from(d: dict) -> Optional[BoundingPolygon]:
    # Vision uses "boundingBox" on annotation nodes, "boundingPoly" elsewhere.
    raw = d.get("boundingBox")
    if raw is None:
        raw = d.get("boundingPoly")
    return BoundingPolygon.from_dict(raw)


def _list_of(d: dict, key: str) -> list:
    value = d.get(key)
    return value if isinstance(value, list) else []


@dataclass
class DetectedBreak:
    type: Optional[BreakType] = None
    is_prefix: bool = False

    def to_dict(self) -> dict:
        d: dict = {}
        if self.type is not None:
            d["type"] = self.type.value
        if self.is_prefix:
            d["isPrefix"] = True
        return d

    @classmethod
    def from_dict(cls, d: Any) -> Optional["DetectedBreak"]:
        if not isinstance(d, dict):
            return None
        return cls(type=BreakType.parse(d.get("type")), is_prefix=bool(d.get("isPrefix")))


@dataclass
class Symbol:
    """Smallest recognised unit, typically one grapheme."""

    text: str = ""
    bounding_poly: Optional[BoundingPolygon] = None
    detected_break: Optional[DetectedBreak] = None
    confidence: Optional[float] = None

    @property
    def break_type(self) -> Optional[BreakType]:
        return self.detected_break.type if self.detected_break else None

    def to_dict(self) -> dict:
        d: dict = {"text": self.text}
        if self.bounding_poly is not None:
            d["boundingBox"] = self.bounding_poly.to_dict()
        if self.detected_break is not None:
            d["property"] = {"detectedBreak": self.detected_break.to_dict()}
        if self.confidence is not None:
            d["confidence"] = self.confidence
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "Symbol":
        if not isinstance(d, dict):
            return cls()
        prop = d.get("property") if isinstance(d.get("property"), dict) else {}
        text = d.get("text")
        return cls(
            text=text if isinstance(text, str) else "",
            bounding_poly=_poly_from(d),
            detected_break=DetectedBreak.from_dict(prop.get("detectedBreak")),
            confidence=_opt_float(d.get("confidence")),
        )


@dataclass
class Word:
    symbols: List[Symbol] = field(default_factory=list)
    bounding_poly: Optional[BoundingPolygon] = None

    def text(self) -> str:
        return "".join(s.text for s in self.symbols)

    def to_dict(self) -> dict:
        d: dict = {"symbols": [s.to_dict() for s in self.symbols]}
        if self.bounding_poly is not None:
            d["boundingBox"] = self.bounding_poly.to_dict()
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "Word":
        if not isinstance(d, dict):
            return cls()
        return cls(
            symbols=[Symbol.from_dict(s) for s in _list_of(d, "symbols")],
            bounding_poly=_poly_from(d),
        )


@dataclass
class Paragraph:
    """A run of words; its own polygon supplies the paragraph sort key."""

    words: List[Word] = field(default_factory=list)
    bounding_poly: Optional[BoundingPolygon] = None

    def text(self) -> str:
        return " ".join(w.text() for w in self.words)

    def to_dict(self) -> dict:
        d: dict = {"words": [w.to_dict() for w in self.words]}
        if self.bounding_poly is not None:
            d["boundingBox"] = self.bounding_poly.to_dict()
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "Paragraph":
        if not isinstance(d, dict):
            return cls()
        return cls(
            words=[Word.from_dict(w) for w in _list_of(d, "words")],
            bounding_poly=_poly_from(d),
        )


@dataclass
class Block:
    paragraphs: List[Paragraph] = field(default_factory=list)
    bounding_poly: Optional[BoundingPolygon] = None
    block_type: Optional[str] = None

    def text(self) -> str:
        return "\n".join(p.text() for p in self.paragraphs)

    def to_dict(self) -> dict:
        d: dict = {"paragraphs": [p.to_dict() for p in self.paragraphs]}
        if self.bounding_poly is not None:
            d["boundingBox"] = self.bounding_poly.to_dict()
        if self.block_type is not None:
            d["blockType"] = self.block_type
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "Block":
        if not isinstance(d, dict):
            return cls()
        block_type = d.get("blockType")
        return cls(
            paragraphs=[Paragraph.from_dict(p) for p in _list_of(d, "paragraphs")],
            bounding_poly=_poly_from(d),
            block_type=block_type if isinstance(block_type, str) else None,
        )


@dataclass
class DetectedLanguage:
    language_code: str = ""
    confidence: Optional[float] = None

    def to_dict(self) -> dict:
        d: dict = {"languageCode": self.language_code}
        if self.confidence is not None:
            d["confidence"] = self.confidence
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "DetectedLanguage":
        if not isinstance(d, dict):
            return cls()
        code = d.get("languageCode")
        return cls(
            language_code=code if isinstance(code, str) else "",
            confidence=_opt_float(d.get("confidence")),
        )


@dataclass
class Page:
    """One page; detected languages are ordered by confidence."""

    blocks: List[Block] = field(default_factory=list)
    detected_languages: List[DetectedLanguage] = field(default_factory=list)
    width: Optional[float] = None
    height: Optional[float] = None
    confidence: Optional[float] = None

    def to_dict(self) -> dict:
        d: dict = {"blocks": [b.to_dict() for b in self.blocks]}
        if self.detected_languages:
            d["property"] = {
                "detectedLanguages": [lang.to_dict() for lang in self.detected_languages]
            }
        if self.width is not None:
            d["width"] = self.width
        if self.height is not None:
            d["height"] = self.height
        if self.confidence is not None:
            d["confidence"] = self.confidence
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "Page":
        if not isinstance(d, dict):
            return cls()
        prop = d.get("property") if isinstance(d.get("property"), dict) else {}
        return cls(
            blocks=[Block.from_dict(b) for b in _list_of(d, "blocks")],
            detected_languages=[
                DetectedLanguage.from_dict(lang)
                for lang in _list_of(prop, "detectedLanguages")
            ],
            width=_opt_float(d.get("width")),
            height=_opt_float(d.get("height")),
            confidence=_opt_float(d.get("confidence")),
        )


@dataclass
class TextAnnotation:
    """Root of the tree: the provider's full text plus its pages."""

    text: Optional[str] = None
    pages: List[Page] = field(default_factory=list)

    def iter_paragraphs(self):
        """Yield ``(page_index, block_index, paragraph_index, paragraph)``."""
        for pi, page in enumerate(self.pages):
            for bi, block in enumerate(page.blocks):
                for qi, para in enumerate(block.paragraphs):
                    yield pi, bi, qi, para

    def to_dict(self) -> dict:
        d: dict = {"pages": [p.to_dict() for p in self.pages]}
        if self.text is not None:
            d["text"] = self.text
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "TextAnnotation":
        if not isinstance(d, dict):
            return cls()
        text = d.get("text")
        return cls(
            text=text if isinstance(text, str) else None,
            pages=[Page.from_dict(p) for p in _list_of(d, "pages")],
        )


@dataclass
class SymbolRecord:
    """Flattened view of one Symbol with absolute geometry.

    Recreated on every reconstruction pass.  ``is_included`` is the result
    of caller-side filtering and is never computed by the engine itself.
    """

    text: str
    is_included: bool = True
    detected_break: Optional[BreakType] = None
    centroid_x: float = 0.0
    centroid_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    top_left_x: float = 0.0
    top_left_y: float = 0.0
    page_index: int = 0
    block_index: int = 0
    paragraph_index: int = 0
    word_index: int = 0
    symbol_index: int = 0
    original_index: int = 0

    def with_text(self, text: str) -> "SymbolRecord":
        """Copy of this record carrying different text."""
        return replace(self, text=text)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "text": self.text,
            "is_included": self.is_included,
            "detected_break": (
                self.detected_break.value if self.detected_break is not None else None
            ),
            "centroid_x": round(self.centroid_x, 3),
            "centroid_y": round(self.centroid_y, 3),
            "width": round(self.width, 3),
            "height": round(self.height, 3),
            "top_left_x": round(self.top_left_x, 3),
            "top_left_y": round(self.top_left_y, 3),
            "page_index": self.page_index,
            "block_index": self.block_index,
            "paragraph_index": self.paragraph_index,
            "word_index": self.word_index,
            "symbol_index": self.symbol_index,
            "original_index": self.original_index,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "SymbolRecord":
        """Deserialize from a dict produced by :meth:`to_dict`."""
        return cls(
            text=d.get("text", ""),
            is_included=d.get("is_included", True),
            detected_break=BreakType.parse(d.get("detected_break")),
            centroid_x=d.get("centroid_x", 0.0),
            centroid_y=d.get("centroid_y", 0.0),
            width=d.get("width", 0.0),
            height=d.get("height", 0.0),
            top_left_x=d.get("top_left_x", 0.0),
            top_left_y=d.get("top_left_y", 0.0),
            page_index=d.get("page_index", 0),
            block_index=d.get("block_index", 0),
            paragraph_index=d.get("paragraph_index", 0),
            word_index=d.get("word_index", 0),
            symbol_index=d.get("symbol_index", 0),
            original_index=d.get("original_index", 0),
        )
