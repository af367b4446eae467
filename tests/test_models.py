"""Tests for ocrlayout.models — tree parsing and record invariants."""

import math

from conftest import make_poly, make_record

from ocrlayout.models import (
    BoundingPolygon,
    BreakType,
    DetectedBreak,
    Symbol,
    SymbolRecord,
    TextAnnotation,
    Vertex,
)

VISION_JSON = {
    "text": "Hi\n",
    "pages": [
        {
            "property": {
                "detectedLanguages": [
                    {"languageCode": "en", "confidence": 0.98},
                    {"languageCode": "fr", "confidence": 0.02},
                ]
            },
            "width": 200,
            "height": 100,
            "blocks": [
                {
                    "blockType": "TEXT",
                    "boundingBox": {"vertices": [{"x": 1, "y": 2}, {"x": 30, "y": 2}, {"x": 30, "y": 20}, {"x": 1, "y": 20}]},
                    "paragraphs": [
                        {
                            "boundingBox": {"vertices": [{"x": 1, "y": 2}, {"x": 30, "y": 2}, {"x": 30, "y": 20}, {"x": 1, "y": 20}]},
                            "words": [
                                {
                                    "symbols": [
                                        {
                                            "text": "H",
                                            "boundingBox": {"vertices": [{"y": 2}, {"x": 10, "y": 2}, {"x": 10, "y": 20}, {"y": 20}]},
                                        },
                                        {
                                            "text": "i",
                                            "property": {"detectedBreak": {"type": "LINE_BREAK"}},
                                            "boundingBox": {"vertices": [{"x": 12, "y": 2}, {"x": 30, "y": 2}, {"x": 30, "y": 20}, {"x": 12, "y": 20}]},
                                        },
                                    ]
                                }
                            ],
                        }
                    ],
                }
            ],
        }
    ],
}


class TestBreakType:
    def test_parse_known(self):
        assert BreakType.parse("SPACE") is BreakType.SPACE
        assert BreakType.parse("eol_sure_space") is BreakType.EOL_SURE_SPACE

    def test_parse_absent(self):
        assert BreakType.parse(None) is None
        assert BreakType.parse("") is None

    def test_parse_unknown(self):
        assert BreakType.parse("SOMETHING_NEW") is BreakType.UNKNOWN

    def test_str_equality(self):
        assert BreakType.HYPHEN == "HYPHEN"


class TestBoundingPolygon:
    def test_extents(self):
        poly = make_poly(10, 20, 30, 40)
        assert poly.extents() == (10, 20, 40, 60)

    def test_missing_coordinate_ignored(self):
        poly = BoundingPolygon([Vertex(None, 5), Vertex(10, 5), Vertex(10, 9), Vertex(None, 9)])
        assert poly.extents() == (10, 5, 10, 9)

    def test_missing_coordinate_as_zero(self):
        poly = BoundingPolygon([Vertex(None, 5), Vertex(10, 5), Vertex(10, 9), Vertex(None, 9)])
        assert poly.extents(missing_as_zero=True) == (0, 5, 10, 9)

    def test_axis_without_values(self):
        poly = BoundingPolygon([Vertex(None, 1), Vertex(None, 2), Vertex(None, 3)])
        assert poly.extents() is None
        assert poly.min_x() == math.inf
        assert poly.min_y() == 1

    def test_degenerate(self):
        assert BoundingPolygon([Vertex(0, 0), Vertex(1, 1)]).is_degenerate()
        assert not make_poly(0, 0, 1, 1).is_degenerate()

    def test_empty_min(self):
        assert BoundingPolygon().min_x() == math.inf
        assert BoundingPolygon().first_vertex() is None


class TestTreeParsing:
    def test_from_dict(self):
        ann = TextAnnotation.from_dict(VISION_JSON)
        assert ann.text == "Hi\n"
        page = ann.pages[0]
        assert page.width == 200.0
        assert [lang.language_code for lang in page.detected_languages] == ["en", "fr"]
        block = page.blocks[0]
        assert block.block_type == "TEXT"
        sym_h, sym_i = block.paragraphs[0].words[0].symbols
        assert sym_h.text == "H"
        assert sym_h.bounding_poly.vertices[0].x is None
        assert sym_h.break_type is None
        assert sym_i.break_type is BreakType.LINE_BREAK

    def test_missing_collections_become_empty(self):
        ann = TextAnnotation.from_dict({"pages": [{"blocks": [{}]}]})
        assert ann.text is None
        assert ann.pages[0].blocks[0].paragraphs == []
        assert ann.pages[0].blocks[0].bounding_poly is None
        assert ann.pages[0].detected_languages == []

    def test_non_dict_input(self):
        assert TextAnnotation.from_dict(None).pages == []
        assert TextAnnotation.from_dict({"pages": "nope"}).pages == []

    def test_bounding_poly_key(self):
        sym = Symbol.from_dict({"text": "x", "boundingPoly": {"vertices": [{"x": 1, "y": 1}]}})
        assert sym.bounding_poly is not None
        assert len(sym.bounding_poly) == 1

    def test_to_dict_round_trip(self):
        ann = TextAnnotation.from_dict(VISION_JSON)
        again = TextAnnotation.from_dict(ann.to_dict())
        assert again == ann

    def test_text_helpers(self):
        ann = TextAnnotation.from_dict(VISION_JSON)
        para = ann.pages[0].blocks[0].paragraphs[0]
        assert para.words[0].text() == "Hi"
        assert para.text() == "Hi"

    def test_iter_paragraphs(self):
        ann = TextAnnotation.from_dict(VISION_JSON)
        assert [(p, b, q) for p, b, q, _ in ann.iter_paragraphs()] == [(0, 0, 0)]


class TestSymbolRecord:
    def test_defaults(self):
        rec = SymbolRecord(text="a")
        assert rec.is_included is True
        assert rec.width == 0.0
        assert rec.detected_break is None

    def test_with_text_copies(self):
        rec = make_record("-", 0, 0, brk="HYPHEN")
        other = rec.with_text("——")
        assert other.text == "——"
        assert rec.text == "-"
        assert other.detected_break is BreakType.HYPHEN

    def test_to_dict_round_trip(self):
        rec = make_record("字", 10.12345, 20, included=False, brk="SPACE", index=7)
        restored = SymbolRecord.from_dict(rec.to_dict())
        assert restored.text == "字"
        assert restored.is_included is False
        assert restored.detected_break is BreakType.SPACE
        assert restored.top_left_x == round(10.12345, 3)
        assert restored.original_index == 7

    def test_detected_break_dict(self):
        brk = DetectedBreak(type=BreakType.SPACE, is_prefix=True)
        assert brk.to_dict() == {"type": "SPACE", "isPrefix": True}
        assert DetectedBreak.from_dict(brk.to_dict()) == brk
