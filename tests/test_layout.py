"""Tests for ocrlayout.layout — the four reconstruction strategies."""

import pytest
from conftest import (
    line_of_symbols,
    make_annotation,
    make_paragraph,
    make_poly,
    make_record,
    make_symbol,
)

from ocrlayout.config import LayoutConfig
from ocrlayout.flatten import flatten_symbols
from ocrlayout.layout import (
    horizontal_paragraph_text,
    horizontal_parallel_text,
    vertical_paragraph_text,
    vertical_parallel_text,
)
from ocrlayout.models import TextAnnotation

ALL_STRATEGIES = [
    horizontal_parallel_text,
    horizontal_paragraph_text,
    vertical_parallel_text,
    vertical_paragraph_text,
]


def _hyphenated():
    """"co-" on one line, "op" on the next, one paragraph."""
    words = [
        [
            make_symbol("c", 0, 0),
            make_symbol("o", 12, 0),
            make_symbol("-", 24, 0, brk="HYPHEN"),
            make_symbol("o", 0, 20),
            make_symbol("p", 12, 20, brk="LINE_BREAK"),
        ]
    ]
    return make_annotation([make_paragraph(words, make_poly(0, 0, 34, 30))], language="en")


class TestEmptyInput:
    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_no_records(self, strategy, hello_world):
        assert strategy(hello_world, [], "en") == ""

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_no_annotation(self, strategy):
        assert strategy(None, None, "en") == ""

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_empty_annotation(self, strategy):
        ann = TextAnnotation()
        assert strategy(ann, flatten_symbols(ann), "en") == ""


class TestHorizontalParallel:
    def test_english(self, hello_world):
        recs = flatten_symbols(hello_world)
        assert horizontal_parallel_text(hello_world, recs, "en") == "Hello, World.\nBye."

    def test_chinese_punctuation_and_no_spaces(self, hello_world):
        recs = flatten_symbols(hello_world)
        assert horizontal_parallel_text(hello_world, recs, "zh") == "Hello，World。\nBye。"

    def test_excluded_symbols_dropped(self, hello_world):
        recs = flatten_symbols(hello_world, included=lambda r: r.text != "W")
        assert horizontal_parallel_text(hello_world, recs, "en") == "Hello, orld.\nBye."

    def test_document_order_kept(self):
        recs = [make_record("b", 50, 0), make_record("a", 0, 0)]
        assert horizontal_parallel_text(None, recs, "en") == "ba"

    def test_hyphen_not_skipped(self):
        ann = _hyphenated()
        recs = flatten_symbols(ann)
        assert horizontal_parallel_text(ann, recs, "en") == "co-\nop"

    def test_fast_path_english(self):
        ann = make_annotation([make_paragraph(line_of_symbols("Hello, World."))], text="Hello, World.")
        recs = flatten_symbols(ann, included=lambda r: False)
        diag = {}
        assert horizontal_parallel_text(ann, recs, "en", diagnostics=diag) == "Hello, World."
        assert diag["fast_path"] is True

    def test_fast_path_chinese(self):
        ann = make_annotation([make_paragraph(line_of_symbols("Hello, World."))], text="Hello, World.")
        recs = flatten_symbols(ann, included=lambda r: False)
        assert horizontal_parallel_text(ann, recs, "zh") == "Hello， World。"

    def test_no_fast_path_without_full_text(self, hello_world):
        hello_world.text = None
        recs = flatten_symbols(hello_world, included=lambda r: False)
        assert horizontal_parallel_text(hello_world, recs, "en") == ""

    def test_diagnostics(self, hello_world):
        recs = flatten_symbols(hello_world)
        diag = {}
        horizontal_parallel_text(hello_world, recs, "en", diagnostics=diag)
        assert diag == {"fast_path": False, "symbols_included": len(recs)}


class TestHorizontalParagraph:
    def test_english(self, hello_world):
        recs = flatten_symbols(hello_world)
        assert horizontal_paragraph_text(hello_world, recs, "en") == "Hello, World.\n\nBye."

    def test_paragraphs_sorted_by_top_edge(self):
        low = make_paragraph([[make_symbol("B", 0, 50)]], make_poly(0, 50, 10, 10))
        high = make_paragraph([[make_symbol("A", 0, 0)]], make_poly(0, 0, 10, 10))
        unplaced = make_paragraph([[make_symbol("C", 0, 100)]])
        ann = make_annotation([unplaced, low, high])
        recs = flatten_symbols(ann)
        assert horizontal_paragraph_text(ann, recs, "en") == "A\n\nB\n\nC"

    def test_hyphen_skipped(self):
        ann = _hyphenated()
        recs = flatten_symbols(ann)
        assert horizontal_paragraph_text(ann, recs, "en") == "coop"

    def test_hyphen_kept_for_chinese(self):
        ann = _hyphenated()
        recs = flatten_symbols(ann)
        assert horizontal_paragraph_text(ann, recs, "zh") == "co——op"

    def test_excluded_paragraph_omitted(self, hello_world):
        recs = flatten_symbols(hello_world, included=lambda r: r.centroid_y > 40)
        assert horizontal_paragraph_text(hello_world, recs, "en") == "Bye."

    def test_unmatched_symbols_count_as_excluded(self, hello_world):
        recs = flatten_symbols(hello_world)
        for rec in recs:
            rec.centroid_x += 20
        diag = {}
        assert horizontal_paragraph_text(hello_world, recs, "en", diagnostics=diag) == ""
        assert diag["match_misses"] == len(recs)
        assert diag["paragraphs"] == 0

    def test_small_offsets_still_match(self, hello_world):
        recs = flatten_symbols(hello_world)
        for rec in recs:
            rec.centroid_x += 4
            rec.centroid_y -= 4
        assert horizontal_paragraph_text(hello_world, recs, "en") == "Hello, World.\n\nBye."

    def test_custom_separator(self, hello_world):
        cfg = LayoutConfig(paragraph_separator=" | ")
        recs = flatten_symbols(hello_world)
        assert horizontal_paragraph_text(hello_world, recs, "en", cfg) == "Hello, World. | Bye."


class TestVerticalParallel:
    def test_two_columns(self, vertical_two_columns):
        recs = flatten_symbols(vertical_two_columns)
        assert vertical_parallel_text(vertical_two_columns, recs, "ja") == "縦書き\n文字"

    def test_three_symbol_scenario(self):
        recs = [make_record("A", 0, 0), make_record("B", 8, 0), make_record("C", 0, 12)]
        assert vertical_parallel_text(None, recs, "ja") == "B\nAC"

    def test_excluded_dropped(self, vertical_two_columns):
        recs = flatten_symbols(vertical_two_columns, included=lambda r: r.text != "書")
        assert vertical_parallel_text(vertical_two_columns, recs, "ja") == "縦き\n文字"

    def test_only_included_false(self, vertical_two_columns):
        recs = flatten_symbols(vertical_two_columns, included=lambda r: False)
        assert vertical_parallel_text(vertical_two_columns, recs, "ja", only_included=False) == "縦書き\n文字"
        assert vertical_parallel_text(vertical_two_columns, recs, "ja") == ""

    def test_punctuation_substituted(self):
        recs = [make_record("字", 0, 0, w=20, h=20), make_record(".", 0, 22, w=20, h=20)]
        assert vertical_parallel_text(None, recs, "ja") == "字。"

    def test_records_not_modified(self):
        recs = [make_record(",", 0, 0)]
        vertical_parallel_text(None, recs, "zh")
        assert recs[0].text == ","

    def test_diagnostics(self, vertical_two_columns):
        recs = flatten_symbols(vertical_two_columns)
        diag = {}
        vertical_parallel_text(vertical_two_columns, recs, "ja", diagnostics=diag)
        assert diag == {"symbols_included": 5, "columns": 2}


class TestVerticalParagraph:
    def test_columns_concatenated(self, vertical_two_columns):
        recs = flatten_symbols(vertical_two_columns)
        assert vertical_paragraph_text(vertical_two_columns, recs, "ja") == "縦書き文字"

    def test_paragraphs_right_to_left(self):
        right = make_paragraph([[make_symbol("右", 100, 0, 20, 20)]], make_poly(100, 0, 20, 20))
        left = make_paragraph([[make_symbol("左", 10, 0, 20, 20)]], make_poly(10, 0, 20, 20))
        ann = make_annotation([left, right], language="ja")
        recs = flatten_symbols(ann)
        assert vertical_paragraph_text(ann, recs, "ja") == "右\n\n左"

    def test_unplaced_paragraph_first(self):
        right = make_paragraph([[make_symbol("右", 100, 0, 20, 20)]], make_poly(100, 0, 20, 20))
        unplaced = make_paragraph([[make_symbol("無", 50, 0, 20, 20)]])
        ann = make_annotation([right, unplaced], language="ja")
        recs = flatten_symbols(ann)
        assert vertical_paragraph_text(ann, recs, "ja") == "無\n\n右"

    def test_top_left_tolerance(self, vertical_two_columns):
        recs = flatten_symbols(vertical_two_columns)
        for rec in recs:
            rec.top_left_x += 2
        assert vertical_paragraph_text(vertical_two_columns, recs, "ja") == ""

        recs = flatten_symbols(vertical_two_columns)
        for rec in recs:
            rec.top_left_x += 1.5
        assert vertical_paragraph_text(vertical_two_columns, recs, "ja") == "縦書き文字"

    def test_line_breaks_stripped(self):
        para = make_paragraph([[make_symbol("縦\n", 0, 0, 20, 20), make_symbol("字", 0, 22, 20, 20)]])
        ann = make_annotation([para], language="ja")
        recs = flatten_symbols(ann)
        assert vertical_paragraph_text(ann, recs, "ja") == "縦字"

    def test_excluded_paragraph_omitted(self):
        right = make_paragraph([[make_symbol("右", 100, 0, 20, 20)]], make_poly(100, 0, 20, 20))
        left = make_paragraph([[make_symbol("左", 10, 0, 20, 20)]], make_poly(10, 0, 20, 20))
        ann = make_annotation([left, right], language="ja")
        recs = flatten_symbols(ann, included=[False, True])
        diag = {}
        assert vertical_paragraph_text(ann, recs, "ja", diagnostics=diag) == "右"
        assert diag["paragraphs"] == 1
        assert diag["match_misses"] == 0
