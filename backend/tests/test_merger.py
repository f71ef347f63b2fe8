"""Tests for positional merging (editorial/core/translation/pipeline/merger.py)."""

import pytest

from editorial.core.translation.models import ParagraphPair
from editorial.core.translation.pipeline.merger import (
    ElementKind,
    classify_element,
    merge_element,
    merge_translation,
)

SOURCES = ["First.", "Second.", "Third."]


class TestClassifyElement:
    @pytest.mark.parametrize(
        "element, kind",
        [
            ("译文", ElementKind.PLAIN_TEXT),
            ({"zh": "译文"}, ElementKind.TARGET_ONLY),
            ({"en": "Echo", "zh": "译文"}, ElementKind.TARGET_ONLY),
            ({"en": "Echo"}, ElementKind.SOURCE_ONLY),
            (None, ElementKind.MALFORMED),
            (42, ElementKind.MALFORMED),
            (["nested"], ElementKind.MALFORMED),
            ({"text": "unrelated"}, ElementKind.MALFORMED),
        ],
    )
    def test_shapes(self, element, kind):
        assert classify_element(element) is kind


class TestMergeElement:
    def test_plain_text(self):
        assert merge_element("First.", "第一。") == ParagraphPair(source="First.", target="第一。")

    def test_target_object_keeps_original_source(self):
        pair = merge_element("First.", {"en": "Paraphrased", "zh": "第一。"})
        assert pair.source == "First."
        assert pair.target == "第一。"

    def test_null_target_is_empty(self):
        assert merge_element("First.", {"zh": None}).target == ""

    def test_source_only_object(self):
        pair = merge_element("First.", {"en": "Recovered"})
        assert pair.source == "Recovered"
        assert pair.target == ""

    def test_malformed_element(self):
        assert merge_element("First.", 7) == ParagraphPair(source="First.", target="")


class TestMergeTranslation:
    """Output always has one pair per source paragraph."""

    def test_exact_length(self):
        pairs = merge_translation(SOURCES, ["一", "二", "三"])
        assert [(p.source, p.target) for p in pairs] == [
            ("First.", "一"),
            ("Second.", "二"),
            ("Third.", "三"),
        ]

    def test_short_array_pads_with_empty_targets(self):
        pairs = merge_translation(SOURCES, ["一"])
        assert len(pairs) == 3
        assert [p.target for p in pairs] == ["一", "", ""]
        assert [p.source for p in pairs] == SOURCES

    def test_long_array_is_truncated(self):
        pairs = merge_translation(SOURCES, ["一", "二", "三", "四", "五"])
        assert [p.target for p in pairs] == ["一", "二", "三"]

    @pytest.mark.parametrize("raw", [None, "整段", {"translation": []}, 3])
    def test_non_list_is_all_missing(self, raw):
        pairs = merge_translation(SOURCES, raw)
        assert [p.target for p in pairs] == ["", "", ""]

    def test_mixed_elements(self):
        pairs = merge_translation(SOURCES, ["一", {"zh": "二"}, {"en": "Third!"}])
        assert [(p.source, p.target) for p in pairs] == [
            ("First.", "一"),
            ("Second.", "二"),
            ("Third!", ""),
        ]


def test_pair_wire_format():
    pair = ParagraphPair(source="First.", target="第一。")
    assert pair.model_dump(by_alias=True) == {"en": "First.", "zh": "第一。"}
    assert ParagraphPair.model_validate({"en": "A", "zh": "甲"}).target == "甲"
