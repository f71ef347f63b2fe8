"""Tests for title/author fallback (editorial/core/translation/pipeline/metadata_extractor.py)."""

from editorial.core.translation.models import BilingualName, ParagraphPair
from editorial.core.translation.pipeline.metadata_extractor import (
    AUTHOR_RULES,
    apply_fallback,
    extract_author,
    extract_title,
    extract_title_author,
    first_match,
)


def pairs(*items):
    return [ParagraphPair(source=en, target=zh) for en, zh in items]


TOKYO = pairs(
    ("TOKYO WEEDS", "东京杂草"),
    ("By Amos Lee", "作者：阿莫斯·李"),
    ("The weeds grew everywhere that summer.", "那个夏天，杂草到处生长。"),
)


class TestExtractTitle:
    def test_short_first_line(self):
        assert extract_title(TOKYO[0]) == BilingualName(en="TOKYO WEEDS", zh="东京杂草")

    def test_sentence_is_not_a_title(self):
        pair = ParagraphPair(source="It was a cold morning.", target="那是一个寒冷的早晨。")
        assert extract_title(pair) is None

    def test_long_line_is_not_a_title(self):
        long_line = "A" * 61
        assert extract_title(ParagraphPair(source=long_line, target="")) is None

    def test_author_line_is_not_a_title(self):
        assert extract_title(TOKYO[1]) is None
        assert extract_title(ParagraphPair(source="Amos", target="作者：阿莫斯")) is None

    def test_empty_pair(self):
        assert extract_title(ParagraphPair(source="  ", target="")) is None

    def test_uses_first_line_of_multiline_paragraph(self):
        pair = ParagraphPair(source="\nTOKYO WEEDS\nA story", target="东京杂草\n故事")
        assert extract_title(pair) == BilingualName(en="TOKYO WEEDS", zh="东京杂草")


class TestExtractAuthor:
    def test_byline_in_second_pair(self):
        author = extract_author(TOKYO)
        assert author.en == "Amos Lee"
        assert author.zh == "阿莫斯·李"

    def test_english_label(self):
        author = extract_author(pairs(("Author: Jane Doe", "")))
        assert author == BilingualName(en="Jane Doe", zh="")

    def test_chinese_label_takes_priority_over_loose(self):
        assert first_match(AUTHOR_RULES, "zh", "作者：王小明。后记") == "王小明"

    def test_no_author(self):
        assert extract_author(pairs(("Once upon a time", "从前"))) is None

    def test_byline_requires_word_boundary(self):
        assert first_match(AUTHOR_RULES, "en", "Abby Road") is None


class TestApplyFallback:
    def test_fills_absent_title_and_author(self):
        """The TOKYO WEEDS scenario: engine returned empty metadata."""
        title, author = apply_fallback(BilingualName(), BilingualName(), TOKYO)

        assert title == BilingualName(en="TOKYO WEEDS", zh="东京杂草")
        assert author.en == "Amos Lee"

    def test_dash_placeholders_count_as_absent(self):
        title, author = apply_fallback(
            BilingualName(en="-", zh="—"), BilingualName(en="–", zh=" "), TOKYO
        )
        assert title.en == "TOKYO WEEDS"
        assert author.en == "Amos Lee"

    def test_present_values_are_kept(self):
        given_title = BilingualName(en="Weeds", zh="杂草")
        given_author = BilingualName(en="A. Lee", zh="李")

        title, author = apply_fallback(given_title, given_author, TOKYO)

        assert title is given_title
        assert author is given_author

    def test_idempotent(self):
        once = apply_fallback(BilingualName(), BilingualName(), TOKYO)
        twice = apply_fallback(once[0], once[1], TOKYO)
        assert once == twice

    def test_only_first_four_pairs_are_scanned(self):
        body = pairs(*[(f"Paragraph {i}.", f"第{i}段。") for i in range(4)])
        late = body + pairs(("By Late Author", ""))

        assert extract_title_author(late).author is None

    def test_nothing_found_leaves_empty(self):
        body = pairs(("It rained.", "下雨了。"))
        title, author = apply_fallback(BilingualName(), BilingualName(), body)
        assert title.is_absent()
        assert author.is_absent()
