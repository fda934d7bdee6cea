"""Unit tests for CJK/Latin boundary spacing."""

import pytest

from cjk_spacing.config import SpacingOptions
from cjk_spacing.infrastructure.spacing.boundary import (
    BoundarySpacer,
    build_head_pattern,
    reinsert_ignore_exception_spacing,
    space_boundaries,
)

DEFAULT_AFTER = "-+'\"([¥$"
DEFAULT_BEFORE = "-+;:'\"°%$)]"


@pytest.mark.unit
class TestSpaceBoundaries:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("中文english中文", "中文 english 中文"),
            ("中文123中文", "中文 123 中文"),
            ("中文   english", "中文 english"),
            ("english   中文", "english 中文"),
            ("中文 english 中文", "中文 english 中文"),
            ("foo_bar中文", "foo_bar 中文"),
            ("中文[link](url)中文", "中文 [link](url) 中文"),
            ("中文`code`中文", "中文 `code` 中文"),
            ("价格$100元", "价格 $100 元"),
            ("增长50%左右", "增长 50% 左右"),
        ],
    )
    def test_default_sets(self, text: str, expected: str) -> None:
        assert space_boundaries(text, DEFAULT_AFTER, DEFAULT_BEFORE) == expected

    def test_full_width_letters_are_not_latin(self) -> None:
        assert space_boundaries("中文ＡＢＣ中文", DEFAULT_AFTER, DEFAULT_BEFORE) == "中文ＡＢＣ中文"

    def test_cjk_punctuation_untouched(self) -> None:
        assert space_boundaries("你好，world。", DEFAULT_AFTER, DEFAULT_BEFORE) == "你好，world。"

    def test_empty_sets_only_space_words(self) -> None:
        assert space_boundaries("你好-世界", "", "") == "你好-世界"
        assert space_boundaries("你好-世界", DEFAULT_AFTER, DEFAULT_BEFORE) == "你好 - 世界"

    def test_set_characters_are_escaped(self) -> None:
        assert space_boundaries("中]文", "]^\\", "") == "中 ]文"
        assert space_boundaries("中^文", "]^\\", "") == "中 ^文"

    def test_tabs_and_newlines_are_not_collapsed(self) -> None:
        assert space_boundaries("中文\tenglish", "", "") == "中文\tenglish"
        assert space_boundaries("中文\nenglish", "", "") == "中文\nenglish"

    def test_asterisk_alternatives(self) -> None:
        assert space_boundaries("中文*x", "", "") == "中文 *x"
        assert space_boundaries("x*中文", "", "") == "x* 中文"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1文*あ-", "1 文 * あ -"),
            ("文*あ*文", "文 * あ * 文"),
            ("-あ*文", "- あ * 文"),
        ],
    )
    def test_asterisk_neighbour_still_spaced_in_same_pass(
        self, text: str, expected: str
    ) -> None:
        once = space_boundaries(text, DEFAULT_AFTER, DEFAULT_BEFORE)
        assert once == expected
        assert space_boundaries(once, DEFAULT_AFTER, DEFAULT_BEFORE) == once


@pytest.mark.unit
class TestBoundarySpacer:
    def test_from_options(self) -> None:
        spacer = BoundarySpacer.from_options(
            SpacingOptions(english_like_after_cjk="", english_like_before_cjk="")
        )
        assert spacer("你好-世界abc") == "你好-世界 abc"

    def test_fixed_point(self) -> None:
        spacer = BoundarySpacer(DEFAULT_AFTER, DEFAULT_BEFORE)
        once = spacer("日本語englishひらがな123한글")
        assert once == "日本語 english ひらがな 123 한글"
        assert spacer(once) == once

    def test_patterns_are_cached(self) -> None:
        assert build_head_pattern("-+") is build_head_pattern("-+")


@pytest.mark.unit
class TestReinsertIgnoreExceptionSpacing:
    @pytest.mark.parametrize(
        "placeholder",
        [
            "{LINKPLACEHOLDER}",
            "{INLINEMATHPLACEHOLDER}",
            "{INLINECODEPLACEHOLDER}",
            "{WIKILINKPLACEHOLDER}",
        ],
    )
    def test_spaces_cjk_next_to_placeholder(self, placeholder: str) -> None:
        text = f"中文{placeholder}中文"
        assert reinsert_ignore_exception_spacing(text) == f"中文 {placeholder} 中文"

    def test_collapses_existing_spaces(self) -> None:
        text = "中文   {LINKPLACEHOLDER}   中文"
        assert reinsert_ignore_exception_spacing(text) == "中文 {LINKPLACEHOLDER} 中文"

    @pytest.mark.parametrize(
        "placeholder",
        ["{TAGPLACEHOLDER}", "{IMAGEPLACEHOLDER}", "{HTMLPLACEHOLDER}"],
    )
    def test_other_placeholders_untouched(self, placeholder: str) -> None:
        text = f"中文{placeholder}中文"
        assert reinsert_ignore_exception_spacing(text) == text
