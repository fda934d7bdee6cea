"""Unit tests for the spacing pipeline (space_markdown / apply_cjk_spacing)."""

import pytest

from cjk_spacing.config import SpacingOptions
from cjk_spacing.infrastructure.spacing.boundary import BoundarySpacer
from cjk_spacing.infrastructure.spacing.pipeline import (
    apply_cjk_spacing,
    space_inside_emphasis,
    space_markdown,
)


def _assert_stable(before: str, after: str, options: SpacingOptions = None) -> None:
    once = space_markdown(before, options)
    assert once == after
    assert space_markdown(once, options) == once


@pytest.mark.unit
class TestBoundaryInsertion:
    @pytest.mark.parametrize(
        "before,after",
        [
            ("中文字符串english中文字符串。", "中文字符串 english 中文字符串。"),
            ("日本語englishひらがな", "日本語 english ひらがな"),
            ("한글english한글", "한글 english 한글"),
            ("ﾊﾝｶｸｶﾀｶﾅenglish１２３全角数字", "ﾊﾝｶｸｶﾀｶﾅ english１２３全角数字"),
            ("中文   english", "中文 english"),
            ("foo_bar中文", "foo_bar 中文"),
            ("1文*あ-", "1 文 * あ -"),
        ],
    )
    def test_spaces_boundaries(self, before: str, after: str) -> None:
        _assert_stable(before, after)

    def test_empty_text(self) -> None:
        assert space_markdown("") == ""

    def test_text_without_cjk_unchanged(self) -> None:
        text = "plain *english* text with **bold** and `code`"
        assert space_markdown(text) == text


@pytest.mark.unit
class TestIgnoreRegions:
    def test_inline_math_gets_surrounding_spaces(self) -> None:
        _assert_stable(
            "这是一个数学公式$f(x)=x^2$这是一个数学公式",
            "这是一个数学公式 $f(x)=x^2$ 这是一个数学公式",
        )

    def test_inline_code_content_untouched(self) -> None:
        text = (
            "`test_case`\n"
            "`测试_一下_吧`\n"
            "`测试-几个-才行`\n"
            "`测试*一下*你们`\n"
            "`测试一下**你们**所有人`\n"
            "`this_测试-还*可以`\n"
            "`filepath = './知识_巴别图书馆.md'`\n"
            "`テスト_ＴＥＳＴ`"
        )
        assert space_markdown(text) == text

    def test_inline_math_content_untouched(self) -> None:
        text = "# Title Here\n\n$M0 = 现金$"
        assert space_markdown(text) == text

    @pytest.mark.parametrize(
        "text",
        [
            "*[[abs 接口]]*\n*[abs 接口](abs 接口.md)*",
            "**[[abs 接口]]**\n**[abs 接口](abs 接口.md)**",
            '<img src="中文small.png" />',
            "<u>自己想说的</u>",
            "![[流浪地球-1.webp|image title|600]]",
            "![[视频或者image文件34有数字]]\n![[完美网络42 [J0].mp4]]",
            "#标签A #标签2标签",
            "---\ntitle: 标题title\n---\n",
            "```\n中文english\n```",
        ],
    )
    def test_protected_regions_unchanged(self, text: str) -> None:
        assert space_markdown(text) == text

    def test_text_around_protected_regions_is_spaced(self) -> None:
        _assert_stable(
            "---\ntitle: 标题title\n---\n正文text内容\n```\n中文english\n```\n结尾end",
            "---\ntitle: 标题title\n---\n正文 text 内容\n```\n中文english\n```\n结尾 end",
        )


@pytest.mark.unit
class TestEmphasis:
    def test_bold_with_nested_italic(self) -> None:
        _assert_stable("这是**bold *with* italics**测试", "这是 **bold *with* italics** 测试")

    def test_italic_markers_stay_attached(self) -> None:
        _assert_stable(
            "_这是一个数学公式_\n*这是一个数学公式english*",
            "_这是一个数学公式_\n*这是一个数学公式 english*",
        )

    def test_content_inside_emphasis_is_spaced(self) -> None:
        _assert_stable("**_这是一_个数学公式**", "**_ 这是一 _ 个数学公式**")
        _assert_stable("*这是一hello__个数学world公式__*", "*这是一 hello__ 个数学 world 公式 __*")

    def test_bold_gap_removed_next_to_cjk_punctuation(self) -> None:
        _assert_stable("然后 **锁在仓库里不给国民吃** 。", "然后**锁在仓库里不给国民吃**。")

    def test_underscore_bold_stays_bold_next_to_cjk(self) -> None:
        _assert_stable("中文 __粗体__ 中文", "中文 __粗体__ 中文")
        _assert_stable("然后 __锁在仓库里__ 。", "然后 __锁在仓库里__。")

    def test_no_emphasis_across_blank_lines(self) -> None:
        text = (
            "你要做的，是一个“特种武器供应商”**。\n"
            "\n"
            "- **你的角色**： 拥有 C++/AI/数据分析能力的“技术取证专家”。"
        )
        _assert_stable(text, text)

    def test_placeholder_collision_still_spaces_text(self) -> None:
        text = "{EMPHASISPLACEHOLDER0}中文english"
        assert space_markdown(text) == "{EMPHASISPLACEHOLDER0}中文 english"

    def test_literal_ignore_placeholder_does_not_move_links(self) -> None:
        _assert_stable(
            "字面 {LINKPLACEHOLDER} 记号\n见[文档](a.md)",
            "字面 {LINKPLACEHOLDER} 记号\n见 [文档](a.md)",
        )


@pytest.mark.unit
class TestConfigurability:
    def test_dash_removed_from_both_sets(self) -> None:
        options = SpacingOptions(
            englishNonLetterCharactersAfterCJKCharacters="+'\"([¥$",
            englishNonLetterCharactersBeforeCJKCharacters="+;:'\"°%$)]",
        )
        _assert_stable("你好-世界", "你好-世界", options)

    def test_dash_in_default_sets(self) -> None:
        _assert_stable("你好-世界", "你好 - 世界")

    def test_whitespace_only_and_empty_sets(self) -> None:
        options = SpacingOptions(
            englishNonLetterCharactersAfterCJKCharacters="",
            englishNonLetterCharactersBeforeCJKCharacters=" \t",
        )
        _assert_stable("你好\t\t世界\nthis测试-还", "你好\t\t世界\nthis 测试-还", options)


@pytest.mark.unit
class TestPipelineStages:
    def test_apply_cjk_spacing_works_on_masked_text(self) -> None:
        text = "中文{LINKPLACEHOLDER}中文english"
        assert apply_cjk_spacing(text, SpacingOptions()) == "中文 {LINKPLACEHOLDER} 中文 english"

    def test_space_inside_emphasis_only_touches_content(self) -> None:
        spacer = BoundarySpacer("", "")
        text = "中文*斜体english*和**粗体english**"
        assert space_inside_emphasis(text, spacer) == "中文*斜体 english*和**粗体 english**"
