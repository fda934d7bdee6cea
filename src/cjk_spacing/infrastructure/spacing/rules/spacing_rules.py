"""中英文混排空格规则集合。"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import regex as re

from cjk_spacing.config import SpacingOptions, get_settings
from cjk_spacing.infrastructure.spacing.pipeline import space_markdown
from cjk_spacing.infrastructure.spacing.registry import RuleCategory, rule

_TRAILING_WHITESPACE = re.compile(r"[ \t]+$", re.MULTILINE)
# Markdown 硬换行：行尾恰好两个空格
_HARD_BREAK = "  "


def _strip_unless_hard_break(match: re.Match) -> str:
    """删除行尾空白，但保留非空行末尾的硬换行。"""
    text = match.string
    at_line_start = match.start() == 0 or text[match.start() - 1] == "\n"
    if match.group(0) == _HARD_BREAK and not at_line_start:
        return _HARD_BREAK
    return ""


def _resolve_options(
    english_like_after_cjk: Optional[str],
    english_like_before_cjk: Optional[str],
) -> SpacingOptions:
    """未指定（None）的选项取自环境配置。"""
    defaults = get_settings().default_options()
    return SpacingOptions(
        english_like_after_cjk=(
            defaults.english_like_after_cjk
            if english_like_after_cjk is None
            else english_like_after_cjk
        ),
        english_like_before_cjk=(
            defaults.english_like_before_cjk
            if english_like_before_cjk is None
            else english_like_before_cjk
        ),
    )


@rule(
    name="space_between_cjk_and_english",
    category=RuleCategory.SPACING,
    description="在中日韩文字与英文字母、数字及标点之间插入一个空格",
)
def space_between_cjk_and_english(
    value: Any,
    english_like_after_cjk: Optional[str] = None,
    english_like_before_cjk: Optional[str] = None,
) -> Any:
    """
    为 Markdown 文本的中英文边界补齐空格。

    选项为 None 时使用环境配置
    （``CJK_SPACING_ENGLISH_LIKE_AFTER_CJK`` / ``..._BEFORE_CJK``）。
    """
    if value is None:
        return None

    if not isinstance(value, str):
        return value

    options = _resolve_options(english_like_after_cjk, english_like_before_cjk)
    return space_markdown(value, options)


@rule(
    name="trim_trailing_whitespace",
    category=RuleCategory.CONTENT,
    description="移除行尾空格和制表符，保留两个空格的硬换行",
)
def trim_trailing_whitespace(value: Any) -> Any:
    """逐行去除行尾空白。"""
    if value is None:
        return None

    if not isinstance(value, str):
        return value

    return _TRAILING_WHITESPACE.sub(_strip_unless_hard_break, value)


# Documented before/after pairs of space_between_cjk_and_english
RULE_EXAMPLES: List[Dict[str, str]] = [
    {
        "description": "Space between Chinese and English",
        "before": "中文字符串english中文字符串。",
        "after": "中文字符串 english 中文字符串。",
    },
    {
        "description": "Space between Chinese and link",
        "before": "中文字符串[english](http://example.com)中文字符串。",
        "after": "中文字符串 [english](http://example.com) 中文字符串。",
    },
    {
        "description": "Space between Chinese and inline code",
        "before": "中文字符串`code`中文字符串。",
        "after": "中文字符串 `code` 中文字符串。",
    },
    {
        "description": "No space between Chinese and English in tag",
        "before": "#标签A #标签2标签",
        "after": "#标签A #标签2标签",
    },
    {
        "description": "Emphasis markers stay attached to their content",
        "before": (
            "_这是一个数学公式_\n"
            "*这是一个数学公式english*\n"
            "\n"
            "**_这是一_个数学公式**\n"
            "*这是一hello__个数学world公式__*"
        ),
        "after": (
            "_这是一个数学公式_\n"
            "*这是一个数学公式 english*\n"
            "\n"
            "**_ 这是一 _ 个数学公式**\n"
            "*这是一 hello__ 个数学 world 公式 __*"
        ),
    },
    {
        "description": "Images and links are ignored",
        "before": (
            "[[这是一个数学公式english]]\n"
            "![[这是一个数学公式english.jpg]]\n"
            "[这是一个数学公式english](这是一个数学公式english.md)\n"
            "![这是一个数学公式english](这是一个数学公式english.jpg)"
        ),
        "after": (
            "[[这是一个数学公式english]]\n"
            "![[这是一个数学公式english.jpg]]\n"
            "[这是一个数学公式english](这是一个数学公式english.md)\n"
            "![这是一个数学公式english](这是一个数学公式english.jpg)"
        ),
    },
    {
        "description": "Space between CJK and English",
        "before": (
            "日本語englishひらがな\n"
            "カタカナenglishカタカナ\n"
            "ﾊﾝｶｸｶﾀｶﾅenglish１２３全角数字\n"
            "한글english한글"
        ),
        "after": (
            "日本語 english ひらがな\n"
            "カタカナ english カタカナ\n"
            "ﾊﾝｶｸｶﾀｶﾅ english１２３全角数字\n"
            "한글 english 한글"
        ),
    },
]
