"""Character classification helpers shared by the spacing passes.

Every predicate takes a single character (or ``""`` for "no character",
e.g. past the start or end of the text) and returns False for ``""``.
"""

from __future__ import annotations

import regex as re

from cjk_spacing.infrastructure.spacing.constants import (
    CJK_PUNCTUATION,
    CJK_SCRIPT_CLASS,
    EMPHASIS_SPACING_TRIGGERS,
    LINE_BREAK_CHARACTERS,
    SPACING_CHARACTERS,
)

_CJK_CHAR = re.compile(rf"[{CJK_SCRIPT_CLASS}]")
# Unicode punctuation and symbols, as CommonMark uses for emphasis flanking
_PUNCTUATION_CHAR = re.compile(r"[\p{P}\p{S}]")


def is_cjk_char(char: str) -> bool:
    return char != "" and _CJK_CHAR.fullmatch(char) is not None


def is_cjk_punctuation(char: str) -> bool:
    return char != "" and char in CJK_PUNCTUATION


def is_punctuation_char(char: str) -> bool:
    return char != "" and _PUNCTUATION_CHAR.fullmatch(char) is not None


def is_english_or_number_char(char: str) -> bool:
    return char != "" and char.isascii() and char.isalnum()


def is_emphasis_spacing_trigger(char: str) -> bool:
    return char != "" and char in EMPHASIS_SPACING_TRIGGERS


def is_english_like_after_cjk(char: str, english_after_cjk: str) -> bool:
    """Whether ``char`` reads as Latin text when it follows a CJK character."""
    if char == "":
        return False
    return (
        is_english_or_number_char(char)
        or char in english_after_cjk
        or is_emphasis_spacing_trigger(char)
    )


def is_english_like_before_cjk(char: str, english_before_cjk: str) -> bool:
    """Whether ``char`` reads as Latin text when it precedes a CJK character."""
    if char == "":
        return False
    return (
        is_english_or_number_char(char)
        or char in english_before_cjk
        or is_emphasis_spacing_trigger(char)
    )


def is_spacing_char(char: str) -> bool:
    return char != "" and char in SPACING_CHARACTERS


def is_line_break(char: str) -> bool:
    return char != "" and char in LINE_BREAK_CHARACTERS


def first_non_whitespace_char(text: str) -> str:
    for char in text:
        if not char.isspace():
            return char
    return ""


def last_non_whitespace_char(text: str) -> str:
    for char in reversed(text):
        if not char.isspace():
            return char
    return ""
