"""
CJK/Latin boundary spacing.

Two patterns do the work:

- *head*: a CJK character, any run of spaces, then a Latin-like token
  (a Markdown link, an inline code span, a word ``[A-Za-z0-9_]+``, one of
  the configured after-CJK characters, or a lone asterisk);
- *tail*: the mirror image, a Latin-like token, spaces, then a CJK character.

Each match is rewritten with exactly one space between the two sides, so the
transform is a fixed point on text that is already spaced.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

import regex as re

from cjk_spacing.config.options import SpacingOptions, normalize_character_set
from cjk_spacing.infrastructure.spacing.constants import CJK_SCRIPT_CLASS
from cjk_spacing.markdown.ignore_types import IgnoreTypes

_CJK = rf"[{CJK_SCRIPT_CLASS}]"
_MARKDOWN_LINK = r"\[[^\[]*\]\(.*\)"
_INLINE_CODE = r"`[^`]*`"
_WORD = r"[A-Za-z0-9_]+"

# Ignore regions that still need a visible space from adjacent CJK text
IGNORE_EXCEPTION_TYPES = (
    IgnoreTypes.LINK,
    IgnoreTypes.INLINE_MATH,
    IgnoreTypes.INLINE_CODE,
    IgnoreTypes.WIKI_LINK,
)
_EXCEPTION_PLACEHOLDERS = "|".join(
    re.escape(kind.placeholder) for kind in IGNORE_EXCEPTION_TYPES
)
_EXCEPTION_HEAD = re.compile(rf"({_CJK})( *)({_EXCEPTION_PLACEHOLDERS})")
_EXCEPTION_TAIL = re.compile(rf"({_EXCEPTION_PLACEHOLDERS})( *)({_CJK})")

_CLASS_SPECIALS = set("\\]^-[")


def _escape_for_class(characters: str) -> str:
    return "".join("\\" + char if char in _CLASS_SPECIALS else char for char in characters)


def _punctuation_alternative(characters: Optional[str]) -> str:
    """``|[...]`` for a non-empty character set, ``""`` otherwise."""
    characters = normalize_character_set(characters)
    if not characters:
        return ""
    return f"|[{_escape_for_class(characters)}]"


@lru_cache(maxsize=32)
def build_head_pattern(english_after_cjk: Optional[str]) -> re.Pattern:
    extra = _punctuation_alternative(english_after_cjk)
    return re.compile(
        rf"({_CJK})( *)({_MARKDOWN_LINK}|{_INLINE_CODE}|{_WORD}{extra}|\*(?=[^*]))"
    )


@lru_cache(maxsize=32)
def build_tail_pattern(english_before_cjk: Optional[str]) -> re.Pattern:
    extra = _punctuation_alternative(english_before_cjk)
    return re.compile(
        rf"({_MARKDOWN_LINK}|{_INLINE_CODE}|{_WORD}{extra}|(?<=[^*])\*)( *)({_CJK})"
    )


class BoundarySpacer:
    """Callable that spaces CJK/Latin boundaries for one option set."""

    def __init__(self, english_after_cjk: str = "", english_before_cjk: str = "") -> None:
        self._head = build_head_pattern(normalize_character_set(english_after_cjk))
        self._tail = build_tail_pattern(normalize_character_set(english_before_cjk))

    @classmethod
    def from_options(cls, options: SpacingOptions) -> "BoundarySpacer":
        return cls(options.english_like_after_cjk, options.english_like_before_cjk)

    def __call__(self, text: str) -> str:
        text = self._head.sub(r"\1 \3", text)
        return self._tail.sub(r"\1 \3", text)


def space_boundaries(text: str, english_after_cjk: str, english_before_cjk: str) -> str:
    """Insert one space at every CJK/Latin boundary of ``text``."""
    return BoundarySpacer(english_after_cjk, english_before_cjk)(text)


def reinsert_ignore_exception_spacing(text: str) -> str:
    """
    Normalize the gap between CJK text and link/code/math placeholders.

    Placeholders are atomic tokens that the word-based patterns never match,
    yet visually they are Latin content and get one space on each side.
    """
    text = _EXCEPTION_HEAD.sub(r"\1 \3", text)
    return _EXCEPTION_TAIL.sub(r"\1 \3", text)
