"""
Bold-boundary normalization.

After boundary spacing, the horizontal gap on each side of a bold span is
decided by the characters facing each other across it:

- a CJK neighbour against Latin-like content (or the reverse) gets one space;
- a CJK neighbour against CJK content, or CJK sentence punctuation on either
  side, gets no space;
- any other neighbour (Latin against Latin, a line break, the start or end of
  the text) is left exactly as written.

A ``__`` delimiter glued to a letter or CJK character outside the span stops
being a delimiter, so the outer gap of an underscore span only drops to zero
against punctuation.
"""

from __future__ import annotations

from typing import List, Optional

from cjk_spacing.config.options import SpacingOptions
from cjk_spacing.infrastructure.spacing.characters import (
    first_non_whitespace_char,
    is_cjk_char,
    is_cjk_punctuation,
    is_english_like_after_cjk,
    is_english_like_before_cjk,
    is_line_break,
    is_punctuation_char,
    is_spacing_char,
    last_non_whitespace_char,
)
from cjk_spacing.infrastructure.spacing.emphasis import (
    collect_asterisk_emphasis_ranges,
    get_underscore_emphasis_ranges,
)
from cjk_spacing.markdown.emphasis_ast import EmphasisKind
from cjk_spacing.utils.types import BoldRange


def get_bold_ranges(text: str) -> List[BoldRange]:
    """Asterisk bold spans followed by underscore bold spans."""
    ranges = [
        BoldRange(item.start, item.end, 2) for item in collect_asterisk_emphasis_ranges(text, 2)
    ]
    ranges.extend(
        BoldRange(item.start, item.end, 2)
        for item in get_underscore_emphasis_ranges(text, EmphasisKind.BOLD)
    )
    return ranges


def _left_gap(left_char: str, first_char: str, after: str, before: str) -> Optional[str]:
    """New gap before a bold span, or None to keep the current one."""
    if left_char == "" or is_line_break(left_char):
        return None

    english_then_cjk = is_english_like_before_cjk(left_char, before) and is_cjk_char(first_char)
    needs_space = (
        is_cjk_char(left_char) and is_english_like_after_cjk(first_char, after)
    ) or english_then_cjk
    should_normalize = (
        is_cjk_char(left_char) or is_cjk_punctuation(left_char) or english_then_cjk
    )
    if not should_normalize:
        return None
    return " " if needs_space else ""


def _right_gap(right_char: str, last_char: str, after: str, before: str) -> Optional[str]:
    """New gap after a bold span, or None to keep the current one."""
    if right_char == "" or is_line_break(right_char):
        return None

    right_is_punctuation = is_cjk_punctuation(right_char)
    cjk_then_english = is_english_like_after_cjk(right_char, after) and is_cjk_char(last_char)
    needs_space = not right_is_punctuation and (
        (is_cjk_char(right_char) and is_english_like_before_cjk(last_char, before))
        or cjk_then_english
    )
    should_normalize = is_cjk_char(right_char) or right_is_punctuation or cjk_then_english
    if not should_normalize:
        return None
    return " " if needs_space else ""


def _keep_underscore_delimiter(gap: Optional[str], neighbour: str) -> Optional[str]:
    if gap == "" and not is_punctuation_char(neighbour):
        return " "
    return gap


def normalize_bold_spacing(text: str, options: SpacingOptions) -> str:
    """
    Set the space/tab gap on both sides of every bold span.

    Spans are visited from the end of the text backwards. Only spaces and tabs
    count as a gap; a gap is rewritten only when its normalized form differs.
    """
    after = options.english_like_after_cjk
    before = options.english_like_before_cjk
    ranges = sorted(get_bold_ranges(text), key=lambda item: item.start, reverse=True)
    if not ranges:
        return text

    spans = [[item.start, item.end, item.marker_length] for item in ranges]
    for index, (start, end, marker_length) in enumerate(spans):
        inner = text[start + marker_length : end - marker_length]
        first_char = first_non_whitespace_char(inner)
        last_char = last_non_whitespace_char(inner)
        if not first_char or not last_char:
            continue

        left_start = start
        while left_start > 0 and is_spacing_char(text[left_start - 1]):
            left_start -= 1
        right_end = end
        while right_end < len(text) and is_spacing_char(text[right_end]):
            right_end += 1

        left_char = text[left_start - 1] if left_start > 0 else ""
        right_char = text[right_end] if right_end < len(text) else ""
        left_spaces = text[left_start:start]
        right_spaces = text[end:right_end]

        new_left = _left_gap(left_char, first_char, after, before)
        new_right = _right_gap(right_char, last_char, after, before)
        if text[start] == "_":
            new_left = _keep_underscore_delimiter(new_left, left_char)
            new_right = _keep_underscore_delimiter(new_right, right_char)
        if new_left is None:
            new_left = left_spaces
        if new_right is None:
            new_right = right_spaces
        if new_left == left_spaces and new_right == right_spaces:
            continue

        text = text[:left_start] + new_left + text[start:end] + new_right + text[right_end:]

        # Enclosing spans still to be visited shift with the rewritten gaps
        delta = len(new_left) + len(new_right) - len(left_spaces) - len(right_spaces)
        for enclosing in spans[index + 1 :]:
            if enclosing[1] >= end:
                enclosing[1] += delta

    return text
