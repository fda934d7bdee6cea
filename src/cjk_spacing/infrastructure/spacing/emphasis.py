"""
Emphasis isolation and restoration.

Before boundary spacing runs, every bold/italic span is swapped for an opaque
placeholder so that spacing never lands between a marker and its content.
Spans are masked in a fixed order, each step working on the output of the
previous one:

1. ``**bold**``   (exact two-asterisk runs)
2. ``*italic*``   (exact one-asterisk runs)
3. ``__bold__``   (emphasis nodes bounded by exactly ``__``)
4. ``_italic_``   (emphasis nodes bounded by exactly ``_``)

Unterminated or ambiguous markers are left in place; they are "not really
emphasis" and flow through the later passes as plain text.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import regex as re

from cjk_spacing.infrastructure.spacing.constants import (
    EMPHASIS_PLACEHOLDER_PREFIX,
    EMPHASIS_PLACEHOLDER_SUFFIX,
)
from cjk_spacing.markdown.emphasis_ast import EmphasisKind, get_emphasis_ranges
from cjk_spacing.utils.logging import get_logger
from cjk_spacing.utils.types import EmphasisReplacement, TextRange

logger = get_logger(__name__)

# A newline followed by an empty (or blank) line: emphasis never spans it
_BLANK_LINE_AHEAD = re.compile(r"\n[ \t]*\r?\n")


def build_placeholder(index: int) -> str:
    return f"{EMPHASIS_PLACEHOLDER_PREFIX}{index}{EMPHASIS_PLACEHOLDER_SUFFIX}"


def is_escaped(text: str, index: int) -> bool:
    """True when ``text[index]`` is preceded by an odd number of backslashes."""
    backslash_count = 0
    cursor = index - 1
    while cursor >= 0 and text[cursor] == "\\":
        backslash_count += 1
        cursor -= 1
    return backslash_count % 2 == 1


def is_exact_marker_run(text: str, index: int, marker: str, length: int) -> bool:
    """True when exactly ``length`` copies of ``marker`` start at ``index``."""
    if text[index : index + length] != marker * length:
        return False

    prev_char = text[index - 1] if index > 0 else ""
    next_char = text[index + length] if index + length < len(text) else ""
    return prev_char != marker and next_char != marker


def collect_asterisk_emphasis_ranges(text: str, marker_length: int) -> List[TextRange]:
    """
    Pair exact asterisk runs of ``marker_length`` left to right.

    The first unmatched run opens a range and the next qualifying run closes
    it. An opener still pending at a blank line is dropped, as is an opener
    left over at the end of the text.
    """
    ranges: List[TextRange] = []
    open_index = None
    index = 0
    last_start = len(text) - marker_length

    while index <= last_start:
        if open_index is not None and _BLANK_LINE_AHEAD.match(text, index):
            open_index = None

        if is_exact_marker_run(text, index, "*", marker_length) and not is_escaped(text, index):
            if open_index is None:
                open_index = index
            else:
                ranges.append(TextRange(open_index, index + marker_length))
                open_index = None
            index += marker_length
            continue

        index += 1

    return ranges


def get_underscore_emphasis_ranges(text: str, kind: EmphasisKind) -> List[TextRange]:
    """
    Emphasis nodes of ``kind`` whose source is bounded by underscores.

    Nodes whose first and last ``marker_length`` characters are not exactly
    underscores (asterisk emphasis, or a node the parser attributed
    differently) are rejected.
    """
    marker = "_" * kind.marker_length
    length = kind.marker_length
    return [
        node
        for node in get_emphasis_ranges(text, kind)
        if text[node.start : node.start + length] == marker
        and text[node.end - length : node.end] == marker
    ]


def _replace_ranges(
    text: str,
    ranges: Sequence[TextRange],
    replacements: List[EmphasisReplacement],
) -> str:
    if not ranges:
        return text

    parts: List[str] = []
    cursor = 0
    for text_range in sorted(ranges, key=lambda item: item.start):
        if text_range.start < cursor:
            continue

        placeholder = build_placeholder(len(replacements))
        replacements.append(EmphasisReplacement(placeholder, text_range.slice(text)))
        parts.append(text[cursor : text_range.start])
        parts.append(placeholder)
        cursor = text_range.end

    parts.append(text[cursor:])
    return "".join(parts)


def isolate_emphasis(text: str) -> Tuple[str, List[EmphasisReplacement]]:
    """
    Mask every emphasis span with a unique placeholder.

    Args:
        text: Markdown text (ignore regions already masked)

    Returns:
        The masked text and the replacements needed by restore_emphasis()
    """
    replacements: List[EmphasisReplacement] = []
    if EMPHASIS_PLACEHOLDER_PREFIX in text:
        logger.warning(
            "spacing.placeholder_collision",
            placeholder_prefix=EMPHASIS_PLACEHOLDER_PREFIX,
        )
        return text, replacements

    masked = _replace_ranges(text, collect_asterisk_emphasis_ranges(text, 2), replacements)
    masked = _replace_ranges(masked, collect_asterisk_emphasis_ranges(masked, 1), replacements)
    masked = _replace_ranges(
        masked, get_underscore_emphasis_ranges(masked, EmphasisKind.BOLD), replacements
    )
    masked = _replace_ranges(
        masked, get_underscore_emphasis_ranges(masked, EmphasisKind.ITALIC), replacements
    )

    if replacements:
        logger.debug("spacing.emphasis_isolated", replacements=len(replacements))
    return masked, replacements


def restore_emphasis(text: str, replacements: Sequence[EmphasisReplacement]) -> str:
    """
    Swap placeholders back to their original spans.

    An earlier placeholder may sit inside the value of a later one (an italic
    span masked around an already-masked bold span), so placeholders are
    restored newest first.
    """
    for replacement in reversed(replacements):
        text = text.replace(replacement.placeholder, replacement.value, 1)
    return text
