"""
Emphasis node lookup for Markdown text.

Answers "where are the bold / italic nodes of this document?" with source
offsets, the way a CommonMark parser would attribute them:

1. The text is split into inline scopes (paragraph lines, heading content,
   list-item and block-quote content). Blank lines, headings, container
   markers, thematic breaks and fenced code end a scope; emphasis never
   crosses a scope boundary and container markers are not inline content.
2. Inside a scope, backslash escapes and backtick code spans are opaque.
   Runs of ``*`` / ``_`` are classified as left/right flanking (Unicode
   whitespace and Unicode punctuation, with the underscore intraword rule).
3. Runs are paired with the CommonMark "process emphasis" procedure
   (openers bottom, rule of three). A pair uses two characters from each run
   (strong) when both runs have at least two left, otherwise one (emphasis).

Only node spans are reported; no tree is built.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import regex as re

from cjk_spacing.utils.types import TextRange


class EmphasisKind(Enum):
    """Markdown emphasis node kinds."""

    BOLD = "strong"
    ITALIC = "emphasis"

    @property
    def marker_length(self) -> int:
        return 2 if self is EmphasisKind.BOLD else 1


_BLANK_LINE = re.compile(r"[ \t]*$")
_FENCE_OPEN = re.compile(r"[ \t]{0,3}(`{3,}|~{3,})")
_ATX_HEADING = re.compile(r"[ \t]{0,3}#{1,6}(?:[ \t]+|$)")
_THEMATIC_BREAK = re.compile(r"[ \t]{0,3}(?:(?:\*[ \t]*){3,}|(?:-[ \t]*){3,}|(?:_[ \t]*){3,})$")
_CONTAINER_MARKERS = re.compile(r"(?:[ \t]*(?:>[ \t]?|[-+*][ \t]+|\d{1,9}[.)][ \t]+))+")
_ASCII_PUNCTUATION = set("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")


@dataclass
class _Delimiter:
    char: str
    position: int
    length: int
    original_length: int
    can_open: bool
    can_close: bool


def _is_whitespace(char: str) -> bool:
    return char.isspace()


def _is_punctuation(char: str) -> bool:
    return char in _ASCII_PUNCTUATION or unicodedata.category(char)[0] in ("P", "S")


def _iter_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (offset, line content without its line ending)."""
    offset = 0
    for line in text.splitlines(keepends=True):
        yield offset, line.rstrip("\r\n")
        offset += len(line)


def _iter_inline_scopes(text: str) -> Iterator[Tuple[int, int]]:
    """Yield ``(start, end)`` offsets of every inline scope of ``text``."""
    scope_start: Optional[int] = None
    scope_end = 0
    fence: Optional[str] = None

    for offset, line in _iter_lines(text):
        if fence is not None:
            stripped = line.strip()
            if stripped.startswith(fence) and not stripped.strip(fence[0]):
                fence = None
            continue

        if _BLANK_LINE.fullmatch(line):
            if scope_start is not None:
                yield scope_start, scope_end
            scope_start = None
            continue

        fence_match = _FENCE_OPEN.match(line)
        if fence_match:
            if scope_start is not None:
                yield scope_start, scope_end
            scope_start = None
            fence = fence_match.group(1)
            continue

        if _THEMATIC_BREAK.match(line):
            if scope_start is not None:
                yield scope_start, scope_end
            scope_start = None
            continue

        heading_match = _ATX_HEADING.match(line)
        if heading_match:
            if scope_start is not None:
                yield scope_start, scope_end
            scope_start = None
            yield offset + heading_match.end(), offset + len(line)
            continue

        container_match = _CONTAINER_MARKERS.match(line)
        if container_match:
            if scope_start is not None:
                yield scope_start, scope_end
            scope_start = offset + container_match.end()
            scope_end = offset + len(line)
            continue

        if scope_start is None:
            scope_start = offset
        scope_end = offset + len(line)

    if scope_start is not None:
        yield scope_start, scope_end


def _skip_code_span(text: str, index: int, end: int) -> int:
    """Return the offset after the code span opening at ``index``."""
    run_end = index
    while run_end < end and text[run_end] == "`":
        run_end += 1
    run = text[index:run_end]

    search = run_end
    while True:
        found = text.find(run, search, end)
        if found == -1:
            return run_end
        closing_end = found + len(run)
        if closing_end < end and text[closing_end] == "`":
            search = closing_end
            while search < end and text[search] == "`":
                search += 1
            continue
        return closing_end


def _scan_delimiters(text: str, start: int, end: int) -> List[_Delimiter]:
    delimiters: List[_Delimiter] = []
    index = start
    while index < end:
        char = text[index]
        if char == "\\" and index + 1 < end and text[index + 1] in _ASCII_PUNCTUATION:
            index += 2
            continue
        if char == "`":
            index = _skip_code_span(text, index, end)
            continue
        if char not in "*_":
            index += 1
            continue

        run_end = index
        while run_end < end and text[run_end] == char:
            run_end += 1

        before = text[index - 1] if index > start else " "
        after = text[run_end] if run_end < end else " "

        left_flanking = not _is_whitespace(after) and (
            not _is_punctuation(after) or _is_whitespace(before) or _is_punctuation(before)
        )
        right_flanking = not _is_whitespace(before) and (
            not _is_punctuation(before) or _is_whitespace(after) or _is_punctuation(after)
        )

        if char == "*":
            can_open = left_flanking
            can_close = right_flanking
        else:
            can_open = left_flanking and (not right_flanking or _is_punctuation(before))
            can_close = right_flanking and (not left_flanking or _is_punctuation(after))

        if can_open or can_close:
            length = run_end - index
            delimiters.append(
                _Delimiter(char, index, length, length, can_open, can_close)
            )
        index = run_end

    return delimiters


def _process_emphasis(
    delimiters: List[_Delimiter],
) -> List[Tuple[TextRange, EmphasisKind]]:
    nodes: List[Tuple[TextRange, EmphasisKind]] = []
    openers_bottom: Dict[Tuple[str, bool, int], int] = {}

    closer_index = 0
    while closer_index < len(delimiters):
        closer = delimiters[closer_index]
        if closer.length == 0 or not closer.can_close:
            closer_index += 1
            continue

        bottom_key = (closer.char, closer.can_open, closer.original_length % 3)
        bottom = openers_bottom.get(bottom_key, -1)

        opener_index: Optional[int] = None
        candidate = closer_index - 1
        while candidate > bottom:
            opener = delimiters[candidate]
            if opener.char == closer.char and opener.can_open and opener.length > 0:
                odd_match = (
                    (closer.can_open or opener.can_close)
                    and (opener.original_length + closer.original_length) % 3 == 0
                    and not (
                        opener.original_length % 3 == 0
                        and closer.original_length % 3 == 0
                    )
                )
                if not odd_match:
                    opener_index = candidate
                    break
            candidate -= 1

        if opener_index is None:
            openers_bottom[bottom_key] = closer_index - 1
            if not closer.can_open:
                closer.length = 0
            closer_index += 1
            continue

        opener = delimiters[opener_index]
        used = 2 if opener.length >= 2 and closer.length >= 2 else 1
        opener.length -= used
        node_start = opener.position + opener.length
        node_end = closer.position + used
        nodes.append(
            (
                TextRange(node_start, node_end),
                EmphasisKind.BOLD if used == 2 else EmphasisKind.ITALIC,
            )
        )
        closer.position += used
        closer.length -= used

        # Delimiters between a matched pair can no longer match anything
        for between in delimiters[opener_index + 1 : closer_index]:
            between.length = 0

        if closer.length == 0:
            closer_index += 1

    return nodes


def parse_emphasis(text: str) -> List[Tuple[TextRange, EmphasisKind]]:
    """Return every emphasis node of ``text`` with its kind."""
    nodes: List[Tuple[TextRange, EmphasisKind]] = []
    for start, end in _iter_inline_scopes(text):
        nodes.extend(_process_emphasis(_scan_delimiters(text, start, end)))
    return nodes


def get_emphasis_ranges(text: str, kind: EmphasisKind) -> List[TextRange]:
    """
    Return the source spans of all ``kind`` nodes, markers included.

    The spans are sorted by descending start offset, so callers can edit the
    text from the end without invalidating spans still to be visited.
    """
    ranges = [node_range for node_range, node_kind in parse_emphasis(text) if node_kind is kind]
    return sorted(ranges, key=lambda node_range: node_range.start, reverse=True)


def update_emphasis_text(
    text: str,
    kind: EmphasisKind,
    func: Callable[[str], str],
) -> str:
    """
    Rewrite the inner content of every ``kind`` node with ``func``.

    The markers themselves are left untouched. Nodes are visited last-first;
    when a rewrite changes the length of a node's content, the end offset of
    every enclosing node still to be visited is shifted by the same amount.
    """
    marker_length = kind.marker_length
    spans = [[node.start, node.end] for node in get_emphasis_ranges(text, kind)]

    for index, (start, end) in enumerate(spans):
        inner_start = start + marker_length
        inner_end = end - marker_length
        if inner_end < inner_start:
            continue

        inner = text[inner_start:inner_end]
        updated = func(inner)
        if updated == inner:
            continue

        text = text[:inner_start] + updated + text[inner_end:]
        delta = len(updated) - len(inner)
        for enclosing in spans[index + 1 :]:
            if enclosing[1] >= end:
                enclosing[1] += delta

    return text


__all__ = [
    "EmphasisKind",
    "parse_emphasis",
    "get_emphasis_ranges",
    "update_emphasis_text",
]
