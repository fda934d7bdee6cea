"""
Ignore-region masking for Markdown text.

Spans that a text rule must never modify (code, math, HTML, links, tags,
images, YAML front matter) are swapped for fixed placeholder tokens before a
rule runs and swapped back afterwards. Every kind has exactly one token shape,
``{<KIND>PLACEHOLDER}``: braces plus capital letters only, so a token can never
be read as a word (``[A-Za-z0-9_]+``) that touches neighbouring text, nor as
an emphasis delimiter.

Usage:
    from cjk_spacing.markdown.ignore_types import IgnoreTypes, apply_ignoring

    result = apply_ignoring(text, my_rule, [IgnoreTypes.INLINE_CODE, IgnoreTypes.LINK])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

import regex as re

from cjk_spacing.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IgnoreType:
    """A kind of protected Markdown region and its placeholder token."""

    name: str
    placeholder: str
    pattern: re.Pattern


MaskedRegions = List[Tuple[IgnoreType, List[str]]]


class IgnoreTypes:
    """Registry of the supported ignore-region kinds."""

    YAML = IgnoreType(
        "yaml",
        "{YAMLPLACEHOLDER}",
        re.compile(r"\A---[ \t]*\r?\n.*?\r?\n---[ \t]*(?=\r?\n|\Z)", re.DOTALL),
    )
    CODE = IgnoreType(
        "code",
        "{CODEBLOCKPLACEHOLDER}",
        re.compile(
            r"^[ \t]*(`{3,}|~{3,})[^\n]*\n.*?^[ \t]*\1[ \t]*$",
            re.DOTALL | re.MULTILINE,
        ),
    )
    INLINE_CODE = IgnoreType(
        "inline_code",
        "{INLINECODEPLACEHOLDER}",
        re.compile(r"(`+)(?!`)((?:(?!\n[ \t]*\n).)+?)(?<!`)\1(?!`)", re.DOTALL),
    )
    IMAGE = IgnoreType(
        "image",
        "{IMAGEPLACEHOLDER}",
        re.compile(r"!\[\[[^\n]*?\]\]|!\[[^\]\n]*\]\([^)\n]*\)"),
    )
    LINK = IgnoreType(
        "link",
        "{LINKPLACEHOLDER}",
        re.compile(
            r"\[[^\[\]\n]*\]\([^)\n]*\)"
            r"|<(?:https?|ftp|mailto):[^<>\s]+>"
            r"|(?<![A-Za-z0-9])(?:https?|ftp)://[A-Za-z0-9\-._~:/?#@!$&'+,;=%]*[A-Za-z0-9\-_~/#=&%]"
        ),
    )
    WIKI_LINK = IgnoreType(
        "wiki_link",
        "{WIKILINKPLACEHOLDER}",
        re.compile(r"\[\[[^\n]*?\]\]"),
    )
    TAG = IgnoreType(
        "tag",
        "{TAGPLACEHOLDER}",
        re.compile(r"""(?<!\S)#[^\s#!"$%&'()*+,.:;<=>?@^`{|}~\[\]\\/]+"""),
    )
    MATH = IgnoreType(
        "math",
        "{MATHBLOCKPLACEHOLDER}",
        re.compile(r"\$\$.*?\$\$", re.DOTALL),
    )
    INLINE_MATH = IgnoreType(
        "inline_math",
        "{INLINEMATHPLACEHOLDER}",
        re.compile(r"(?<![\\$])\$(?=[^\s$])(?:\\.|[^$\\\n])+?(?<=\S)\$(?![$\d])"),
    )
    HTML = IgnoreType(
        "html",
        "{HTMLPLACEHOLDER}",
        re.compile(r"<!--.*?-->|</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?>", re.DOTALL),
    )

    @classmethod
    def all(cls) -> Tuple[IgnoreType, ...]:
        return (
            cls.YAML,
            cls.CODE,
            cls.INLINE_CODE,
            cls.IMAGE,
            cls.LINK,
            cls.WIKI_LINK,
            cls.TAG,
            cls.MATH,
            cls.INLINE_MATH,
            cls.HTML,
        )


def mask_ignored_regions(
    text: str, kinds: Sequence[IgnoreType]
) -> Tuple[str, MaskedRegions]:
    """
    Replace every region of the given kinds with its placeholder token.

    Kinds are masked in the order given; a later kind never sees the content
    of an earlier one. Text that already spells a kind's placeholder is
    recorded as a region of that kind, so it comes back where it was.

    Args:
        text: Markdown text
        kinds: Ignore-region kinds to mask

    Returns:
        The masked text and the recorded regions needed by
        restore_ignored_regions()
    """
    regions: MaskedRegions = []
    for kind in kinds:
        values: List[str] = []
        pattern = kind.pattern
        if kind.placeholder in text:
            logger.warning("ignore.placeholder_collision", kind=kind.name)
            pattern = re.compile(
                f"{re.escape(kind.placeholder)}|(?:{kind.pattern.pattern})",
                kind.pattern.flags,
            )

        def _stash(match: re.Match, _values: List[str] = values, _kind: IgnoreType = kind) -> str:
            _values.append(match.group(0))
            return _kind.placeholder

        text = pattern.sub(_stash, text)
        regions.append((kind, values))
        if values:
            logger.debug("ignore.regions_masked", kind=kind.name, count=len(values))

    return text, regions


def restore_ignored_regions(text: str, regions: MaskedRegions) -> str:
    """Put masked regions back, last-masked kind first."""
    for kind, values in reversed(regions):
        for value in values:
            text = text.replace(kind.placeholder, value, 1)
    return text


def apply_ignoring(
    text: str,
    func: Callable[[str], str],
    kinds: Sequence[IgnoreType],
) -> str:
    """Run ``func`` over ``text`` with the given region kinds protected."""
    masked, regions = mask_ignored_regions(text, kinds)
    return restore_ignored_regions(func(masked), regions)


__all__ = [
    "IgnoreType",
    "IgnoreTypes",
    "MaskedRegions",
    "mask_ignored_regions",
    "restore_ignored_regions",
    "apply_ignoring",
]
