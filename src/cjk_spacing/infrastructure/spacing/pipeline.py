"""
CJK/Latin spacing pipeline.

``space_markdown`` is the whole rule: ignore regions are masked, then
``apply_cjk_spacing`` runs the passes in order on the masked text:

1. isolate emphasis spans behind placeholders
2. space CJK/Latin boundaries outside emphasis
3. re-space CJK text next to link/code/math placeholders
4. restore emphasis spans
5. space the content of italic, then bold nodes
6. normalize the gaps around bold spans
"""

from __future__ import annotations

from typing import Optional, Sequence

from cjk_spacing.config.options import SpacingOptions
from cjk_spacing.infrastructure.spacing.bold_normalizer import normalize_bold_spacing
from cjk_spacing.infrastructure.spacing.boundary import (
    BoundarySpacer,
    reinsert_ignore_exception_spacing,
)
from cjk_spacing.infrastructure.spacing.emphasis import isolate_emphasis, restore_emphasis
from cjk_spacing.markdown.emphasis_ast import EmphasisKind, update_emphasis_text
from cjk_spacing.markdown.ignore_types import IgnoreType, IgnoreTypes, apply_ignoring
from cjk_spacing.utils.logging import get_logger

logger = get_logger(__name__)

SPACING_IGNORE_TYPES: Sequence[IgnoreType] = (
    IgnoreTypes.CODE,
    IgnoreTypes.INLINE_CODE,
    IgnoreTypes.YAML,
    IgnoreTypes.IMAGE,
    IgnoreTypes.LINK,
    IgnoreTypes.WIKI_LINK,
    IgnoreTypes.TAG,
    IgnoreTypes.MATH,
    IgnoreTypes.INLINE_MATH,
    IgnoreTypes.HTML,
)


def space_inside_emphasis(text: str, spacer: BoundarySpacer) -> str:
    """Apply ``spacer`` to the content of every italic node, then every bold node."""
    text = update_emphasis_text(text, EmphasisKind.ITALIC, spacer)
    return update_emphasis_text(text, EmphasisKind.BOLD, spacer)


def apply_cjk_spacing(text: str, options: SpacingOptions) -> str:
    """Run the spacing passes on text whose ignore regions are already masked."""
    spacer = BoundarySpacer.from_options(options)

    masked, replacements = isolate_emphasis(text)
    spaced = spacer(masked)
    spaced = reinsert_ignore_exception_spacing(spaced)
    spaced = restore_emphasis(spaced, replacements)
    spaced = space_inside_emphasis(spaced, spacer)
    return normalize_bold_spacing(spaced, options)


def space_markdown(text: str, options: Optional[SpacingOptions] = None) -> str:
    """
    Put one space at every CJK/Latin boundary of a Markdown document.

    Args:
        text: Markdown source
        options: Extra English-like characters; defaults to SpacingOptions()

    Returns:
        The spaced document. Code, math, links, tags, HTML and front matter
        are returned byte-for-byte.
    """
    if options is None:
        options = SpacingOptions()
    if not text:
        return text

    result = apply_ignoring(
        text,
        lambda masked: apply_cjk_spacing(masked, options),
        SPACING_IGNORE_TYPES,
    )
    if result != text:
        logger.debug(
            "spacing.text_updated",
            input_length=len(text),
            output_length=len(result),
        )
    return result
