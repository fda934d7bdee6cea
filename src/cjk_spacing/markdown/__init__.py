"""Markdown helpers: ignore-region masking and emphasis node lookup."""

from cjk_spacing.markdown.emphasis_ast import (
    EmphasisKind,
    get_emphasis_ranges,
    parse_emphasis,
    update_emphasis_text,
)
from cjk_spacing.markdown.ignore_types import (
    IgnoreType,
    IgnoreTypes,
    apply_ignoring,
    mask_ignored_regions,
    restore_ignored_regions,
)

__all__ = [
    "EmphasisKind",
    "get_emphasis_ranges",
    "parse_emphasis",
    "update_emphasis_text",
    "IgnoreType",
    "IgnoreTypes",
    "apply_ignoring",
    "mask_ignored_regions",
    "restore_ignored_regions",
]
