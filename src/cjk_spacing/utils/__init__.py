"""Shared utilities and common types."""

from cjk_spacing.utils.types import BoldRange, EmphasisReplacement, TextRange

__all__ = [
    "TextRange",
    "BoldRange",
    "EmphasisReplacement",
]
