"""Registered text rules; importing this package registers them."""

from cjk_spacing.infrastructure.spacing.rules.spacing_rules import (
    RULE_EXAMPLES,
    space_between_cjk_and_english,
    trim_trailing_whitespace,
)

__all__ = [
    "RULE_EXAMPLES",
    "space_between_cjk_and_english",
    "trim_trailing_whitespace",
]
