"""
CJK/English spacing framework.

Usage:
    # 1. Space a Markdown document directly
    from cjk_spacing.infrastructure.spacing import space_markdown

    spaced = space_markdown("中文english中文")

    # 2. Run a registered rule or a profile chain
    from cjk_spacing.infrastructure.spacing import registry

    spaced = registry.apply_rule(text, "space_between_cjk_and_english")
    tidied = registry.apply_rules(text, registry.get_profile_rules("tidy"))
"""

from cjk_spacing.infrastructure.spacing.pipeline import (
    SPACING_IGNORE_TYPES,
    apply_cjk_spacing,
    space_inside_emphasis,
    space_markdown,
)
from cjk_spacing.infrastructure.spacing.registry import (
    RuleCategory,
    SpacingRegistry,
    SpacingRule,
    parse_rule_spec,
    registry,
    rule,
)
from cjk_spacing.infrastructure.spacing.rules import (
    RULE_EXAMPLES,
    space_between_cjk_and_english,
    trim_trailing_whitespace,
)

__all__: list[str] = [
    "registry",
    "rule",
    "RuleCategory",
    "SpacingRule",
    "SpacingRegistry",
    "parse_rule_spec",
    "SPACING_IGNORE_TYPES",
    "apply_cjk_spacing",
    "space_inside_emphasis",
    "space_markdown",
    "RULE_EXAMPLES",
    "space_between_cjk_and_english",
    "trim_trailing_whitespace",
]
