"""Configuration management for cjk-spacing.

This module provides centralized configuration loaded from environment variables
with validation using Pydantic BaseSettings, plus the rule option model.

Usage:
    >>> from cjk_spacing.config import get_settings
    >>> settings = get_settings()
    >>> options = settings.default_options()
"""

from cjk_spacing.config.options import (
    DEFAULT_ENGLISH_LIKE_AFTER_CJK,
    DEFAULT_ENGLISH_LIKE_BEFORE_CJK,
    SpacingOptions,
    normalize_character_set,
)
from cjk_spacing.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "SpacingOptions",
    "normalize_character_set",
    "DEFAULT_ENGLISH_LIKE_AFTER_CJK",
    "DEFAULT_ENGLISH_LIKE_BEFORE_CJK",
]
