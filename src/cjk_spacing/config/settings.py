"""
Configuration management for cjk-spacing.

This module provides environment-based configuration using Pydantic BaseSettings,
so the rule defaults and the logging level can be tuned per deployment
(editor plugin, CI check, batch reformatting) without code changes.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cjk_spacing.config.options import (
    DEFAULT_ENGLISH_LIKE_AFTER_CJK,
    DEFAULT_ENGLISH_LIKE_BEFORE_CJK,
    SpacingOptions,
)

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("CJK_SPACING_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are automatically loaded with the CJK_SPACING_ prefix.
    For example, CJK_SPACING_ENGLISH_LIKE_AFTER_CJK overrides the default
    after-CJK character set. LOG_LEVEL is read without a prefix.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    english_like_after_cjk: str = Field(
        default=DEFAULT_ENGLISH_LIKE_AFTER_CJK,
        description="Default extra English-like characters after CJK characters",
    )
    english_like_before_cjk: str = Field(
        default=DEFAULT_ENGLISH_LIKE_BEFORE_CJK,
        description="Default extra English-like characters before CJK characters",
    )

    rules_config: Optional[str] = Field(
        default=None,
        description="Path to a YAML rule profile file (None = packaged spacing_rules.yml)",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    def default_options(self) -> SpacingOptions:
        """Build the rule options configured for this environment."""
        return SpacingOptions(
            english_like_after_cjk=self.english_like_after_cjk,
            english_like_before_cjk=self.english_like_before_cjk,
        )

    def rules_config_path(self) -> Optional[Path]:
        """Resolved rule profile path, or None when the packaged file is used."""
        if not self.rules_config:
            return None
        path = Path(self.rules_config).expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        return path

    model_config = SettingsConfigDict(
        env_prefix="CJK_SPACING_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
