"""Shared pytest fixtures for the cjk-spacing test suite."""

from __future__ import annotations

from typing import Iterator

import pytest

from cjk_spacing.config import get_settings
from cjk_spacing.infrastructure.spacing import registry


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from the caller's CJK_SPACING_* environment."""
    for name in (
        "CJK_SPACING_ENGLISH_LIKE_AFTER_CJK",
        "CJK_SPACING_ENGLISH_LIKE_BEFORE_CJK",
        "CJK_SPACING_RULES_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _packaged_profiles() -> Iterator[None]:
    """Point the rule registry back at the packaged profile file after each test."""
    yield
    registry.set_config_path(None)
