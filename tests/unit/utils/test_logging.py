"""Unit tests for the structured logging setup."""

import json
import logging

import pytest

from cjk_spacing.utils.logging import _HANDLER_NAME, bind_context, get_logger


@pytest.mark.unit
def test_get_logger_returns_bound_logger() -> None:
    logger = get_logger("test_module")

    assert hasattr(logger, "bind")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")


@pytest.mark.unit
def test_log_line_is_json_with_name_level_and_timestamp(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO)

    get_logger("my_test_logger").info("spacing.file_checked", path="笔记.md")

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["event"] == "spacing.file_checked"
    assert log_data["logger"] == "my_test_logger"
    assert log_data["level"] == "info"
    assert "timestamp" in log_data
    # non-ASCII text stays readable
    assert log_data["path"] == "笔记.md"
    assert "笔记.md" in caplog.records[-1].message


@pytest.mark.unit
def test_bind_context_adds_fields(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    package_logger = logging.getLogger("cjk_spacing")
    package_logger.addHandler(caplog.handler)
    try:
        bind_context(profile="tidy").info("cli.completed")
    finally:
        package_logger.removeHandler(caplog.handler)

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["profile"] == "tidy"
    assert log_data["logger"] == "cjk_spacing"


@pytest.mark.unit
def test_package_logger_writes_to_a_single_stderr_handler() -> None:
    package_logger = logging.getLogger("cjk_spacing")
    handlers = [h for h in package_logger.handlers if h.get_name() == _HANDLER_NAME]

    assert len(handlers) == 1
    assert package_logger.propagate is False
