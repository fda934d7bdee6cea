"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Context binding support

Configuration is loaded from cjk_spacing.config.settings:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO

Log records go to stderr so that formatted documents written to stdout by the
CLI are never interleaved with log lines.

Usage:
    >>> from cjk_spacing.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("spacing.file_formatted", path="notes.md", changed=True)
"""

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

from cjk_spacing.config import get_settings

_HANDLER_NAME = "cjk_spacing.stderr"


def _get_log_level() -> int:
    """Get log level from settings.

    Returns:
        Logging level constant (e.g., logging.INFO, logging.DEBUG)
    """
    try:
        level_name = get_settings().LOG_LEVEL.upper()
    except Exception:
        # Fallback to environment variable if settings can't be loaded
        # (e.g. a malformed .env file); logging must still work.
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def _configure_structlog() -> None:
    """Configure structlog with JSON rendering.

    Sets up:
    - ISO-8601 timestamps
    - Logger name
    - Log level
    - JSON renderer
    - stderr output
    """
    level = _get_log_level()

    package_logger = logging.getLogger("cjk_spacing")
    package_logger.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers):
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.set_name(_HANDLER_NAME)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(stderr_handler)
    package_logger.propagate = False

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("spacing.emphasis_isolated", replacements=3)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Args:
        **kwargs: Context fields to bind (e.g., path="notes.md", profile="default")

    Returns:
        A BoundLogger with the specified context already bound

    Example:
        >>> logger = bind_context(path="notes.md", profile="default")
        >>> logger.info("spacing.file_checked", changed=False)
    """
    return structlog.get_logger("cjk_spacing").bind(**kwargs)
