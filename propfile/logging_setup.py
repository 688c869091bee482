"""Loguru sink configuration for command line use.

Library modules only emit through ``loguru.logger``; installing sinks is
left to the host application, or to ``configure_logging`` for the CLI.
"""
from __future__ import annotations

import sys
from typing import Any, Optional

from loguru import logger

LOG_FORMAT = "[{time:YYYY-MM-DD HH:mm:ss}] {level}: {message}"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def normalize_level(level: Optional[str], default: str = DEFAULT_LOG_LEVEL) -> str:
    """Upper-case a level name, falling back to ``default`` when unknown."""
    if not level:
        return default
    level = level.strip().upper()
    return level if level in LOG_LEVELS else default


def configure_logging(level: Optional[str] = DEFAULT_LOG_LEVEL, sink: Any = None) -> int:
    """Replace all loguru sinks with a single one.

    Args:
        level: Minimum level name ("TRACE", "DEBUG", "INFO", ...)
        sink: Loguru sink; stderr when omitted

    Returns:
        Id of the installed sink
    """
    logger.remove()
    return logger.add(
        sink if sink is not None else sys.stderr,
        format=LOG_FORMAT,
        level=normalize_level(level),
    )


__all__ = ["configure_logging", "normalize_level", "LOG_FORMAT", "LOG_LEVELS"]
