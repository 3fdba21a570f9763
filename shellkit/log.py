"""Logging configuration using loguru.

Diagnostics go to stderr; command output stays on stdout via ``click.echo``.
"""

from __future__ import annotations

import sys

from loguru import logger


def setup_logging(level: str = "WARNING") -> None:
    """Configure loguru as the sole logging sink.

    Call this once per CLI invocation, before any command runs.
    """
    level = level.upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
    )

    logger.debug("Logging initialised (level={})", level)
