from __future__ import annotations

import sys

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} {level} [{name}] {message}"


def configure_logging(level: str = "INFO") -> None:
    """Route loguru output to stderr only.

    stdout carries the stdio transport, so nothing else may write there.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT, backtrace=False, diagnose=False)


__all__ = ["configure_logging"]
