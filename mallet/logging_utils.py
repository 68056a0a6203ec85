"""Runtime logging helpers."""

from __future__ import annotations

import sys

from loguru import logger

from mallet.config import get_log_level

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_CONFIGURED_LEVEL: str | None = None


def configure_logging(level: str | None = None) -> str:
    """Install a single stderr sink at `level` (or MALLET_LOG_LEVEL).

    Calling again with the same level is a no-op; a different level replaces
    the sink. Returns the level in effect.
    """
    global _CONFIGURED_LEVEL

    resolved = (level or get_log_level()).upper()
    if resolved == _CONFIGURED_LEVEL:
        return resolved

    logger.remove()
    logger.add(sys.stderr, level=resolved, format=_FORMAT, backtrace=False, diagnose=False)
    _CONFIGURED_LEVEL = resolved
    return resolved
