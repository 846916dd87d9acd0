"""Runtime logging helpers."""

from __future__ import annotations

import os
import sys

from loguru import logger

from taskshell.exceptions import EnvironmentCheckError

LOG_LEVEL_ENV: str = "TASKSHELL_LOG_LEVEL"
DEFAULT_LOG_LEVEL: str = "WARNING"
_FORMAT: str = "{time:HH:mm:ss.SSS} | {level:<7} | {thread.name} | {message}"


def resolve_log_level(*, verbose: bool = False) -> str:
    """``DEBUG`` when *verbose*, otherwise ``$TASKSHELL_LOG_LEVEL`` or ``WARNING``."""
    if verbose:
        return "DEBUG"
    return os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()


def configure_logging(*, verbose: bool = False) -> str:
    """Route loguru output to stderr at the resolved level.

    Safe to call repeatedly; each call replaces the previous sink.
    Returns the level that was applied.
    """
    level = resolve_log_level(verbose=verbose)
    try:
        logger.level(level)
    except ValueError as exc:
        raise EnvironmentCheckError(
            f"Unknown log level {level!r} in ${LOG_LEVEL_ENV}.",
            hint="Use one of TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL.",
        ) from exc

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    return level
