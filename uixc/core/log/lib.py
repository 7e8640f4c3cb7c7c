"""Core logging implementation for uixc."""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "resolve_level", "setup_logging"]

DEFAULT_LOGGER_NAME = "uixc"


def resolve_level(level: int | str | None, default: int = logging.INFO) -> int:
    """Turn a level name such as "debug" or "WARNING" into a logging level.

    Args:
        level: Numeric level, level name, or None.
        default: Level returned when the value is missing or unknown.

    Returns:
        Numeric logging level.
    """
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else default


def setup_logging(level: int | str = logging.INFO, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level or level name.
        stream: Output stream.
    """
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or DEFAULT_LOGGER_NAME)
