"""Logging utilities for the Oracle HCM bridge."""

import logging
import sys

_LOGGER_NAME = "oracle_hcm_mcp"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance for the bridge.

    Args:
        name: Optional sub-logger name. If None, returns the root package logger.
            Dotted module names that already start with the package name are used as-is.

    Returns:
        The requested logger.
    """
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(
    level: int | str = logging.INFO,
    format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """Setup default logging configuration for the bridge.

    This adds a StreamHandler writing to stderr to the package's root logger.
    stdout is left untouched because the stdio transport owns it.
    Should be called by the process entry point, not by library code.

    Args:
        level: Logging level, either numeric or a level name such as "DEBUG".
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Avoid adding multiple handlers if called multiple times
    if any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)


# Set default NullHandler to avoid "No handler found" warnings
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
