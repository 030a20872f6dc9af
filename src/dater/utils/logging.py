"""Logging configuration for the dater command line."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from .exceptions import ConfigurationError


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure logging for the ``dater`` logger hierarchy.

    Library modules only log through ``logging.getLogger(__name__)``; this
    is meant for the CLI and for applications that want dater's fallback
    decisions (unknown timezones, unparseable values) reported.

    Console messages go to stderr so they never mix with command output on
    stdout. A log file always receives DEBUG records, whatever the console
    level.

    Args:
        level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        stream: Console stream (defaults to stderr)

    Returns:
        Configured logger instance

    Raises:
        ConfigurationError: If level is not a logging level name
    """
    console_level = logging.getLevelName(level.upper())
    if not isinstance(console_level, int):
        raise ConfigurationError(f"Invalid log level: {level}")

    logger = logging.getLogger("dater")
    logger.setLevel(logging.DEBUG if log_file else console_level)

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger
