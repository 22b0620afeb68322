"""Logging setup for the documentation metadata extractor.

Provides a centralized logging configuration with a console handler
on stderr and an optional file handler. Stdout is left to the JSON
output of the CLI.
"""

import logging
import sys
from typing import Optional

from docmeta.utils.config import DEFAULT_LOG_FORMAT


def setup_logging(
    level: str = "WARNING",
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure the package logger with console and optional file output.

    Clears any existing handlers to prevent duplicate log entries across
    calls.

    Args:
        level: Logging level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log messages.
        log_file: Optional file path for log output. If None, logs only
            to the console.

    Returns:
        The configured ``docmeta`` logger instance.
    """
    root_logger = logging.getLogger("docmeta")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root_logger.setLevel(numeric_level)

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized at level %s", level)
    return root_logger
