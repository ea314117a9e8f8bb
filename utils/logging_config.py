"""
Logging configuration for the substudy application.

This module provides centralized logging setup with colored output,
different log levels, and proper formatting for both console and file output.
All module loggers live under the ``substudy`` namespace so a single call to
``setup_logging`` configures the whole application.
"""

import copy
import logging
import sys
from pathlib import Path
from typing import Optional
from .constants import DEFAULT_LOG_FORMAT, DEFAULT_LOG_DATE_FORMAT

ROOT_LOGGER_NAME = "substudy"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for different log levels."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with colors.

        The record is copied first so other handlers (e.g. a log file)
        never see the escape codes.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with colors
        """
        colored = copy.copy(record)
        log_color = self.COLORS.get(colored.levelname, self.RESET)
        colored.levelname = f"{log_color}{colored.levelname}{self.RESET}"
        return super().format(colored)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    use_colors: bool = True,
    logger_name: str = ROOT_LOGGER_NAME
) -> logging.Logger:
    """
    Set up logging with appropriate level and formatting.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO)
        log_file: Optional path to log file for file output
        use_colors: Whether to use colored output for console
        logger_name: Name for the logger instance

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(logging.DEBUG, Path("substudy.log"))
        >>> logger.info("Application started")
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # Diagnostics go to stderr; stdout may carry rendered subtitles
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if use_colors and sys.stderr.isatty():
        console_formatter = ColoredFormatter(
            DEFAULT_LOG_FORMAT,
            datefmt=DEFAULT_LOG_DATE_FORMAT
        )
    else:
        console_formatter = logging.Formatter(
            DEFAULT_LOG_FORMAT,
            datefmt=DEFAULT_LOG_DATE_FORMAT
        )

    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            DEFAULT_LOG_FORMAT,
            datefmt=DEFAULT_LOG_DATE_FORMAT
        ))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger in the application namespace.

    Args:
        name: Logger name, usually ``__name__`` of the calling module

    Returns:
        Logger instance that is a child of the ``substudy`` logger
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def level_for_flags(verbose: bool = False, debug: bool = False) -> int:
    """Map the CLI verbosity flags to a logging level."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING

