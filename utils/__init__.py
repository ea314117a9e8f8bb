"""
Utility modules.

This package contains shared utility functions and configurations:
- File I/O operations and backup utilities
- Logging configuration
- Shared constants and configurations
"""

from .file_operations import FileHandler
from .logging_config import setup_logging, get_logger
from .constants import (
    RenderMode,
    SUBTITLE_EXTENSIONS,
    SRT_DECIMAL_SEPARATOR,
    CANONICAL_NEWLINE,
    FALLBACK_ENCODING,
    MIN_ENCODING_CONFIDENCE,
    UTF8_BOM,
    DEFAULT_TOP_LANGUAGE,
    DEFAULT_EXPORT_JOINER,
    CSV_EXPORT_FIELDS,
    BACKUP_DIR_NAME,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_DATE_FORMAT,
    APP_NAME,
    APP_VERSION,
    APP_DESCRIPTION,
)

__all__ = [
    'FileHandler',
    'setup_logging',
    'get_logger',
    'RenderMode',
    'SUBTITLE_EXTENSIONS',
    'SRT_DECIMAL_SEPARATOR',
    'CANONICAL_NEWLINE',
    'FALLBACK_ENCODING',
    'MIN_ENCODING_CONFIDENCE',
    'UTF8_BOM',
    'DEFAULT_TOP_LANGUAGE',
    'DEFAULT_EXPORT_JOINER',
    'CSV_EXPORT_FIELDS',
    'BACKUP_DIR_NAME',
    'DEFAULT_LOG_FORMAT',
    'DEFAULT_LOG_DATE_FORMAT',
    'APP_NAME',
    'APP_VERSION',
    'APP_DESCRIPTION',
]
