"""
File operations and backup utilities for subtitle processing.

This module provides safe file operations including:
- Raw byte reading for encoding detection
- Backup creation with timestamps
- Safe file writing with parent directory creation
- Output filename generation for derived study material
"""

import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional
from .constants import BACKUP_DIR_NAME, CANONICAL_NEWLINE
from .logging_config import get_logger

logger = get_logger(__name__)


class FileHandler:
    """Handles file operations with proper error handling and logging."""

    @staticmethod
    def read_bytes(file_path: Path) -> bytes:
        """
        Read the raw bytes of a subtitle file.

        Decoding is left to the encoding detector, so this never guesses
        a text encoding itself.

        Args:
            file_path: Path to the file to read

        Returns:
            File contents as bytes

        Raises:
            FileNotFoundError: If the file does not exist
            IOError: If the file cannot be read
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            data = file_path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise IOError(f"Cannot read file {file_path}: {e}")

        logger.debug(f"Read {len(data)} bytes from {file_path.name}")
        return data

    @staticmethod
    def create_backup(file_path: Path, backup_dir: Optional[Path] = None) -> Path:
        """
        Create a backup of the file with timestamp.

        Args:
            file_path: Path to the file to backup
            backup_dir: Optional custom backup directory

        Returns:
            Path to the created backup file

        Raises:
            IOError: If backup creation fails

        Example:
            >>> backup_path = FileHandler.create_backup(Path("movie.es.srt"))
            >>> print(f"Backup created at: {backup_path}")
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if backup_dir is None:
            backup_dir = file_path.parent / BACKUP_DIR_NAME

        backup_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_path = backup_dir / f"{file_path.stem}_{timestamp}{file_path.suffix}"

        try:
            shutil.copy2(file_path, backup_path)
            logger.debug(f"Created backup: {backup_path}")
            return backup_path
        except OSError as e:
            logger.error(f"Failed to create backup for {file_path}: {e}")
            raise IOError(f"Backup creation failed: {e}")

    @staticmethod
    def safe_write(file_path: Path, content: str, encoding: str = 'utf-8',
                   create_backup: bool = False) -> None:
        """
        Safely write content to a file with optional backup.

        Args:
            file_path: Path to write to
            content: Content to write
            encoding: File encoding to use
            create_backup: Whether to create backup if file exists

        Raises:
            IOError: If write operation fails

        Example:
            >>> FileHandler.safe_write(Path("movie.es-en.srt"), combined_text)
        """
        try:
            if create_backup and file_path.exists():
                FileHandler.create_backup(file_path)

            file_path.parent.mkdir(parents=True, exist_ok=True)

            with open(file_path, 'w', encoding=encoding, newline=CANONICAL_NEWLINE) as f:
                f.write(content)

            logger.debug(f"Successfully wrote file: {file_path}")

        except OSError as e:
            logger.error(f"Failed to write file {file_path}: {e}")
            raise IOError(f"Write operation failed: {e}")

    @staticmethod
    def derived_path(source: Path, tag: str, suffix: str,
                     directory: Optional[Path] = None) -> Path:
        """
        Build an output path next to (or under) a source subtitle file.

        A trailing language tag on the source stem is dropped, so
        ``movie.es.srt`` with tag ``es-en`` becomes ``movie.es-en.srt``.

        Args:
            source: Source subtitle path the output is derived from
            tag: Tag inserted before the suffix
            suffix: Output suffix including the dot
            directory: Optional output directory (defaults to the source's)

        Returns:
            Output path
        """
        stem = source.stem
        if '.' in stem and len(stem.rsplit('.', 1)[1]) <= 3:
            stem = stem.rsplit('.', 1)[0]
        parent = directory if directory is not None else source.parent
        return parent / f"{stem}.{tag}{suffix}"
