"""
Shared constants and configurations for the substudy application.

This module contains all the constants used across different modules including:
- Supported subtitle extensions and time formats
- Encoding detection defaults
- Output and export defaults
- Logging formats and application metadata
"""

from enum import Enum
from typing import List, Set

# ============================================================================
# FILE FORMAT CONSTANTS
# ============================================================================

class RenderMode(Enum):
    """Output modes supported by the serializer."""
    FOREIGN = "foreign"
    NATIVE = "native"
    COMBINED = "combined"

    @classmethod
    def from_name(cls, name: str) -> 'RenderMode':
        """
        Get a render mode from its name.

        Args:
            name: Mode name, case-insensitive ('foreign', 'native', 'combined')

        Returns:
            RenderMode enum value

        Raises:
            ValueError: If the name is not a known mode
        """
        name = name.lower().strip()
        for mode in cls:
            if mode.value == name:
                return mode
        raise ValueError(f"Unsupported render mode: {name}")


# Supported subtitle file extensions
SUBTITLE_EXTENSIONS: Set[str] = {'.srt'}

# Separator between seconds and milliseconds in SRT time stamps
SRT_DECIMAL_SEPARATOR: str = ","

# Separators the parser accepts between seconds and milliseconds
ACCEPTED_DECIMAL_SEPARATORS: str = ",."

# Canonical line terminator handed to the parser and written by the serializer
CANONICAL_NEWLINE: str = "\n"

# ============================================================================
# ENCODING DETECTION CONSTANTS
# ============================================================================

# Encoding used when detection is unsure or the detected codec fails
FALLBACK_ENCODING: str = "utf-8"

# Detector answers below this confidence are ignored
MIN_ENCODING_CONFIDENCE: float = 0.5

# Byte-order marks, checked longest first
UTF8_BOM: bytes = b"\xef\xbb\xbf"
UTF16_LE_BOM: bytes = b"\xff\xfe"
UTF16_BE_BOM: bytes = b"\xfe\xff"
UTF32_LE_BOM: bytes = b"\xff\xfe\x00\x00"
UTF32_BE_BOM: bytes = b"\x00\x00\xfe\xff"

BOM_ENCODINGS: List[tuple] = [
    (UTF8_BOM, 'utf-8-sig'),
    (UTF32_LE_BOM, 'utf-32'),
    (UTF32_BE_BOM, 'utf-32'),
    (UTF16_LE_BOM, 'utf-16'),
    (UTF16_BE_BOM, 'utf-16'),
]

# ============================================================================
# LANGUAGE DETECTION CONSTANTS
# ============================================================================

# Number of cues sampled when guessing a track's language
LANGUAGE_SAMPLE_SIZE: int = 50

# Label used when no language could be guessed
UNKNOWN_LANGUAGE: str = "unknown"

# ============================================================================
# OUTPUT AND EXPORT CONSTANTS
# ============================================================================

# Which track goes on top in combined output ('foreign' or 'native')
DEFAULT_TOP_LANGUAGE: str = "foreign"

# Separator used when joining several cues into one export cell
DEFAULT_EXPORT_JOINER: str = " "

# CSV export columns, in order
CSV_EXPORT_FIELDS: List[str] = [
    'index', 'start', 'end', 'start_ms', 'end_ms', 'foreign', 'native'
]

# Export formats understood by the exporter
EXPORT_FORMATS: List[str] = ['csv', 'review']

# Default backup directory name
BACKUP_DIR_NAME: str = "subtitle_backups"

# Default log format
DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Application metadata
APP_NAME: str = "Substudy"
APP_VERSION: str = "0.4.5"
APP_DESCRIPTION: str = """
Language-learning tools for working with parallel, bilingual subtitles:
- Combine a foreign-language and a native-language SRT into one bilingual track
- Export aligned subtitle pairs as CSV or as an HTML review page
- Write re-numbered per-language tracks from the aligned result
- Clean formatting codes out of subtitle files
"""
