"""
Language detection for subtitle tracks.

This module provides:
- Script-based detection for languages with their own writing system
- Stop-word scoring for common Latin-script languages
- Track-level detection over a sample of cues

The result is a two-letter code used to name output files and to label
the review page; it never influences alignment.
"""

import re
from collections import Counter
from typing import Dict, Optional, Set
from utils.constants import LANGUAGE_SAMPLE_SIZE, UNKNOWN_LANGUAGE
from utils.logging_config import get_logger
from .subtitle_formats import SubtitleTrack

logger = get_logger(__name__)

# (first, last) code point ranges checked in order; kana before CJK so
# Japanese text with kanji is not reported as Chinese
SCRIPT_RANGES = [
    ('ja', '\u3040', '\u30ff'),  # Hiragana and Katakana
    ('ko', '\uac00', '\ud7af'),  # Hangul syllables
    ('zh', '\u4e00', '\u9fff'),  # CJK unified ideographs
    ('zh', '\u3400', '\u4dbf'),  # CJK extension A
    ('ru', '\u0400', '\u04ff'),  # Cyrillic
    ('el', '\u0370', '\u03ff'),  # Greek
    ('he', '\u0590', '\u05ff'),  # Hebrew
    ('ar', '\u0600', '\u06ff'),  # Arabic
    ('th', '\u0e00', '\u0e7f'),  # Thai
]

STOP_WORDS: Dict[str, Set[str]] = {
    'en': {'the', 'and', 'you', 'that', 'was', 'for', 'are', 'with', 'have',
           'this', 'what', 'just', 'know', 'your', 'not', 'it', 'is', 'i'},
    'es': {'el', 'la', 'que', 'de', 'y', 'los', 'las', 'por', 'pero', 'es',
           'no', 'una', 'con', 'qué', 'está', 'yo', 'lo', 'me'},
    'fr': {'le', 'la', 'les', 'et', 'est', 'je', 'tu', 'vous', 'pas', 'que',
           'une', 'des', 'ce', 'il', 'qui', 'mais', 'avec', 'suis'},
    'de': {'der', 'die', 'das', 'und', 'ist', 'ich', 'nicht', 'du', 'sie',
           'ein', 'eine', 'mit', 'was', 'wir', 'zu', 'es', 'auf', 'den'},
    'it': {'il', 'che', 'di', 'e', 'non', 'la', 'un', 'una', 'sono', 'per',
           'questo', 'mi', 'ti', 'ho', 'cosa', 'è', 'lo', 'gli'},
    'pt': {'o', 'que', 'de', 'não', 'e', 'um', 'uma', 'para', 'com', 'você',
           'eu', 'os', 'as', 'isso', 'está', 'mas', 'é', 'ele'},
}

WORD_RE = re.compile(r"[^\W\d_]+", re.UNICODE)

# Minimum share of alphabetic characters a script needs to decide the language
SCRIPT_SHARE_THRESHOLD = 0.3


class LanguageDetector:
    """Handles language detection for subtitle text and tracks."""

    @staticmethod
    def detect_language(text: str) -> str:
        """
        Detect the language of a piece of text.

        Args:
            text: Text to analyze

        Returns:
            Two-letter language code, or 'unknown'

        Example:
            >>> LanguageDetector.detect_language("¿Qué es lo que quieres?")
            'es'
        """
        script = LanguageDetector._detect_script(text)
        if script:
            return script
        return LanguageDetector._score_stop_words(text) or UNKNOWN_LANGUAGE

    @staticmethod
    def _detect_script(text: str) -> Optional[str]:
        letters = [char for char in text if char.isalpha()]
        if not letters:
            return None

        counts: Counter = Counter()
        for char in letters:
            for code, first, last in SCRIPT_RANGES:
                if first <= char <= last:
                    counts[code] += 1
                    break

        # Any kana at all means Japanese, even when kanji dominate
        if counts['ja'] and counts['ja'] + counts['zh'] >= SCRIPT_SHARE_THRESHOLD * len(letters):
            return 'ja'

        if counts:
            code, count = counts.most_common(1)[0]
            if count >= SCRIPT_SHARE_THRESHOLD * len(letters):
                return code
        return None

    @staticmethod
    def _score_stop_words(text: str) -> Optional[str]:
        words = [word.lower() for word in WORD_RE.findall(text)]
        if not words:
            return None

        scores = {
            code: sum(1 for word in words if word in vocabulary)
            for code, vocabulary in STOP_WORDS.items()
        }
        best_code = max(scores, key=scores.get)
        if scores[best_code] == 0:
            return None
        return best_code

    @staticmethod
    def detect_track_language(track: SubtitleTrack,
                              sample_size: int = LANGUAGE_SAMPLE_SIZE) -> str:
        """
        Detect the language of a subtitle track from a sample of its cues.

        Args:
            track: Parsed subtitle track
            sample_size: Maximum number of cues to look at

        Returns:
            Two-letter language code, or 'unknown'
        """
        if not len(track):
            return UNKNOWN_LANGUAGE

        step = max(1, len(track) // sample_size)
        sample = " ".join(cue.text for cue in track.cues[::step][:sample_size])
        language = LanguageDetector.detect_language(sample)
        logger.debug(f"Detected language of {track.name}: {language}")
        return language
