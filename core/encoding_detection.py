"""
Encoding detection and text decoding for subtitle files.

This module turns the raw bytes of a subtitle file into canonical text:
- Byte-order marks win over statistical detection
- Statistical detection goes through a small detector interface so tests
  can substitute fixed answers (charset-normalizer first, chardet second)
- Low-confidence guesses and failed decodes fall back to UTF-8
- Every line terminator is normalized to ``\\n``
"""

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple

import chardet
from charset_normalizer import from_bytes

from utils.constants import (
    BOM_ENCODINGS, CANONICAL_NEWLINE, FALLBACK_ENCODING, MIN_ENCODING_CONFIDENCE
)
from utils.file_operations import FileHandler
from utils.logging_config import get_logger
from .errors import DecodeError

logger = get_logger(__name__)


@dataclass(frozen=True)
class EncodingGuess:
    """Result of a statistical encoding detection."""
    encoding: Optional[str]
    confidence: float = 0.0

    @property
    def is_confident(self) -> bool:
        return bool(self.encoding) and self.confidence >= MIN_ENCODING_CONFIDENCE


class EncodingDetectorProtocol(Protocol):
    """Anything that can guess the encoding of a byte string."""

    def detect(self, raw: bytes) -> EncodingGuess:
        ...


class CharsetNormalizerDetector:
    """Detects encodings with charset-normalizer."""

    def detect(self, raw: bytes) -> EncodingGuess:
        best = from_bytes(raw).best()
        if best is None:
            return EncodingGuess(None, 0.0)
        # chaos is the mess ratio of the best decoding, 0.0 being clean text
        return EncodingGuess(best.encoding, round(1.0 - best.chaos, 3))


class ChardetDetector:
    """Detects encodings with chardet's universal detector."""

    def detect(self, raw: bytes) -> EncodingGuess:
        result = chardet.detect(raw)
        return EncodingGuess(result.get('encoding'), result.get('confidence') or 0.0)


class ChainedDetector:
    """
    Asks several detectors in order and keeps the first confident answer.

    When nobody is confident, the most confident answer is returned so the
    caller can still log what was seen before falling back.
    """

    def __init__(self, detectors: Sequence[EncodingDetectorProtocol]):
        self.detectors = list(detectors)

    def detect(self, raw: bytes) -> EncodingGuess:
        best = EncodingGuess(None, 0.0)
        for detector in self.detectors:
            guess = detector.detect(raw)
            logger.debug(f"{type(detector).__name__} guessed {guess.encoding} "
                         f"(confidence {guess.confidence:.2f})")
            if guess.is_confident:
                return guess
            if guess.confidence > best.confidence:
                best = guess
        return best


def default_detector() -> ChainedDetector:
    """Detector used when the caller does not supply one."""
    return ChainedDetector([CharsetNormalizerDetector(), ChardetDetector()])


def _canonical_codec_name(encoding: str) -> Optional[str]:
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        return None


def bom_encoding(raw: bytes) -> Optional[str]:
    """
    Return the encoding announced by a byte-order mark, if any.

    Example:
        >>> bom_encoding(b"\\xef\\xbb\\xbf1\\n")
        'utf-8-sig'
    """
    for bom, encoding in BOM_ENCODINGS:
        if raw.startswith(bom):
            return encoding
    return None


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line terminators to the canonical newline."""
    text = text.replace('\r\n', CANONICAL_NEWLINE).replace('\r', CANONICAL_NEWLINE)
    return text


def decode_with_encoding(raw: bytes,
                         detector: Optional[EncodingDetectorProtocol] = None
                         ) -> Tuple[str, str]:
    """
    Decode subtitle bytes to canonical text and report the encoding used.

    Args:
        raw: Raw file contents
        detector: Encoding detector; charset-normalizer with a chardet
            second opinion when omitted

    Returns:
        Tuple of (canonical_text, encoding_used)

    Raises:
        DecodeError: If neither the detected nor the fallback encoding can
            decode the bytes

    Example:
        >>> decode_with_encoding("1\\r\\n".encode("utf-8"))
        ('1\\n', 'utf-8')
    """
    if not raw:
        return "", FALLBACK_ENCODING

    candidates: List[str] = []
    announced = bom_encoding(raw)
    if announced:
        logger.debug(f"Byte-order mark found, using {announced}")
        candidates.append(announced)
    else:
        guess = (detector or default_detector()).detect(raw)
        if guess.is_confident:
            candidates.append(guess.encoding)
        else:
            logger.warning(f"Encoding detection unsure ({guess.encoding}, "
                           f"confidence {guess.confidence:.2f}); "
                           f"falling back to {FALLBACK_ENCODING}")

    fallback = _canonical_codec_name(FALLBACK_ENCODING)
    if fallback not in [_canonical_codec_name(c) for c in candidates]:
        candidates.append(FALLBACK_ENCODING)

    position = None
    for encoding in candidates:
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as e:
            logger.warning(f"Decoding as {encoding} failed at byte {e.start}: {e.reason}")
            position = e.start
            continue
        except LookupError:
            logger.warning(f"Unknown encoding reported by detector: {encoding}")
            continue

        if text.startswith('\ufeff'):
            text = text[1:]
        return normalize_newlines(text), encoding

    raise DecodeError("Cannot decode subtitle data", candidates, position)


def decode(raw: bytes, detector: Optional[EncodingDetectorProtocol] = None) -> str:
    """
    Decode subtitle bytes to canonical text.

    See ``decode_with_encoding`` for the detection and fallback rules.
    """
    text, _ = decode_with_encoding(raw, detector)
    return text


class EncodingDetector:
    """File-level helpers built on the decoding functions above."""

    @staticmethod
    def read_file_with_encoding(file_path: Path,
                                detector: Optional[EncodingDetectorProtocol] = None
                                ) -> Tuple[str, str]:
        """
        Read a subtitle file and return its canonical text.

        Args:
            file_path: Path to the file to read
            detector: Optional encoding detector

        Returns:
            Tuple of (canonical_text, encoding_used)

        Raises:
            IOError: If the file cannot be read
            DecodeError: If the contents cannot be decoded

        Example:
            >>> content, encoding = EncodingDetector.read_file_with_encoding(Path("movie.es.srt"))
        """
        raw = FileHandler.read_bytes(file_path)
        content, encoding = decode_with_encoding(raw, detector)
        logger.debug(f"Read {file_path.name} with encoding: {encoding}")
        return content, encoding
