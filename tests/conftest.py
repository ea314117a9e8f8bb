"""Shared fixtures for the substudy test suite.

Encoding detection is replaced by fixed answers where a test needs to be
independent of charset-normalizer's and chardet's heuristics.
"""

from pathlib import Path
from typing import Optional, Tuple

import pytest

from core.encoding_detection import EncodingGuess
from core.subtitle_formats import Cue, SubtitleTrack
from core.timing_utils import TimeSpan


class FixedDetector:
    """Encoding detector that always gives the same answer."""

    def __init__(self, encoding: Optional[str], confidence: float = 0.99):
        self.guess = EncodingGuess(encoding, confidence)
        self.calls = 0

    def detect(self, raw: bytes) -> EncodingGuess:
        self.calls += 1
        return self.guess


def make_track(*entries: Tuple[int, int, str]) -> SubtitleTrack:
    """Build a track from (start_ms, end_ms, text) tuples."""
    cues = [
        Cue(index=number, span=TimeSpan(start, end), lines=tuple(text.split("\n")) if text else ())
        for number, (start, end, text) in enumerate(entries, start=1)
    ]
    return SubtitleTrack(cues=tuple(cues))


SPANISH_SRT = """1
00:00:01,000 --> 00:00:03,000
¿Qué es lo que quieres?

2
00:00:04,000 --> 00:00:05,500
No lo sé.

3
00:00:05,500 --> 00:00:07,000
Pero yo sí.
"""

ENGLISH_SRT = """1
00:00:01,200 --> 00:00:03,100
What do you want?

2
00:00:04,100 --> 00:00:06,900
I don't know. But I do.

3
00:00:10,000 --> 00:00:11,000
[door slams]
"""


@pytest.fixture
def utf8_detector() -> FixedDetector:
    return FixedDetector('utf-8')


@pytest.fixture
def subtitle_pair(tmp_path: Path) -> Tuple[Path, Path]:
    """A Spanish (CRLF, cp1252-safe UTF-8) and an English SRT file on disk."""
    foreign = tmp_path / "movie.es.srt"
    native = tmp_path / "movie.en.srt"
    foreign.write_bytes(SPANISH_SRT.replace("\n", "\r\n").encode("utf-8"))
    native.write_bytes(ENGLISH_SRT.encode("utf-8"))
    return foreign, native
