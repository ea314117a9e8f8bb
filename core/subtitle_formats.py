"""
Subtitle data structures and the SRT parser.

This module provides:
- Core data structures for subtitle cues and tracks
- A permissive SRT parser that normalizes numbering and ordering
- File-level parsing with automatic encoding detection
"""

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, overload
from utils.constants import CANONICAL_NEWLINE
from utils.logging_config import get_logger
from .encoding_detection import EncodingDetectorProtocol, EncodingDetector
from .errors import ParseError
from .timing_utils import TimeSpan, TimeConverter, TIME_RANGE_RE

logger = get_logger(__name__)

INDEX_LINE_RE = re.compile(r'^\s*\d+\s*$')


@dataclass(frozen=True)
class Cue:
    """A single timed caption from a subtitle file."""
    index: int
    span: TimeSpan
    lines: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """Text lines joined with newlines."""
        return CANONICAL_NEWLINE.join(self.lines)

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end


@dataclass(frozen=True)
class SubtitleTrack:
    """
    Ordered, immutable sequence of cues from one subtitle file.

    Cues are kept sorted by start time (ties keep their file order).
    Overlapping or duplicate spans are allowed and preserved.
    """
    cues: Tuple[Cue, ...] = ()
    path: Optional[Path] = field(default=None, compare=False)
    encoding: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_cues(cls, cues: Sequence[Cue], path: Optional[Path] = None,
                  encoding: Optional[str] = None) -> 'SubtitleTrack':
        """
        Build a track from cues in any order.

        Cues are sorted stably by span and renumbered from 1.

        Args:
            cues: Cues to include
            path: Optional source path
            encoding: Optional source encoding

        Returns:
            New SubtitleTrack
        """
        ordered = sorted(cues, key=lambda cue: cue.span)
        renumbered = tuple(
            cue if cue.index == number else replace(cue, index=number)
            for number, cue in enumerate(ordered, start=1)
        )
        return cls(cues=renumbered, path=path, encoding=encoding)

    def __len__(self) -> int:
        return len(self.cues)

    def __iter__(self) -> Iterator[Cue]:
        return iter(self.cues)

    @overload
    def __getitem__(self, item: int) -> Cue: ...

    @overload
    def __getitem__(self, item: slice) -> Tuple[Cue, ...]: ...

    def __getitem__(self, item):
        return self.cues[item]

    @property
    def name(self) -> str:
        """Short label for log messages."""
        return self.path.name if self.path else "<memory>"

    def get_total_duration(self) -> int:
        """Milliseconds from the first cue start to the last cue end."""
        if not self.cues:
            return 0
        return max(cue.end for cue in self.cues) - self.cues[0].start


class SRTParser:
    """Parser for SRT subtitle text."""

    @staticmethod
    def parse(content: str) -> SubtitleTrack:
        """
        Parse canonical SRT text into a subtitle track.

        The grammar is permissive: the index line may be missing, stray
        whitespace in the time range is accepted, and blank lines between
        blocks may repeat. Source indices are ignored; cues are sorted by
        time and renumbered from 1.

        Args:
            content: Decoded text with ``\\n`` line endings

        Returns:
            SubtitleTrack with all cues

        Raises:
            ParseError: For the first malformed block; nothing is returned

        Example:
            >>> track = SRTParser.parse("1\\n00:00:01,000 --> 00:00:02,000\\nHello\\n")
            >>> track[0].span
            TimeSpan(start=1000, end=2000)
        """
        content = content.lstrip("\ufeff")
        cues = [
            SRTParser._parse_block(block, first_line)
            for first_line, block in SRTParser._split_blocks(content)
        ]
        track = SubtitleTrack.from_cues(cues)
        logger.debug(f"Parsed {len(track)} cues")
        return track

    @staticmethod
    def _split_blocks(content: str) -> List[Tuple[int, List[str]]]:
        """
        Split text into blocks of non-blank lines.

        Returns:
            List of (1-based line number of the block's first line, lines)
        """
        blocks: List[Tuple[int, List[str]]] = []
        current: List[str] = []
        first_line = 0

        for number, line in enumerate(content.split(CANONICAL_NEWLINE), start=1):
            if line.strip():
                if not current:
                    first_line = number
                current.append(line)
            elif current:
                blocks.append((first_line, current))
                current = []

        if current:
            blocks.append((first_line, current))

        split: List[Tuple[int, List[str]]] = []
        for first_line, lines in blocks:
            split.extend(SRTParser._split_run_on_cues(first_line, lines))
        return split

    @staticmethod
    def _split_run_on_cues(first_line: int, lines: List[str]) -> List[Tuple[int, List[str]]]:
        """Split a block where a missing blank line glued two cues together."""
        starts = [0]
        # The first cue needs at least an index or time range line before a
        # second cue can start
        first = 1 if TIME_RANGE_RE.match(lines[0]) else 2
        for i in range(first, len(lines) - 1):
            if INDEX_LINE_RE.match(lines[i]) and TIME_RANGE_RE.match(lines[i + 1]):
                starts.append(i)
        if len(starts) > 1:
            logger.debug(f"Block at line {first_line} holds {len(starts)} cues without blank separators")
        bounds = starts + [len(lines)]
        return [
            (first_line + bounds[n], lines[bounds[n]:bounds[n + 1]])
            for n in range(len(starts))
        ]

    @staticmethod
    def _parse_block(lines: List[str], first_line: int) -> Cue:
        """Parse one block of non-blank lines into a cue."""
        position = 0
        index = 0

        if INDEX_LINE_RE.match(lines[0]):
            index = int(lines[0])
            position = 1
            if len(lines) == 1:
                raise ParseError(first_line, "cue index without a time range", lines[0])
        elif not TimeConverter.looks_like_time_range(lines[0]):
            raise ParseError(first_line, "expected a cue index or time range", lines[0])

        time_line = lines[position]
        line_number = first_line + position
        try:
            start, end = TimeConverter.parse_time_range(time_line)
        except ValueError as e:
            raise ParseError(line_number, str(e), time_line)

        if start > end:
            raise ParseError(line_number, "cue ends before it starts", time_line)

        text_lines = tuple(lines[position + 1:])
        return Cue(index=index, span=TimeSpan(start, end), lines=text_lines)

    @staticmethod
    def parse_file(file_path: Path,
                   detector: Optional[EncodingDetectorProtocol] = None) -> SubtitleTrack:
        """
        Read, decode and parse an SRT file.

        Args:
            file_path: Path to the SRT file
            detector: Optional encoding detector

        Returns:
            SubtitleTrack carrying the source path and detected encoding

        Raises:
            IOError: If the file cannot be read
            DecodeError: If the bytes cannot be decoded
            ParseError: If a cue block is malformed
        """
        content, encoding = EncodingDetector.read_file_with_encoding(file_path, detector)
        try:
            track = SRTParser.parse(content)
        except ParseError as e:
            logger.error(f"Failed to parse {file_path.name}: {e}")
            raise

        logger.info(f"Parsed {len(track)} cues from SRT file: {file_path.name}")
        return replace(track, path=file_path, encoding=encoding)
