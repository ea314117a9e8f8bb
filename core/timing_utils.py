"""
Time conversion and interval utilities for subtitle processing.

This module provides:
- The TimeSpan value type (closed interval of integer milliseconds)
- Conversion between SRT time stamps and milliseconds
- Human-readable duration formatting for logs and exports

Times are kept as integer milliseconds throughout so parsing and
re-serializing never loses precision.
"""

import re
from dataclasses import dataclass
from typing import Tuple
from utils.constants import SRT_DECIMAL_SEPARATOR, ACCEPTED_DECIMAL_SEPARATORS
from utils.logging_config import get_logger

logger = get_logger(__name__)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

TIMESTAMP_PATTERN = (
    r'(?P<{p}h>\d+)\s*:\s*(?P<{p}m>\d+)\s*:\s*(?P<{p}s>\d+)\s*'
    r'[' + re.escape(ACCEPTED_DECIMAL_SEPARATORS) + r']\s*(?P<{p}ms>\d+)'
)

TIME_RANGE_RE = re.compile(
    r'^\s*' + TIMESTAMP_PATTERN.format(p='start_') +
    r'\s*-->\s*' + TIMESTAMP_PATTERN.format(p='end_') +
    # SRT position coordinates (X1:100 X2:200 ...) may trail the range
    r'(?:\s+.*)?$'
)


@dataclass(frozen=True, order=True)
class TimeSpan:
    """
    Closed time interval ``[start, end]`` in milliseconds.

    Spans order by start, then end. A span is valid when
    ``0 <= start <= end``; the parser rejects invalid spans and the
    aligner re-checks them, so construction itself does not raise.
    """
    start: int
    end: int

    @property
    def duration(self) -> int:
        """Length of the span in milliseconds."""
        return self.end - self.start

    @property
    def is_valid(self) -> bool:
        return 0 <= self.start <= self.end

    def overlaps(self, other: 'TimeSpan') -> bool:
        """
        Check whether two spans intersect.

        Intervals are closed, so spans that only touch at a boundary and
        zero-length spans at the same instant both count as overlapping.

        Args:
            other: Span to compare against

        Returns:
            True if the spans share at least one instant
        """
        return self.start <= other.end and other.start <= self.end

    def union(self, other: 'TimeSpan') -> 'TimeSpan':
        """Smallest span covering both spans."""
        return TimeSpan(min(self.start, other.start), max(self.end, other.end))

    def __str__(self) -> str:
        return (f"{TimeConverter.ms_to_timestamp(self.start)} --> "
                f"{TimeConverter.ms_to_timestamp(self.end)}")


class TimeConverter:
    """Handles time format conversions for SRT-style time stamps."""

    @staticmethod
    def components_to_ms(hours: str, minutes: str, seconds: str, millis: str) -> int:
        """
        Convert time stamp components to milliseconds.

        Args:
            hours: Hour digits (any width)
            minutes: Minute digits, must be below 60
            seconds: Second digits, must be below 60
            millis: Exactly three millisecond digits

        Returns:
            Time in milliseconds

        Raises:
            ValueError: If a component is out of range
        """
        if len(millis) != 3:
            raise ValueError(f"milliseconds must have three digits, got '{millis}'")
        h, m, s, ms = int(hours), int(minutes), int(seconds), int(millis)
        if m >= 60:
            raise ValueError(f"minutes out of range: {m}")
        if s >= 60:
            raise ValueError(f"seconds out of range: {s}")
        return h * MS_PER_HOUR + m * MS_PER_MINUTE + s * MS_PER_SECOND + ms

    @staticmethod
    def ms_to_timestamp(ms: int, separator: str = SRT_DECIMAL_SEPARATOR) -> str:
        """
        Convert milliseconds to an SRT time stamp.

        ``parse_time_range`` reads the result back exactly for either
        separator. Hours are zero-padded to two digits and widen as needed.

        Args:
            ms: Time in milliseconds, must not be negative
            separator: Character between seconds and milliseconds

        Returns:
            Formatted time stamp

        Example:
            >>> TimeConverter.ms_to_timestamp(3825678)
            '01:03:45,678'
        """
        if ms < 0:
            raise ValueError(f"Cannot format negative time: {ms}")
        hours, rest = divmod(ms, MS_PER_HOUR)
        minutes, rest = divmod(rest, MS_PER_MINUTE)
        seconds, millis = divmod(rest, MS_PER_SECOND)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}{separator}{millis:03d}"

    @staticmethod
    def parse_time_range(timestamp_line: str) -> Tuple[int, int]:
        """
        Parse an SRT time-range line to start and end milliseconds.

        Args:
            timestamp_line: Line such as ``00:01:23,456 --> 00:01:26,789``

        Returns:
            Tuple of (start_ms, end_ms)

        Raises:
            ValueError: If the line is not a well-formed time range
        """
        match = TIME_RANGE_RE.match(timestamp_line)
        if not match:
            raise ValueError("malformed time range")
        start = TimeConverter.components_to_ms(
            match.group('start_h'), match.group('start_m'),
            match.group('start_s'), match.group('start_ms')
        )
        end = TimeConverter.components_to_ms(
            match.group('end_h'), match.group('end_m'),
            match.group('end_s'), match.group('end_ms')
        )
        return start, end

    @staticmethod
    def looks_like_time_range(line: str) -> bool:
        """Cheap check used to tell a missing index line from garbage."""
        return '-->' in line

    @staticmethod
    def format_duration(ms: int) -> str:
        """
        Format a duration in milliseconds to a human-readable string.

        Example:
            >>> TimeConverter.format_duration(3825500)
            '1h 3m 45.5s'
        """
        seconds = ms / MS_PER_SECOND
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            return f"{minutes}m {seconds % 60:.1f}s"
        else:
            hours = int(seconds // 3600)
            remaining = seconds % 3600
            minutes = int(remaining // 60)
            return f"{hours}h {minutes}m {remaining % 60:.1f}s"
