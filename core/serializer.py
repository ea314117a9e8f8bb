"""
Rendering of tracks and aligned sequences back to SRT text and export rows.

Output formatting choices are passed in through ``RenderConfig`` rather than
read from global state, so the same sequence can be rendered several ways.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union
from utils.constants import (
    CANONICAL_NEWLINE, DEFAULT_EXPORT_JOINER, DEFAULT_TOP_LANGUAGE,
    SRT_DECIMAL_SEPARATOR, ACCEPTED_DECIMAL_SEPARATORS, RenderMode
)
from utils.logging_config import get_logger
from .alignment import AlignedSequence, FOREIGN, NATIVE
from .subtitle_formats import SubtitleTrack
from .timing_utils import TimeConverter, TimeSpan

logger = get_logger(__name__)

TOP_LANGUAGES = (FOREIGN, NATIVE)


@dataclass(frozen=True)
class RenderConfig:
    """
    Formatting options for the serializer.

    Attributes:
        decimal_separator: Character between seconds and milliseconds
        top_language: Side rendered first in combined mode ('foreign' or 'native')
        export_joiner: Separator used when several cues share an export cell
    """
    decimal_separator: str = SRT_DECIMAL_SEPARATOR
    top_language: str = DEFAULT_TOP_LANGUAGE
    export_joiner: str = DEFAULT_EXPORT_JOINER

    def __post_init__(self):
        if (len(self.decimal_separator) != 1
                or self.decimal_separator not in ACCEPTED_DECIMAL_SEPARATORS):
            raise ValueError(f"decimal_separator must be one of "
                             f"{list(ACCEPTED_DECIMAL_SEPARATORS)}, got {self.decimal_separator!r}")
        if self.top_language not in TOP_LANGUAGES:
            raise ValueError(f"top_language must be one of {list(TOP_LANGUAGES)}, "
                             f"got {self.top_language!r}")


@dataclass(frozen=True)
class ExportRecord:
    """One aligned group flattened for tabular or template export."""
    index: int
    start_ms: int
    end_ms: int
    foreign_text: str
    native_text: str


def format_timestamp(ms: int, separator: str = SRT_DECIMAL_SEPARATOR) -> str:
    """Format milliseconds the way the parser reads them back."""
    return TimeConverter.ms_to_timestamp(ms, separator)


def _render_blocks(entries: Iterable[Tuple[TimeSpan, Tuple[str, ...]]],
                   config: RenderConfig) -> str:
    blocks: List[str] = []
    for number, (span, lines) in enumerate(entries, start=1):
        block_lines = [
            str(number),
            f"{format_timestamp(span.start, config.decimal_separator)} --> "
            f"{format_timestamp(span.end, config.decimal_separator)}",
        ]
        # A blank line would end the block early
        block_lines.extend(line for line in lines if line.strip())
        blocks.append(CANONICAL_NEWLINE.join(block_lines) + CANONICAL_NEWLINE)
    return CANONICAL_NEWLINE.join(blocks)


def _entries_for(source: Union[AlignedSequence, SubtitleTrack], mode: RenderMode,
                 config: RenderConfig) -> List[Tuple[TimeSpan, Tuple[str, ...]]]:
    if isinstance(source, SubtitleTrack):
        return [(cue.span, cue.lines) for cue in source]

    if mode is RenderMode.FOREIGN:
        return [(cue.span, cue.lines) for group in source for cue in group.foreign]
    if mode is RenderMode.NATIVE:
        return [(cue.span, cue.lines) for group in source for cue in group.native]

    first, second = ((FOREIGN, NATIVE) if config.top_language == FOREIGN
                     else (NATIVE, FOREIGN))
    return [(group.span, group.lines(first) + group.lines(second)) for group in source]


def render(source: Union[AlignedSequence, SubtitleTrack],
           mode: RenderMode = RenderMode.COMBINED,
           config: Optional[RenderConfig] = None) -> str:
    """
    Render a track or aligned sequence as SRT text.

    A track renders all of its cues whatever the mode. For an aligned
    sequence, FOREIGN and NATIVE render the original cues of that side with
    their own timing, and COMBINED renders one cue per group spanning the
    whole group, with both sides' lines.

    Blank and whitespace-only text lines are left out, since SRT uses them
    to separate cues. Other lines are written unchanged, trailing
    whitespace included, so the parser reads back the same text.

    Args:
        source: Parsed track or aligned sequence
        mode: Which cues to render
        config: Formatting options

    Returns:
        SRT text with cues numbered from 1, blocks separated by a blank line

    Example:
        >>> text = render(sequence, RenderMode.COMBINED)
    """
    config = config or RenderConfig()
    entries = _entries_for(source, mode, config)
    logger.debug(f"Rendering {len(entries)} cues in {mode.value} mode")
    return _render_blocks(entries, config)


def export_records(sequence: AlignedSequence,
                   config: Optional[RenderConfig] = None) -> List[ExportRecord]:
    """
    Flatten an aligned sequence into one export row per group.

    Lines within a cue and cues within a group are joined with
    ``config.export_joiner``.

    Args:
        sequence: Aligned sequence to export
        config: Formatting options

    Returns:
        List of ExportRecord, numbered from 1
    """
    config = config or RenderConfig()
    joiner = config.export_joiner
    return [
        ExportRecord(
            index=number,
            start_ms=group.span.start,
            end_ms=group.span.end,
            foreign_text=joiner.join(group.lines(FOREIGN)),
            native_text=joiner.join(group.lines(NATIVE)),
        )
        for number, group in enumerate(sequence, start=1)
    ]
