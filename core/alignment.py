"""
Interval-based alignment of a foreign-language and a native-language track.

Neither subtitle file says which of its cues correspond to the other file's
cues, so correspondence is inferred purely from timing: cues whose spans
overlap (directly or through a chain of overlaps) end up in the same group.

The merge is a single forward pass over both tracks with one cursor per
track. Each group is seeded with the earliest unconsumed cue and then
absorbs overlapping cues from either track, in start order, until a pass
absorbs nothing.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
from utils.logging_config import get_logger
from .errors import AlignmentError
from .subtitle_formats import Cue, SubtitleTrack
from .timing_utils import TimeSpan

logger = get_logger(__name__)

FOREIGN = 'foreign'
NATIVE = 'native'


@dataclass(frozen=True)
class AlignedGroup:
    """
    Foreign and native cues that overlap in time.

    Either side may be empty when a cue has no counterpart in the other
    track. The cues are the original track objects, not copies.
    """
    span: TimeSpan
    foreign: Tuple[Cue, ...] = ()
    native: Tuple[Cue, ...] = ()

    @property
    def is_paired(self) -> bool:
        return bool(self.foreign) and bool(self.native)

    def lines(self, side: str) -> Tuple[str, ...]:
        """All text lines of one side, in cue order."""
        cues = self.foreign if side == FOREIGN else self.native
        return tuple(line for cue in cues for line in cue.lines)


@dataclass(frozen=True)
class AlignedSequence:
    """Ordered, immutable sequence of aligned groups."""
    groups: Tuple[AlignedGroup, ...] = ()

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[AlignedGroup]:
        return iter(self.groups)

    def __getitem__(self, item):
        return self.groups[item]


@dataclass(frozen=True)
class AlignmentStats:
    """Summary counts for an aligned sequence."""
    groups: int
    paired: int
    foreign_only: int
    native_only: int

    def __str__(self) -> str:
        return (f"{self.groups} groups ({self.paired} paired, "
                f"{self.foreign_only} foreign-only, {self.native_only} native-only)")


def _ordered_cues(track: SubtitleTrack, label: str) -> Tuple[Cue, ...]:
    """
    Validate a track's spans and return its cues in start order.

    Tracks built by the parser are already sorted; others are sorted
    stably by span without renumbering or copying the cues.
    """
    for cue in track:
        if not cue.span.is_valid:
            raise AlignmentError(
                f"{label} cue {cue.index} has an invalid span "
                f"({cue.span.start} ms to {cue.span.end} ms)"
            )
    if all(a.span <= b.span for a, b in zip(track.cues, track.cues[1:])):
        return track.cues
    logger.warning(f"{label} track {track.name} is not in time order; sorting it")
    return tuple(sorted(track.cues, key=lambda cue: cue.span))


def align(foreign: SubtitleTrack, native: SubtitleTrack) -> AlignedSequence:
    """
    Align two subtitle tracks by temporal overlap.

    Every input cue ends up in exactly one group, groups come out in
    non-decreasing start order, and the result depends only on the inputs.
    When both next cues start at the same instant the foreign cue is taken
    first.

    Args:
        foreign: Foreign-language track
        native: Native-language track

    Returns:
        AlignedSequence covering both tracks

    Raises:
        AlignmentError: If a span has start after end

    Example:
        >>> sequence = align(spanish_track, english_track)
        >>> for group in sequence:
        ...     print(group.span, len(group.foreign), len(group.native))
    """
    f_cues = _ordered_cues(foreign, FOREIGN)
    n_cues = _ordered_cues(native, NATIVE)
    f_pos, n_pos = 0, 0
    groups: List[AlignedGroup] = []

    def next_side(span: Optional[TimeSpan]) -> Optional[str]:
        # The earlier of the two head cues, restricted to cues overlapping
        # span when one is given; foreign wins ties.
        f_head = f_cues[f_pos] if f_pos < len(f_cues) else None
        n_head = n_cues[n_pos] if n_pos < len(n_cues) else None
        if span is not None:
            if f_head is not None and not f_head.span.overlaps(span):
                f_head = None
            if n_head is not None and not n_head.span.overlaps(span):
                n_head = None
        if f_head is None and n_head is None:
            return None
        if n_head is None:
            return FOREIGN
        if f_head is None:
            return NATIVE
        return FOREIGN if f_head.span.start <= n_head.span.start else NATIVE

    while f_pos < len(f_cues) or n_pos < len(n_cues):
        side = next_side(None)
        if side == FOREIGN:
            seed = f_cues[f_pos]
            f_pos += 1
            group_foreign, group_native = [seed], []
        else:
            seed = n_cues[n_pos]
            n_pos += 1
            group_foreign, group_native = [], [seed]
        span = seed.span

        # Each pass absorbs one cue, so the remaining count bounds the loop
        budget = (len(f_cues) - f_pos) + (len(n_cues) - n_pos)
        for _ in range(budget):
            side = next_side(span)
            if side is None:
                break
            if side == FOREIGN:
                cue = f_cues[f_pos]
                f_pos += 1
                group_foreign.append(cue)
            else:
                cue = n_cues[n_pos]
                n_pos += 1
                group_native.append(cue)
            span = span.union(cue.span)

        groups.append(AlignedGroup(span, tuple(group_foreign), tuple(group_native)))

    sequence = AlignedSequence(tuple(groups))
    logger.debug(f"Aligned {len(foreign)} foreign and {len(native)} native cues "
                 f"into {len(sequence)} groups")
    return sequence


def summarize(sequence: AlignedSequence) -> AlignmentStats:
    """
    Count paired and unpaired groups in an aligned sequence.

    Args:
        sequence: Result of ``align``

    Returns:
        AlignmentStats
    """
    paired = sum(1 for group in sequence if group.is_paired)
    foreign_only = sum(1 for group in sequence if group.foreign and not group.native)
    native_only = sum(1 for group in sequence if group.native and not group.foreign)
    return AlignmentStats(len(sequence), paired, foreign_only, native_only)
