import random

import pytest

from core.alignment import AlignedGroup, AlignmentStats, align, summarize
from core.errors import AlignmentError
from core.subtitle_formats import Cue, SubtitleTrack
from core.timing_utils import TimeSpan

from conftest import make_track


def texts(cues):
    return [cue.text for cue in cues]


def random_track(rng, count):
    entries = []
    for number in range(count):
        start = rng.randrange(0, 60000)
        entries.append((start, start + rng.randrange(0, 4000), f"cue {number}"))
    entries.sort(key=lambda entry: (entry[0], entry[1]))
    return make_track(*entries)


class TestAlignScenarios:
    def test_identical_spans_pair_up(self):
        sequence = align(make_track((0, 2000, "Hallo")), make_track((0, 2000, "Hello")))
        assert len(sequence) == 1
        group = sequence[0]
        assert group.span == TimeSpan(0, 2000)
        assert texts(group.foreign) == ["Hallo"]
        assert texts(group.native) == ["Hello"]
        assert group.is_paired

    def test_transitive_overlap_forms_one_group(self):
        foreign = make_track((0, 1000, "A"), (1000, 2000, "B"))
        native = make_track((0, 2000, "AB"))
        sequence = align(foreign, native)
        assert len(sequence) == 1
        assert texts(sequence[0].foreign) == ["A", "B"]
        assert texts(sequence[0].native) == ["AB"]
        assert sequence[0].span == TimeSpan(0, 2000)

    def test_unpaired_foreign_cue(self):
        sequence = align(make_track((5000, 6000, "X")), make_track())
        assert len(sequence) == 1
        assert sequence[0] == AlignedGroup(TimeSpan(5000, 6000), sequence[0].foreign, ())
        assert texts(sequence[0].foreign) == ["X"]
        assert not sequence[0].is_paired

    def test_touching_boundaries_merge(self):
        sequence = align(make_track((0, 1000, "left")), make_track((1000, 2000, "right")))
        assert len(sequence) == 1
        assert sequence[0].span == TimeSpan(0, 2000)


class TestAlignBehaviour:
    def test_empty_tracks(self):
        assert len(align(make_track(), make_track())) == 0

    def test_disjoint_cues_are_ordered_by_start(self):
        sequence = align(make_track((3000, 4000, "later")), make_track((0, 1000, "earlier")))
        assert [group.span.start for group in sequence] == [0, 3000]
        assert texts(sequence[0].native) == ["earlier"]
        assert texts(sequence[1].foreign) == ["later"]

    def test_chain_through_long_native_cue(self):
        foreign = make_track((0, 1000, "a"), (5000, 6000, "b"), (9000, 9500, "c"))
        native = make_track((900, 5100, "long"))
        sequence = align(foreign, native)
        assert len(sequence) == 2
        assert texts(sequence[0].foreign) == ["a", "b"]
        assert sequence[0].span == TimeSpan(0, 6000)
        assert texts(sequence[1].foreign) == ["c"]
        assert sequence[1].native == ()

    def test_overlapping_cues_in_one_track_share_a_group(self):
        sequence = align(make_track((0, 2000, "one"), (1500, 3000, "two")), make_track())
        assert len(sequence) == 1
        assert texts(sequence[0].foreign) == ["one", "two"]

    def test_groups_keep_original_cue_objects(self):
        foreign = make_track((0, 1000, "a"))
        native = make_track((500, 1500, "b"))
        group = align(foreign, native)[0]
        assert group.foreign[0] is foreign[0]
        assert group.native[0] is native[0]

    def test_simultaneous_start_puts_foreign_lines_first(self):
        group = align(make_track((0, 500, "f")), make_track((0, 2000, "n")))[0]
        assert group.lines('foreign') == ("f",)
        assert group.lines('native') == ("n",)
        assert group.span == TimeSpan(0, 2000)

    def test_invalid_span_is_rejected(self):
        with pytest.raises(AlignmentError, match="invalid span"):
            align(make_track((2000, 1000, "bad")), make_track())

    def test_unsorted_track_is_sorted_first(self):
        late = Cue(1, TimeSpan(5000, 6000), ("late",))
        early = Cue(2, TimeSpan(0, 1000), ("early",))
        track = SubtitleTrack(cues=(late, early))
        groups = list(align(make_track(), track))
        assert [group.span for group in groups] == [TimeSpan(0, 1000), TimeSpan(5000, 6000)]
        assert groups[0].native[0] is early
        assert groups[1].native[0] is late


class TestAlignProperties:
    @pytest.mark.parametrize("seed", range(8))
    def test_every_cue_lands_in_exactly_one_group(self, seed):
        rng = random.Random(seed)
        foreign = random_track(rng, rng.randrange(0, 30))
        native = random_track(rng, rng.randrange(0, 30))
        sequence = align(foreign, native)

        grouped_foreign = [cue for group in sequence for cue in group.foreign]
        grouped_native = [cue for group in sequence for cue in group.native]
        assert grouped_foreign == list(foreign)
        assert grouped_native == list(native)
        assert len(sequence) <= len(foreign) + len(native)

    @pytest.mark.parametrize("seed", range(8))
    def test_groups_are_ordered_and_disjoint(self, seed):
        rng = random.Random(seed)
        sequence = align(random_track(rng, 25), random_track(rng, 25))

        for group in sequence:
            members = list(group.foreign) + list(group.native)
            assert group.span.start == min(cue.start for cue in members)
            assert group.span.end == max(cue.end for cue in members)

        for previous, current in zip(sequence, sequence[1:]):
            assert previous.span.end < current.span.start
            for cue in list(current.foreign) + list(current.native):
                for other in list(previous.foreign) + list(previous.native):
                    assert not cue.span.overlaps(other.span)

    def test_alignment_is_deterministic(self):
        rng = random.Random(42)
        foreign, native = random_track(rng, 40), random_track(rng, 40)
        assert align(foreign, native) == align(foreign, native)


def test_summarize():
    foreign = make_track((0, 1000, "a"), (5000, 6000, "b"))
    native = make_track((500, 1500, "x"), (8000, 9000, "y"))
    stats = summarize(align(foreign, native))
    assert stats == AlignmentStats(groups=3, paired=1, foreign_only=1, native_only=1)
    assert str(stats) == "3 groups (1 paired, 1 foreign-only, 1 native-only)"
