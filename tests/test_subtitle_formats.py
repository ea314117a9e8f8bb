import pytest

from core.errors import ParseError
from core.subtitle_formats import Cue, SRTParser, SubtitleTrack
from core.timing_utils import TimeSpan

from conftest import ENGLISH_SRT, FixedDetector


class TestSRTParser:
    def test_parse_basic(self):
        track = SRTParser.parse(ENGLISH_SRT)
        assert len(track) == 3
        assert track[0] == Cue(1, TimeSpan(1200, 3100), ("What do you want?",))
        assert track[2].text == "[door slams]"

    def test_multiline_text_is_kept(self):
        track = SRTParser.parse("1\n00:00:01,000 --> 00:00:02,000\nline one\nline two  \n")
        assert track[0].lines == ("line one", "line two  ")
        assert track[0].text == "line one\nline two  "

    def test_malformed_time_range_cites_line(self):
        content = "1\n00:00:01,000 --> bad\nHello\n"
        with pytest.raises(ParseError) as excinfo:
            SRTParser.parse(content)
        assert excinfo.value.line == 2
        assert excinfo.value.text == "00:00:01,000 --> bad"
        assert "line 2" in str(excinfo.value)

    def test_error_line_counts_earlier_blocks(self):
        content = ("1\n00:00:01,000 --> 00:00:02,000\nOne\n\n\n"
                   "2\n00:00:03,000 --> 00:00:0x,000\nTwo\n")
        with pytest.raises(ParseError) as excinfo:
            SRTParser.parse(content)
        assert excinfo.value.line == 7

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ParseError, match="ends before it starts"):
            SRTParser.parse("1\n00:00:05,000 --> 00:00:04,000\nBackwards\n")

    def test_out_of_range_minutes_are_rejected(self):
        with pytest.raises(ParseError, match="minutes out of range"):
            SRTParser.parse("1\n00:75:00,000 --> 00:76:00,000\nNope\n")

    def test_garbage_block_is_rejected(self):
        with pytest.raises(ParseError, match="expected a cue index or time range"):
            SRTParser.parse("hello there\n")

    def test_index_without_time_range(self):
        with pytest.raises(ParseError, match="cue index without a time range"):
            SRTParser.parse("1\n00:00:01,000 --> 00:00:02,000\nOne\n\n2\n")

    def test_missing_index_line_is_accepted(self):
        track = SRTParser.parse("00:00:01,000 --> 00:00:02,000\nNo index\n")
        assert track[0].index == 1
        assert track[0].lines == ("No index",)

    def test_period_separator_and_coordinates(self):
        track = SRTParser.parse("1\n00:00:01.250 --> 00:00:02.750 X1:10 X2:20\nDots\n")
        assert track[0].span == TimeSpan(1250, 2750)

    def test_cues_are_sorted_and_renumbered(self):
        content = ("7\n00:00:05,000 --> 00:00:06,000\nSecond\n\n"
                   "3\n00:00:01,000 --> 00:00:02,000\nFirst\n")
        track = SRTParser.parse(content)
        assert [cue.index for cue in track] == [1, 2]
        assert [cue.text for cue in track] == ["First", "Second"]

    def test_equal_spans_keep_file_order(self):
        content = ("1\n00:00:01,000 --> 00:00:02,000\nA\n\n"
                   "2\n00:00:01,000 --> 00:00:02,000\nB\n")
        assert [cue.text for cue in SRTParser.parse(content)] == ["A", "B"]

    def test_repeated_blank_lines_and_bom(self):
        content = "\ufeff\n\n1\n00:00:01,000 --> 00:00:02,000\nA\n\n\n\n2\n00:00:03,000 --> 00:00:04,000\nB\n\n"
        assert len(SRTParser.parse(content)) == 2

    def test_run_on_cues_are_split(self):
        content = ("1\n00:00:01,000 --> 00:00:02,000\nA\n"
                   "2\n00:00:03,000 --> 00:00:04,000\nB\n")
        track = SRTParser.parse(content)
        assert [cue.text for cue in track] == ["A", "B"]

    def test_run_on_cue_after_textless_cue_without_index(self):
        content = ("00:00:01,000 --> 00:00:02,000\n"
                   "2\n00:00:03,000 --> 00:00:04,000\nB\n")
        track = SRTParser.parse(content)
        assert [cue.span.start for cue in track] == [1000, 3000]
        assert track[0].lines == ()
        assert track[1].lines == ("B",)

    def test_cue_without_text(self):
        track = SRTParser.parse("1\n00:00:01,000 --> 00:00:02,000\n\n2\n00:00:03,000 --> 00:00:04,000\nB\n")
        assert track[0].lines == ()
        assert len(track) == 2

    def test_empty_content(self):
        assert len(SRTParser.parse("")) == 0
        assert len(SRTParser.parse("\n\n  \n")) == 0

    def test_parse_file_records_path_and_encoding(self, tmp_path):
        path = tmp_path / "movie.en.srt"
        path.write_bytes(ENGLISH_SRT.replace("\n", "\r\n").encode('ascii'))
        track = SRTParser.parse_file(path, FixedDetector('ascii'))
        assert track.path == path
        assert track.encoding == 'ascii'
        assert track.name == "movie.en.srt"
        assert track == SRTParser.parse(ENGLISH_SRT)


class TestSubtitleTrack:
    def test_from_cues_renumbers(self):
        cues = [Cue(9, TimeSpan(3000, 4000), ("b",)), Cue(4, TimeSpan(1000, 2000), ("a",))]
        track = SubtitleTrack.from_cues(cues)
        assert [(cue.index, cue.text) for cue in track] == [(1, "a"), (2, "b")]

    def test_total_duration(self):
        track = SubtitleTrack.from_cues([
            Cue(1, TimeSpan(1000, 9000)),
            Cue(2, TimeSpan(2000, 3000)),
        ])
        assert track.get_total_duration() == 8000
        assert SubtitleTrack().get_total_duration() == 0

    def test_unnamed_track(self):
        assert SubtitleTrack().name == "<memory>"
