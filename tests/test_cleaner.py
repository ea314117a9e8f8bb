from processors.cleaner import SubtitleCleaner

from conftest import FixedDetector, make_track


class TestSubtitleCleaner:
    def test_clean_line(self):
        assert SubtitleCleaner.clean_line(r"{\an8}<i>Hola,   amigo</i> ") == "Hola, amigo"
        assert SubtitleCleaner.clean_line('<font color="#ffff00">Sí</font>') == "Sí"
        assert SubtitleCleaner.clean_line("3 < 5 and 7 > 2") == "3 < 5 and 7 > 2"

    def test_clean_track_drops_empty_cues(self):
        track = make_track((0, 1000, "<i></i>"), (2000, 3000, "<b>kept</b>\n{\\pos(1,2)}"))
        cleaned = SubtitleCleaner().clean_track(track)
        assert len(cleaned) == 1
        assert cleaned[0].index == 1
        assert cleaned[0].lines == ("kept",)

    def test_keep_empty_cues(self):
        track = make_track((0, 1000, "<i></i>"), (2000, 3000, "kept"))
        cleaned = SubtitleCleaner(drop_empty_cues=False).clean_track(track)
        assert [cue.lines for cue in cleaned] == [(), ("kept",)]

    def test_unchanged_cue_is_reused(self):
        track = make_track((0, 1000, "plain"))
        assert SubtitleCleaner().clean_cue(track[0]) is track[0]

    def test_clean_file(self, tmp_path):
        source = tmp_path / "movie.es.srt"
        source.write_bytes(b"1\r\n00:00:01,000 --> 00:00:02,000\r\n<i>Hola</i>\r\n\r\n"
                           b"2\r\n00:00:03,000 --> 00:00:04,000\r\n{\\an8}\r\n")
        output = SubtitleCleaner().clean_file(source, detector=FixedDetector('ascii'))
        assert output == tmp_path / "movie.es.clean.srt"
        assert output.read_text(encoding='utf-8') == "1\n00:00:01,000 --> 00:00:02,000\nHola\n"

    def test_clean_file_explicit_output(self, tmp_path):
        source = tmp_path / "in.srt"
        source.write_text("1\n00:00:01,000 --> 00:00:02,000\nHi\n", encoding='utf-8')
        target = tmp_path / "out" / "cleaned.srt"
        assert SubtitleCleaner().clean_file(source, target, FixedDetector('utf-8')) == target
        assert target.exists()
