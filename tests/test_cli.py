import pytest

import core.encoding_detection
from ui.cli import CLIHandler, main

from conftest import ENGLISH_SRT, SPANISH_SRT, FixedDetector


@pytest.fixture(autouse=True)
def fixed_detection(monkeypatch):
    monkeypatch.setattr(core.encoding_detection, 'default_detector',
                        lambda: FixedDetector('utf-8'))


class TestCLI:
    def test_combine(self, subtitle_pair, tmp_path, capsys):
        foreign, native = subtitle_pair
        output = tmp_path / "combined.srt"
        assert main(['--no-colors', 'combine', str(foreign), str(native), '-o', str(output)]) == 0
        assert capsys.readouterr().out.strip() == str(output)
        assert output.read_text(encoding='utf-8').startswith("1\n00:00:01,000 --> 00:00:03,100\n")

    def test_combine_default_output(self, subtitle_pair, tmp_path):
        assert main(['combine', '--sequential', *map(str, subtitle_pair)]) == 0
        assert (tmp_path / "movie.es-en.srt").exists()

    def test_tracks(self, subtitle_pair, tmp_path, capsys):
        assert main(['tracks', *map(str, subtitle_pair), '--output-dir', str(tmp_path / "out")]) == 0
        printed = capsys.readouterr().out.split()
        assert printed == [str(tmp_path / "out" / "movie.es.srt"),
                           str(tmp_path / "out" / "movie.en.srt")]

    def test_tracks_from_input_folder_keeps_inputs(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(core.encoding_detection, 'default_detector',
                            lambda: FixedDetector('cp1252'))
        monkeypatch.chdir(tmp_path)
        foreign = tmp_path / "movie.es.srt"
        native = tmp_path / "movie.en.srt"
        foreign.write_bytes(SPANISH_SRT.replace("\n", "\r\n").encode('cp1252'))
        native.write_bytes(ENGLISH_SRT.encode('ascii'))
        originals = (foreign.read_bytes(), native.read_bytes())

        assert main(['tracks', 'movie.es.srt', 'movie.en.srt']) == 0

        assert capsys.readouterr().out.split() == ["movie.es.aligned.srt", "movie.en.aligned.srt"]
        assert (foreign.read_bytes(), native.read_bytes()) == originals
        assert "¿Qué es lo que quieres?" in (tmp_path / "movie.es.aligned.srt").read_text(encoding='utf-8')

    def test_combine_single_side(self, subtitle_pair, tmp_path):
        output = tmp_path / "native.srt"
        assert main(['combine', *map(str, subtitle_pair), '--mode', 'native', '-o', str(output)]) == 0
        assert output.read_text(encoding='utf-8') == ENGLISH_SRT

    def test_combine_refuses_to_overwrite_input(self, subtitle_pair):
        foreign, native = subtitle_pair
        original = native.read_bytes()
        assert main(['combine', str(foreign), str(native), '-o', str(native)]) == 1
        assert native.read_bytes() == original

    @pytest.mark.parametrize("export_format, name", [('csv', "movie.es-en.csv"),
                                                     ('review', "movie.es-en.html")])
    def test_export(self, subtitle_pair, tmp_path, export_format, name):
        assert main(['export', export_format, *map(str, subtitle_pair)]) == 0
        assert (tmp_path / name).exists()

    def test_clean(self, subtitle_pair, tmp_path):
        foreign, _ = subtitle_pair
        assert main(['clean', str(foreign)]) == 0
        assert (tmp_path / "movie.es.clean.srt").exists()

    def test_missing_input(self, subtitle_pair, tmp_path):
        foreign, _ = subtitle_pair
        assert main(['combine', str(foreign), str(tmp_path / "missing.srt")]) == 1

    def test_parse_error_exit_code(self, subtitle_pair, tmp_path):
        foreign, _ = subtitle_pair
        broken = tmp_path / "broken.srt"
        broken.write_text("1\n00:00:01,000 --> bad\n", encoding='utf-8')
        assert main(['combine', str(foreign), str(broken)]) == 1

    def test_no_command(self):
        assert main([]) == 1

    def test_unknown_export_format_is_rejected_by_parser(self, subtitle_pair):
        with pytest.raises(SystemExit):
            main(['export', 'anki', *map(str, subtitle_pair)])

    def test_parser_defaults(self):
        args = CLIHandler().create_parser().parse_args(['combine', 'a.srt', 'b.srt'])
        assert args.top == 'foreign'
        assert not args.sequential
        assert args.output is None
        assert args.mode == 'combined'
