"""
Bilingual subtitle merging processor.

This module loads a foreign-language and a native-language subtitle file,
aligns them by timing and writes the combined bilingual track. Both files
can be decoded and parsed in parallel since they share no state.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional, Tuple
from core.alignment import AlignedSequence, align, summarize
from core.encoding_detection import EncodingDetectorProtocol
from core.language_detection import LanguageDetector
from core.serializer import RenderConfig, render
from core.subtitle_formats import SubtitleTrack, SRTParser
from core.timing_utils import TimeConverter
from utils.constants import RenderMode
from utils.file_operations import FileHandler
from utils.logging_config import get_logger

logger = get_logger(__name__)


class BilingualMerger:
    """Handles merging of foreign-language and native-language subtitles."""

    def __init__(self, config: Optional[RenderConfig] = None,
                 parallel: bool = True,
                 detector: Optional[EncodingDetectorProtocol] = None,
                 progress_callback: Optional[Callable[[str, int, int], None]] = None):
        """
        Initialize the bilingual merger.

        Args:
            config: Render configuration for written output
            parallel: Load the two input files concurrently
            detector: Encoding detector (charset-normalizer/chardet when None)
            progress_callback: Optional callback function(step_name, current, total)
        """
        self.config = config or RenderConfig()
        self.parallel = parallel
        self.detector = detector
        self.progress_callback = progress_callback

        logger.debug(f"BilingualMerger initialized: parallel={parallel}, "
                     f"top_language={self.config.top_language}")

    def _report_progress(self, step_name: str, current: int = 0, total: int = 0):
        """Report progress to callback if available."""
        if self.progress_callback:
            self.progress_callback(step_name, current, total)

    def load_track(self, path: Path) -> SubtitleTrack:
        """
        Decode and parse one subtitle file.

        Raises:
            IOError: If the file cannot be read
            DecodeError, ParseError: If the file is not usable SRT
        """
        return SRTParser.parse_file(path, self.detector)

    def load_tracks(self, foreign_path: Path,
                    native_path: Path) -> Tuple[SubtitleTrack, SubtitleTrack]:
        """
        Load both subtitle files.

        Errors from either file propagate unchanged; there is no partial
        result.

        Args:
            foreign_path: Foreign-language subtitle file
            native_path: Native-language subtitle file

        Returns:
            Tuple of (foreign_track, native_track)
        """
        self._report_progress("Loading subtitles", 0, 2)
        if self.parallel:
            with ThreadPoolExecutor(max_workers=2) as executor:
                foreign_future = executor.submit(self.load_track, foreign_path)
                native_future = executor.submit(self.load_track, native_path)
                foreign, native = foreign_future.result(), native_future.result()
        else:
            foreign = self.load_track(foreign_path)
            native = self.load_track(native_path)
        self._report_progress("Loading subtitles", 2, 2)

        logger.info(f"Loaded {len(foreign)} foreign cues ({foreign.encoding}, "
                    f"{TimeConverter.format_duration(foreign.get_total_duration())}) "
                    f"and {len(native)} native cues ({native.encoding}, "
                    f"{TimeConverter.format_duration(native.get_total_duration())})")
        return foreign, native

    def align_tracks(self, foreign: SubtitleTrack, native: SubtitleTrack) -> AlignedSequence:
        """
        Align two loaded tracks and log the alignment statistics.

        Args:
            foreign: Foreign-language track
            native: Native-language track

        Returns:
            AlignedSequence of both tracks
        """
        self._report_progress("Aligning", 0, 1)
        sequence = align(foreign, native)
        self._report_progress("Aligning", 1, 1)
        logger.info(f"Alignment: {summarize(sequence)}")
        return sequence

    @staticmethod
    def language_pair(foreign: SubtitleTrack, native: SubtitleTrack) -> Tuple[str, str]:
        """Detected (foreign, native) language codes, used for output names."""
        return (LanguageDetector.detect_track_language(foreign),
                LanguageDetector.detect_track_language(native))

    @staticmethod
    def _check_not_input(output_path: Path, *input_paths: Path) -> None:
        resolved = output_path.resolve()
        for input_path in input_paths:
            if resolved == input_path.resolve():
                raise ValueError(f"Output would overwrite input file: {input_path}")

    @staticmethod
    def _unused_output(candidate: Path, source: Path, tag: str, output_dir: Path,
                       taken: Tuple[Path, ...]) -> Path:
        # Fall back to an .aligned tag when the derived name is an input or
        # another output of the same run
        if candidate.resolve() in taken:
            candidate = FileHandler.derived_path(source, f"{tag}.aligned", ".srt", output_dir)
        return candidate

    def merge_subtitle_files(self, foreign_path: Path, native_path: Path,
                             output_path: Optional[Path] = None,
                             mode: RenderMode = RenderMode.COMBINED) -> Path:
        """
        Merge two subtitle files into one bilingual SRT file.

        Args:
            foreign_path: Foreign-language subtitle file
            native_path: Native-language subtitle file
            output_path: Output path (generated from detected languages if None)
            mode: What to write; COMBINED writes one bilingual cue per group

        Returns:
            Path of the written file

        Raises:
            IOError: If an input cannot be read or the output cannot be written
            ValueError: If the output path is one of the inputs
            DecodeError, ParseError, AlignmentError: If an input is unusable

        Example:
            >>> merger = BilingualMerger()
            >>> merger.merge_subtitle_files(Path("movie.es.srt"), Path("movie.en.srt"))
            PosixPath('movie.es-en.srt')
        """
        if output_path is not None:
            self._check_not_input(output_path, foreign_path, native_path)

        foreign, native = self.load_tracks(foreign_path, native_path)
        sequence = self.align_tracks(foreign, native)

        if output_path is None:
            foreign_lang, native_lang = self.language_pair(foreign, native)
            output_path = FileHandler.derived_path(foreign_path,
                                                   f"{foreign_lang}-{native_lang}", ".srt")
            self._check_not_input(output_path, foreign_path, native_path)

        self._report_progress("Writing", 0, 1)
        FileHandler.safe_write(output_path, render(sequence, mode, self.config))
        self._report_progress("Writing", 1, 1)

        logger.info(f"Successfully created {mode.value} subtitle: {output_path}")
        return output_path

    def write_tracks(self, foreign_path: Path, native_path: Path,
                     output_dir: Path) -> Tuple[Path, Path]:
        """
        Write the foreign and native sides of the alignment as separate files.

        Each file keeps its original cue timing and is renumbered from 1.
        An output name that would replace an input file or the other output
        gets an extra ``.aligned`` tag.

        Args:
            foreign_path: Foreign-language subtitle file
            native_path: Native-language subtitle file
            output_dir: Directory for the two output files

        Returns:
            Tuple of (foreign_output, native_output)
        """
        foreign, native = self.load_tracks(foreign_path, native_path)
        sequence = self.align_tracks(foreign, native)
        foreign_lang, native_lang = self.language_pair(foreign, native)

        inputs = (foreign_path.resolve(), native_path.resolve())
        foreign_out = self._unused_output(
            FileHandler.derived_path(foreign_path, foreign_lang, ".srt", output_dir),
            foreign_path, foreign_lang, output_dir, inputs)
        native_tag = native_lang
        native_out = FileHandler.derived_path(native_path, native_tag, ".srt", output_dir)
        if native_out.resolve() == foreign_out.resolve():
            native_tag = f"{native_lang}.native"
            native_out = FileHandler.derived_path(native_path, native_tag, ".srt", output_dir)
        native_out = self._unused_output(
            native_out, native_path, native_tag, output_dir, inputs + (foreign_out.resolve(),))

        FileHandler.safe_write(foreign_out, render(sequence, RenderMode.FOREIGN, self.config))
        FileHandler.safe_write(native_out, render(sequence, RenderMode.NATIVE, self.config))
        logger.info(f"Wrote tracks: {foreign_out}, {native_out}")
        return foreign_out, native_out
