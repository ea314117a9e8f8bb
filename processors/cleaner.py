"""
Subtitle cleaning processor.

This module strips presentation markup out of subtitle tracks so the text
is suitable for study material:
- HTML-style tags (<i>, <font color=...>) and ASS override blocks ({\\an8})
- Redundant whitespace inside lines
- Lines and cues that end up empty
"""

import re
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple
from core.encoding_detection import EncodingDetectorProtocol
from core.serializer import RenderConfig, render
from core.subtitle_formats import Cue, SubtitleTrack, SRTParser
from utils.file_operations import FileHandler
from utils.logging_config import get_logger

logger = get_logger(__name__)

HTML_TAG_RE = re.compile(r'</?[a-zA-Z][^>]*>')
ASS_OVERRIDE_RE = re.compile(r'\{\\[^}]*\}')
WHITESPACE_RE = re.compile(r'\s+')


class SubtitleCleaner:
    """Removes formatting codes and empty cues from subtitle tracks."""

    def __init__(self, drop_empty_cues: bool = True):
        """
        Initialize the cleaner.

        Args:
            drop_empty_cues: Remove cues with no text left after cleaning
        """
        self.drop_empty_cues = drop_empty_cues

    @staticmethod
    def clean_line(line: str) -> str:
        """
        Clean a single line of subtitle text.

        Example:
            >>> SubtitleCleaner.clean_line("{\\\\an8}<i>Hola,   amigo</i> ")
            'Hola, amigo'
        """
        line = ASS_OVERRIDE_RE.sub('', line)
        line = HTML_TAG_RE.sub('', line)
        return WHITESPACE_RE.sub(' ', line).strip()

    def clean_cue(self, cue: Cue) -> Cue:
        lines: Tuple[str, ...] = tuple(
            cleaned for cleaned in (self.clean_line(line) for line in cue.lines) if cleaned
        )
        return cue if lines == cue.lines else replace(cue, lines=lines)

    def clean_track(self, track: SubtitleTrack) -> SubtitleTrack:
        """
        Clean every cue of a track.

        Args:
            track: Parsed subtitle track

        Returns:
            New track, renumbered from 1
        """
        cleaned = [self.clean_cue(cue) for cue in track]
        if self.drop_empty_cues:
            cleaned = [cue for cue in cleaned if cue.lines]

        dropped = len(track) - len(cleaned)
        if dropped:
            logger.info(f"Dropped {dropped} empty cues from {track.name}")
        return SubtitleTrack.from_cues(cleaned, path=track.path, encoding=track.encoding)

    def clean_file(self, input_path: Path, output_path: Optional[Path] = None,
                   detector: Optional[EncodingDetectorProtocol] = None,
                   config: Optional[RenderConfig] = None,
                   create_backup: bool = False) -> Path:
        """
        Clean a subtitle file and write the result as UTF-8 SRT.

        Args:
            input_path: Subtitle file to clean
            output_path: Output path (defaults to ``<stem>.clean.srt``)
            detector: Optional encoding detector
            config: Optional render configuration
            create_backup: Back up an existing output file before overwriting it

        Returns:
            Path of the written file

        Raises:
            DecodeError, ParseError: If the input cannot be read as SRT
            IOError: If the output cannot be written
        """
        track = SRTParser.parse_file(input_path, detector)
        cleaned = self.clean_track(track)

        if output_path is None:
            output_path = input_path.with_name(f"{input_path.stem}.clean.srt")

        FileHandler.safe_write(output_path, render(cleaned, config=config),
                               create_backup=create_backup)
        logger.info(f"Wrote {len(cleaned)} cleaned cues to {output_path}")
        return output_path
