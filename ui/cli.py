"""
Command-line interface for substudy.

This module provides CLI functionality for combining bilingual subtitles,
writing per-language tracks, exporting study material and cleaning files.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional
from core.errors import SubstudyError
from core.serializer import RenderConfig
from processors.cleaner import SubtitleCleaner
from processors.exporter import StudyExporter
from processors.merger import BilingualMerger
from utils.constants import (
    APP_NAME, APP_VERSION, APP_DESCRIPTION, EXPORT_FORMATS, SUBTITLE_EXTENSIONS, RenderMode
)
from utils.file_operations import FileHandler
from utils.logging_config import setup_logging, level_for_flags

logger = None  # Will be initialized in setup_cli_logging


def setup_cli_logging(verbose: bool = False, debug: bool = False, use_colors: bool = True):
    """Set up logging for CLI operations."""
    global logger
    logger = setup_logging(level=level_for_flags(verbose, debug), use_colors=use_colors)
    return logger


class CLIHandler:
    """Handles command-line interface operations."""

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create the main argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog='substudy',
            description=APP_DESCRIPTION,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Combine foreign and native subtitles into one bilingual file
  substudy combine movie.es.srt movie.en.srt --output movie.es-en.srt

  # Export aligned pairs for review
  substudy export csv movie.es.srt movie.en.srt
  substudy export review movie.es.srt movie.en.srt -o movie.html

  # Write renumbered per-language tracks
  substudy tracks movie.es.srt movie.en.srt --output-dir out/

  # Strip formatting codes
  substudy clean movie.es.srt
            """
        )

        parser.add_argument('--version', action='version', version=f'{APP_NAME} {APP_VERSION}')
        parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--no-colors', action='store_true', help='Disable colored output')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        self._add_combine_parser(subparsers)
        self._add_tracks_parser(subparsers)
        self._add_export_parser(subparsers)
        self._add_clean_parser(subparsers)

        return parser

    @staticmethod
    def _add_pair_arguments(command_parser):
        command_parser.add_argument('foreign', type=Path, help='Foreign-language subtitle file')
        command_parser.add_argument('native', type=Path, help='Native-language subtitle file')
        command_parser.add_argument('--sequential', action='store_true',
                                    help='Load the two files one after the other')

    def _add_combine_parser(self, subparsers):
        """Add combine command parser."""
        combine_parser = subparsers.add_parser(
            'combine',
            help='Combine foreign and native subtitles into one bilingual SRT',
            description='Align two subtitle files by timing and write a bilingual SRT'
        )
        self._add_pair_arguments(combine_parser)
        combine_parser.add_argument('-o', '--output', type=Path, help='Output file path')
        combine_parser.add_argument('--top', choices=['foreign', 'native'], default='foreign',
                                    help='Which language appears on top (default: foreign)')
        combine_parser.add_argument('--mode', choices=[mode.value for mode in RenderMode],
                                    default=RenderMode.COMBINED.value,
                                    help='Write both languages or only one side (default: combined)')

    def _add_tracks_parser(self, subparsers):
        """Add tracks command parser."""
        tracks_parser = subparsers.add_parser(
            'tracks',
            help='Write aligned foreign and native tracks as separate SRT files',
        )
        self._add_pair_arguments(tracks_parser)
        tracks_parser.add_argument('--output-dir', type=Path, default=Path('.'),
                                   help='Directory for the output files (default: current)')

    def _add_export_parser(self, subparsers):
        """Add export command parser."""
        export_parser = subparsers.add_parser(
            'export',
            help='Export aligned subtitles as CSV or an HTML review page',
        )
        export_parser.add_argument('format', choices=EXPORT_FORMATS, help='Export format')
        self._add_pair_arguments(export_parser)
        export_parser.add_argument('-o', '--output', type=Path, help='Output file path')
        export_parser.add_argument('--title', help='Title for review pages')

    def _add_clean_parser(self, subparsers):
        """Add clean command parser."""
        clean_parser = subparsers.add_parser(
            'clean',
            help='Strip formatting codes and write a normalized SRT',
        )
        clean_parser.add_argument('input', type=Path, help='Subtitle file to clean')
        clean_parser.add_argument('-o', '--output', type=Path, help='Output file path')
        clean_parser.add_argument('--keep-empty', action='store_true',
                                  help='Keep cues whose text is empty after cleaning')
        clean_parser.add_argument('--backup', action='store_true',
                                  help='Back up the output file if it already exists')

    def handle_command(self, args) -> int:
        """
        Handle the parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        setup_cli_logging(args.verbose, args.debug, use_colors=not args.no_colors)

        if not args.command:
            logger.error("No command specified. Use --help for usage information.")
            return 1

        handlers = {
            'combine': self._handle_combine,
            'tracks': self._handle_tracks,
            'export': self._handle_export,
            'clean': self._handle_clean,
        }

        try:
            return handlers[args.command](args)
        except SubstudyError as e:
            logger.error(f"{e}")
            return 1
        except (IOError, ValueError) as e:
            logger.error(f"{e}")
            if args.debug:
                import traceback
                traceback.print_exc()
            return 1
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 1

    @staticmethod
    def _check_inputs(*paths: Path) -> bool:
        for path in paths:
            if not path.exists():
                logger.error(f"Input file not found: {path}")
                return False
            if path.suffix.lower() not in SUBTITLE_EXTENSIONS:
                logger.warning(f"{path.name} does not look like an SRT file; parsing it as SRT anyway")
        return True

    def _merger(self, args, top: str = 'foreign') -> BilingualMerger:
        return BilingualMerger(config=RenderConfig(top_language=top),
                               parallel=not args.sequential)

    def _handle_combine(self, args) -> int:
        """Handle combine command."""
        if not self._check_inputs(args.foreign, args.native):
            return 1

        output_path = self._merger(args, args.top).merge_subtitle_files(
            foreign_path=args.foreign,
            native_path=args.native,
            output_path=args.output,
            mode=RenderMode.from_name(args.mode)
        )
        print(output_path)
        return 0

    def _handle_tracks(self, args) -> int:
        """Handle tracks command."""
        if not self._check_inputs(args.foreign, args.native):
            return 1

        for path in self._merger(args).write_tracks(args.foreign, args.native, args.output_dir):
            print(path)
        return 0

    def _handle_export(self, args) -> int:
        """Handle export command."""
        if not self._check_inputs(args.foreign, args.native):
            return 1

        merger = self._merger(args)
        foreign, native = merger.load_tracks(args.foreign, args.native)
        sequence = merger.align_tracks(foreign, native)
        foreign_lang, native_lang = merger.language_pair(foreign, native)
        suffix = '.csv' if args.format == 'csv' else '.html'
        output_path = args.output or FileHandler.derived_path(
            args.foreign, f"{foreign_lang}-{native_lang}", suffix)

        StudyExporter(merger.config).export(
            args.format, sequence, output_path,
            title=args.title or args.foreign.stem,
            foreign_lang=foreign_lang,
            native_lang=native_lang,
        )
        print(output_path)
        return 0

    def _handle_clean(self, args) -> int:
        """Handle clean command."""
        if not self._check_inputs(args.input):
            return 1

        cleaner = SubtitleCleaner(drop_empty_cues=not args.keep_empty)
        print(cleaner.clean_file(args.input, args.output, create_backup=args.backup))
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    cli = CLIHandler()
    parser = cli.create_parser()
    args = parser.parse_args(argv)
    return cli.handle_command(args)


if __name__ == '__main__':
    sys.exit(main())
