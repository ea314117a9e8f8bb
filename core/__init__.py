"""
Core subtitle processing modules.

This package contains the fundamental components for bilingual subtitle work:
- Encoding detection and canonical text decoding
- The cue model, time arithmetic and the SRT parser
- Interval-based alignment of two tracks
- Rendering to SRT text and export records
- Language detection for naming and labelling
"""

from .errors import SubstudyError, DecodeError, ParseError, AlignmentError
from .timing_utils import TimeSpan, TimeConverter
from .encoding_detection import (
    EncodingGuess, EncodingDetector, CharsetNormalizerDetector, ChardetDetector,
    ChainedDetector, decode, decode_with_encoding,
)
from .subtitle_formats import Cue, SubtitleTrack, SRTParser
from .alignment import AlignedGroup, AlignedSequence, AlignmentStats, align, summarize
from .serializer import RenderConfig, ExportRecord, render, export_records, format_timestamp
from .language_detection import LanguageDetector

__all__ = [
    'SubstudyError',
    'DecodeError',
    'ParseError',
    'AlignmentError',
    'TimeSpan',
    'TimeConverter',
    'EncodingGuess',
    'EncodingDetector',
    'CharsetNormalizerDetector',
    'ChardetDetector',
    'ChainedDetector',
    'decode',
    'decode_with_encoding',
    'Cue',
    'SubtitleTrack',
    'SRTParser',
    'AlignedGroup',
    'AlignedSequence',
    'AlignmentStats',
    'align',
    'summarize',
    'RenderConfig',
    'ExportRecord',
    'render',
    'export_records',
    'format_timestamp',
    'LanguageDetector',
]
