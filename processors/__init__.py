"""
Subtitle processing modules.

This package contains specialized processors built on the core components:
- Bilingual subtitle merging and per-language track output
- CSV and HTML review export of aligned subtitles
- Formatting cleanup of single subtitle files
"""

from .merger import BilingualMerger
from .exporter import StudyExporter
from .cleaner import SubtitleCleaner

__all__ = [
    'BilingualMerger',
    'StudyExporter',
    'SubtitleCleaner',
]
