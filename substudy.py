#!/usr/bin/env python3
"""
Substudy - Main Application Entry Point
=======================================

Language-learning tools for working with parallel, bilingual subtitles.

A foreign-language and a native-language subtitle file for the same video
are aligned by timing and turned into:
- A combined bilingual SRT file
- Renumbered per-language SRT tracks
- CSV rows or an HTML review page for study

Usage:
    python substudy.py combine movie.es.srt movie.en.srt --output movie.es-en.srt
    python substudy.py export csv movie.es.srt movie.en.srt
    python substudy.py export review movie.es.srt movie.en.srt -o movie.html
    python substudy.py tracks movie.es.srt movie.en.srt --output-dir out/
    python substudy.py clean movie.es.srt

    # Help
    python substudy.py --help
    python substudy.py <command> --help
"""

import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from ui.cli import main


if __name__ == '__main__':
    sys.exit(main())
