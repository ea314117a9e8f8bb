"""
User interface modules.

This package contains user interface components:
- Command-line interface (CLI) with combine, tracks, export and clean commands
"""

from .cli import CLIHandler, main

__all__ = [
    'CLIHandler',
    'main',
]
