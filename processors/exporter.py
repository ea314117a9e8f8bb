"""
Study-material exporters.

This module turns an aligned sequence into files for reviewing a video's
dialogue outside the player:
- CSV with one row per aligned group
- A self-contained HTML review page with both languages side by side

Media clips for each row are produced by an external tool from the
``start_ms``/``end_ms`` columns; nothing here touches audio or video.
"""

import csv
import html
from pathlib import Path
from typing import List, Optional
from core.alignment import AlignedSequence
from core.serializer import ExportRecord, RenderConfig, export_records, format_timestamp
from utils.constants import APP_NAME, CSV_EXPORT_FIELDS, EXPORT_FORMATS
from utils.file_operations import FileHandler
from utils.logging_config import get_logger

logger = get_logger(__name__)

REVIEW_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; margin: 2em; }}
table {{ border-collapse: collapse; width: 100%; }}
td, th {{ border-bottom: 1px solid #ddd; padding: 0.4em; vertical-align: top; }}
td.time {{ color: #888; white-space: nowrap; font-size: 0.8em; }}
td.foreign {{ font-size: 1.2em; }}
</style>
</head>
<body>
<h1>{title}</h1>
<table>
<tr><th>#</th><th>Time</th><th lang="{foreign_lang}">Foreign</th><th lang="{native_lang}">Native</th></tr>
{rows}
</table>
<p class="generator">Generated by {app_name}</p>
</body>
</html>
"""

REVIEW_ROW = ('<tr><td>{index}</td><td class="time">{start}</td>'
              '<td class="foreign" lang="{foreign_lang}">{foreign}</td>'
              '<td class="native" lang="{native_lang}">{native}</td></tr>')


class StudyExporter:
    """Writes aligned subtitle pairs as CSV or HTML review pages."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def records(self, sequence: AlignedSequence) -> List[ExportRecord]:
        return export_records(sequence, self.config)

    def write_csv(self, sequence: AlignedSequence, output_path: Path) -> Path:
        """
        Write one CSV row per aligned group.

        Args:
            sequence: Aligned sequence to export
            output_path: CSV file to write

        Returns:
            Path of the written file

        Raises:
            IOError: If the file cannot be written
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        records = self.records(sequence)
        try:
            with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=CSV_EXPORT_FIELDS)
                writer.writeheader()
                for record in records:
                    writer.writerow({
                        'index': record.index,
                        'start': format_timestamp(record.start_ms, self.config.decimal_separator),
                        'end': format_timestamp(record.end_ms, self.config.decimal_separator),
                        'start_ms': record.start_ms,
                        'end_ms': record.end_ms,
                        'foreign': record.foreign_text,
                        'native': record.native_text,
                    })
        except OSError as e:
            logger.error(f"Failed to write CSV export {output_path}: {e}")
            raise IOError(f"Cannot write CSV export: {e}")

        logger.info(f"Exported {len(records)} rows to {output_path}")
        return output_path

    def render_review(self, sequence: AlignedSequence, title: str,
                      foreign_lang: str = "", native_lang: str = "") -> str:
        """
        Render the HTML review page as a string.

        Args:
            sequence: Aligned sequence to export
            title: Page title, usually the video or file name
            foreign_lang: Language code for the foreign column
            native_lang: Language code for the native column

        Returns:
            HTML document
        """
        rows = [
            REVIEW_ROW.format(
                index=record.index,
                start=html.escape(format_timestamp(record.start_ms,
                                                   self.config.decimal_separator)),
                foreign=html.escape(record.foreign_text),
                native=html.escape(record.native_text),
                foreign_lang=html.escape(foreign_lang, quote=True),
                native_lang=html.escape(native_lang, quote=True),
            )
            for record in self.records(sequence)
        ]
        return REVIEW_PAGE.format(
            title=html.escape(title),
            rows="\n".join(rows),
            foreign_lang=html.escape(foreign_lang, quote=True),
            native_lang=html.escape(native_lang, quote=True),
            app_name=html.escape(APP_NAME),
        )

    def write_review(self, sequence: AlignedSequence, output_path: Path, title: str,
                     foreign_lang: str = "", native_lang: str = "") -> Path:
        """Write the HTML review page to ``output_path``."""
        FileHandler.safe_write(output_path,
                               self.render_review(sequence, title, foreign_lang, native_lang))
        logger.info(f"Exported review page with {len(sequence)} rows to {output_path}")
        return output_path

    def export(self, export_format: str, sequence: AlignedSequence, output_path: Path,
               title: str = "", foreign_lang: str = "", native_lang: str = "") -> Path:
        """
        Export in one of the supported formats.

        Args:
            export_format: 'csv' or 'review'
            sequence: Aligned sequence to export
            output_path: File to write
            title: Page title for review pages
            foreign_lang: Language code for the foreign side
            native_lang: Language code for the native side

        Returns:
            Path of the written file

        Raises:
            ValueError: If the format is not supported
        """
        if export_format == 'csv':
            return self.write_csv(sequence, output_path)
        if export_format == 'review':
            return self.write_review(sequence, output_path, title or output_path.stem,
                                     foreign_lang, native_lang)
        raise ValueError(f"Unsupported export format: {export_format} "
                         f"(expected one of {EXPORT_FORMATS})")
