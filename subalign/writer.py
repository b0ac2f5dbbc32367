"""
Subtitle Writer — SRT and plain-text file output.

Writes display entries as SubRip (.srt) files with sequential indices
and HH:MM:SS,mmm timestamps, or as plain text (.txt) with the time lines
left out. Files are always UTF-8.
"""

import logging
from pathlib import Path
from typing import List

from .models import DisplayEntry
from .projection import format_timestamp, render

logger = logging.getLogger(__name__)


class SubtitleWriter:
    """
    Writes display entries to disk.

    SRT format:
        1
        00:00:14,014 --> 00:00:16,516
        안녕하세요
        你好

    TXT format:
        안녕하세요
        你好
    """

    def write(self, entries: List[DisplayEntry], output_path: Path, timed: bool = True) -> Path:
        """
        Write entries to a file.

        Args:
            entries: Ordered display entries.
            output_path: Destination file; parent directories are created.
            timed: Include index and time lines (SRT) or not (TXT).

        Returns:
            The path written.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(render(entries, timed))

        kind = "SRT" if timed else "TXT"
        logger.info(f"{kind} written: {len(entries)} entries → {output_path}")
        return output_path

    def write_srt(self, entries: List[DisplayEntry], output_path: Path) -> Path:
        return self.write(entries, output_path, timed=True)

    def write_txt(self, entries: List[DisplayEntry], output_path: Path) -> Path:
        return self.write(entries, output_path, timed=False)

    def write_preview(self, entries: List[DisplayEntry], max_entries: int = 10) -> str:
        """
        Generate a text preview of the entries.

        Args:
            entries: Display entries.
            max_entries: Maximum entries to include in preview.

        Returns:
            Formatted string preview.
        """
        lines = []
        shown = min(len(entries), max_entries)

        for entry in entries[:shown]:
            flat = entry.text.replace("\n", " / ")
            text_preview = flat[:80]
            if len(flat) > 80:
                text_preview += "..."
            if entry.timed:
                ts_start = format_timestamp(entry.start_sec)
                ts_end = format_timestamp(entry.end_sec)
                lines.append(f"  [{ts_start} → {ts_end}] {text_preview}")
            else:
                lines.append(f"  {text_preview}")

        if len(entries) > shown:
            lines.append(f"  ... and {len(entries) - shown} more entries")

        return "\n".join(lines)
