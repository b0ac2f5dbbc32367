"""
Output Projection — Renders display entries as timed or untimed blocks.

Timed (SRT):
    1
    00:00:14,014 --> 00:00:16,516
    primary text
    secondary text

Untimed (TXT):
    primary text
    secondary text

Every block is followed by one blank line.
"""

from dataclasses import replace
from typing import Iterable, List

from .models import DisplayEntry


def project(entries: Iterable[DisplayEntry], timed: bool = True) -> List[DisplayEntry]:
    """
    Prepare entries for a timed or untimed consumer.

    Indices are reassigned 1..N; for untimed output the time range is
    dropped. The input entries are left untouched.
    """
    projected = []
    for i, entry in enumerate(entries, start=1):
        if timed:
            projected.append(replace(entry, index=i))
        else:
            projected.append(replace(entry, index=i, start_sec=None, end_sec=None))
    return projected


def format_timestamp(seconds: float) -> str:
    """
    Convert seconds to SRT timestamp format: HH:MM:SS,mmm

    Args:
        seconds: Time in seconds (e.g., 125.340)

    Returns:
        Formatted timestamp string (e.g., "00:02:05,340")
    """
    if seconds < 0:
        seconds = 0.0

    # Round once on the total so 14.014 never renders as 14,013
    total_ms = int(round(seconds * 1000))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)

    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def render_block(entry: DisplayEntry, timed: bool = True) -> str:
    """Render one entry, including its trailing blank line."""
    lines = []
    if timed:
        if not entry.timed:
            raise ValueError(f"Entry #{entry.index} has no time range; render it untimed")
        lines.append(str(entry.index))
        lines.append(
            f"{format_timestamp(entry.start_sec)} --> "
            f"{format_timestamp(entry.end_sec)}"
        )
    lines.extend(entry.texts)
    return "\n".join(lines) + "\n\n"


def render(entries: Iterable[DisplayEntry], timed: bool = True) -> str:
    """Render a full document from display entries."""
    return "".join(render_block(entry, timed) for entry in project(entries, timed))
