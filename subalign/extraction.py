"""
Cue Extraction — Reads timed-text (TTML-style XML) subtitle documents.

Two document layouts are supported:

  FORMAT_A ("kr"): text directly inside each paragraph
      <p xml:id="subtitle1" begin="140140000t" end="165165000t"
         region="region1" style="style1">line one<br/>line two</p>

  FORMAT_B ("ch"): text split over <span> elements, one line per span
      <p xml:id="subtitle1" begin="140140000t" end="165165000t"
         region="region1"><span style="s1">line one</span></p>

Times are tick counts at the document's ttp:tickRate (default
10,000,000 ticks per second).
"""

import html
import logging
import re
from enum import Enum
from pathlib import Path
from typing import List, Union

from .errors import InvalidTimeInput
from .models import TimedCue
from .timebase import DEFAULT_TICK_RATE, parse_ticks

logger = logging.getLogger(__name__)

_TICK_RATE_RE = re.compile(r'ttp:tickRate="(\d+)"')

_FORMAT_A_RE = re.compile(
    r'<p xml:id="subtitle\d+" begin="([^"]*)" end="([^"]*)" '
    r'region="region\d+" style="style\d+">([\s\S]*?)</p>'
)
_FORMAT_B_RE = re.compile(
    r'<p xml:id="subtitle\d+" begin="([^"]*)" end="([^"]*)" '
    r'region="region\d+">([\s\S]*?)</p>'
)
_SPAN_RE = re.compile(r"<span[^>]*>([\s\S]*?)</span>")
_BR_RE = re.compile(r"<br\s*/?>")
_TAG_RE = re.compile(r"<[^>]+>")


class TrackFormat(Enum):
    """Layout of a subtitle document."""
    FORMAT_A = "kr"
    FORMAT_B = "ch"

    @classmethod
    def parse(cls, value: Union[str, "TrackFormat"]) -> "TrackFormat":
        """Accept a TrackFormat, a language code ("kr"/"ch") or "a"/"b"."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        aliases = {"kr": cls.FORMAT_A, "a": cls.FORMAT_A,
                   "ch": cls.FORMAT_B, "b": cls.FORMAT_B}
        if key not in aliases:
            raise ValueError(f"Unknown track format: {value!r} (expected 'kr' or 'ch')")
        return aliases[key]


def read_document(path: Path) -> str:
    """Read a subtitle document as UTF-8, tolerating a BOM."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Subtitle file not found: {path}")
    return path.read_text(encoding="utf-8-sig")


def extract_tick_rate(document_text: str) -> int:
    """Return the document's ttp:tickRate, or the default when absent."""
    match = _TICK_RATE_RE.search(document_text)
    if not match:
        return DEFAULT_TICK_RATE
    return int(match.group(1))


def _ticks(raw: str) -> Union[int, str]:
    """Parse a tick attribute; malformed values are passed through raw."""
    try:
        return parse_ticks(raw)
    except InvalidTimeInput:
        logger.debug(f"Keeping malformed time attribute {raw!r}")
        return raw


def _clean_text(fragment: str) -> str:
    text = _BR_RE.sub("\n", fragment)
    text = _TAG_RE.sub("", text)
    return html.unescape(text)


def _span_text(content: str) -> str:
    return "\n".join(span for span in _SPAN_RE.findall(content))


def extract_cues(document_text: str, track_format: Union[str, TrackFormat]) -> List[TimedCue]:
    """
    Extract timed cues from a subtitle document.

    Args:
        document_text: The raw XML document.
        track_format: Document layout (TrackFormat, "kr" or "ch").

    Returns:
        Cues in document order, stamped with the document's tick rate.
    """
    track_format = TrackFormat.parse(track_format)
    tick_rate = extract_tick_rate(document_text)

    if track_format is TrackFormat.FORMAT_A:
        pattern = _FORMAT_A_RE
    else:
        pattern = _FORMAT_B_RE

    cues: List[TimedCue] = []
    for begin, end, content in pattern.findall(document_text):
        if track_format is TrackFormat.FORMAT_B:
            content = _span_text(content)
        cues.append(TimedCue(_ticks(begin), _ticks(end), _clean_text(content), tick_rate))

    logger.info(
        f"Extracted {len(cues)} cues ({track_format.value}, tickRate={tick_rate})"
    )
    return cues
