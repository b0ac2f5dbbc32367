"""
Time Model — Tick-based timestamps to track-independent seconds.

Subtitle documents express times as integer tick counts ("140140000t")
together with a per-document tick rate. Two tracks of the same episode
may use different tick rates, so every comparison happens on normalized
seconds, never on raw ticks.
"""

import re
from typing import Any

from .errors import InvalidTimeInput

DEFAULT_TICK_RATE = 10_000_000

_TICK_RE = re.compile(r"^\s*([+-]?\d+)\s*t?\s*$")


def parse_ticks(value: Any) -> int:
    """
    Parse a tick expression such as "140140000t" into an integer.

    Negative values are returned as-is; they are rejected by normalize()
    so the offending cue gets reported instead of the whole document.

    Raises:
        InvalidTimeInput: If the value is not an integer tick expression.
    """
    if isinstance(value, bool):
        raise InvalidTimeInput(f"Invalid tick value: {value!r}")
    if isinstance(value, int):
        return value

    match = _TICK_RE.match(str(value))
    if not match:
        raise InvalidTimeInput(f"Invalid tick value: {value!r}")
    return int(match.group(1))


def normalize(tick_count: Any, tick_rate: Any) -> float:
    """
    Convert a tick count at a given tick rate into seconds.

    Args:
        tick_count: Non-negative integer tick count.
        tick_rate: Positive integer number of ticks per second.

    Returns:
        Time in seconds.

    Raises:
        InvalidTimeInput: For non-integer or negative tick counts, or a
            tick rate that is not a positive integer.
    """
    if isinstance(tick_rate, bool) or not isinstance(tick_rate, int) or tick_rate <= 0:
        raise InvalidTimeInput(f"Invalid tick rate: {tick_rate!r}")
    if isinstance(tick_count, bool) or not isinstance(tick_count, int):
        raise InvalidTimeInput(f"Non-numeric tick count: {tick_count!r}")
    if tick_count < 0:
        raise InvalidTimeInput(f"Negative tick count: {tick_count}")

    return tick_count / tick_rate


def difference(a: float, b: float) -> float:
    """Absolute distance between two normalized times."""
    return abs(a - b)
