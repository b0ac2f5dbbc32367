"""
Data model shared by the alignment strategies and the output stage.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from .timebase import DEFAULT_TICK_RATE, normalize


class Track(Enum):
    """Origin of a cue. Track A is the primary language."""
    A = "A"
    B = "B"

    @property
    def order(self) -> int:
        return 0 if self is Track.A else 1


@dataclass(frozen=True)
class TimedCue:
    """One timed caption unit, exactly as extracted from its document."""
    start: Union[int, str]
    end: Union[int, str]
    text: str
    tick_rate: int = DEFAULT_TICK_RATE

    @property
    def start_sec(self) -> float:
        return normalize(self.start, self.tick_rate)

    @property
    def end_sec(self) -> float:
        return normalize(self.end, self.tick_rate)

    def __repr__(self):
        return (f"TimedCue({self.start}–{self.end} @{self.tick_rate}, "
                f"'{self.text[:40]}')")


# One track's cues, in document order (not necessarily sorted).
CueSequence = Sequence[TimedCue]


@dataclass(frozen=True)
class MatchResult:
    """Secondary cue chosen for a primary cue by the paired strategy."""
    index: int          # Position in the sorted secondary sequence
    cue: TimedCue
    gap: float          # Absolute start-time difference in seconds


@dataclass
class DisplayEntry:
    """A finalized output unit: primary text first, then secondary text."""
    index: int
    start_sec: Optional[float]
    end_sec: Optional[float]
    texts: Tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.texts)

    @property
    def timed(self) -> bool:
        return self.start_sec is not None and self.end_sec is not None

    def __repr__(self):
        if self.timed:
            span = f"{self.start_sec:.2f}–{self.end_sec:.2f}s"
        else:
            span = "untimed"
        return f"Entry#{self.index}({span}, '{self.text[:50]}')"


@dataclass(frozen=True)
class SkippedCue:
    """Diagnostic for a cue excluded because its times are invalid."""
    track: Track
    position: int
    reason: str

    def __str__(self):
        return f"track {self.track.value} cue #{self.position + 1}: {self.reason}"


@dataclass
class AlignmentResult:
    """Output of one strategy invocation."""
    strategy: str
    entries: List[DisplayEntry] = field(default_factory=list)
    skipped: List[SkippedCue] = field(default_factory=list)
    matched: int = 0
