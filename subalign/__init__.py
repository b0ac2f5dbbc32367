"""
Bilingual Subtitle Aligner — Alignment Package

Combines two independently timed subtitle tracks into one bilingual track:
  - timebase: tick counts + tick rate → seconds
  - models: cue, match and display entry types
  - extraction: TTML-style XML documents → timed cues
  - timeline: chronological interleave of both tracks
  - paired: windowed nearest-start matching onto the primary track
  - aligner: strategy selection from configuration
  - projection: timed (SRT) / untimed (TXT) rendering
  - writer: UTF-8 file output
  - orchestrator: convert / combine / batch workflows
"""

from .aligner import align, build_strategy
from .errors import AlignmentError, InvalidConfiguration, InvalidTimeInput
from .models import AlignmentResult, DisplayEntry, MatchResult, SkippedCue, TimedCue, Track

__all__ = [
    "align",
    "build_strategy",
    "AlignmentError",
    "InvalidConfiguration",
    "InvalidTimeInput",
    "AlignmentResult",
    "DisplayEntry",
    "MatchResult",
    "SkippedCue",
    "TimedCue",
    "Track",
]
