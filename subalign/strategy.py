"""
Common base for the alignment strategies.

A strategy is a policy object with a single capability:
``align(primary, secondary) -> AlignmentResult``. Both strategies share
the same preparation step, which normalizes every cue once and sets
aside the ones whose times cannot be normalized.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .errors import InvalidTimeInput
from .models import AlignmentResult, CueSequence, SkippedCue, TimedCue, Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedCue:
    """A cue whose start and end have been normalized to seconds."""
    position: int       # Index in the caller's sequence
    track: Track
    cue: TimedCue
    start_sec: float
    end_sec: float


class AlignmentStrategy:
    """Base class for alignment policies."""

    name = "base"

    def align(self, primary: CueSequence, secondary: CueSequence) -> AlignmentResult:
        raise NotImplementedError

    @staticmethod
    def prepare(cues: CueSequence, track: Track) -> Tuple[List[PreparedCue], List[SkippedCue]]:
        """
        Normalize every cue of a track.

        Cues with an invalid start or end are excluded and reported as
        SkippedCue diagnostics; the rest of the track is unaffected.

        Returns:
            (prepared cues in input order, skipped-cue diagnostics)
        """
        prepared: List[PreparedCue] = []
        skipped: List[SkippedCue] = []

        for position, cue in enumerate(cues):
            try:
                start_sec = cue.start_sec
                end_sec = cue.end_sec
            except InvalidTimeInput as e:
                diag = SkippedCue(track, position, str(e))
                logger.debug(f"Skipping {diag}")
                skipped.append(diag)
                continue
            prepared.append(PreparedCue(position, track, cue, start_sec, end_sec))

        return prepared, skipped
