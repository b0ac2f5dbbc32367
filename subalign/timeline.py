"""
Timeline Merge — Interleaves two subtitle tracks by absolute start time.

Every cue from both tracks becomes its own entry; nothing is paired,
merged, dropped or duplicated. Ordering is chronological with track A
ahead of track B on equal start times.
"""

import logging

from .models import AlignmentResult, CueSequence, DisplayEntry, Track
from .strategy import AlignmentStrategy

logger = logging.getLogger(__name__)


class TimelineStrategy(AlignmentStrategy):
    """
    Chronological interleave of two tracks.

    Ordering rules:
    1. Ascending normalized start time
    2. Track A before track B on equal start times
    3. Input order within a track on equal start times
    """

    name = "timeline"

    def align(self, primary: CueSequence, secondary: CueSequence) -> AlignmentResult:
        """
        Merge two cue sequences into one chronological entry list.

        Args:
            primary: Track A cues, in any order.
            secondary: Track B cues, in any order.

        Returns:
            AlignmentResult with one entry per valid input cue.
        """
        items_a, skipped_a = self.prepare(primary, Track.A)
        items_b, skipped_b = self.prepare(secondary, Track.B)

        # sorted() is stable, so input order survives on full ties
        items = sorted(
            items_a + items_b,
            key=lambda item: (item.start_sec, item.track.order),
        )

        entries = [
            DisplayEntry(idx, item.start_sec, item.end_sec, (item.cue.text,))
            for idx, item in enumerate(items, start=1)
        ]

        result = AlignmentResult(self.name, entries, skipped_a + skipped_b)

        logger.info(
            f"Timeline merge: {len(items_a)} + {len(items_b)} cues "
            f"→ {len(entries)} entries ({len(result.skipped)} skipped)"
        )
        return result
