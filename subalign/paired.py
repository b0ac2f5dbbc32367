"""
Paired Match — Attaches the closest secondary cue to each primary cue.

The two tracks are assumed to come from the same media and to be roughly
aligned already, so a true counterpart is always close both in time and
in sequence position. Instead of a global nearest-neighbour search the
matcher walks the secondary track with a mostly forward-moving cursor and only
looks at a small window around it:

    window = [max(0, j - backtrack), max(0, j - backtrack) + search_window)

Cost is O(len(primary) * search_window).
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .models import AlignmentResult, CueSequence, DisplayEntry, MatchResult, SkippedCue, Track
from .strategy import AlignmentStrategy, PreparedCue
from .timebase import difference

logger = logging.getLogger(__name__)

Pairing = Tuple[PreparedCue, Optional[MatchResult]]


class PairedStrategy(AlignmentStrategy):
    """
    One entry per primary cue, with at most one secondary cue attached.

    Matching rules:
    1. Both tracks are sorted by normalized start time first
    2. Only cues inside the window around the cursor are candidates
    3. The candidate with the smallest start-time gap wins, earliest on ties
    4. A secondary cue is attached to at most one primary cue
    5. The match is kept only if its gap is below max_gap_seconds
    6. A kept match moves the cursor just past the matched cue, which may
       step it back by up to backtrack positions
    """

    name = "paired"

    def __init__(self, max_gap_seconds: float = 1.0, search_window: int = 10,
                 backtrack: int = 2):
        self.max_gap_seconds = max_gap_seconds
        self.search_window = search_window
        self.backtrack = backtrack

    def match(self, primary: CueSequence,
              secondary: CueSequence) -> Tuple[List[Pairing], List[SkippedCue]]:
        """
        Find the secondary match (if any) for every valid primary cue.

        Returns:
            (pairings in primary start-time order, skipped-cue diagnostics)
        """
        items_a, skipped_a = self.prepare(primary, Track.A)
        items_b, skipped_b = self.prepare(secondary, Track.B)

        items_a.sort(key=lambda item: item.start_sec)
        items_b.sort(key=lambda item: item.start_sec)

        starts_b = np.array([item.start_sec for item in items_b], dtype=np.float64)
        taken = np.zeros(len(items_b), dtype=bool)

        pairings: List[Pairing] = []
        cursor = 0

        for item in items_a:
            found = self._search(item.start_sec, starts_b, taken, cursor)
            if found is None:
                pairings.append((item, None))
                continue

            k, gap = found
            taken[k] = True
            # A backtracked match moves the cursor back as well
            cursor = k + 1
            pairings.append((item, MatchResult(k, items_b[k].cue, gap)))

        return pairings, skipped_a + skipped_b

    def _search(self, start_sec: float, starts_b: np.ndarray, taken: np.ndarray,
                cursor: int) -> Optional[Tuple[int, float]]:
        """
        Return (index, gap) of the best candidate in the window, or None.

        The window gaps are the vectorized form of timebase.difference();
        cues already matched are masked out with +inf.
        """
        lo = max(0, cursor - self.backtrack)
        hi = min(len(starts_b), lo + self.search_window)
        if lo >= hi:
            return None

        gaps = np.abs(starts_b[lo:hi] - start_sec)
        gaps[taken[lo:hi]] = np.inf

        # argmin returns the first minimum: earliest index wins ties
        k = int(np.argmin(gaps))
        if np.isinf(gaps[k]):
            gap = float("inf")
        else:
            gap = difference(start_sec, float(starts_b[lo + k]))
        if not gap < self.max_gap_seconds:
            logger.debug(
                f"No match for cue at {start_sec:.3f}s "
                f"(window {lo}–{hi}, best gap {gap:.3f}s)"
            )
            return None

        return lo + k, gap

    def align(self, primary: CueSequence, secondary: CueSequence) -> AlignmentResult:
        """
        Pair two cue sequences.

        Args:
            primary: Track A cues; supplies timing and the first text block.
            secondary: Track B cues; matched text becomes the second block.

        Returns:
            AlignmentResult with exactly one entry per valid primary cue.
        """
        pairings, skipped = self.match(primary, secondary)

        entries: List[DisplayEntry] = []
        matched = 0
        for idx, (item, result) in enumerate(pairings, start=1):
            texts: Tuple[str, ...] = (item.cue.text,)
            if result is not None:
                texts += (result.cue.text,)
                matched += 1
            entries.append(DisplayEntry(idx, item.start_sec, item.end_sec, texts))

        logger.info(
            f"Paired match: {matched}/{len(entries)} primary cues matched "
            f"(max gap {self.max_gap_seconds}s, window {self.search_window}, "
            f"backtrack {self.backtrack}, {len(skipped)} skipped)"
        )
        return AlignmentResult(self.name, entries, skipped, matched)
