"""
Strategy selection — picks the alignment policy named by the configuration.

Usage:
    result = align(korean_cues, chinese_cues, config.align)
    for entry in result.entries:
        ...
"""

import logging
import math
from numbers import Real

from .errors import InvalidConfiguration
from .models import AlignmentResult, CueSequence
from .paired import PairedStrategy
from .strategy import AlignmentStrategy
from .timeline import TimelineStrategy

logger = logging.getLogger(__name__)

STRATEGIES = (TimelineStrategy.name, PairedStrategy.name)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_options(config):
    """
    Check alignment options before any cue is processed.

    Args:
        config: Any object with strategy, max_gap_seconds, search_window
            and backtrack attributes (normally config.AlignConfig).

    Raises:
        InvalidConfiguration: On the first out-of-range option.
    """
    strategy = getattr(config, "strategy", PairedStrategy.name)
    max_gap = getattr(config, "max_gap_seconds", 1.0)
    window = getattr(config, "search_window", 10)
    backtrack = getattr(config, "backtrack", 2)

    if strategy not in STRATEGIES:
        raise InvalidConfiguration(
            f"Unknown strategy {strategy!r} (expected one of: {', '.join(STRATEGIES)})"
        )
    if isinstance(max_gap, bool) or not isinstance(max_gap, Real) \
            or math.isnan(max_gap) or max_gap < 0:
        raise InvalidConfiguration(f"max_gap_seconds must be >= 0, got {max_gap!r}")
    if not _is_int(window) or window <= 0:
        raise InvalidConfiguration(f"search_window must be a positive integer, got {window!r}")
    if not _is_int(backtrack) or backtrack < 0:
        raise InvalidConfiguration(f"backtrack must be a non-negative integer, got {backtrack!r}")


def build_strategy(config=None) -> AlignmentStrategy:
    """Validate the options and return the configured strategy object."""
    if config is None:
        return PairedStrategy()

    validate_options(config)

    if getattr(config, "strategy", PairedStrategy.name) == TimelineStrategy.name:
        return TimelineStrategy()
    return PairedStrategy(
        max_gap_seconds=float(getattr(config, "max_gap_seconds", 1.0)),
        search_window=getattr(config, "search_window", 10),
        backtrack=getattr(config, "backtrack", 2),
    )


def align(primary: CueSequence, secondary: CueSequence, config=None) -> AlignmentResult:
    """
    Align two tracks with the strategy selected by ``config``.

    Args:
        primary: Track A cues (first text block of every entry).
        secondary: Track B cues.
        config: Alignment options; defaults to paired matching.

    Returns:
        AlignmentResult with entries and skipped-cue diagnostics.
    """
    strategy = build_strategy(config)
    logger.debug(f"Aligning {len(primary)} + {len(secondary)} cues with '{strategy.name}'")
    return strategy.align(primary, secondary)
