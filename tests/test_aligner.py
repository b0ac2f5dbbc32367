"""
Tests for strategy selection and option validation.
"""

import math

import pytest
from config import AlignConfig
from subalign.aligner import align, build_strategy, validate_options
from subalign.errors import InvalidConfiguration
from subalign.models import TimedCue
from subalign.paired import PairedStrategy
from subalign.timeline import TimelineStrategy

RATE = 10_000_000


def cue(seconds, text):
    start = int(round(seconds * RATE))
    return TimedCue(start, start + RATE, text, RATE)


class TestBuildStrategy:
    """The configuration picks the policy object."""

    def test_default_is_paired(self):
        assert isinstance(build_strategy(), PairedStrategy)

    def test_timeline(self):
        assert isinstance(build_strategy(AlignConfig(strategy="timeline")), TimelineStrategy)

    def test_paired_options_passed(self):
        strategy = build_strategy(
            AlignConfig(strategy="paired", max_gap_seconds=0.5, search_window=4, backtrack=1)
        )
        assert strategy.max_gap_seconds == 0.5
        assert strategy.search_window == 4
        assert strategy.backtrack == 1


class TestValidation:
    """Out-of-range options fail before any cue is processed."""

    @pytest.mark.parametrize("kwargs", [
        {"strategy": "nearest"},
        {"max_gap_seconds": -0.1},
        {"max_gap_seconds": math.nan},
        {"max_gap_seconds": "1.0"},
        {"search_window": 0},
        {"search_window": -3},
        {"search_window": 2.5},
        {"backtrack": -1},
    ])
    def test_rejected(self, kwargs):
        with pytest.raises(InvalidConfiguration):
            validate_options(AlignConfig(**kwargs))

    def test_zero_gap_allowed(self):
        validate_options(AlignConfig(max_gap_seconds=0.0))

    def test_integer_gap_allowed(self):
        validate_options(AlignConfig(max_gap_seconds=2))

    def test_align_fails_fast(self):
        bad = AlignConfig(search_window=0)
        with pytest.raises(InvalidConfiguration):
            align([TimedCue("not-a-time", 0, "x", RATE)], [], bad)

    def test_config_validate_delegates(self):
        with pytest.raises(InvalidConfiguration):
            AlignConfig(backtrack=-2).validate()


class TestAlign:
    """The convenience wrapper runs the chosen strategy."""

    def test_paired_entry_count(self):
        a = [cue(0, "a1"), cue(10, "a2")]
        b = [cue(0.2, "b1"), cue(20, "b2")]
        result = align(a, b, AlignConfig(strategy="paired"))
        assert result.strategy == "paired"
        assert len(result.entries) == 2

    def test_timeline_entry_count(self):
        a = [cue(0, "a1"), cue(10, "a2")]
        b = [cue(0.2, "b1"), cue(20, "b2")]
        result = align(a, b, AlignConfig(strategy="timeline"))
        assert result.strategy == "timeline"
        assert len(result.entries) == 4
