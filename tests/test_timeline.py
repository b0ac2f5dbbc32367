"""
Tests for the Timeline Merge strategy.
"""

import pytest
from subalign.models import TimedCue
from subalign.timeline import TimelineStrategy

RATE = 10_000_000


def cue(seconds, text, rate=RATE, duration=1.0):
    start = int(round(seconds * rate))
    return TimedCue(start, start + int(round(duration * rate)), text, rate)


@pytest.fixture
def merger():
    return TimelineStrategy()


class TestBasicMerge:
    """Test basic interleaving of two tracks."""

    def test_tie_primary_first(self, merger):
        result = merger.align([cue(0, "a1")], [cue(0, "b1")])
        assert [e.texts for e in result.entries] == [("a1",), ("b1",)]

    def test_interleaves_by_start(self, merger):
        a = [cue(1, "a1"), cue(5, "a2")]
        b = [cue(3, "b1"), cue(7, "b2")]
        result = merger.align(a, b)
        assert [e.text for e in result.entries] == ["a1", "b1", "a2", "b2"]

    def test_unsorted_input_is_sorted(self, merger):
        result = merger.align([cue(5, "late"), cue(1, "early")], [])
        assert [e.text for e in result.entries] == ["early", "late"]

    def test_equal_start_same_track_keeps_input_order(self, merger):
        a = [cue(2, "first"), cue(2, "second"), cue(2, "third")]
        result = merger.align(a, [cue(2, "b")])
        assert [e.text for e in result.entries] == ["first", "second", "third", "b"]

    def test_different_tick_rates_tie(self, merger):
        a = [TimedCue(10_000_000, 20_000_000, "a", 10_000_000)]
        b = [TimedCue(2_700_000, 5_400_000, "b", 2_700_000)]
        result = merger.align(a, b)
        assert [e.text for e in result.entries] == ["a", "b"]
        assert result.entries[0].start_sec == result.entries[1].start_sec == 1.0

    def test_different_tick_rates_ordering(self, merger):
        # 0.9s at a coarse rate must come before 1.0s at a fine one
        a = [TimedCue(10_000_000, 20_000_000, "a", 10_000_000)]
        b = [TimedCue(900, 1900, "b", 1000)]
        result = merger.align(a, b)
        assert [e.text for e in result.entries] == ["b", "a"]


class TestCompleteness:
    """Every cue appears exactly once, with only its own text."""

    def test_length_is_sum(self, merger):
        a = [cue(i * 2, f"a{i}") for i in range(7)]
        b = [cue(i * 3 + 0.5, f"b{i}") for i in range(5)]
        result = merger.align(a, b)
        assert len(result.entries) == 12

    def test_texts_are_a_permutation(self, merger):
        a = [cue(i, f"a{i}") for i in range(4)]
        b = [cue(i + 0.25, f"b{i}") for i in range(4)]
        result = merger.align(a, b)
        expected = sorted(c.text for c in a + b)
        assert sorted(e.text for e in result.entries) == expected
        assert all(len(e.texts) == 1 for e in result.entries)

    def test_time_range_taken_from_origin(self, merger):
        result = merger.align([cue(2.5, "a", duration=1.5)], [])
        entry = result.entries[0]
        assert entry.start_sec == pytest.approx(2.5)
        assert entry.end_sec == pytest.approx(4.0)

    def test_multiline_text_preserved(self, merger):
        result = merger.align([cue(0, "line one\nline two")], [])
        assert result.entries[0].text == "line one\nline two"


class TestEmptyInputs:
    """Empty tracks are valid input."""

    def test_both_empty(self, merger):
        result = merger.align([], [])
        assert result.entries == []
        assert result.skipped == []

    def test_primary_empty(self, merger):
        result = merger.align([], [cue(2, "b2"), cue(1, "b1")])
        assert [e.text for e in result.entries] == ["b1", "b2"]

    def test_secondary_empty(self, merger):
        result = merger.align([cue(1, "a1")], [])
        assert [e.text for e in result.entries] == ["a1"]


class TestInvalidCues:
    """A bad cue is reported and skipped; the rest still merge."""

    def test_malformed_start_skipped(self, merger):
        a = [cue(1, "a1"), TimedCue("bogus", 100, "bad", RATE), cue(3, "a3")]
        result = merger.align(a, [cue(2, "b1")])
        assert [e.text for e in result.entries] == ["a1", "b1", "a3"]
        assert len(result.skipped) == 1
        assert result.skipped[0].position == 1
        assert result.skipped[0].track.value == "A"

    def test_negative_start_skipped(self, merger):
        result = merger.align([], [TimedCue(-5, 10, "neg", RATE), cue(1, "ok")])
        assert [e.text for e in result.entries] == ["ok"]
        assert result.skipped[0].track.value == "B"


class TestSequentialIndices:
    """Test that output entries have correct sequential indices."""

    def test_indices_sequential(self, merger):
        result = merger.align([cue(1, "One"), cue(7, "Three")], [cue(4, "Two")])
        for i, entry in enumerate(result.entries):
            assert entry.index == i + 1


class TestIdempotence:
    """Re-running on the same input gives the same output."""

    def test_repeatable(self, merger):
        a = [cue(3, "a1"), cue(1, "a0")]
        b = [cue(1, "b0"), cue(2, "b1")]
        assert merger.align(a, b) == merger.align(a, b)

    def test_inputs_not_mutated(self, merger):
        a = [cue(3, "a1"), cue(1, "a0")]
        snapshot = list(a)
        merger.align(a, [])
        assert a == snapshot
