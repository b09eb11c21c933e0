"""
Tests for tonal_harmony/rules/melody.py

Run with: pytest tests/test_melody.py -v
"""

import random

import pytest

from tonal_harmony.rules.melody import (
    DEFAULT_STEP_PROBABILITY,
    first_note,
    next_note,
    step_probability,
    walk_melody,
)
from tonal_harmony.rules.scales import SCALE_PATTERNS, build_scale


C_MAJOR = ["C", "D", "E", "F", "G", "A", "B"]


class ScriptedRandom(random.Random):
    """A Random whose random() draws come from a fixed list."""

    def __init__(self, draws):
        super().__init__(0)
        self.draws = list(draws)

    def random(self):
        return self.draws.pop(0)


class TestFirstNote:
    """Test the opening note."""

    def test_tonic_on_high_draw(self):
        assert first_note(C_MAJOR, ScriptedRandom([0.9])) == "C"

    def test_fifth_on_low_draw(self):
        assert first_note(C_MAJOR, ScriptedRandom([0.2])) == "G"

    def test_short_scale_starts_on_tonic(self):
        assert first_note(["C", "E", "G"], ScriptedRandom([0.1])) == "C"


class TestNextNote:
    """Test steps and leaps."""

    def test_step_up(self):
        assert next_note("E", C_MAJOR, 0.8, ScriptedRandom([0.1, 0.9])) == "F"

    def test_step_down(self):
        assert next_note("E", C_MAJOR, 0.8, ScriptedRandom([0.1, 0.2])) == "D"

    def test_step_stops_at_scale_ends(self):
        assert next_note("C", C_MAJOR, 0.8, ScriptedRandom([0.1, 0.2])) == "C"
        assert next_note("B", C_MAJOR, 0.8, ScriptedRandom([0.1, 0.9])) == "B"

    def test_leap_stays_in_scale(self):
        rng = random.Random(3)
        for _ in range(50):
            assert next_note("E", C_MAJOR, 0.0, rng) in C_MAJOR


class TestWalkMelody:
    """Test whole melodies."""

    @pytest.mark.parametrize("length", [1, 2, 8, 32])
    def test_exact_length(self, length):
        assert len(walk_melody(C_MAJOR, length, 0.6, random.Random(1))) == length

    def test_notes_come_from_the_scale(self):
        scale = build_scale("A", SCALE_PATTERNS["pentatonicMinor"])
        melody = walk_melody(scale, 64, 0.4, random.Random(9))
        assert set(melody) <= set(scale)

    def test_first_note_is_tonic_or_fifth(self):
        for seed in range(30):
            assert walk_melody(C_MAJOR, 4, 0.6, random.Random(seed))[0] in ("C", "G")

    def test_always_stepping_moves_one_note_at_a_time(self):
        melody = walk_melody(C_MAJOR, 40, 1.0, random.Random(4))
        indices = [C_MAJOR.index(note) for note in melody]
        for a, b in zip(indices, indices[1:]):
            assert abs(a - b) <= 1

    def test_same_seed_same_melody(self):
        first = walk_melody(C_MAJOR, 16, 0.6, random.Random(21))
        second = walk_melody(C_MAJOR, 16, 0.6, random.Random(21))
        assert first == second

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            walk_melody(C_MAJOR, 0, 0.6, random.Random(1))

    def test_empty_scale(self):
        with pytest.raises(ValueError):
            walk_melody([], 4, 0.6, random.Random(1))


class TestStepProbability:
    """Test the complexity table."""

    def test_known_complexities(self):
        assert step_probability("simple") == 0.8
        assert step_probability("moderate") == 0.6
        assert step_probability("complex") == 0.4

    def test_unknown_complexity(self):
        assert step_probability("baroque") == DEFAULT_STEP_PROBABILITY


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
