"""
Melody Module - Scale-Walk Melodies

A melody here is a list of note names drawn from one scale. Each note is
either a step to a neighbouring scale note or a leap to any scale note:

    1. The first note is the tonic, or sometimes the fifth scale note
    2. Every later note steps up or down from the previous note with the
       genre's step probability, otherwise leaps to a random scale note
    3. Steps stop at the ends of the scale (no octave wrap)

Simple genres step more often and sound smoother; complex genres leap more.
All randomness comes from the random.Random passed in.
"""

from typing import Dict, List, Sequence
import random


# =============================================================================
# CONSTANTS
# =============================================================================

# Chance that a note steps from the previous one, by genre complexity
STEP_PROBABILITIES: Dict[str, float] = {
    "simple": 0.8,
    "moderate": 0.6,
    "complex": 0.4,
}

DEFAULT_STEP_PROBABILITY = 0.7

# The first note is the fifth scale note when a draw falls at or below this
START_ON_FIFTH_PROBABILITY = 0.3

# A step goes up when a draw is above this
STEP_UP_THRESHOLD = 0.5

DEFAULT_MELODY_LENGTH = 8


# =============================================================================
# CORE FUNCTIONS
# =============================================================================

def step_probability(complexity: str) -> float:
    return STEP_PROBABILITIES.get(complexity, DEFAULT_STEP_PROBABILITY)


def first_note(scale_notes: Sequence[str], rng: random.Random) -> str:
    """Tonic most of the time, else the fifth note (tonic for short scales)."""
    if rng.random() > START_ON_FIFTH_PROBABILITY or len(scale_notes) < 5:
        return scale_notes[0]
    return scale_notes[4]


def next_note(
    previous: str,
    scale_notes: Sequence[str],
    step_chance: float,
    rng: random.Random
) -> str:
    """Step to a neighbour of `previous`, or leap to any scale note."""
    if rng.random() < step_chance:
        direction = 1 if rng.random() > STEP_UP_THRESHOLD else -1
        index = scale_notes.index(previous) + direction
        index = max(0, min(len(scale_notes) - 1, index))
        return scale_notes[index]
    return rng.choice(list(scale_notes))


def walk_melody(
    scale_notes: Sequence[str],
    length: int,
    step_chance: float,
    rng: random.Random
) -> List[str]:
    """
    Build a melody of exactly `length` notes from a scale.

    Args:
        scale_notes: Notes of the scale, tonic first
        length: Number of notes, at least 1
        step_chance: Probability (0-1) that a note is a step
        rng: Random source

    Raises:
        ValueError: if length < 1 or the scale is empty
    """
    if length < 1:
        raise ValueError(f"Melody length must be at least 1. Got: {length}")
    if not scale_notes:
        raise ValueError("Cannot build a melody from an empty scale")

    melody = [first_note(scale_notes, rng)]
    while len(melody) < length:
        melody.append(next_note(melody[-1], scale_notes, step_chance, rng))
    return melody
