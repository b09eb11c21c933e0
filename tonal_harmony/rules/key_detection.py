"""
Key Detection - Greedy Key Scoring

Scores all 24 candidate keys (12 tonics x major/minor) against a list of
chord symbols and picks the best one.

For every chord and candidate key:
    +5  the chord root is the tonic
    +3  the chord root is the fifth scale degree
    +1  the chord root is any other scale note
    +2  the chord's major/minor quality matches the mode
        (diminished and augmented chords are neutral)

This is a single-pass heuristic with no smoothing. Short or ambiguous
inputs can tie several keys; ties go to the earliest tonic in chromatic
order, and between the best major and best minor key, to major.
"""

from typing import List, Optional, Sequence, Tuple

from tonal_harmony.data.config import ScoringWeights
from tonal_harmony.data.schema import ChordSymbol, Key
from tonal_harmony.rules.chords import parse_chord, quality_family
from tonal_harmony.rules.pitch import MODES, OCTAVE
from tonal_harmony.rules.scales import mode_pattern


DEFAULT_WEIGHTS = ScoringWeights()

# Returned when no chord can be scored at all
FALLBACK_KEY = Key(tonic="C", mode="major")


def _parse_all(chords: Sequence[str]) -> List[ChordSymbol]:
    """Parse chord strings, dropping anything without a chromatic root."""
    parsed = []
    for symbol in chords:
        chord = parse_chord(symbol)
        if chord is not None:
            parsed.append(chord)
    return parsed


def _score(parsed: List[ChordSymbol], tonic_index: int, mode: str, weights: ScoringWeights) -> float:
    scale = [(tonic_index + offset) % OCTAVE for offset in mode_pattern(mode)]
    score = 0.0

    for chord in parsed:
        root = chord.root_index
        if root in scale:
            if root == scale[0]:
                score += weights.tonic
            elif root == scale[4]:
                score += weights.dominant
            else:
                score += weights.scale_note

        if quality_family(chord.quality) == mode:
            score += weights.mode_bonus

    return score


def score_key(
    chords: Sequence[str],
    tonic: str,
    mode: str = "major",
    weights: Optional[ScoringWeights] = None
) -> float:
    """
    Score how well a chord list fits one key.

    Example:
        score_key(["C", "Dm", "G", "Am"], "C", "major") → 14.0
    """
    key = Key(tonic=tonic, mode=mode)
    return _score(_parse_all(chords), key.pitch_class, key.mode, weights or DEFAULT_WEIGHTS)


def rank_keys(
    chords: Sequence[str],
    weights: Optional[ScoringWeights] = None
) -> List[Tuple[Key, float]]:
    """
    Score all 24 keys, best first.

    Equal scores keep major before minor and chromatic order, which is the
    same order detect_key uses to break ties.
    """
    weights = weights or DEFAULT_WEIGHTS
    parsed = _parse_all(chords)

    ranked = []
    for mode in MODES:
        for index in range(OCTAVE):
            ranked.append((Key.from_pitch_class(index, mode), _score(parsed, index, mode, weights)))
    ranked.sort(key=lambda item: -item[1])
    return ranked


def detect_key(chords: Sequence[str], weights: Optional[ScoringWeights] = None) -> Key:
    """
    Detect the most probable key of a chord list.

    Malformed chord strings are ignored. An input with no usable chord
    returns C major.

    Example:
        detect_key(["C", "Dm", "G", "Am"]) → Key(tonic='C', mode='major')
    """
    weights = weights or DEFAULT_WEIGHTS
    parsed = _parse_all(chords)
    if not parsed:
        return FALLBACK_KEY

    best = {}
    for mode in MODES:
        best_index, best_score = 0, _score(parsed, 0, mode, weights)
        for index in range(1, OCTAVE):
            score = _score(parsed, index, mode, weights)
            if score > best_score:
                best_index, best_score = index, score
        best[mode] = (best_index, best_score)

    major_index, major_score = best["major"]
    minor_index, minor_score = best["minor"]

    if minor_score > major_score:
        return Key.from_pitch_class(minor_index, "minor")
    return Key.from_pitch_class(major_index, "major")


def key_confidence(
    chords: Sequence[str],
    key: Key,
    weights: Optional[ScoringWeights] = None,
    max_confidence: float = 100.0
) -> float:
    """
    Average score per input chord for a key, capped at max_confidence.

    Malformed chords still count in the denominator, so unparsable input
    lowers the confidence instead of raising.
    """
    if not chords:
        return 0.0
    score = _score(_parse_all(chords), key.pitch_class, key.mode, weights or DEFAULT_WEIGHTS)
    return max(0.0, min(score / len(chords), max_confidence))
