"""
Cadences Module - Cadence, Function and Modulation Scanning

Pattern-matching over numeral and chord sequences:
    - cadences: adjacent numeral pairs that close a phrase
    - harmonic functions: Tonic / Subdominant / Dominant labels per numeral
    - modulations: chords whose root carries an accidental

The modulation scan is lexical. Any chromatically altered chord is flagged,
including borrowed chords that do not change the key.
"""

from typing import List, Optional, Sequence

from tonal_harmony.rules.chords import parse_chord
from tonal_harmony.rules.numerals import numeral_degree


# (previous, next) numeral pairs and the cadence they form
CADENCE_PATTERNS = {
    ("V", "I"): "Authentic",
    ("v", "i"): "Authentic",
    ("IV", "I"): "Plagal",
    ("iv", "i"): "Plagal",
}

# Scale degree -> harmonic function
DEGREE_FUNCTIONS = {
    1: "Tonic",
    6: "Tonic",
    2: "Subdominant",
    4: "Subdominant",
    5: "Dominant",
    7: "Dominant",
}


def identify_cadence(current: str, following: str) -> Optional[str]:
    name = CADENCE_PATTERNS.get((current, following))
    return f"{name} Cadence" if name else None


def detect_cadences(numerals: Sequence[str]) -> List[str]:
    """
    Slide a two-numeral window over the sequence and name each cadence.

    Examples:
        detect_cadences(["V", "I"])   → ["Authentic Cadence"]
        detect_cadences(["IV", "I"])  → ["Plagal Cadence"]
        detect_cadences(["ii", "V"])  → []
    """
    cadences = []
    for current, following in zip(numerals, numerals[1:]):
        cadence = identify_cadence(current, following)
        if cadence:
            cadences.append(cadence)
    return cadences


def harmonic_function(numeral: str) -> str:
    """Tonic (I, vi), Subdominant (ii, IV), Dominant (V, vii) or Other."""
    degree = numeral_degree(numeral)
    return DEGREE_FUNCTIONS.get(degree, "Other")


def harmonic_functions(numerals: Sequence[str]) -> List[str]:
    return [harmonic_function(n) for n in numerals]


def detect_modulations(chords: Sequence[str], min_run: int = 1) -> List[str]:
    """
    Flag potential modulations: chords whose root has a sharp or flat.

    The final chord is not examined. With min_run > 1 only runs of at least
    that many consecutive accidental chords are flagged, once, at the first
    chord of the run.

    Example:
        detect_modulations(["C", "F#m", "G", "C"]) → ["Potential modulation at chord 2"]
    """
    if min_run < 1:
        raise ValueError(f"min_run must be at least 1. Got: {min_run}")

    flagged = []
    for chord in chords[:-1]:
        parsed = parse_chord(chord)
        flagged.append(parsed is not None and parsed.has_accidental)

    modulations = []
    run_start, run_length = 0, 0
    for i, altered in enumerate(flagged):
        if not altered:
            run_length = 0
            continue
        if run_length == 0:
            run_start = i
        run_length += 1
        if min_run == 1:
            modulations.append(f"Potential modulation at chord {i + 1}")
        elif run_length == min_run:
            modulations.append(f"Potential modulation at chord {run_start + 1}")
    return modulations
