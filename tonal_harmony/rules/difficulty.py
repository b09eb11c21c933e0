"""
Difficulty Module - Guitar Fingering Difficulty of Chord Symbols

Rates a chord symbol as beginner, intermediate, advanced or expert by
looking at its spelling. Rules are checked in order; every matching rule
adds its reason, and the last matching rule sets the level.

Examples:
    analyze_chord_difficulty("G")      → beginner
    analyze_chord_difficulty("F")      → intermediate (barre chord)
    analyze_chord_difficulty("B°")     → advanced
    analyze_chord_difficulty("Cmaj13") → expert
"""

from typing import Callable, List, Tuple
import re

from tonal_harmony.data.schema import ChordDifficulty


# =============================================================================
# CONSTANTS
# =============================================================================

# Open-position shapes do not exist for these; they need a barre
BARRE_CHORDS = {"F", "B", "Fm", "Bm", "F#", "F#m", "Bb", "Bbm"}

# A root followed by a two-digit extension (Cmaj13, Dm11, G#aug11)
JAZZ_HARMONY_REGEX = re.compile(r"[A-G][#b]?m?(maj|dim|aug)?[0-9]{2}")


def _has_any(*parts: str) -> Callable[[str], bool]:
    return lambda chord: any(part in chord for part in parts)


DIFFICULTY_RULES: List[Tuple[Callable[[str], bool], str, str]] = [
    (_has_any("7", "9", "11", "13"), "intermediate", "Extended harmony (7th, 9th, etc.)"),
    (_has_any("sus", "add"), "intermediate", "Suspended or added tone chord"),
    (lambda chord: chord in BARRE_CHORDS, "intermediate", "Requires barre chord technique"),
    (_has_any("°", "+", "alt"), "advanced", "Altered or diminished/augmented harmony"),
    (lambda chord: JAZZ_HARMONY_REGEX.search(chord) is not None, "expert", "Complex jazz harmony"),
]


# =============================================================================
# CORE FUNCTIONS
# =============================================================================

def analyze_chord_difficulty(chord: str) -> ChordDifficulty:
    """
    Rate how hard a chord is to finger on guitar.

    Never raises: an unrecognised symbol is rated on its spelling alone, so
    plain text with none of the markers comes out as beginner.
    """
    chord = chord.strip()
    difficulty = "beginner"
    reasons = []
    for matches, level, reason in DIFFICULTY_RULES:
        if matches(chord):
            difficulty = level
            reasons.append(reason)
    return ChordDifficulty(chord=chord, difficulty=difficulty, reasons=reasons)
