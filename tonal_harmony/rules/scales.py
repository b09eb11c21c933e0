"""
Scales Module - Interval Patterns, Scales and Diatonic Chords

This module applies an interval pattern to a tonic. It can:
    1. Build the notes of any registered scale from any tonic
    2. Derive the diatonic triad on every scale degree
    3. Rotate a pattern to get its modes (Ionian, Dorian, ...)

Scale construction is pure arithmetic on the chromatic index:
    note = (tonic_index + offset) mod 12
"""

from typing import Dict, List, Optional
import re

from tonal_harmony.data.schema import Key, Scale
from tonal_harmony.exceptions import UnknownScaleError
from tonal_harmony.rules.pitch import OCTAVE, note_index, note_name, normalize_note, prefers_flats


# =============================================================================
# CONSTANTS: Scale Formulas
# =============================================================================

# Scale formulas as semitone offsets from the tonic
SCALE_PATTERNS: Dict[str, List[int]] = {
    "major": [0, 2, 4, 5, 7, 9, 11],          # W-W-H-W-W-W-H
    "minor": [0, 2, 3, 5, 7, 8, 10],          # W-H-W-W-H-W-W (natural minor)
    "dorian": [0, 2, 3, 5, 7, 9, 10],
    "mixolydian": [0, 2, 4, 5, 7, 9, 10],
    "lydian": [0, 2, 4, 6, 7, 9, 11],
    "phrygian": [0, 1, 3, 5, 7, 8, 10],
    "locrian": [0, 1, 3, 5, 6, 8, 10],
    "pentatonicMajor": [0, 2, 4, 7, 9],
    "pentatonicMinor": [0, 3, 5, 7, 10],
    "blues": [0, 3, 5, 6, 7, 10],
    "harmonicMinor": [0, 2, 3, 5, 7, 8, 11],
    "melodicMinor": [0, 2, 3, 5, 7, 9, 11],
}

# Church modes in rotation order of the major scale
CHURCH_MODES = ["Ionian", "Dorian", "Phrygian", "Lydian", "Mixolydian", "Aeolian", "Locrian"]

# Which rotation of the major scale each registered scale is
MODE_ROTATION: Dict[str, int] = {
    "major": 0,
    "dorian": 1,
    "phrygian": 2,
    "lydian": 3,
    "mixolydian": 4,
    "minor": 5,
    "locrian": 6,
}

# Chord quality suffixes produced by triad stacking
TRIAD_SUFFIXES = {
    "major": "",
    "minor": "m",
    "diminished": "°",
    "augmented": "+",
}

# "harmonic_minor", "Harmonic Minor" and "harmonicMinor" all name one scale
_SCALE_LOOKUP = {name.lower(): name for name in SCALE_PATTERNS}
_SEPARATORS = re.compile(r"[\s_\-]+")


# =============================================================================
# CORE FUNCTIONS
# =============================================================================

def resolve_scale_name(scale_name: str) -> str:
    """Canonical registered name for a scale, or UnknownScaleError."""
    if not isinstance(scale_name, str):
        raise UnknownScaleError(str(scale_name), SCALE_PATTERNS)
    key = _SEPARATORS.sub("", scale_name).lower()
    if key not in _SCALE_LOOKUP:
        raise UnknownScaleError(scale_name, SCALE_PATTERNS)
    return _SCALE_LOOKUP[key]


def get_scale_pattern(scale_name: str) -> List[int]:
    return list(SCALE_PATTERNS[resolve_scale_name(scale_name)])


def mode_pattern(mode: str) -> List[int]:
    """Interval pattern of a key mode ("major" or "minor")."""
    if mode not in ("major", "minor"):
        raise UnknownScaleError(mode, ("major", "minor"))
    return list(SCALE_PATTERNS[mode])


def _default_flats(tonic: str, pattern: List[int]) -> bool:
    # A pattern with a minor third spells like the minor key on that tonic
    mode = "minor" if 3 in pattern and 4 not in pattern else "major"
    return prefers_flats(tonic, mode)


def build_scale(tonic: str, pattern: List[int], prefer_flats: Optional[bool] = None) -> List[str]:
    """
    Build a scale from a tonic and an interval pattern.

    Example:
        build_scale("E", SCALE_PATTERNS["minor"])
        → ['E', 'F#', 'G', 'A', 'B', 'C', 'D']

    Raises:
        InvalidTonicError: if the tonic is not a chromatic pitch class
    """
    tonic = normalize_note(tonic)
    tonic_index = note_index(tonic)
    if prefer_flats is None:
        prefer_flats = _default_flats(tonic, pattern)

    scale = []
    for interval in pattern:
        scale.append(note_name(tonic_index + interval, prefer_flats))
    # Keep the tonic spelled exactly as given
    scale[0] = tonic
    return scale


def key_scale(key: Key) -> List[str]:
    """The seven notes of a key, spelled for that key."""
    return build_scale(key.tonic, mode_pattern(key.mode), key.prefers_flats)


def key_pitch_classes(key: Key) -> List[int]:
    return [(key.pitch_class + offset) % OCTAVE for offset in mode_pattern(key.mode)]


def triad_quality(root: int, third: int, fifth: int) -> str:
    """
    Classify a stacked triad by its intervals above the root.

    third=4, fifth=7 → major; third=3, fifth=7 → minor;
    fifth=6 → diminished; fifth=8 → augmented; anything else → major.
    """
    third_interval = (third - root) % OCTAVE
    fifth_interval = (fifth - root) % OCTAVE

    if third_interval == 4 and fifth_interval == 7:
        return "major"
    if third_interval == 3 and fifth_interval == 7:
        return "minor"
    if fifth_interval == 6:
        return "diminished"
    if fifth_interval == 8:
        return "augmented"
    return "major"


def diatonic_chords(tonic: str, pattern: List[int], prefer_flats: Optional[bool] = None) -> List[str]:
    """
    Get the triad on every degree of a scale.

    Each chord stacks the degree with the notes two and four scale steps
    above it, wrapping around the scale.

    Example:
        diatonic_chords("G", SCALE_PATTERNS["major"])
        → ['G', 'Am', 'Bm', 'C', 'D', 'Em', 'F#°']
    """
    scale = build_scale(tonic, pattern, prefer_flats)
    indices = [note_index(note) for note in scale]
    size = len(scale)

    chords = []
    for i, note in enumerate(scale):
        quality = triad_quality(indices[i], indices[(i + 2) % size], indices[(i + 4) % size])
        chords.append(note + TRIAD_SUFFIXES[quality])
    return chords


def key_chords(key: Key) -> List[str]:
    return diatonic_chords(key.tonic, mode_pattern(key.mode), key.prefers_flats)


# =============================================================================
# MODES
# =============================================================================

def rotate_pattern(pattern: List[int], degree: int) -> List[int]:
    """
    Interval pattern of the mode starting on a scale degree (0-based).

    Example:
        rotate_pattern(SCALE_PATTERNS["major"], 1) == SCALE_PATTERNS["dorian"]
    """
    degree %= len(pattern)
    base = pattern[degree]
    rotated = pattern[degree:] + pattern[:degree]
    return [(step - base) % OCTAVE for step in rotated]


def mode_names(scale_name: str) -> List[str]:
    """
    Names of the modes obtained by rotating a church-mode scale, starting
    with the scale itself. Other scales have no named modes.
    """
    canonical = resolve_scale_name(scale_name)
    if canonical not in MODE_ROTATION:
        return []
    start = MODE_ROTATION[canonical]
    return CHURCH_MODES[start:] + CHURCH_MODES[:start]


def get_scale(tonic: str, scale_name: str) -> Scale:
    """
    Build a Scale with notes, diatonic chords and mode names.

    Raises:
        UnknownScaleError: if scale_name is not registered
        InvalidTonicError: if the tonic is not a chromatic pitch class
    """
    canonical = resolve_scale_name(scale_name)
    tonic = normalize_note(tonic)
    pattern = list(SCALE_PATTERNS[canonical])

    return Scale(
        name=f"{tonic} {canonical}",
        tonic=tonic,
        intervals=pattern,
        notes=build_scale(tonic, pattern),
        chords=diatonic_chords(tonic, pattern),
        modes=mode_names(canonical),
    )
