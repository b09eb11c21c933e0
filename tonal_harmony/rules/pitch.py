"""
Pitch Module - The Chromatic Index

Every piece of pitch arithmetic in the package goes through this module:
    1. Normalize a note name ("bb", "Db", "c#") to a pitch class (0-11)
    2. Spell a pitch class back as a note name (sharps or flats)
    3. Derive key signatures from the circle of fifths
    4. Split key strings like "Am" or "F# minor" into tonic and mode

Enharmonic spelling (C# vs Db) is a presentation choice: both spell the
same pitch class and compare equal once normalized.
"""

from typing import Optional, Tuple
import re

from tonal_harmony.exceptions import InvalidTonicError


# =============================================================================
# CONSTANTS: The Building Blocks of Pitch Arithmetic
# =============================================================================

# The 12 notes in Western music, spelled with sharps
CHROMATIC_SCALE = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# The same 12 pitch classes spelled with flats
CHROMATIC_SCALE_FLATS = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# Mapping of flat notes to their sharp equivalents (enharmonic equivalents)
FLAT_TO_SHARP = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

OCTAVE = 12

# Keys ordered by ascending perfect fifths, starting from C
CIRCLE_OF_FIFTHS = ["C", "G", "D", "A", "E", "B", "F#", "C#", "Ab", "Eb", "Bb", "F"]

MODES = ("major", "minor")

# A relative major sits a minor third above its minor tonic
RELATIVE_MAJOR_OFFSET = 3

NOTE_REGEX = re.compile(r"^([A-Ga-g])([#b]?)$")
KEY_REGEX = re.compile(r"^\s*([A-Ga-g])([#b]?)\s*(.*?)\s*$")


# =============================================================================
# NOTE NAMES
# =============================================================================

def normalize_note(note: str) -> str:
    """Canonical spelling of a note name, keeping its accidental ("bb" -> "Bb")."""
    match = NOTE_REGEX.match(note.strip()) if isinstance(note, str) else None
    if not match:
        raise InvalidTonicError(note)

    letter, accidental = match.groups()
    normalized = letter.upper() + accidental
    if normalized not in CHROMATIC_SCALE and normalized not in FLAT_TO_SHARP:
        # Fb, Cb, E#, B# are not part of the index
        raise InvalidTonicError(note)
    return normalized


def note_index(note: str) -> int:
    """Get the index of a note in the chromatic scale (0-11)."""
    normalized = normalize_note(note)
    return CHROMATIC_SCALE.index(FLAT_TO_SHARP.get(normalized, normalized))


def is_note(note: str) -> bool:
    try:
        note_index(note)
    except InvalidTonicError:
        return False
    return True


def note_name(index: int, prefer_flats: bool = False) -> str:
    """Spell a pitch class; any integer is reduced mod 12."""
    names = CHROMATIC_SCALE_FLATS if prefer_flats else CHROMATIC_SCALE
    return names[index % OCTAVE]


def transpose(note: str, semitones: int, prefer_flats: Optional[bool] = None) -> str:
    """Move a note by a number of semitones, keeping its accidental style."""
    if prefer_flats is None:
        prefer_flats = "b" in normalize_note(note)
    return note_name(note_index(note) + semitones, prefer_flats)


def same_pitch(a: str, b: str) -> bool:
    return note_index(a) == note_index(b)


# =============================================================================
# KEY SIGNATURES
# =============================================================================

def fifths_from_c(index: int) -> int:
    """Position of a major key on the circle of fifths (0=C, 1=G, ... 11=F)."""
    return (index * 7) % OCTAVE


def key_signature(tonic: str, mode: str = "major") -> str:
    """
    Derive the key signature from the tonic's circle-of-fifths position.

    Minor keys take the signature of their relative major. The tonic's own
    accidental decides between enharmonic signatures where both are usable
    (C# major is "7#", Db major is "5b"); natural tonics use the shorter one.

    Examples:
        key_signature("D")          → "2#"
        key_signature("F")          → "1b"
        key_signature("C", "minor") → "3b"
        key_signature("A", "minor") → "0"
    """
    normalized = normalize_note(tonic)
    index = note_index(normalized)
    if mode == "minor":
        index += RELATIVE_MAJOR_OFFSET
    sharps = fifths_from_c(index)
    flats = (OCTAVE - sharps) % OCTAVE

    if sharps == 0:
        return "0"
    if "#" in normalized and sharps <= 7:
        return f"{sharps}#"
    if "b" in normalized and flats <= 7:
        return f"{flats}b"
    if sharps <= 6:
        return f"{sharps}#"
    return f"{flats}b"


def prefers_flats(tonic: str, mode: str = "major") -> bool:
    """Whether notes in this key should be spelled with flats."""
    normalized = normalize_note(tonic)
    if "#" in normalized:
        return False
    if "b" in normalized:
        return True
    return key_signature(normalized, mode).endswith("b")


def spell_tonic(index: int, mode: str = "major") -> str:
    """
    Choose the conventional spelling for a tonic found by pitch class.

    Used when a key comes out of an algorithm (key detection) rather than
    from user input: 10 in major becomes "Bb", 1 in minor becomes "C#".
    """
    sharp_name = note_name(index)
    if "#" not in sharp_name:
        return sharp_name
    relative = index + (RELATIVE_MAJOR_OFFSET if mode == "minor" else 0)
    if fifths_from_c(relative) <= 6:
        return sharp_name
    return note_name(index, prefer_flats=True)


# =============================================================================
# KEY STRINGS
# =============================================================================

def parse_key_string(key: str) -> Tuple[str, str]:
    """
    Split a key string into (tonic, mode).

    Key strings follow the "<Tonic>[m]" convention. Long forms such as
    "F# minor", "Bb major", "Dmin" and "CM" are accepted too.

    Raises:
        InvalidTonicError: if the tonic is not a chromatic pitch class
    """
    match = KEY_REGEX.match(key) if isinstance(key, str) else None
    if not match:
        raise InvalidTonicError(key)

    letter, accidental, suffix = match.groups()
    tonic = normalize_note(letter + accidental)

    if suffix == "M":
        mode = "major"
    else:
        lowered = suffix.lower()
        is_minor = (
            lowered.startswith("m") and not lowered.startswith("maj")
        ) or lowered.startswith("-")
        mode = "minor" if is_minor else "major"

    return tonic, mode


def relative_tonic(tonic: str, mode: str) -> Tuple[str, str]:
    """Get the relative major/minor of a key."""
    index = note_index(tonic)
    if mode == "major":
        relative_index = (index + OCTAVE - RELATIVE_MAJOR_OFFSET) % OCTAVE
        return spell_tonic(relative_index, "minor"), "minor"
    relative_index = (index + RELATIVE_MAJOR_OFFSET) % OCTAVE
    return spell_tonic(relative_index, "major"), "major"
