"""
Chord Symbols - Parsing and Spelling

Turns chord strings such as "Am7", "F#°" or "Bbmaj7/D" into ChordSymbol
values and back. A chord string is a root (A-G plus an optional # or b)
followed by a quality suffix and optional extensions.

Malformed strings are not an error here: parse_chord returns None and the
callers (key scoring, numeral mapping) skip or fall back.
"""

from typing import Dict, List, Optional, Tuple
import re

from tonal_harmony.data.schema import ChordSymbol


# =============================================================================
# QUALITY SUFFIXES
# =============================================================================

# Checked in order, so longer suffixes must come before their prefixes
# ("maj7" before "m", "m7b5" before "m7").
QUALITY_SUFFIXES: List[Tuple[str, str]] = [
    ("m7b5", "half_diminished"),
    ("min7b5", "half_diminished"),
    ("ø7", "half_diminished"),
    ("ø", "half_diminished"),
    ("maj7", "major7"),
    ("Maj7", "major7"),
    ("M7", "major7"),
    ("Δ", "major7"),
    ("maj", "major"),
    ("dim7", "diminished7"),
    ("°7", "diminished7"),
    ("o7", "diminished7"),
    ("dim", "diminished"),
    ("°", "diminished"),
    ("o", "diminished"),
    ("aug", "augmented"),
    ("+", "augmented"),
    ("min7", "minor7"),
    ("m7", "minor7"),
    ("-7", "minor7"),
    ("min", "minor"),
    ("m", "minor"),
    ("-", "minor"),
    ("sus2", "sus2"),
    ("sus4", "sus4"),
    ("sus", "sus4"),
    ("7", "dominant7"),
    ("5", "power"),
]

# Preferred suffix when spelling a chord from a quality
QUALITY_TO_SUFFIX: Dict[str, str] = {
    "major": "",
    "minor": "m",
    "diminished": "°",
    "augmented": "+",
    "dominant7": "7",
    "major7": "maj7",
    "minor7": "m7",
    "half_diminished": "m7b5",
    "diminished7": "°7",
    "sus2": "sus2",
    "sus4": "sus4",
    "power": "5",
}

MAJOR_FAMILY = {"major", "dominant7", "major7", "sus2", "sus4", "power"}
MINOR_FAMILY = {"minor", "minor7"}
DIMINISHED_FAMILY = {"diminished", "half_diminished", "diminished7"}
SEVENTH_QUALITIES = {"dominant7", "major7", "minor7", "half_diminished", "diminished7"}

CHORD_REGEX = re.compile(r"^([A-G])([#b]?)(.*)$")


# =============================================================================
# PARSING
# =============================================================================

def split_quality(suffix: str) -> Tuple[str, str]:
    """Split a chord suffix into (quality, extensions)."""
    for token, quality in QUALITY_SUFFIXES:
        if suffix.startswith(token):
            return quality, suffix[len(token):]
    return "major", suffix


def parse_chord(symbol: str) -> Optional[ChordSymbol]:
    """
    Parse a chord string; returns None when the root is not chromatic.

    Examples:
        parse_chord("Am7")   → root="A", quality="minor7"
        parse_chord("Bb")    → root="Bb", quality="major"
        parse_chord("F#°")   → root="F#", quality="diminished"
        parse_chord("Xyz")   → None
    """
    if not isinstance(symbol, str):
        return None
    text = symbol.strip()
    match = CHORD_REGEX.match(text)
    if not match:
        return None

    letter, accidental, suffix = match.groups()
    root = letter + accidental
    if root in ("Cb", "Fb"):
        return None

    quality, extensions = split_quality(suffix)
    return ChordSymbol(symbol=text, root=root, quality=quality, extensions=extensions)


def chord_root(symbol: str) -> Optional[str]:
    chord = parse_chord(symbol)
    return chord.root if chord else None


def quality_family(quality: str) -> Optional[str]:
    """
    Major/minor family of a quality, or None for mode-neutral qualities.

    Diminished and augmented chords belong to neither family.
    """
    if quality in MAJOR_FAMILY:
        return "major"
    if quality in MINOR_FAMILY:
        return "minor"
    return None


def is_lower_case_quality(quality: str) -> bool:
    """Whether a Roman numeral for this quality is written in lower case."""
    return quality in MINOR_FAMILY or quality in DIMINISHED_FAMILY


def format_chord(root: str, quality: str = "major", extensions: str = "") -> str:
    """Spell a chord from its parts, e.g. ("A", "minor7") → "Am7"."""
    return root + QUALITY_TO_SUFFIX[quality] + extensions


def is_valid_chord(symbol: str) -> bool:
    return parse_chord(symbol) is not None
