"""
Numerals Module - Chord Symbols <-> Roman Numerals

Translates chord symbols into scale-degree (Roman numeral) notation and back,
for any of the 24 major and minor keys.

Notation:
    - Case encodes the chord family: upper case for major, dominant and
      augmented chords (I, IV, V7); lower case for minor and diminished
      chords (ii, vi, vii°).
    - Quality markers follow the numeral: ° diminished, ø half-diminished,
      + augmented, 7 any seventh chord.
    - A flat or sharp prefix (bVII, bIII, #iv) marks a root outside the
      key's scale, measured against the tonic's major scale.

The same numeral means different chords in different keys ("V" is G in C
major, E in A minor), so every call takes the key explicitly.

Unknown input never raises: an unparsable chord maps to a default numeral
("I") and an unparsable numeral maps to the key's tonic chord.
"""

from dataclasses import dataclass
from typing import List, Optional, Union
import re

from tonal_harmony.data.schema import Key
from tonal_harmony.rules.chords import format_chord, is_lower_case_quality, parse_chord
from tonal_harmony.rules.pitch import OCTAVE, note_name
from tonal_harmony.rules.scales import SCALE_PATTERNS, key_chords, key_pitch_classes, mode_pattern


# =============================================================================
# CONSTANTS
# =============================================================================

# Roman numeral labels of the diatonic triads
ROMAN_NUMERALS = {
    "major": ["I", "ii", "iii", "IV", "V", "vi", "vii°"],
    "minor": ["i", "ii°", "III", "iv", "v", "VI", "VII"],
}

BASE_NUMERALS = ["I", "II", "III", "IV", "V", "VI", "VII"]

NUMERAL_TO_DEGREE = {numeral: i + 1 for i, numeral in enumerate(BASE_NUMERALS)}

NUMERAL_REGEX = re.compile(
    r"^(?P<accidental>[b#♭♯]?)"
    r"(?P<base>VII|VI|IV|V|III|II|I|vii|vi|iv|v|iii|ii|i)"
    r"(?P<markers>[°oø+]?)"
    r"(?P<seventh>7?)$"
)

ACCIDENTALS = {"": 0, "b": -1, "♭": -1, "#": 1, "♯": 1}

KeyLike = Union[Key, str]


# =============================================================================
# NUMERAL VALUES
# =============================================================================

@dataclass(frozen=True)
class RomanNumeral:
    """A parsed Roman numeral: scale degree plus case and quality markers."""
    degree: int
    upper: bool = True
    accidental: int = 0
    diminished: bool = False
    half_diminished: bool = False
    augmented: bool = False
    seventh: bool = False

    @property
    def text(self) -> str:
        prefix = {-1: "b", 0: "", 1: "#"}[self.accidental]
        base = BASE_NUMERALS[self.degree - 1]
        base = base if self.upper else base.lower()

        marker = ""
        if self.half_diminished:
            marker = "ø"
        elif self.diminished:
            marker = "°"
        elif self.augmented:
            marker = "+"
        return prefix + base + marker + ("7" if self.seventh else "")

    @property
    def quality(self) -> str:
        """Chord quality implied by the numeral's case and markers."""
        if self.half_diminished:
            return "half_diminished"
        if self.diminished:
            return "diminished7" if self.seventh else "diminished"
        if self.augmented:
            return "augmented"
        if self.upper:
            return "dominant7" if self.seventh else "major"
        return "minor7" if self.seventh else "minor"

    def __str__(self) -> str:
        return self.text


def parse_numeral(numeral: str) -> Optional[RomanNumeral]:
    """
    Parse a numeral string such as "V7", "vii°" or "bVII".

    Returns None for anything that is not a numeral (mixed case like "Vi",
    unknown markers, "N/A").
    """
    if not isinstance(numeral, str):
        return None
    match = NUMERAL_REGEX.match(numeral.strip())
    if not match:
        return None

    base = match.group("base")
    marker = match.group("markers")
    return RomanNumeral(
        degree=NUMERAL_TO_DEGREE[base.upper()],
        upper=base.isupper(),
        accidental=ACCIDENTALS[match.group("accidental")],
        diminished=marker in ("°", "o"),
        half_diminished=marker == "ø",
        augmented=marker == "+",
        seventh=bool(match.group("seventh")),
    )


def numeral_degree(numeral: str) -> Optional[int]:
    """Scale degree (1-7) of a plain, unaltered numeral; None otherwise."""
    parsed = parse_numeral(numeral)
    if parsed is None or parsed.accidental:
        return None
    return parsed.degree


def as_key(key: KeyLike) -> Key:
    return key if isinstance(key, Key) else Key.parse(key)


# =============================================================================
# CHORD -> NUMERAL
# =============================================================================

def chord_to_numeral(chord: str, key: KeyLike, default: str = "I") -> str:
    """
    Convert a chord symbol to a Roman numeral in a key.

    The root is looked up in the key's scale first, then in the tonic's
    major scale (so the leading-tone chord of a minor key is still vii°),
    and otherwise written as a flattened major-scale degree.

    Examples:
        chord_to_numeral("Am", "C")   → "vi"
        chord_to_numeral("G7", "C")   → "V7"
        chord_to_numeral("B°", "C")   → "vii°"
        chord_to_numeral("Bb", "C")   → "bVII"
        chord_to_numeral("E7", "Am")  → "V7"
        chord_to_numeral("Xyz", "C")  → "I"

    Raises:
        InvalidTonicError: only for an invalid key
    """
    key = as_key(key)
    parsed = parse_chord(chord)
    if parsed is None:
        return default

    root = parsed.root_index
    scale = key_pitch_classes(key)
    major = [(key.pitch_class + offset) % OCTAVE for offset in SCALE_PATTERNS["major"]]

    accidental = 0
    if root in scale:
        degree = scale.index(root) + 1
    elif root in major:
        degree = major.index(root) + 1
    else:
        # Every pitch class outside a major scale is a lowered scale degree
        degree = major.index((root + 1) % OCTAVE) + 1
        accidental = -1

    quality = parsed.quality
    numeral = RomanNumeral(
        degree=degree,
        upper=not is_lower_case_quality(quality),
        accidental=accidental,
        diminished=quality in ("diminished", "diminished7"),
        half_diminished=quality == "half_diminished",
        augmented=quality == "augmented",
        seventh=quality in ("dominant7", "major7", "minor7", "half_diminished", "diminished7"),
    )
    return numeral.text


def chords_to_numerals(chords: List[str], key: KeyLike, default: str = "I") -> List[str]:
    key = as_key(key)
    return [chord_to_numeral(chord, key, default) for chord in chords]


# =============================================================================
# NUMERAL -> CHORD
# =============================================================================

def fits_triad(parsed: RomanNumeral, diatonic: str) -> bool:
    """True when a numeral has the case and diminished marker of a diatonic numeral."""
    expected = parse_numeral(diatonic)
    diminished = parsed.diminished or parsed.half_diminished
    return parsed.upper == expected.upper and diminished == expected.diminished


def raises_minor_degree(parsed: RomanNumeral) -> bool:
    """
    True when a minor-key numeral names the tonic major scale's degree.

    vii° in A minor fits G#° (from A major) but not the natural-minor G,
    so the degree is raised. Numerals that fit the natural-minor triad
    (VII, VI, ii°) keep their degree.
    """
    index = parsed.degree - 1
    return (
        not fits_triad(parsed, ROMAN_NUMERALS["minor"][index])
        and fits_triad(parsed, ROMAN_NUMERALS["major"][index])
    )


def numeral_to_chord(numeral: str, key: KeyLike) -> str:
    """
    Convert a Roman numeral to a chord symbol in a key.

    The numeral's markers are stripped to find the scale degree, the degree
    note is taken from the key's scale (or from the tonic's major scale for
    numerals with a flat/sharp prefix), and the quality is re-applied:
    lower case → "m", 7 → "7", ° → "°", + → "+".

    In a minor key a numeral whose case only fits the major-scale triad
    (vii°, vi, iii) takes the raised degree, spelled with a sharp. This
    mirrors chord_to_numeral, which finds such roots in the major scale.

    Examples:
        numeral_to_chord("vi", "C")     → "Am"
        numeral_to_chord("V7", "G")     → "D7"
        numeral_to_chord("IV", "F")     → "Bb"
        numeral_to_chord("bVII", "E")   → "D"
        numeral_to_chord("VII", "Am")   → "G"
        numeral_to_chord("vii°", "Am")  → "G#°"
        numeral_to_chord("xyz", "Am")   → "Am"   (tonic fallback)
    """
    key = as_key(key)
    parsed = parse_numeral(numeral)
    if parsed is None:
        return key.tonic_chord

    if parsed.accidental:
        offset = SCALE_PATTERNS["major"][parsed.degree - 1] + parsed.accidental
        prefer_flats = parsed.accidental < 0
    else:
        offset = mode_pattern(key.mode)[parsed.degree - 1]
        prefer_flats = key.prefers_flats
        if key.mode == "minor" and raises_minor_degree(parsed):
            raised = SCALE_PATTERNS["major"][parsed.degree - 1]
            # ii, IV and V coincide in both scales and keep the key's spelling
            if raised != offset:
                offset, prefer_flats = raised, False

    if parsed.degree == 1 and not parsed.accidental:
        root = key.tonic
    else:
        root = note_name(key.pitch_class + offset, prefer_flats)
    return format_chord(root, parsed.quality)


def numerals_to_chords(numerals: List[str], key: KeyLike) -> List[str]:
    key = as_key(key)
    return [numeral_to_chord(numeral, key) for numeral in numerals]


def key_numerals(key: KeyLike) -> List[str]:
    """The seven diatonic numerals of a key, e.g. I ii iii IV V vi vii°."""
    key = as_key(key)
    return [chord_to_numeral(chord, key) for chord in key_chords(key)]
