"""
Schema definitions for the harmony core.

This module defines the Pydantic models every operation returns. They are
immutable values: built once per request and never updated in place.

    Key              - tonic + mode, with a derived key signature
    ChordSymbol      - a parsed chord string (root, quality, extensions)
    Scale            - notes and diatonic chords of a tonic + interval pattern
    GenreProfile     - progression templates and stylistic metadata of a genre
    ChordProgression - a generated progression (numerals + chords)
    HarmonyAnalysis  - the result of analysing a list of chords
    ChordDifficulty  - guitar fingering difficulty of one chord symbol
"""

from typing import Dict, List, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from tonal_harmony.rules.pitch import (
    key_signature,
    note_index,
    normalize_note,
    parse_key_string,
    prefers_flats,
    relative_tonic,
    spell_tonic,
)


# =============================================================================
# VALID OPTIONS
# =============================================================================

Mode = Literal["major", "minor"]

ChordQuality = Literal[
    "major", "minor", "diminished", "augmented",
    "dominant7", "major7", "minor7", "half_diminished", "diminished7",
    "sus2", "sus4", "power",
]

Emotion = Literal["happy", "sad", "tense", "resolved", "mysterious", "powerful"]

Commonality = Literal["very-common", "common", "uncommon", "rare"]

Complexity = Literal["simple", "moderate", "complex"]

HarmonicFunction = Literal["Tonic", "Subdominant", "Dominant", "Other"]

Difficulty = Literal["beginner", "intermediate", "advanced", "expert"]


# =============================================================================
# KEY
# =============================================================================

class Key(BaseModel):
    """
    A musical key.

    The signature is never stored: it is computed from (tonic, mode) every
    time, so it cannot drift from the tonic.

    Example:
        >>> Key.parse("Em")
        Key(tonic='E', mode='minor', signature='1#')
    """

    model_config = ConfigDict(frozen=True)

    tonic: str = Field(
        ...,
        description="Tonic pitch class, spelled as given (e.g. 'C', 'F#', 'Bb')",
        examples=["C", "F#", "Bb"]
    )

    mode: Mode = Field(
        default="major",
        description="Major or minor mode",
        examples=["major", "minor"]
    )

    @field_validator("tonic")
    @classmethod
    def validate_tonic(cls, v: str) -> str:
        """Ensure the tonic is one of the 12 pitch classes"""
        return normalize_note(v)

    @computed_field
    @property
    def signature(self) -> str:
        return key_signature(self.tonic, self.mode)

    @property
    def name(self) -> str:
        """Key string in the "<Tonic>[m]" convention, e.g. 'Am' or 'G'."""
        return self.tonic + ("m" if self.mode == "minor" else "")

    @property
    def pitch_class(self) -> int:
        return note_index(self.tonic)

    @property
    def prefers_flats(self) -> bool:
        return prefers_flats(self.tonic, self.mode)

    @property
    def tonic_chord(self) -> str:
        return self.name

    def relative(self) -> "Key":
        tonic, mode = relative_tonic(self.tonic, self.mode)
        return Key(tonic=tonic, mode=mode)

    def parallel(self) -> "Key":
        return Key(tonic=self.tonic, mode="minor" if self.mode == "major" else "major")

    @classmethod
    def parse(cls, key: str) -> "Key":
        """
        Build a Key from a key string like "C", "Am" or "F# minor".

        Raises:
            InvalidTonicError: directly (not wrapped by pydantic) for a bad tonic
        """
        if isinstance(key, Key):
            return key
        tonic, mode = parse_key_string(key)
        return cls(tonic=tonic, mode=mode)

    @classmethod
    def from_pitch_class(cls, index: int, mode: str = "major") -> "Key":
        return cls(tonic=spell_tonic(index, mode), mode=mode)

    def __str__(self) -> str:
        return f"{self.tonic} {self.mode}"


# =============================================================================
# CHORDS AND SCALES
# =============================================================================

class ChordSymbol(BaseModel):
    """
    A chord symbol split into its parts.

    Attributes:
        symbol: The original string, e.g. "F#m7/A"
        root: Root note as spelled, e.g. "F#"
        quality: Quality tag, e.g. "minor7"
        extensions: Whatever followed the quality, e.g. "/A" or "add9"
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    root: str
    quality: ChordQuality = "major"
    extensions: str = ""

    @property
    def root_index(self) -> int:
        return note_index(self.root)

    @property
    def has_accidental(self) -> bool:
        return len(self.root) > 1

    def __str__(self) -> str:
        return self.symbol


class Scale(BaseModel):
    """A scale built on a tonic: notes in scale order plus one chord per degree."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., examples=["C major", "E minor"])
    tonic: str
    intervals: List[int] = Field(..., description="Semitone offsets from the tonic")
    notes: List[str]
    chords: List[str]
    modes: List[str] = Field(default_factory=list)


# =============================================================================
# GENERATION
# =============================================================================

class GenreProfile(BaseModel):
    """
    Progression templates and stylistic metadata of one genre.

    Only common_progressions and bias affect generation; the remaining
    fields describe the style for callers that build on top of a result.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    common_progressions: List[List[str]] = Field(..., min_length=1)
    preferred_keys: List[str] = Field(default_factory=list)
    typical_chords: List[str] = Field(default_factory=list)
    avoided_chords: List[str] = Field(default_factory=list)
    rhythm_features: List[str] = Field(default_factory=list)
    modal_interchange: bool = False
    complexity: Complexity = "moderate"
    bias: Dict[Mode, Tuple[str, str]] = Field(
        default_factory=lambda: {"major": ("I", "V"), "minor": ("i", "VII")},
        description="Two numerals per mode mixed into next-chord suggestions"
    )

    @field_validator("common_progressions")
    @classmethod
    def validate_templates(cls, v: List[List[str]]) -> List[List[str]]:
        """Ensure every template is a usable numeral sequence"""
        for template in v:
            if not 4 <= len(template) <= 12:
                raise ValueError(
                    f"Progression templates must hold 4-12 numerals. Got: {template}"
                )
        return v


class ChordProgression(BaseModel):
    """
    A generated chord progression.

    Example:
        >>> progression.numerals
        ['I', 'V', 'vi', 'IV']
        >>> progression.chords
        ['C', 'G', 'Am', 'F']
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., examples=["prog_0001"])
    numerals: List[str]
    chords: List[str]
    key: str = Field(..., examples=["C", "Am"])
    genre: str
    commonality: Commonality = "common"
    emotional: Emotion = "happy"

    @model_validator(mode="after")
    def check_parallel_lengths(self) -> "ChordProgression":
        if len(self.numerals) != len(self.chords):
            raise ValueError(
                f"numerals and chords must have the same length "
                f"({len(self.numerals)} != {len(self.chords)})"
            )
        return self


# =============================================================================
# ANALYSIS
# =============================================================================

class HarmonyAnalysis(BaseModel):
    """
    Result of analysing a chord list.

    numerals, functions and chords are parallel lists. cadences and
    modulations are human-readable labels.
    """

    model_config = ConfigDict(frozen=True)

    key: Key
    chords: List[str]
    numerals: List[str]
    functions: List[HarmonicFunction]
    cadences: List[str] = Field(default_factory=list)
    modulations: List[str] = Field(default_factory=list)
    non_chord_tones: List[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0, le=100)


class ChordDifficulty(BaseModel):
    """
    Guitar fingering difficulty of a chord symbol.

    reasons lists every rule the chord matched, in rule order; it is empty
    for a beginner chord.
    """

    model_config = ConfigDict(frozen=True)

    chord: str
    difficulty: Difficulty = "beginner"
    reasons: List[str] = Field(default_factory=list)
