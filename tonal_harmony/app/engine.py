"""
Harmony Engine - Main Entry Point of the Harmony Core
=====================================================

HarmonyEngine composes the rule modules into the public operations that
collaborators (chord extractors, melody and arrangement generators) call:

    analyze_harmony            chords (+ optional key) → HarmonyAnalysis
    detect_key                 chords → Key
    chord_to_roman_numeral     "Am", "C" → "vi"
    roman_numeral_to_chord     "vi", "C" → "Am"
    get_scale                  "E", "minor" → Scale
    generate_chord_progression key, genre, length → ChordProgression
    suggest_chords             key, genre → chord symbols
    get_logical_next_chords    numerals, key → next numerals
    generate_melody            key, scale, length, genre → note names
    analyze_chord_difficulty   "F" → ChordDifficulty (intermediate, barre)

The engine is constructed explicitly; there is no module-level default
instance. Its only mutable state lives in the progression generator (random
source and id counter); every other operation is a pure function of its
arguments and the configuration.

Usage:
    from tonal_harmony.app.engine import HarmonyEngine

    engine = HarmonyEngine()
    analysis = engine.analyze_harmony(["C", "Am", "F", "G"], "C")
    print(analysis.numerals)    # ['I', 'vi', 'IV', 'V']

    # Reproducible generation
    engine = HarmonyEngine.seeded(42)
    print(engine.generate_chord_progression("G", "country", 8).chords)
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging

from tonal_harmony.data.config import HarmonyConfig, load_config
from tonal_harmony.data.schema import (
    ChordDifficulty,
    ChordProgression,
    GenreProfile,
    HarmonyAnalysis,
    Key,
    Scale,
)
from tonal_harmony.rules.cadences import detect_cadences, detect_modulations, harmonic_functions
from tonal_harmony.rules.difficulty import analyze_chord_difficulty
from tonal_harmony.rules.key_detection import detect_key, key_confidence
from tonal_harmony.rules.numerals import chords_to_numerals, chord_to_numeral, numeral_to_chord
from tonal_harmony.rules.progressions import ProgressionGenerator, get_genre_profile
from tonal_harmony.rules.scales import get_scale


logger = logging.getLogger(__name__)

# Numeral reported for chords that cannot be parsed during analysis
UNMAPPED_NUMERAL = "N/A"


class HarmonyEngine:
    """
    Facade over key detection, numeral mapping, scales and generation.

    Args:
        config: Scoring weights and defaults; HarmonyConfig() if omitted
        generator: Progression generator; a live (unseeded) one if omitted
    """

    def __init__(
        self,
        config: Optional[HarmonyConfig] = None,
        generator: Optional[ProgressionGenerator] = None
    ):
        self.config = config or HarmonyConfig()
        self.generator = generator or ProgressionGenerator.live(
            suggestion_count=self.config.suggestion_count
        )

    @classmethod
    def seeded(cls, seed: int, config: Optional[HarmonyConfig] = None) -> "HarmonyEngine":
        """Engine whose progression generation is reproducible."""
        config = config or HarmonyConfig()
        generator = ProgressionGenerator.seeded(seed, suggestion_count=config.suggestion_count)
        return cls(config, generator)

    @classmethod
    def from_config_file(cls, path: Union[str, Path], seed: Optional[int] = None) -> "HarmonyEngine":
        config = load_config(path)
        if seed is not None:
            return cls.seeded(seed, config)
        return cls(config)

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze_harmony(self, chords: Sequence[str], key: Optional[str] = None) -> HarmonyAnalysis:
        """
        Analyse a chord list: key, numerals, functions, cadences, modulations.

        If no key is given it is detected from the chords.

        Raises:
            InvalidTonicError: if an explicit key has an invalid tonic
        """
        chords = list(chords)
        key_obj = Key.parse(key) if key else self.detect_key(chords)

        numerals = chords_to_numerals(chords, key_obj, default=UNMAPPED_NUMERAL)
        analysis = HarmonyAnalysis(
            key=key_obj,
            chords=chords,
            numerals=numerals,
            functions=harmonic_functions(numerals),
            cadences=detect_cadences(numerals),
            modulations=detect_modulations(chords, self.config.modulation_min_run),
            non_chord_tones=[],
            confidence=self.confidence(chords, key_obj),
        )
        logger.debug(
            "Analysed %d chords in %s: %s (confidence %.2f)",
            len(chords), key_obj, numerals, analysis.confidence
        )
        return analysis

    def detect_key(self, chords: Sequence[str]) -> Key:
        key = detect_key(chords, self.config.weights)
        logger.debug("Detected key %s from %d chords", key, len(chords))
        return key

    def confidence(self, chords: Sequence[str], key: Union[Key, str]) -> float:
        key_obj = Key.parse(key)
        return key_confidence(chords, key_obj, self.config.weights, self.config.max_confidence)

    # -------------------------------------------------------------------------
    # Numerals and scales
    # -------------------------------------------------------------------------

    def chord_to_roman_numeral(self, chord: str, key: str) -> str:
        return chord_to_numeral(chord, key)

    def roman_numeral_to_chord(self, numeral: str, key: str) -> str:
        return numeral_to_chord(numeral, key)

    def get_scale(self, tonic: str, scale_name: str) -> Scale:
        """
        Raises:
            UnknownScaleError: for an unregistered scale name
            InvalidTonicError: for an invalid tonic
        """
        return get_scale(tonic, scale_name)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate_chord_progression(
        self,
        key: str,
        genre: Optional[str] = None,
        length: Optional[int] = None
    ) -> ChordProgression:
        """
        Generate a genre-flavoured progression of exactly `length` chords.

        Not a pure function: template choice depends on the generator's
        random source. Build the engine with HarmonyEngine.seeded() for
        reproducible output.
        """
        genre = genre or self.config.default_genre
        length = self.config.default_progression_length if length is None else length
        progression = self.generator.generate(key, genre, length)
        logger.debug("Generated %s: %s", progression.id, progression.chords)
        return progression

    def suggest_chords(self, key: str, genre: Optional[str] = None) -> List[str]:
        return self.generator.suggest_chords(key, genre or self.config.default_genre)

    def get_logical_next_chords(
        self,
        numerals: Sequence[str],
        key: str,
        genre: Optional[str] = None
    ) -> List[str]:
        """Suggested next numerals after a numeral sequence in a key."""
        return self.generator.logical_next(numerals, key, genre)

    def generate_melody(
        self,
        key: str,
        scale_name: str = "major",
        length: Optional[int] = None,
        genre: Optional[str] = None
    ) -> List[str]:
        """
        Generate a melody of `length` note names on the key's tonic.

        Like progressions, this draws from the generator's random source.

        Raises:
            ValueError: if length < 1
            UnknownScaleError: for an unregistered scale name
            InvalidTonicError: for an invalid tonic
        """
        genre = genre or self.config.default_genre
        length = self.config.default_melody_length if length is None else length
        return self.generator.generate_melody(key, scale_name, length, genre)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def analyze_chord_difficulty(self, chord: str) -> ChordDifficulty:
        return analyze_chord_difficulty(chord)

    def get_genre_characteristics(self, genre: str) -> GenreProfile:
        return get_genre_profile(genre)
