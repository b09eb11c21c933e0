"""
Tonal Harmony - Source Package

A tonal-harmony core for music tooling: key detection, Roman numeral
analysis, scale construction and genre-flavoured chord progressions.

Subpackages:
    - tonal_harmony.data: Pydantic value types and configuration
    - tonal_harmony.rules: Music theory rules (pitch, scales, chords,
      key detection, numerals, progressions, cadences, melody, difficulty)
    - tonal_harmony.app: HarmonyEngine facade and command line interface

Example usage:
    from tonal_harmony import HarmonyEngine

    engine = HarmonyEngine()
    analysis = engine.analyze_harmony(["C", "Am", "F", "G"], "C")
    print(analysis.numerals)    # ['I', 'vi', 'IV', 'V']
    print(analysis.cadences)    # []
"""

__version__ = "0.1.0"

from tonal_harmony.app.engine import HarmonyEngine
from tonal_harmony.exceptions import (
    HarmonyError,
    InvalidConfigError,
    InvalidTonicError,
    UnknownScaleError,
)
