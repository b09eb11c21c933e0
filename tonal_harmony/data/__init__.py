"""
Data Subpackage

This package holds the value types and configuration of the harmony core:
    - schema.py: Pydantic models returned by every operation
    - config.py: Scoring weights and generation defaults (YAML-loadable)

The central result types are HarmonyAnalysis (analysis of a chord list)
and ChordProgression (a generated progression).
"""

from tonal_harmony.data.schema import (
    ChordDifficulty,
    ChordProgression,
    ChordSymbol,
    GenreProfile,
    HarmonyAnalysis,
    Key,
    Scale,
)
from tonal_harmony.data.config import HarmonyConfig, ScoringWeights, load_config
