"""
Configuration for the harmony core.

Every tunable number of the heuristics lives in HarmonyConfig. The defaults
reproduce the documented behaviour, so most callers never load a file:

    engine = HarmonyEngine()                          # defaults
    engine = HarmonyEngine(load_config("harmony.yaml"))

A YAML file only needs the keys it overrides:

    weights:
      tonic: 5
      dominant: 3
    suggestion_count: 4
"""

from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tonal_harmony.exceptions import InvalidConfigError


class ScoringWeights(BaseModel):
    """Points awarded per chord when scoring a candidate key."""

    model_config = ConfigDict(frozen=True)

    tonic: float = Field(5.0, ge=0, description="Chord root equals the candidate tonic")
    dominant: float = Field(3.0, ge=0, description="Chord root equals the fifth degree")
    scale_note: float = Field(1.0, ge=0, description="Any other root inside the scale")
    mode_bonus: float = Field(2.0, ge=0, description="Chord quality agrees with the mode")


class HarmonyConfig(BaseModel):
    """
    Tunables of key detection, analysis and generation.

    Attributes:
        weights: Key scoring weights
        max_confidence: Cap applied to score / number of chords
        suggestion_count: Maximum number of suggested chords or numerals
        default_progression_length: Progression length used when a caller
            gives none
        default_melody_length: Melody length used when a caller gives none
        modulation_min_run: Consecutive accidental chords needed to flag a
            modulation (1 flags every chord with an accidental root)
        default_genre: Genre used when a caller gives none
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    max_confidence: float = Field(100.0, gt=0, le=100)
    suggestion_count: int = Field(6, ge=1, le=24)
    default_progression_length: int = Field(4, ge=1, le=64)
    default_melody_length: int = Field(8, ge=1, le=64)
    modulation_min_run: int = Field(1, ge=1)
    default_genre: str = Field("rock", min_length=1)

    @field_validator("default_genre")
    @classmethod
    def validate_genre(cls, v: str) -> str:
        return v.strip().lower()


def load_config(path: Union[str, Path]) -> HarmonyConfig:
    """
    Load a HarmonyConfig from a YAML file.

    An empty file yields the defaults.

    Raises:
        InvalidConfigError: if the file is missing, is not a mapping, or
            holds invalid values
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise InvalidConfigError(f"Cannot read config file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise InvalidConfigError(f"Config file '{path}' is not valid YAML: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise InvalidConfigError(
            f"Config file '{path}' must contain a mapping. Got: {type(raw).__name__}"
        )

    try:
        return HarmonyConfig.model_validate(raw)
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid config in '{path}': {e}") from e
