"""
Exceptions raised by the harmony core.

Only structural problems are errors: a tonic that is not one of the twelve
pitch classes, a scale name that is not registered, or a configuration file
that does not validate. Unknown chord symbols and Roman numerals are not
errors; they fall back to a playable default instead.

All exceptions derive from ValueError, so callers that already catch
ValueError around note parsing keep working.
"""


class HarmonyError(ValueError):
    """Base class for every error raised by tonal_harmony."""


class InvalidTonicError(HarmonyError):
    """The tonic is not one of the 12 chromatic pitch classes."""

    def __init__(self, tonic: str):
        self.tonic = tonic
        super().__init__(
            f"Invalid tonic: '{tonic}'. Expected one of C, C#/Db, D, D#/Eb, E, "
            f"F, F#/Gb, G, G#/Ab, A, A#/Bb, B"
        )


class UnknownScaleError(HarmonyError):
    """The requested scale pattern is not registered."""

    def __init__(self, scale_name: str, known=None):
        self.scale_name = scale_name
        message = f"Unknown scale: '{scale_name}'"
        if known:
            message += f". Valid scales are: {sorted(known)}"
        super().__init__(message)


class InvalidConfigError(HarmonyError):
    """A configuration file could not be read or failed validation."""
