"""
Tests for tonal_harmony/rules/scales.py

Run with: pytest tests/test_scales.py -v
"""

import pytest

from tonal_harmony.data.schema import Key
from tonal_harmony.exceptions import InvalidTonicError, UnknownScaleError
from tonal_harmony.rules.pitch import CHROMATIC_SCALE, MODES, note_index
from tonal_harmony.rules.scales import (
    SCALE_PATTERNS,
    build_scale,
    diatonic_chords,
    get_scale,
    key_chords,
    key_scale,
    mode_names,
    resolve_scale_name,
    rotate_pattern,
    triad_quality,
)


class TestBuildScale:
    """Test scale construction from a tonic and a pattern."""

    def test_e_minor(self):
        scale = get_scale("E", "minor")
        assert scale.name == "E minor"
        assert scale.tonic == "E"
        assert scale.notes == ["E", "F#", "G", "A", "B", "C", "D"]
        assert scale.chords == ["Em", "F#°", "G", "Am", "Bm", "C", "D"]
        assert scale.intervals == SCALE_PATTERNS["minor"]

    def test_c_major_chords(self):
        assert get_scale("C", "major").chords == ["C", "Dm", "Em", "F", "G", "Am", "B°"]

    def test_g_major_chords(self):
        assert diatonic_chords("G", SCALE_PATTERNS["major"]) == ["G", "Am", "Bm", "C", "D", "Em", "F#°"]

    def test_flat_keys_spell_with_flats(self):
        assert get_scale("F", "major").notes == ["F", "G", "A", "Bb", "C", "D", "E"]
        assert get_scale("D", "minor").notes == ["D", "E", "F", "G", "A", "Bb", "C"]
        assert get_scale("Bb", "major").notes == ["Bb", "C", "D", "Eb", "F", "G", "A"]

    def test_tonic_keeps_its_spelling(self):
        assert build_scale("Gb", SCALE_PATTERNS["major"])[0] == "Gb"
        assert build_scale("F#", SCALE_PATTERNS["major"])[0] == "F#"

    def test_explicit_spelling(self):
        assert build_scale("C", SCALE_PATTERNS["minor"], prefer_flats=False) == \
            ["C", "D", "D#", "F", "G", "G#", "A#"]

    def test_non_heptatonic_scales(self):
        assert get_scale("C", "pentatonicMajor").notes == ["C", "D", "E", "G", "A"]
        assert get_scale("A", "blues").notes == ["A", "C", "D", "D#", "E", "G"]

    @pytest.mark.parametrize("tonic", CHROMATIC_SCALE)
    @pytest.mark.parametrize("mode", MODES)
    def test_every_key_has_seven_distinct_notes(self, tonic, mode):
        notes = get_scale(tonic, mode).notes
        assert len(notes) == 7
        assert notes[0] == tonic
        assert len({note_index(n) for n in notes}) == 7

    def test_key_helpers(self):
        assert key_scale(Key.parse("Dm")) == ["D", "E", "F", "G", "A", "Bb", "C"]
        assert key_chords(Key.parse("Am")) == ["Am", "B°", "C", "Dm", "Em", "F", "G"]


class TestScaleNames:
    """Test scale name lookup and errors."""

    @pytest.mark.parametrize("name,expected", [
        ("major", "major"),
        ("MAJOR", "major"),
        ("harmonic_minor", "harmonicMinor"),
        ("Harmonic Minor", "harmonicMinor"),
        ("pentatonic-major", "pentatonicMajor"),
    ])
    def test_resolve_scale_name(self, name, expected):
        assert resolve_scale_name(name) == expected

    def test_unknown_scale(self):
        with pytest.raises(UnknownScaleError):
            get_scale("C", "bebop")

    def test_invalid_tonic(self):
        with pytest.raises(InvalidTonicError):
            get_scale("H", "major")


class TestTriadsAndModes:
    """Test triad classification and mode rotation."""

    def test_triad_quality(self):
        assert triad_quality(0, 4, 7) == "major"
        assert triad_quality(9, 0, 4) == "minor"
        assert triad_quality(11, 2, 5) == "diminished"
        assert triad_quality(0, 4, 8) == "augmented"
        assert triad_quality(0, 5, 7) == "major"

    def test_rotate_pattern(self):
        major = SCALE_PATTERNS["major"]
        assert rotate_pattern(major, 1) == SCALE_PATTERNS["dorian"]
        assert rotate_pattern(major, 4) == SCALE_PATTERNS["mixolydian"]
        assert rotate_pattern(major, 5) == SCALE_PATTERNS["minor"]
        assert rotate_pattern(major, 7) == major

    def test_mode_names(self):
        assert mode_names("major")[:3] == ["Ionian", "Dorian", "Phrygian"]
        assert mode_names("minor")[0] == "Aeolian"
        assert mode_names("blues") == []
        assert get_scale("E", "minor").modes[0] == "Aeolian"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
