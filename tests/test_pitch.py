"""
Tests for tonal_harmony/rules/pitch.py

Run with: pytest tests/test_pitch.py -v
"""

import pytest

from tonal_harmony.exceptions import InvalidTonicError
from tonal_harmony.rules.pitch import (
    CHROMATIC_SCALE,
    is_note,
    key_signature,
    normalize_note,
    note_index,
    note_name,
    parse_key_string,
    prefers_flats,
    relative_tonic,
    same_pitch,
    spell_tonic,
    transpose,
)


class TestNoteNames:
    """Test note normalization and the chromatic index."""

    @pytest.mark.parametrize("raw,expected", [
        ("C", "C"),
        ("c#", "C#"),
        ("bb", "Bb"),
        ("  D ", "D"),
        ("Eb", "Eb"),
    ])
    def test_normalize_note(self, raw, expected):
        assert normalize_note(raw) == expected

    @pytest.mark.parametrize("raw", ["H", "", "C##", "Cb", "Fb", "E#", "B#", "Am"])
    def test_normalize_note_rejects(self, raw):
        with pytest.raises(InvalidTonicError):
            normalize_note(raw)

    def test_note_index(self):
        assert note_index("C") == 0
        assert note_index("Db") == 1
        assert note_index("C#") == 1
        assert note_index("B") == 11

    def test_every_chromatic_note_round_trips(self):
        for i, note in enumerate(CHROMATIC_SCALE):
            assert note_index(note) == i
            assert note_name(i) == note

    def test_note_name_wraps_and_spells_flats(self):
        assert note_name(13) == "C#"
        assert note_name(-1) == "B"
        assert note_name(10, prefer_flats=True) == "Bb"

    def test_is_note(self):
        assert is_note("F#")
        assert not is_note("H")

    def test_transpose(self):
        assert transpose("C", 7) == "G"
        assert transpose("A", 3) == "C"
        assert transpose("Bb", 1) == "B"
        assert transpose("Eb", -1) == "D"
        assert transpose("Db", 2) == "Eb"

    def test_enharmonic_notes_are_the_same_pitch(self):
        assert same_pitch("C#", "Db")
        assert not same_pitch("C", "D")


class TestKeySignatures:
    """Test key signature derivation from the circle of fifths."""

    @pytest.mark.parametrize("tonic,mode,expected", [
        ("C", "major", "0"),
        ("G", "major", "1#"),
        ("D", "major", "2#"),
        ("B", "major", "5#"),
        ("F#", "major", "6#"),
        ("Gb", "major", "6b"),
        ("C#", "major", "7#"),
        ("Db", "major", "5b"),
        ("F", "major", "1b"),
        ("Bb", "major", "2b"),
        ("A", "minor", "0"),
        ("E", "minor", "1#"),
        ("D", "minor", "1b"),
        ("C", "minor", "3b"),
    ])
    def test_key_signature(self, tonic, mode, expected):
        assert key_signature(tonic, mode) == expected

    def test_prefers_flats(self):
        assert prefers_flats("F")
        assert prefers_flats("Bb")
        assert prefers_flats("D", "minor")
        assert prefers_flats("G", "minor")
        assert not prefers_flats("C")
        assert not prefers_flats("F#")
        assert not prefers_flats("E", "minor")

    @pytest.mark.parametrize("index,mode,expected", [
        (0, "major", "C"),
        (10, "major", "Bb"),
        (1, "major", "Db"),
        (6, "major", "F#"),
        (1, "minor", "C#"),
        (8, "minor", "G#"),
        (10, "minor", "Bb"),
    ])
    def test_spell_tonic(self, index, mode, expected):
        assert spell_tonic(index, mode) == expected


class TestKeyStrings:
    """Test splitting key strings into tonic and mode."""

    @pytest.mark.parametrize("key,expected", [
        ("C", ("C", "major")),
        ("Am", ("A", "minor")),
        ("F# minor", ("F#", "minor")),
        ("Bb major", ("Bb", "major")),
        ("bbm", ("Bb", "minor")),
        ("Dmin", ("D", "minor")),
        ("Cmaj", ("C", "major")),
        ("CM", ("C", "major")),
        ("E-", ("E", "minor")),
    ])
    def test_parse_key_string(self, key, expected):
        assert parse_key_string(key) == expected

    @pytest.mark.parametrize("key", ["", "Xm", "H major", None])
    def test_parse_key_string_rejects(self, key):
        with pytest.raises(InvalidTonicError):
            parse_key_string(key)

    def test_relative_tonic(self):
        assert relative_tonic("C", "major") == ("A", "minor")
        assert relative_tonic("A", "minor") == ("C", "major")
        assert relative_tonic("E", "minor") == ("G", "major")
        assert relative_tonic("F", "major") == ("D", "minor")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
