"""
Tests for tonal_harmony/rules/chords.py

Run with: pytest tests/test_chords.py -v
"""

import pytest

from tonal_harmony.rules.chords import (
    chord_root,
    format_chord,
    is_lower_case_quality,
    is_valid_chord,
    parse_chord,
    quality_family,
    split_quality,
)


class TestParseChord:
    """Test chord symbol parsing."""

    @pytest.mark.parametrize("symbol,root,quality", [
        ("C", "C", "major"),
        ("Am", "A", "minor"),
        ("Am7", "A", "minor7"),
        ("Cmaj7", "C", "major7"),
        ("G7", "G", "dominant7"),
        ("Bm7b5", "B", "half_diminished"),
        ("F#°", "F#", "diminished"),
        ("Bdim", "B", "diminished"),
        ("Cdim7", "C", "diminished7"),
        ("Caug", "C", "augmented"),
        ("C+", "C", "augmented"),
        ("Csus4", "C", "sus4"),
        ("Dsus2", "D", "sus2"),
        ("E5", "E", "power"),
        ("Cmin", "C", "minor"),
        ("C-7", "C", "minor7"),
        ("Ebm", "Eb", "minor"),
    ])
    def test_root_and_quality(self, symbol, root, quality):
        chord = parse_chord(symbol)
        assert chord.root == root
        assert chord.quality == quality

    def test_extensions_are_kept(self):
        chord = parse_chord("Bbmaj7/D")
        assert chord.root == "Bb"
        assert chord.quality == "major7"
        assert chord.extensions == "/D"

    def test_unknown_suffix_is_major_extension(self):
        chord = parse_chord("Cadd9")
        assert chord.quality == "major"
        assert chord.extensions == "add9"

    @pytest.mark.parametrize("symbol", ["Xyz", "", "am", "Cb", "Fb", "7", None])
    def test_unparsable_returns_none(self, symbol):
        assert parse_chord(symbol) is None
        assert not is_valid_chord(symbol)

    def test_root_helpers(self):
        chord = parse_chord("F#m")
        assert chord.root_index == 6
        assert chord.has_accidental
        assert not parse_chord("G").has_accidental
        assert chord_root("Dbmaj7") == "Db"
        assert chord_root("nope") is None


class TestQualities:
    """Test quality families and spelling."""

    def test_split_quality(self):
        assert split_quality("m7") == ("minor7", "")
        assert split_quality("maj9") == ("major", "9")
        assert split_quality("") == ("major", "")

    def test_quality_family(self):
        assert quality_family("major") == "major"
        assert quality_family("dominant7") == "major"
        assert quality_family("minor7") == "minor"
        assert quality_family("diminished") is None
        assert quality_family("augmented") is None

    def test_lower_case_qualities(self):
        assert is_lower_case_quality("minor")
        assert is_lower_case_quality("half_diminished")
        assert not is_lower_case_quality("dominant7")
        assert not is_lower_case_quality("augmented")

    def test_format_chord(self):
        assert format_chord("A", "minor7") == "Am7"
        assert format_chord("B", "diminished") == "B°"
        assert format_chord("C") == "C"
        assert format_chord("G", "dominant7", "/B") == "G7/B"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
