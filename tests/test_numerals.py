"""
Tests for tonal_harmony/rules/numerals.py

The golden tables in tests/fixtures/numeral_tables.yaml hold the numeral
spellings of the most common keys. The generative mapper must reproduce
every entry in both directions.

Run with: pytest tests/test_numerals.py -v
"""

from pathlib import Path

import pytest
import yaml

from tonal_harmony.data.schema import Key
from tonal_harmony.exceptions import InvalidTonicError
from tonal_harmony.rules.numerals import (
    ROMAN_NUMERALS,
    chord_to_numeral,
    chords_to_numerals,
    key_numerals,
    numeral_degree,
    numeral_to_chord,
    numerals_to_chords,
    parse_numeral,
)
from tonal_harmony.rules.chords import parse_chord
from tonal_harmony.rules.pitch import MODES, OCTAVE
from tonal_harmony.rules.scales import key_chords


FIXTURES = Path(__file__).parent / "fixtures"


def load_table_entries():
    with open(FIXTURES / "numeral_tables.yaml", "r", encoding="utf-8") as f:
        tables = yaml.safe_load(f)
    return [
        (key, chord, numeral)
        for key, table in tables.items()
        for chord, numeral in table.items()
    ]


TABLE_ENTRIES = load_table_entries()

ALL_KEYS = [Key.from_pitch_class(i, mode) for mode in MODES for i in range(OCTAVE)]

MINOR_KEYS = [key for key in ALL_KEYS if key.mode == "minor"]


class TestGoldenTables:
    """Test the mapper against the literal tables of common keys."""

    @pytest.mark.parametrize("key,chord,numeral", TABLE_ENTRIES)
    def test_chord_to_numeral(self, key, chord, numeral):
        assert chord_to_numeral(chord, key) == numeral

    @pytest.mark.parametrize("key,chord,numeral", TABLE_ENTRIES)
    def test_numeral_to_chord(self, key, chord, numeral):
        assert numeral_to_chord(numeral, key) == chord


class TestRoundTrip:
    """Test chord -> numeral -> chord over every key."""

    @pytest.mark.parametrize("key", ALL_KEYS, ids=lambda k: k.name)
    def test_diatonic_chords_round_trip(self, key):
        for chord in key_chords(key):
            assert numeral_to_chord(chord_to_numeral(chord, key), key) == chord

    @pytest.mark.parametrize("key", ALL_KEYS, ids=lambda k: k.name)
    def test_diatonic_numerals(self, key):
        assert key_numerals(key) == ROMAN_NUMERALS[key.mode]

    @pytest.mark.parametrize("key", MINOR_KEYS, ids=lambda k: k.name)
    @pytest.mark.parametrize("numeral", ["vii°", "vii°7", "viiø7"])
    def test_minor_leading_tone_round_trip(self, key, numeral):
        chord = numeral_to_chord(numeral, key)
        assert parse_chord(chord).root_index == (key.pitch_class + 11) % OCTAVE
        assert chord_to_numeral(chord, key) == numeral


class TestChordToNumeral:
    """Test chords outside the diatonic tables."""

    def test_minor_key_leading_tone(self):
        assert chord_to_numeral("G#°", "Am") == "vii°"
        assert chord_to_numeral("E", "Am") == "V"

    def test_borrowed_chords(self):
        assert chord_to_numeral("Bb", "C") == "bVII"
        assert chord_to_numeral("Ab", "C") == "bVI"
        assert chord_to_numeral("Eb", "C") == "bIII"
        assert chord_to_numeral("Bb", "Am") == "bII"

    def test_quality_markers(self):
        assert chord_to_numeral("Bm7b5", "C") == "viiø7"
        assert chord_to_numeral("Caug", "C") == "I+"
        assert chord_to_numeral("C#m", "C#") == "i"

    def test_enharmonic_roots(self):
        assert chord_to_numeral("Gb", "F#") == "I"
        assert chord_to_numeral("A#m", "F") == "iv"

    def test_unparsable_chord_uses_default(self):
        assert chord_to_numeral("Xyz", "C") == "I"
        assert chord_to_numeral("Xyz", "C", default="N/A") == "N/A"

    def test_invalid_key_raises(self):
        with pytest.raises(InvalidTonicError):
            chord_to_numeral("Am", "H")

    def test_accepts_key_objects(self):
        assert chord_to_numeral("Am", Key(tonic="C")) == "vi"

    def test_lists(self):
        assert chords_to_numerals(["C", "Am", "F", "G"], "C") == ["I", "vi", "IV", "V"]


class TestNumeralToChord:
    """Test numerals outside the diatonic tables."""

    def test_flat_degrees(self):
        assert numeral_to_chord("bVII", "E") == "D"
        assert numeral_to_chord("bVI", "Em") == "C"
        assert numeral_to_chord("bVII", "C") == "Bb"
        assert numeral_to_chord("bII", "Em") == "F"

    def test_quality_markers(self):
        assert numeral_to_chord("viiø7", "C") == "Bm7b5"
        assert numeral_to_chord("I+", "C") == "C+"
        assert numeral_to_chord("V", "Am") == "E"

    def test_minor_key_raised_degrees(self):
        assert numeral_to_chord("vii°", "Am") == "G#°"
        assert numeral_to_chord("vii°7", "Am") == "G#°7"
        assert numeral_to_chord("viiø7", "Am") == "G#m7b5"
        assert numeral_to_chord("vii°", "Em") == "D#°"
        assert numeral_to_chord("vii°", "Dm") == "C#°"
        assert numeral_to_chord("vi", "Am") == "F#m"
        assert numeral_to_chord("iii", "Am") == "C#m"

    def test_minor_key_natural_degrees(self):
        assert numeral_to_chord("VII", "Am") == "G"
        assert numeral_to_chord("VI", "Am") == "F"
        assert numeral_to_chord("III", "Am") == "C"
        assert numeral_to_chord("ii°", "Am") == "B°"
        assert numeral_to_chord("vii", "Am") == "Gm"

    def test_minor_key_shared_degrees_keep_flats(self):
        assert numeral_to_chord("V", "Ebm") == "Bb"
        assert numeral_to_chord("IV", "Bbm") == "Eb"

    def test_tonic_keeps_key_spelling(self):
        assert numeral_to_chord("I", "Gb") == "Gb"
        assert numeral_to_chord("i", "bbm") == "Bbm"

    @pytest.mark.parametrize("numeral", ["xyz", "", "Vi", "N/A", "VIII"])
    def test_unknown_numeral_falls_back_to_tonic(self, numeral):
        assert numeral_to_chord(numeral, "C") == "C"
        assert numeral_to_chord(numeral, "Am") == "Am"

    def test_lists(self):
        assert numerals_to_chords(["I", "V", "vi", "IV"], "G") == ["G", "D", "Em", "C"]


class TestParseNumeral:
    """Test Roman numeral parsing."""

    def test_flat_numeral(self):
        numeral = parse_numeral("bVII")
        assert numeral.degree == 7
        assert numeral.accidental == -1
        assert numeral.upper
        assert numeral.quality == "major"

    def test_half_diminished_seventh(self):
        numeral = parse_numeral("viiø7")
        assert numeral.half_diminished
        assert numeral.seventh
        assert numeral.quality == "half_diminished"
        assert numeral.text == "viiø7"

    def test_alternate_diminished_marker(self):
        assert parse_numeral("viio").text == "vii°"

    def test_invalid(self):
        assert parse_numeral("Vi") is None
        assert parse_numeral("N/A") is None
        assert parse_numeral(None) is None

    def test_numeral_degree(self):
        assert numeral_degree("V7") == 5
        assert numeral_degree("vii°") == 7
        assert numeral_degree("bVII") is None
        assert numeral_degree("N/A") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
