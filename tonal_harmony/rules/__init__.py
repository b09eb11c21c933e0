"""
Rules Subpackage

This package contains the music theory rules of the harmony core:
    - pitch.py: Chromatic index, note spelling, key signatures
    - scales.py: Scale patterns, diatonic chords, modes
    - chords.py: Chord symbol parsing and spelling
    - key_detection.py: Scoring chord lists against the 24 keys
    - numerals.py: Chord symbols <-> Roman numerals
    - progressions.py: Genre templates, transitions, generation
    - cadences.py: Cadences, harmonic functions, modulation hints
    - melody.py: Scale-walk melodies driven by genre complexity
    - difficulty.py: Guitar fingering difficulty of chord symbols

Import from the modules directly; this package re-exports nothing, since
the data schema itself depends on pitch.py.
"""
