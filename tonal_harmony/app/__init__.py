"""
App Subpackage

This package contains the user-facing layer of the harmony core:
    - engine.py: HarmonyEngine, the facade that combines all rules
    - cli.py: Command line interface (harmony-cli)

The engine is the "glue" that:
    1. Detects or parses the key
    2. Maps chords to Roman numerals and harmonic functions
    3. Scans for cadences and modulations
    4. Generates and suggests progressions per genre

Usage options:
    - Python: from tonal_harmony.app.engine import HarmonyEngine
    - CLI: harmony-cli analyze C Am F G
"""
