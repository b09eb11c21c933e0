"""
Command Line Interface for the Harmony Core
===========================================

This module exposes the HarmonyEngine operations on the command line, one
subcommand per operation.

Usage Examples:
    # Analyse a progression (key is detected when --key is omitted)
    harmony-cli analyze C Am F G --key C

    # Detect the key of a chord list
    harmony-cli key C Dm G Am

    # Build a scale
    harmony-cli scale E minor

    # Chord <-> Roman numeral
    harmony-cli numeral Am C
    harmony-cli chord vi C

    # Generate a progression, reproducibly
    harmony-cli --seed 42 generate G --genre country --length 8

    # Suggestions
    harmony-cli suggest Am --genre metal
    harmony-cli next C I V vi

    # Melody and chord difficulty
    harmony-cli --seed 7 melody Am pentatonicMinor --length 8 --genre blues-rock
    harmony-cli difficulty G F Cmaj13

    # JSON output - for scripting/integration
    harmony-cli --json analyze C G Am F
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from tonal_harmony.app.engine import HarmonyEngine
from tonal_harmony.data.schema import (
    ChordDifficulty,
    ChordProgression,
    GenreProfile,
    HarmonyAnalysis,
    Key,
    Scale,
)
from tonal_harmony.exceptions import HarmonyError
from tonal_harmony.rules.progressions import list_genres


logger = logging.getLogger(__name__)


# =============================================================================
# PART 1: ARGUMENT PARSER SETUP
# =============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Global options (--json, --seed, --config, --verbose) come before the
    subcommand: harmony-cli --json key C G Am

    Returns:
        Configured ArgumentParser object
    """
    parser = argparse.ArgumentParser(
        prog="harmony-cli",
        description="""
Tonal harmony toolkit - key detection, Roman numeral analysis, scales and
genre-flavoured chord progressions.

Examples:
  harmony-cli analyze C Am F G --key C
  harmony-cli key C Dm G Am
  harmony-cli generate Em --genre metal --length 8
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # ─────────────────────────────────────────────────────────────────────────
    # Global options
    # ─────────────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output result as JSON (useful for scripting)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible progressions and melodies"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file overriding scoring weights and defaults"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # ─────────────────────────────────────────────────────────────────────────
    # Analysis commands
    # ─────────────────────────────────────────────────────────────────────────
    analyze = subparsers.add_parser("analyze", help="Analyse a chord progression")
    analyze.add_argument("chords", nargs="+", help="Chord symbols, e.g. C Am F G")
    analyze.add_argument("--key", "-k", default=None, help="Key to analyse in (detected if omitted)")

    key = subparsers.add_parser("key", help="Detect the key of a chord list")
    key.add_argument("chords", nargs="+", help="Chord symbols")

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup commands
    # ─────────────────────────────────────────────────────────────────────────
    scale = subparsers.add_parser("scale", help="Notes and chords of a scale")
    scale.add_argument("tonic", help="Tonic note, e.g. E or Bb")
    scale.add_argument("scale_name", nargs="?", default="major", help="Scale name (default: major)")

    numeral = subparsers.add_parser("numeral", help="Chord symbol to Roman numeral")
    numeral.add_argument("chord", help="Chord symbol, e.g. Am")
    numeral.add_argument("key", help="Key, e.g. C or Am")

    chord = subparsers.add_parser("chord", help="Roman numeral to chord symbol")
    chord.add_argument("numeral", help="Roman numeral, e.g. vi or bVII")
    chord.add_argument("key", help="Key, e.g. C or Am")

    genre = subparsers.add_parser("genre", help="Characteristics of a genre")
    genre.add_argument("name", choices=list_genres(), help="Genre name")

    # ─────────────────────────────────────────────────────────────────────────
    # Generation commands
    # ─────────────────────────────────────────────────────────────────────────
    generate = subparsers.add_parser("generate", help="Generate a chord progression")
    generate.add_argument("key", help="Key, e.g. G or Em")
    generate.add_argument("--genre", "-g", default=None, help="Genre (default: from config)")
    generate.add_argument("--length", "-l", type=int, default=None, help="Number of chords")

    suggest = subparsers.add_parser("suggest", help="Suggest chords for a key and genre")
    suggest.add_argument("key", help="Key, e.g. G or Em")
    suggest.add_argument("--genre", "-g", default=None, help="Genre (default: from config)")

    next_chords = subparsers.add_parser("next", help="Logical next numerals after a sequence")
    next_chords.add_argument("key", help="Key, e.g. C or Am")
    next_chords.add_argument("numerals", nargs="*", help="Numerals so far, e.g. I V vi")
    next_chords.add_argument("--genre", "-g", default=None, help="Genre to bias suggestions")

    melody = subparsers.add_parser("melody", help="Generate a melody over a scale")
    melody.add_argument("key", help="Key whose tonic starts the scale, e.g. A or Am")
    melody.add_argument("scale_name", nargs="?", default="major", help="Scale name (default: major)")
    melody.add_argument("--genre", "-g", default=None, help="Genre (default: from config)")
    melody.add_argument("--length", "-l", type=int, default=None, help="Number of notes")

    # ─────────────────────────────────────────────────────────────────────────
    # Guitar commands
    # ─────────────────────────────────────────────────────────────────────────
    difficulty = subparsers.add_parser("difficulty", help="Guitar fingering difficulty of chords")
    difficulty.add_argument("chords", nargs="+", help="Chord symbols, e.g. G F Cmaj13")

    return parser


# =============================================================================
# PART 2: OUTPUT FORMATTING FUNCTIONS
# =============================================================================

def format_header() -> str:
    return """
╔═══════════════════════════════════════════════════════════════════════════╗
║                                                                           ║
║   T O N A L   H A R M O N Y                                               ║
║                                                                           ║
║   Keys, Roman numerals, scales and chord progressions                     ║
║                                                                           ║
╚═══════════════════════════════════════════════════════════════════════════╝
"""


def format_section(title: str, rows: List[str]) -> str:
    """Draw a titled box around some rows of text."""
    lines = []
    lines.append("┌" + "─" * 73 + "┐")
    lines.append("│" + f" {title} ".center(73) + "│")
    lines.append("├" + "─" * 73 + "┤")
    for row in rows:
        lines.append("│  " + row.ljust(71) + "│")
    lines.append("└" + "─" * 73 + "┘")
    return "\n".join(lines)


def format_analysis(analysis: HarmonyAnalysis) -> str:
    """
    Format an analysis as a chord / numeral / function table followed by
    the key details, cadences and modulations.
    """
    table = []
    for chord, numeral, function in zip(analysis.chords, analysis.numerals, analysis.functions):
        table.append(f"{chord:<10}{numeral:<10}{function}")

    details = [
        f"Key:         {analysis.key} ({analysis.key.signature})",
        f"Confidence:  {analysis.confidence:.2f}",
        f"Cadences:    {', '.join(analysis.cadences) or '-'}",
        f"Modulations: {', '.join(analysis.modulations) or '-'}",
    ]
    return "\n".join([
        format_section("CHORDS", [f"{'Chord':<10}{'Numeral':<10}Function"] + table),
        "",
        format_section("ANALYSIS", details),
    ])


def format_key(key: Key, confidence: float) -> str:
    return format_section("DETECTED KEY", [
        f"Key:         {key}",
        f"Signature:   {key.signature}",
        f"Confidence:  {confidence:.2f}",
    ])


def format_scale(scale: Scale) -> str:
    rows = [
        f"Notes:   {' '.join(scale.notes)}",
        f"Chords:  {' '.join(scale.chords)}",
    ]
    if scale.modes:
        rows.append(f"Modes:   {', '.join(scale.modes)}")
    return format_section(scale.name.upper(), rows)


def format_progression(progression: ChordProgression) -> str:
    return format_section("CHORD PROGRESSION", [
        f"Key: {progression.key} | Genre: {progression.genre} | Mood: {progression.emotional}",
        "",
        "  →  ".join(progression.chords),
        "  →  ".join(progression.numerals),
    ])


def format_genre(profile: GenreProfile) -> str:
    rows = [f"Complexity:      {profile.complexity}"]
    rows.append(f"Preferred keys:  {', '.join(profile.preferred_keys)}")
    rows.append(f"Typical chords:  {', '.join(profile.typical_chords)}")
    rows.append("Progressions:")
    for template in profile.common_progressions:
        rows.append("  " + " - ".join(template))
    return format_section(profile.name.upper(), rows)


def format_melody(key: str, scale_name: str, notes: List[str]) -> str:
    return format_section("MELODY", [
        f"Key: {key} | Scale: {scale_name}",
        "",
        "  ".join(notes),
    ])


def format_difficulties(ratings: List[ChordDifficulty]) -> str:
    rows = []
    for rating in ratings:
        rows.append(f"{rating.chord:<10}{rating.difficulty}")
        for reason in rating.reasons:
            rows.append(f"{'':<10}- {reason}")
    return format_section("CHORD DIFFICULTY", rows)


def format_json(result) -> str:
    """
    Format any command result as JSON.

    Pydantic models are dumped in JSON mode so computed fields (the key
    signature) are included.
    """
    if hasattr(result, "model_dump"):
        result = result.model_dump(mode="json")
    return json.dumps(result, indent=2, ensure_ascii=False)


# =============================================================================
# PART 3: COMMAND DISPATCH
# =============================================================================

def build_engine(args: argparse.Namespace) -> HarmonyEngine:
    """Create the engine from --config and --seed."""
    if args.config:
        return HarmonyEngine.from_config_file(args.config, seed=args.seed)
    if args.seed is not None:
        return HarmonyEngine.seeded(args.seed)
    return HarmonyEngine()


def run_command(engine: HarmonyEngine, args: argparse.Namespace) -> Dict:
    """
    Run one subcommand.

    Returns:
        {"data": JSON-able result, "text": pretty text for the terminal}

    Raises:
        HarmonyError: for an invalid tonic, scale or config
    """
    command = args.command

    if command == "analyze":
        analysis = engine.analyze_harmony(args.chords, args.key)
        return {"data": analysis, "text": format_analysis(analysis)}

    if command == "key":
        key = engine.detect_key(args.chords)
        confidence = engine.confidence(args.chords, key)
        data = {"key": key.model_dump(mode="json"), "confidence": confidence}
        return {"data": data, "text": format_key(key, confidence)}

    if command == "scale":
        scale = engine.get_scale(args.tonic, args.scale_name)
        return {"data": scale, "text": format_scale(scale)}

    if command == "numeral":
        numeral = engine.chord_to_roman_numeral(args.chord, args.key)
        data = {"chord": args.chord, "key": args.key, "numeral": numeral}
        return {"data": data, "text": f"{args.chord} in {args.key}: {numeral}"}

    if command == "chord":
        chord = engine.roman_numeral_to_chord(args.numeral, args.key)
        data = {"numeral": args.numeral, "key": args.key, "chord": chord}
        return {"data": data, "text": f"{args.numeral} in {args.key}: {chord}"}

    if command == "genre":
        profile = engine.get_genre_characteristics(args.name)
        return {"data": profile, "text": format_genre(profile)}

    if command == "generate":
        progression = engine.generate_chord_progression(args.key, args.genre, args.length)
        return {"data": progression, "text": format_progression(progression)}

    if command == "suggest":
        chords = engine.suggest_chords(args.key, args.genre)
        data = {"key": args.key, "chords": chords}
        return {"data": data, "text": "Suggested chords: " + "  ".join(chords)}

    if command == "next":
        numerals = engine.get_logical_next_chords(args.numerals, args.key, args.genre)
        data = {"key": args.key, "after": args.numerals, "next": numerals}
        return {"data": data, "text": "Next: " + "  ".join(numerals)}

    if command == "melody":
        notes = engine.generate_melody(args.key, args.scale_name, args.length, args.genre)
        data = {"key": args.key, "scale": args.scale_name, "notes": notes}
        return {"data": data, "text": format_melody(args.key, args.scale_name, notes)}

    if command == "difficulty":
        ratings = [engine.analyze_chord_difficulty(chord) for chord in args.chords]
        data = [rating.model_dump(mode="json") for rating in ratings]
        return {"data": data, "text": format_difficulties(ratings)}

    raise ValueError(f"Unknown command: {command}")


# =============================================================================
# PART 4: MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[List[str]] = None):
    """
    Main entry point for the CLI.

    Args:
        argv: Argument list (defaults to sys.argv[1:])
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        print("\n⚠️  Please choose a command")
        sys.exit(1)

    if args.command in ("generate", "melody") and args.length is not None and args.length < 1:
        print(f"⚠️  Length must be at least 1 (got {args.length})")
        sys.exit(1)

    logger.debug("Running '%s' with %s", args.command, vars(args))
    try:
        engine = build_engine(args)
        result = run_command(engine, args)
    except HarmonyError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(result["data"]))
    else:
        print(format_header())
        print(result["text"])


if __name__ == "__main__":
    main()
