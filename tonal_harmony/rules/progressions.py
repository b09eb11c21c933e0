"""
Progressions Module - Genre Templates and Chord Transitions

This module generates chord progressions. It can:
    1. Pick a genre template (a short numeral sequence) at random
    2. Extend a template that is shorter than requested using a table of
       logical next chords
    3. Suggest chords and next numerals for a key and genre
    4. Classify the emotional character of a numeral sequence
    5. Walk a melody over a scale, stepping more often in simpler genres

Randomness only enters through template selection and melody notes, and
always through the generator's own random.Random, so a seeded generator is
reproducible.
"""

from itertools import count
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import random

from tonal_harmony.data.schema import ChordProgression, GenreProfile
from tonal_harmony.rules.melody import DEFAULT_MELODY_LENGTH, step_probability, walk_melody
from tonal_harmony.rules.numerals import KeyLike, as_key, numeral_to_chord, parse_numeral
from tonal_harmony.rules.scales import build_scale, get_scale_pattern


logger = logging.getLogger(__name__)


# =============================================================================
# GENRE PROFILES
# =============================================================================

GENRE_PROFILES: Dict[str, GenreProfile] = {
    "rock": GenreProfile(
        name="rock",
        common_progressions=[
            ["I", "V", "vi", "IV"],
            ["I", "bVII", "IV", "I"],
            ["vi", "IV", "I", "V"],
            ["I", "IV", "V", "I"],
        ],
        preferred_keys=["E", "A", "D", "G", "C", "F"],
        typical_chords=["power chords", "major triads", "dominant 7th"],
        avoided_chords=["maj7", "add9", "sus2"],
        rhythm_features=["strong backbeat", "4/4 time", "driving rhythm"],
        modal_interchange=True,
        complexity="moderate",
        bias={"major": ("I", "IV"), "minor": ("i", "VII")},
    ),
    "metal": GenreProfile(
        name="metal",
        common_progressions=[
            ["i", "bVI", "bVII", "i"],
            ["i", "bIII", "bVII", "bVI"],
            ["i", "iv", "V", "i"],
            ["i", "bII", "bVII", "i"],
        ],
        preferred_keys=["E", "B", "F#", "C#", "D", "A"],
        typical_chords=["power chords", "diminished", "minor triads"],
        avoided_chords=["major 7th", "add9", "sus chords"],
        rhythm_features=["complex rhythms", "odd time signatures", "palm muting"],
        modal_interchange=True,
        complexity="complex",
        bias={"major": ("bVI", "bVII"), "minor": ("bVI", "bVII")},
    ),
    "country": GenreProfile(
        name="country",
        common_progressions=[
            ["I", "V", "vi", "IV"],
            ["I", "IV", "I", "V"],
            ["vi", "V", "I", "IV"],
            ["I", "vi", "IV", "V"],
        ],
        preferred_keys=["G", "C", "D", "A", "E", "F"],
        typical_chords=["major triads", "dominant 7th", "sus4", "add9"],
        avoided_chords=["diminished", "augmented", "complex extensions"],
        rhythm_features=["shuffle feel", "3/4 waltz", "train beat"],
        modal_interchange=False,
        complexity="simple",
        bias={"major": ("I", "V"), "minor": ("i", "VI")},
    ),
    "blues-rock": GenreProfile(
        name="blues-rock",
        common_progressions=[
            ["I7", "I7", "I7", "I7", "IV7", "IV7", "I7", "I7", "V7", "IV7", "I7", "V7"],
            ["i", "iv", "i", "V7"],
            ["I", "V", "vi", "IV"],
            ["i", "bVII", "IV", "i"],
        ],
        preferred_keys=["E", "A", "B", "G", "C", "F"],
        typical_chords=["dominant 7th", "9th chords", "power chords", "minor pentatonic"],
        avoided_chords=["major 7th", "sus2", "add2"],
        rhythm_features=["shuffle rhythm", "12/8 feel", "swing"],
        modal_interchange=True,
        complexity="moderate",
        bias={"major": ("IV7", "I7"), "minor": ("iv", "i")},
    ),
    "contemporary-christian": GenreProfile(
        name="contemporary-christian",
        common_progressions=[
            ["vi", "IV", "I", "V"],
            ["I", "V", "vi", "IV"],
            ["vi", "V", "I", "IV"],
            ["I", "vi", "IV", "V"],
        ],
        preferred_keys=["G", "C", "D", "A", "E", "F"],
        typical_chords=["major triads", "sus4", "add9", "major 7th"],
        avoided_chords=["diminished", "augmented", "complex jazz chords"],
        rhythm_features=["gentle rhythm", "4/4 time", "anthemic builds"],
        modal_interchange=False,
        complexity="simple",
        bias={"major": ("IV", "I"), "minor": ("VI", "VII")},
    ),
    "pop": GenreProfile(
        name="pop",
        common_progressions=[
            ["I", "V", "vi", "IV"],
            ["vi", "IV", "I", "V"],
            ["I", "vi", "IV", "V"],
            ["vi", "V", "I", "IV"],
        ],
        preferred_keys=["C", "G", "D", "A", "F"],
        typical_chords=["major triads", "sus4", "add9", "minor triads"],
        avoided_chords=["complex jazz extensions"],
        rhythm_features=["steady 4/4", "catchy rhythm", "danceable"],
        modal_interchange=False,
        complexity="simple",
        bias={"major": ("V", "vi"), "minor": ("VI", "III")},
    ),
    "jazz": GenreProfile(
        name="jazz",
        common_progressions=[
            ["ii7", "V7", "I", "I"],
            ["I", "vi", "ii", "V"],
            ["iii", "vi", "ii", "V"],
            ["I", "VI7", "ii7", "V7"],
        ],
        preferred_keys=["C", "F", "Bb", "Eb", "Ab", "Db"],
        typical_chords=["7th chords", "9th chords", "11th chords", "13th chords"],
        avoided_chords=["simple triads"],
        rhythm_features=["swing rhythm", "complex time signatures", "syncopation"],
        modal_interchange=True,
        complexity="complex",
        bias={"major": ("ii7", "V7"), "minor": ("ii°", "V7")},
    ),
}

DEFAULT_GENRE = "rock"

# Suggestions used when no genre is given
DEFAULT_BIAS: Dict[str, Tuple[str, ...]] = {
    "major": ("I", "V", "vi", "IV"),
    "minor": ("i", "VII", "VI", "iv"),
}

DEFAULT_SUGGESTION_COUNT = 6


# =============================================================================
# TRANSITION TABLE
# =============================================================================

# Logical next numerals, keyed by (numeral, mode). "V" in a minor key (the
# borrowed dominant) has its own entry and never collides with major "V".
TRANSITIONS: Dict[Tuple[str, str], Tuple[str, ...]] = {
    # Major keys
    ("I", "major"): ("V", "vi", "IV", "ii", "iii"),
    ("ii", "major"): ("V", "vii°", "IV"),
    ("iii", "major"): ("vi", "IV", "ii"),
    ("IV", "major"): ("V", "I", "ii", "vi"),
    ("V", "major"): ("I", "vi", "IV"),
    ("vi", "major"): ("IV", "V", "ii", "I"),
    ("vii°", "major"): ("I", "iii"),
    ("bVII", "major"): ("IV", "I"),
    ("bVI", "major"): ("bVII", "I"),
    # Major-key 7th chords
    ("I7", "major"): ("IV", "vi", "ii7"),
    ("ii7", "major"): ("V7", "I"),
    ("V7", "major"): ("I", "vi", "IV"),
    ("vi7", "major"): ("ii7", "IV", "V7"),
    ("VI7", "major"): ("ii7", "V7"),
    ("IV7", "major"): ("I7", "V7"),

    # Minor keys
    ("i", "minor"): ("iv", "V", "VII", "VI"),
    ("ii°", "minor"): ("V", "vii°"),
    ("III", "minor"): ("VI", "iv", "VII"),
    ("iv", "minor"): ("V", "i", "VII"),
    ("v", "minor"): ("i", "VI"),
    ("V", "minor"): ("i", "VI"),
    ("VI", "minor"): ("iv", "VII", "i"),
    ("VII", "minor"): ("i", "VI"),
    ("vii°", "minor"): ("i",),
    ("IV", "minor"): ("i",),
    ("bII", "minor"): ("i", "bVII"),
    ("bIII", "minor"): ("bVII", "bVI"),
    ("bVI", "minor"): ("bVII", "i"),
    ("bVII", "minor"): ("i", "bVI"),
    # Minor-key 7th chords
    ("V7", "minor"): ("i", "VI"),
}


def transitions_for(numeral: str, mode: str) -> Tuple[str, ...]:
    """Logical next numerals after one numeral; 7th chords fall back to their triad."""
    found = TRANSITIONS.get((numeral, mode))
    if found is None and numeral.endswith("7"):
        found = TRANSITIONS.get((numeral[:-1], mode))
    return found or ()


def next_numerals(
    last: Optional[str],
    mode: str,
    bias: Sequence[str] = (),
    limit: int = DEFAULT_SUGGESTION_COUNT
) -> List[str]:
    """
    Merge the transitions of the last numeral with bias candidates.

    Duplicates are dropped (first occurrence wins) and the result is capped
    at `limit` entries.
    """
    candidates = list(transitions_for(last, mode)) if last else []
    candidates.extend(bias)

    unique = []
    for numeral in candidates:
        if numeral not in unique:
            unique.append(numeral)
    return unique[:limit]


# =============================================================================
# EMOTION
# =============================================================================

def classify_emotion(numerals: Sequence[str]) -> str:
    """
    Emotional character of a numeral sequence. First matching rule wins:
        1. more than half lower-case numerals   → "sad"
        2. has a tonic and a dominant          → "resolved"
        3. has a dominant but no tonic         → "tense"
        4. has a vi / VI                        → "mysterious"
        5. otherwise                            → "happy"
    """
    if not numerals:
        return "happy"

    minor_count = sum(1 for n in numerals if n.lower() == n)
    degrees = set()
    for n in numerals:
        parsed = parse_numeral(n)
        if parsed is not None and not parsed.accidental:
            degrees.add(parsed.degree)

    has_tonic = 1 in degrees
    has_dominant = 5 in degrees

    if minor_count > len(numerals) / 2:
        return "sad"
    if has_tonic and has_dominant:
        return "resolved"
    if has_dominant:
        return "tense"
    if 6 in degrees:
        return "mysterious"
    return "happy"


# =============================================================================
# GENRE LOOKUP
# =============================================================================

def get_genre_profile(genre: Optional[str]) -> GenreProfile:
    """Profile of a genre; unknown genres fall back to rock."""
    name = (genre or DEFAULT_GENRE).strip().lower()
    if name not in GENRE_PROFILES:
        logger.warning("Unknown genre '%s', falling back to '%s'", genre, DEFAULT_GENRE)
        name = DEFAULT_GENRE
    return GENRE_PROFILES[name]


def list_genres() -> List[str]:
    return list(GENRE_PROFILES)


# =============================================================================
# GENERATOR
# =============================================================================

class ProgressionGenerator:
    """
    Builds chord progressions from genre templates, and scale-walk melodies.

    The random source is injected. Use ProgressionGenerator.seeded(42) in
    tests and anywhere output must be reproducible, ProgressionGenerator.live()
    for fresh variety on every run.

    Example:
        >>> generator = ProgressionGenerator.seeded(7)
        >>> progression = generator.generate("G", "country", 4)
        >>> len(progression.chords)
        4
    """

    def __init__(self, rng: Optional[random.Random] = None, suggestion_count: int = DEFAULT_SUGGESTION_COUNT):
        self._rng = rng if rng is not None else random.Random()
        self._ids = count(1)
        self.suggestion_count = suggestion_count

    @classmethod
    def seeded(cls, seed: int, **kwargs) -> "ProgressionGenerator":
        return cls(random.Random(seed), **kwargs)

    @classmethod
    def live(cls, **kwargs) -> "ProgressionGenerator":
        return cls(random.Random(), **kwargs)

    def choose_template(self, profile: GenreProfile) -> List[str]:
        return list(self._rng.choice(profile.common_progressions))

    def next_id(self) -> str:
        return f"prog_{next(self._ids):04d}"

    def extend(self, numerals: List[str], mode: str, bias: Sequence[str], length: int) -> List[str]:
        """
        Grow a numeral sequence to `length` by following the transition table.

        Each step appends the first suggestion for the last numeral. If no
        suggestion exists, the last numeral is repeated.
        """
        numerals = list(numerals)
        while len(numerals) < length:
            suggestions = next_numerals(numerals[-1] if numerals else None, mode, bias, self.suggestion_count)
            if not suggestions:
                break
            numerals.append(suggestions[0])

        while numerals and len(numerals) < length:
            numerals.append(numerals[-1])
        return numerals

    def generate(self, key: KeyLike, genre: str, length: int = 4) -> ChordProgression:
        """
        Generate a progression of exactly `length` chords.

        Args:
            key: Key string ("C", "Am") or Key
            genre: Genre name; unknown genres fall back to rock
            length: Number of chords, at least 1

        Raises:
            ValueError: if length < 1
            InvalidTonicError: if the key's tonic is invalid
        """
        if length < 1:
            raise ValueError(f"Progression length must be at least 1. Got: {length}")

        key = as_key(key)
        profile = get_genre_profile(genre)
        template = self.choose_template(profile)
        logger.debug("Template for %s %s: %s", key.name, profile.name, "-".join(template))

        numerals = self.extend(template[:length], key.mode, profile.bias[key.mode], length)
        chords = [numeral_to_chord(numeral, key) for numeral in numerals]

        return ChordProgression(
            id=self.next_id(),
            numerals=numerals,
            chords=chords,
            key=key.name,
            genre=profile.name,
            commonality="common",
            emotional=classify_emotion(numerals),
        )

    def generate_melody(
        self,
        key: KeyLike,
        scale_name: str = "major",
        length: int = DEFAULT_MELODY_LENGTH,
        genre: Optional[str] = None
    ) -> List[str]:
        """
        Generate a melody of exactly `length` notes on the key's tonic.

        The scale comes from scale_name, not the key's mode, so "Am" with
        "pentatonicMinor" walks the A minor pentatonic. The genre's
        complexity sets how often notes step rather than leap.

        Raises:
            ValueError: if length < 1
            UnknownScaleError: if scale_name is not registered
            InvalidTonicError: if the key's tonic is invalid
        """
        key = as_key(key)
        notes = build_scale(key.tonic, get_scale_pattern(scale_name))
        profile = get_genre_profile(genre)
        melody = walk_melody(notes, length, step_probability(profile.complexity), self._rng)
        logger.debug("Melody in %s %s (%s): %s", key.tonic, scale_name, profile.name, melody)
        return melody

    def suggest_chords(self, key: KeyLike, genre: Optional[str] = None) -> List[str]:
        """
        Chords that suit a key and genre: the opening three numerals of each
        genre template, converted, without duplicates.
        """
        key = as_key(key)
        profile = get_genre_profile(genre)

        suggestions = []
        for template in profile.common_progressions:
            for numeral in template[:3]:
                chord = numeral_to_chord(numeral, key)
                if chord not in suggestions:
                    suggestions.append(chord)
        return suggestions[:self.suggestion_count]

    def logical_next(self, numerals: Sequence[str], key: KeyLike, genre: Optional[str] = None) -> List[str]:
        """
        Logical next numerals after a sequence.

        With a genre, its two bias numerals are mixed in; without one, the
        mode's four staple numerals are.
        """
        key = as_key(key)
        if genre:
            bias = get_genre_profile(genre).bias[key.mode]
        else:
            bias = DEFAULT_BIAS[key.mode]
        last = numerals[-1] if numerals else None
        return next_numerals(last, key.mode, bias, self.suggestion_count)
