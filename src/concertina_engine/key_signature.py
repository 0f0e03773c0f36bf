"""Key Signature Resolver — turn an ABC ``K:`` field into sharps and flats.

The tonic is placed on the circle of fifths ``F C G D A E B`` (C = 0),
shifted by 7 for a ``#``/``b`` tonic, and the mode's offset is subtracted.
A positive result sharps that many letters from the ``F`` end, a negative
result flats that many letters from the ``B`` end::

    K:G      ->  +1  ->  ^F
    K:Edor   ->  +2  ->  ^F ^C
    K:Bb     ->  -2  ->  _B _E
    K:D exp _b ^f    ->  no signature, explicit _B and ^F

Accidental tokens (``^x``, ``_x``, ``=x``) in the mode text are layered
on top as explicit overrides.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .errors import UnsupportedKeyError
from .notation import FLAT, NATURAL, SHARP

logger = logging.getLogger(__name__)


CIRCLE_OF_FIFTHS: str = "FCGDAEB"
MAX_ACCIDENTALS: int = 7

EXPLICIT_MODE: str = "explicit"

# Checked in order: "mix" before "lyd" (mixoLYDian), "aeo" before "ion" (aeolIONan).
_MODE_OFFSETS: tuple[tuple[str, str, int | None], ...] = (
    ("exp", EXPLICIT_MODE, None),
    ("mix", "mixolydian", 1),
    ("aeo", "aeolian", 3),
    ("maj", "major", 0),
    ("ion", "major", 0),
    ("min", "aeolian", 3),
    ("dor", "dorian", 2),
    ("phr", "phrygian", 4),
    ("loc", "locrian", 5),
    ("lyd", "lydian", -1),
)

_KEY_LINE = re.compile(r"^[kK]:[ \t]*(?P<value>.*?)[ \t]*$", re.MULTILINE)
_TONIC = re.compile(r"^(?P<tonic>[A-Ga-g])(?P<accidental>[#b]?)(?P<rest>.*)$")
# Stand-alone tokens only, so "middle=c" is not read as a natural.
_ACCIDENTAL_TOKEN = re.compile(
    r"(?:(?<=\s)|^|(?<=[=^_][A-Ga-g]))"
    r"(?P<accidental>[=^_])(?P<letter>[A-Ga-g])"
    r"(?=\s|$|[=^_])"
)


@dataclass(frozen=True)
class KeySignature:
    """Resolved key signature for one tune.

    Letters are stored uppercase. ``sharped_letters`` and
    ``flatted_letters`` never overlap; the override sets are applied on top
    by the normalizer.
    """

    tonic: str
    mode: str
    fifths: int
    sharped_letters: frozenset[str] = frozenset()
    flatted_letters: frozenset[str] = frozenset()
    natural_overrides: frozenset[str] = frozenset()
    explicit_sharp_overrides: frozenset[str] = frozenset()
    explicit_flat_overrides: frozenset[str] = frozenset()

    def accidental_for(self, letter: str) -> str:
        """Accidental a bare *letter* takes under this signature (``""`` if none)."""
        letter = letter.upper()
        if letter in self.natural_overrides:
            return ""
        if letter in self.sharped_letters or letter in self.explicit_sharp_overrides:
            return SHARP
        if letter in self.flatted_letters or letter in self.explicit_flat_overrides:
            return FLAT
        return ""


def find_key_line(abc_text: str) -> str | None:
    """Value of the first ``K:`` field, or ``None`` if the tune has none."""
    match = _KEY_LINE.search(abc_text)
    if match is None:
        return None
    return match.group("value").split("%", 1)[0].strip()


def _match_mode(word: str) -> tuple[str, int | None]:
    word = word.lower()
    if word == "":
        return "major", 0
    if word == "m":
        return "aeolian", 3
    for fragment, mode, offset in _MODE_OFFSETS:
        if fragment in word:
            return mode, offset
    raise UnsupportedKeyError(f"Unknown or unsupported mode '{word}'")


def _split_mode_text(rest: str) -> tuple[str, dict[str, str]]:
    """Separate the mode word from explicit accidental tokens.

    Returns the mode word (possibly empty) and a letter -> accidental map;
    a later token for the same letter wins.
    """
    overrides: dict[str, str] = {}
    for token in _ACCIDENTAL_TOKEN.finditer(rest):
        overrides[token.group("letter").upper()] = token.group("accidental")

    words = [
        word
        for word in _ACCIDENTAL_TOKEN.sub(" ", rest).split()
        if "=" not in word  # clef=treble, middle=c and similar
    ]
    return (words[0] if words else ""), overrides


def _letters_with(overrides: dict[str, str], accidental: str) -> frozenset[str]:
    return frozenset(letter for letter, acc in overrides.items() if acc == accidental)


def resolve_key_signature(abc_text: str) -> KeySignature:
    """Resolve the key signature declared by a tune's ``K:`` field.

    Args:
        abc_text: The full ABC tune text.

    Returns:
        The resolved :class:`KeySignature`.

    Raises:
        UnsupportedKeyError: If there is no key line, the tonic is not
            ``A``–``G`` (optionally ``#``/``b``), the mode is unknown, or
            the signature would need more than seven sharps or flats.
    """
    value = find_key_line(abc_text)
    if value is None:
        raise UnsupportedKeyError("Unknown or unsupported key signature: no K: line")

    match = _TONIC.match(value)
    if match is None:
        raise UnsupportedKeyError(f"Unknown or unsupported key signature '{value}'")

    tonic = match.group("tonic").upper()
    tonic_accidental = match.group("accidental")
    mode_word, overrides = _split_mode_text(match.group("rest"))
    mode, offset = _match_mode(mode_word)
    logger.debug("Got base key of '%s%s' and mode '%s'", tonic, tonic_accidental, mode)

    if offset is None:
        fifths = 0
    else:
        fifths = CIRCLE_OF_FIFTHS.index(tonic) - 1
        if tonic_accidental == "#":
            fifths += 7
        elif tonic_accidental == "b":
            fifths -= 7
        fifths -= offset

    if abs(fifths) > MAX_ACCIDENTALS:
        raise UnsupportedKeyError(
            f"Key '{value}' needs {abs(fifths)} accidentals (max {MAX_ACCIDENTALS})"
        )

    sharped = frozenset(CIRCLE_OF_FIFTHS[:fifths]) if fifths > 0 else frozenset()
    flatted = frozenset(CIRCLE_OF_FIFTHS[::-1][:-fifths]) if fifths < 0 else frozenset()

    signature = KeySignature(
        tonic=tonic + tonic_accidental,
        mode=mode,
        fifths=fifths,
        sharped_letters=sharped,
        flatted_letters=flatted,
        natural_overrides=_letters_with(overrides, NATURAL),
        explicit_sharp_overrides=_letters_with(overrides, SHARP),
        explicit_flat_overrides=_letters_with(overrides, FLAT),
    )
    logger.debug(
        "Determined %s %s: fifths=%d sharps=%s flats=%s",
        signature.tonic,
        signature.mode,
        fifths,
        sorted(sharped),
        sorted(flatted),
    )
    return signature
