"""Notation — ABC note spellings and enharmonic respelling.

A note token is an optional accidental (``=`` natural, ``^`` sharp,
``_`` flat), one letter and an optional run of octave marks::

    C   c   c'   C,   ^F   _b   =e

Uppercase letters sit in octave 0, lowercase in octave 1; every ``'``
raises the octave by one and every ``,`` lowers it by one. Spellings are
compared in canonical form (``c,`` is written ``C``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass


NATURAL: str = "="
SHARP: str = "^"
FLAT: str = "_"

NOTE_PATTERN = re.compile(r"[=^_]?[A-Ga-g](?:,+|'+)?")

# (accidental, letter) -> (accidental, letter, octave shift)
_RESPELLINGS: dict[tuple[str, str], tuple[str, str, int]] = {
    (SHARP, "C"): (FLAT, "D", 0),
    (FLAT, "D"): (SHARP, "C", 0),
    (SHARP, "D"): (FLAT, "E", 0),
    (FLAT, "E"): (SHARP, "D", 0),
    (SHARP, "E"): ("", "F", 0),
    (FLAT, "F"): ("", "E", 0),
    (SHARP, "F"): (FLAT, "G", 0),
    (FLAT, "G"): (SHARP, "F", 0),
    (SHARP, "G"): (FLAT, "A", 0),
    (FLAT, "A"): (SHARP, "G", 0),
    (SHARP, "A"): (FLAT, "B", 0),
    (FLAT, "B"): (SHARP, "A", 0),
    (SHARP, "B"): ("", "C", 1),
    (FLAT, "C"): ("", "B", -1),
}


@dataclass(frozen=True)
class Spelling:
    """A parsed note token.

    Attributes:
        accidental: ``""``, ``"="``, ``"^"`` or ``"_"``.
        letter: Uppercase note letter ``A``–``G``.
        octave: 0 for the uppercase register, 1 for lowercase, and so on.
    """

    accidental: str
    letter: str
    octave: int


def parse_spelling(text: str) -> Spelling:
    """Parse a single ABC note token.

    Raises:
        ValueError: If *text* is not exactly one note token.
    """
    if not NOTE_PATTERN.fullmatch(text):
        raise ValueError(f"Not an ABC note: {text!r}")

    accidental = text[0] if text[0] in (NATURAL, SHARP, FLAT) else ""
    body = text[len(accidental):]
    letter, marks = body[0], body[1:]

    octave = 1 if letter.islower() else 0
    octave += marks.count("'") - marks.count(",")
    return Spelling(accidental, letter.upper(), octave)


def format_spelling(spelling: Spelling) -> str:
    """Render a :class:`Spelling` in canonical ABC form."""
    if spelling.octave >= 1:
        body = spelling.letter.lower() + "'" * (spelling.octave - 1)
    else:
        body = spelling.letter + "," * (-spelling.octave)
    return spelling.accidental + body


def canonical(text: str) -> str:
    """Return the canonical spelling of a note token (``c,`` -> ``C``)."""
    return format_spelling(parse_spelling(text))


def base_letter(text: str) -> str:
    """Uppercase letter of a note token, ignoring accidental and octave."""
    return parse_spelling(text).letter


def respell(text: str) -> str:
    """Enharmonic respelling of a note carrying a sharp or flat.

    ``^A`` <-> ``_B`` and the other one-step pairs; ``^B`` becomes the
    ``C`` above it and ``_C`` the ``B`` below it. Notes without a
    sharp or flat come back unchanged (in canonical form).
    """
    spelling = parse_spelling(text)
    target = _RESPELLINGS.get((spelling.accidental, spelling.letter))
    if target is None:
        return format_spelling(spelling)

    accidental, letter, shift = target
    return format_spelling(Spelling(accidental, letter, spelling.octave + shift))
