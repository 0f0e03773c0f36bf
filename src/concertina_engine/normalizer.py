"""Note Normalizer — spell each note as it sounds under the key signature.

Explicit sharps and flats are kept, explicit naturals are dropped, and
bare letters pick up the signature's accidental.

Accidentals earlier in the same bar are not carried forward to later bare
notes: each note is normalized on its own.
"""

from __future__ import annotations

import dataclasses
from typing import Iterable

from .key_signature import KeySignature
from .notation import FLAT, NATURAL, SHARP, base_letter
from .note_extractor import Note


def normalize_note(raw_text: str, key_signature: KeySignature) -> str:
    """Return the sounding spelling of one note token.

    Args:
        raw_text: Note token as written (e.g. ``"F"``, ``"=f'"``, ``"_B,"``).
        key_signature: The tune's resolved key signature.

    Returns:
        The normalized spelling, e.g. ``"^F"`` for ``"F"`` in G major.
    """
    if raw_text.startswith(NATURAL):
        return raw_text[1:]
    if raw_text.startswith((SHARP, FLAT)):
        return raw_text
    return key_signature.accidental_for(base_letter(raw_text)) + raw_text


def normalize_notes(notes: Iterable[Note], key_signature: KeySignature) -> list[Note]:
    """Fill in ``normalized_text`` for every extracted note.

    Args:
        notes: Extracted notes.
        key_signature: The tune's resolved key signature.

    Returns:
        New ``Note`` objects, same order.
    """
    return [
        dataclasses.replace(note, normalized_text=normalize_note(note.raw_text, key_signature))
        for note in notes
    ]
