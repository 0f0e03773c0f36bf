"""Note Index — which buttons can sound a given note.

Inverts a :class:`ButtonCatalog` into ``note -> candidates``. Catalog notes
are respelled before indexing (``^F`` is stored as ``_G``), so a lookup
tries the query as written and then its respelling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from .button_catalog import ButtonCatalog
from .errors import NoButtonForNoteError
from .notation import canonical, respell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ButtonCandidate:
    """One way of sounding a note."""

    button_id: str
    cost: float
    finger: str


class NoteIndex:
    """Read-only ``note -> candidates`` mapping, cheapest candidate first.

    Args:
        entries: Mapping of canonical note spelling to candidates.
    """

    def __init__(self, entries: Mapping[str, tuple[ButtonCandidate, ...]]) -> None:
        self._entries: dict[str, tuple[ButtonCandidate, ...]] = dict(entries)

    def __contains__(self, note: str) -> bool:
        return note in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def notes(self) -> list[str]:
        return list(self._entries)

    def get(self, note: str) -> tuple[ButtonCandidate, ...]:
        """Candidates stored under *note* exactly, or ``()``."""
        return self._entries.get(note, ())

    def candidates(self, note: str) -> tuple[ButtonCandidate, ...]:
        """Candidates for a normalized note, falling back to its respelling.

        Raises:
            NoButtonForNoteError: If neither spelling is on the layout.
        """
        try:
            query = canonical(note)
        except ValueError as exc:
            raise NoButtonForNoteError(note) from exc

        found = self._entries.get(query)
        if not found:
            found = self._entries.get(respell(query))
        if not found:
            raise NoButtonForNoteError(note)
        return found


def build_note_index(catalog: ButtonCatalog) -> NoteIndex:
    """Build the note index for a layout.

    Both notes of every button are indexed under their respelled form.
    Each candidate list is sorted by cost; equal costs keep catalog order.
    """
    entries: dict[str, list[ButtonCandidate]] = {}
    for button in catalog:
        candidate = ButtonCandidate(button.id, button.cost, button.finger)
        for note in button.note_pair:
            entries.setdefault(respell(note), []).append(candidate)

    index = NoteIndex(
        {note: tuple(sorted(found, key=lambda c: c.cost)) for note, found in entries.items()}
    )
    logger.debug("Indexed %d notes from layout '%s'", len(index), catalog.name)
    return index
