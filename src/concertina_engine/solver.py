"""Solver — dynamic programming over button choices for a note sequence.

State:  ``(note_index, candidate)``
Transition: :meth:`FingeringCostModel.transition_cost` from the button at
            ``i`` to the button at ``i + 1`` (button cost + hop penalty).
Output: the minimum-cost button sequence.

Design choices:
    - Backward iterative pass over positions: no recursion, so tune length
      is not bounded by the interpreter's stack.
    - Candidate lookups are cached per note spelling; a tune with many
      repeated notes resolves each spelling once.
    - Ties go to the earliest candidate (cheapest first, then layout order).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from .cost_model import FingeringCostModel
from .note_index import ButtonCandidate, NoteIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    """One button per note, with the total cost of the sequence."""

    buttons: tuple[ButtonCandidate, ...]
    total_cost: float

    def __len__(self) -> int:
        return len(self.buttons)


def solve(
    notes: Sequence[str],
    note_index: NoteIndex,
    cost_model: FingeringCostModel,
) -> Assignment:
    """Find the cheapest button for every note.

    Args:
        notes: Normalized note spellings in playing order.
        note_index: Candidate buttons per note.
        cost_model: Button and hop costs.

    Returns:
        The optimal :class:`Assignment` (same length as *notes*).

    Raises:
        NoButtonForNoteError: If some note cannot be played on the layout.
    """
    if not notes:
        return Assignment(buttons=(), total_cost=0.0)

    lookup: dict[str, tuple[ButtonCandidate, ...]] = {}
    candidates: list[tuple[ButtonCandidate, ...]] = []
    for note in notes:
        if note not in lookup:
            lookup[note] = note_index.candidates(note)
        candidates.append(lookup[note])

    n = len(notes)

    # ── DP tables ─────────────────────────────────────────────
    # suffix[i][j] = minimum cost of notes i.. when note i uses candidates[i][j]
    # follow[i][j] = candidate chosen for note i+1 in that optimum (empty for the last note)
    suffix: list[list[float]] = [[] for _ in range(n)]
    follow: list[list[int]] = [[] for _ in range(n)]

    suffix[n - 1] = [cost_model.transition_cost(c, None) for c in candidates[n - 1]]

    # ── Backward pass ─────────────────────────────────────────
    for i in range(n - 2, -1, -1):
        next_candidates = candidates[i + 1]
        next_costs = suffix[i + 1]

        for current in candidates[i]:
            best_cost: float = math.inf
            best_next: int = 0

            for k, following in enumerate(next_candidates):
                total = cost_model.transition_cost(current, following) + next_costs[k]
                if total < best_cost:
                    best_cost = total
                    best_next = k

            suffix[i].append(best_cost)
            follow[i].append(best_next)

    # ── Pick the start and walk forward ───────────────────────
    start = min(range(len(candidates[0])), key=lambda j: suffix[0][j])
    total_cost = suffix[0][start]

    chosen: list[ButtonCandidate] = []
    j = start
    for i in range(n):
        button = candidates[i][j]
        chosen.append(button)
        logger.debug("Chose button %s for note %s", button.button_id, notes[i])
        if i + 1 < n:
            j = follow[i][j]

    return Assignment(buttons=tuple(chosen), total_cost=total_cost)
