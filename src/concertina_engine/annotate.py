"""Annotator — orchestrate the fingering pipeline and merge the result.

Responsibilities:
    1. Resolve the key signature from the ``K:`` line.
    2. Extract note tokens and normalize them under the signature.
    3. Build the note index and run the DP solver.
    4. Insert each chosen button as a quoted annotation before its note.
    5. Report failures as a tagged :class:`FingeringResult`, never as a
       partially annotated tune.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from .button_catalog import ButtonCatalog, default_catalog
from .cost_model import FingeringCostModel
from .errors import ErrorKind, FingeringError, InternalMismatchError
from .key_signature import resolve_key_signature
from .normalizer import normalize_notes
from .note_extractor import Note, extract_notes
from .note_index import build_note_index
from .solver import Assignment, solve

logger = logging.getLogger(__name__)


ANNOTATION_DELIMITER: str = '"'
ERROR_PREFIX: str = "ERROR:"


@dataclass(frozen=True)
class FingeringResult:
    """Outcome of annotating one tune.

    On success ``text`` holds the annotated tune and ``error`` is ``None``.
    On failure ``text`` is ``None`` and ``error``/``message`` describe why.
    """

    text: str | None
    error: ErrorKind | None = None
    message: str = ""
    notes: tuple[Note, ...] = field(default=(), repr=False)
    assignment: Assignment | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_output(self) -> str:
        """Annotated text, or ``"ERROR: <message>"`` on failure."""
        if self.ok:
            return self.text or ""
        return f"{ERROR_PREFIX} {self.message}"


def merge_fingerings(
    abc_text: str,
    notes: Sequence[Note],
    assignment: Assignment,
    delimiter: str = ANNOTATION_DELIMITER,
) -> str:
    """Insert each note's button label into the original text.

    Labels go immediately before their note, at the note's original offset
    shifted by the length of everything inserted so far.

    Raises:
        InternalMismatchError: If there is not exactly one button per note.
    """
    if len(assignment.buttons) != len(notes):
        raise InternalMismatchError(
            f"Internal error. Length mismatch: {len(assignment.buttons)} buttons "
            f"for {len(notes)} notes"
        )

    result = abc_text
    inserted_so_far = 0
    for note, button in zip(notes, assignment.buttons):
        label = f"{delimiter}{button.button_id}{delimiter}"
        index = note.source_offset + inserted_so_far
        result = result[:index] + label + result[index:]
        inserted_so_far += len(label)
    return result


def annotate_tune(
    abc_text: str,
    catalog: ButtonCatalog | None = None,
    cost_model: FingeringCostModel | None = None,
) -> FingeringResult:
    """Run the full fingering pipeline on an ABC tune.

    Args:
        abc_text: The tune, header included.
        catalog: Button layout. Defaults to the shared Jeffries layout.
        cost_model: Cost weights. Defaults to ``src/configs/fingering_costs.yaml``.

    Returns:
        A :class:`FingeringResult`; check ``ok`` before using ``text``.
    """
    if catalog is None:
        catalog = default_catalog()
    if cost_model is None:
        cost_model = FingeringCostModel()

    notes: list[Note] = []
    try:
        # ── Pipeline ──────────────────────────────────────────
        key_signature = resolve_key_signature(abc_text)
        notes = normalize_notes(extract_notes(abc_text), key_signature)
        note_index = build_note_index(catalog)
        normalized = [note.normalized_text or note.raw_text for note in notes]
        assignment = solve(normalized, note_index, cost_model)
        text = merge_fingerings(abc_text, notes, assignment)
    except FingeringError as exc:
        logger.warning("Fingering failed (%s): %s", exc.kind.value, exc)
        return FingeringResult(text=None, error=exc.kind, message=str(exc), notes=tuple(notes))

    logger.debug("Annotated %d notes, total cost %.1f", len(notes), assignment.total_cost)
    return FingeringResult(text=text, notes=tuple(notes), assignment=assignment)


def finger(abc_text: str) -> str:
    """String interface: annotated tune, or a string starting with ``ERROR:``."""
    return annotate_tune(abc_text).to_output()


def annotation_records(result: FingeringResult) -> list[dict[str, Any]]:
    """Per-note table of a successful result.

    Returns:
        One dict per note with ``offset``, ``note``, ``normalized``,
        ``button``, ``finger`` and ``cost``; empty on failure.
    """
    if result.assignment is None:
        return []
    return [
        {
            "offset": note.source_offset,
            "note": note.raw_text,
            "normalized": note.normalized_text,
            "button": button.button_id,
            "finger": button.finger,
            "cost": button.cost,
        }
        for note, button in zip(result.notes, result.assignment.buttons)
    ]


def annotations_to_json_bytes(result: FingeringResult) -> bytes:
    """Serialise the per-note table to UTF-8 JSON bytes (for download buttons)."""
    return json.dumps(annotation_records(result), indent=2, ensure_ascii=False).encode("utf-8")


def annotate_file(
    abc_path: str | Path,
    output_path: str | Path | None = None,
    catalog: ButtonCatalog | None = None,
    cost_model: FingeringCostModel | None = None,
) -> FingeringResult:
    """Annotate an ``.abc`` file.

    Args:
        abc_path: Input tune file (UTF-8).
        output_path: Where to write the annotated tune. Nothing is written
            when omitted or when annotation fails.
        catalog: Button layout, see :func:`annotate_tune`.
        cost_model: Cost weights, see :func:`annotate_tune`.

    Raises:
        FileNotFoundError: If *abc_path* does not exist.
    """
    abc_path = Path(abc_path)
    if not abc_path.exists():
        raise FileNotFoundError(f"ABC file not found: {abc_path}")

    logger.debug("Got input from %s", abc_path)
    result = annotate_tune(abc_path.read_text(encoding="utf-8"), catalog, cost_model)

    if output_path is not None and result.ok:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result.text or "", encoding="utf-8")

    return result
