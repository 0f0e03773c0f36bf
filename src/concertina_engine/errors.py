"""Errors raised by the fingering engine.

Every error is terminal for the tune being processed. The entry point
(:func:`annotate.annotate_tune`) turns them into a tagged result.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Failure categories reported by :class:`annotate.FingeringResult`."""

    UNSUPPORTED_KEY = "unsupported_key"
    NO_BUTTON_FOR_NOTE = "no_button_for_note"
    INTERNAL_MISMATCH = "internal_mismatch"


class FingeringError(Exception):
    """Base class for engine failures."""

    kind: ErrorKind


class UnsupportedKeyError(FingeringError):
    """Key line missing, unparseable, or beyond seven sharps/flats."""

    kind = ErrorKind.UNSUPPORTED_KEY


class NoButtonForNoteError(FingeringError):
    """A note (and its enharmonic respelling) has no button on the layout."""

    kind = ErrorKind.NO_BUTTON_FOR_NOTE

    def __init__(self, note: str) -> None:
        super().__init__(f"Failed to find button for note '{note}'")
        self.note = note


class InternalMismatchError(FingeringError):
    """Chosen buttons and extracted notes differ in length."""

    kind = ErrorKind.INTERNAL_MISMATCH
