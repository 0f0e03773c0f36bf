"""Button Catalog — the concertina layout as read-only data.

Each button sounds one note on the push and another on the pull.
Layouts are YAML files under ``src/configs/layouts/``::

    name: Jeffries 30-button C/G
    buttons:
      L3: {notes: ["C", "D"], cost: 1, finger: l3}

Catalog order is significant: it breaks ties between equal-cost buttons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator

import yaml

from ..config import DEFAULT_LAYOUT_PATH
from .notation import parse_spelling

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ButtonDefinition:
    """One physical button.

    Attributes:
        id: Label written into the tune (e.g. ``"L3"``).
        note_pair: ``(push, pull)`` note spellings.
        cost: Lower is more comfortable.
        finger: Finger that plays the button (e.g. ``"l3"``).
    """

    id: str
    note_pair: tuple[str, str]
    cost: float
    finger: str


@dataclass(frozen=True)
class ButtonCatalog:
    """An ordered, immutable collection of :class:`ButtonDefinition`."""

    name: str
    buttons: tuple[ButtonDefinition, ...]

    def __iter__(self) -> Iterator[ButtonDefinition]:
        return iter(self.buttons)

    def __len__(self) -> int:
        return len(self.buttons)

    def get(self, button_id: str) -> ButtonDefinition:
        for button in self.buttons:
            if button.id == button_id:
                return button
        raise KeyError(button_id)


def _parse_button(button_id: str, entry: Any, source: Path) -> ButtonDefinition:
    if not isinstance(entry, dict):
        raise ValueError(f"Button '{button_id}' must be a mapping in layout: {source}")

    for key in ("notes", "cost", "finger"):
        if key not in entry:
            raise ValueError(
                f"Missing required key '{key}' for button '{button_id}' in layout: {source}"
            )

    notes = entry["notes"]
    if not isinstance(notes, list) or len(notes) != 2:
        raise ValueError(
            f"Button '{button_id}' needs exactly two notes (push, pull) in layout: {source}"
        )
    for note in notes:
        try:
            parse_spelling(str(note))
        except ValueError as exc:
            raise ValueError(f"Button '{button_id}': {exc} ({source})") from exc

    cost = float(entry["cost"])
    if cost < 0:
        raise ValueError(f"Button '{button_id}' has a negative cost in layout: {source}")

    return ButtonDefinition(
        id=str(button_id),
        note_pair=(str(notes[0]), str(notes[1])),
        cost=cost,
        finger=str(entry["finger"]),
    )


def load_button_catalog(layout_path: str | Path | None = None) -> ButtonCatalog:
    """Load a button layout from YAML.

    Args:
        layout_path: Path to the layout file.
            Defaults to ``src/configs/layouts/jeffries_30.yaml``.

    Returns:
        The parsed :class:`ButtonCatalog`, in file order.

    Raises:
        FileNotFoundError: If the layout file does not exist.
        ValueError: If the file or any button entry is malformed.
    """
    path = Path(layout_path) if layout_path is not None else DEFAULT_LAYOUT_PATH
    if not path.exists():
        raise FileNotFoundError(f"Button layout not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict) or not isinstance(data.get("buttons"), dict):
        raise ValueError(f"Layout must contain a 'buttons' mapping: {path}")

    buttons = tuple(
        _parse_button(button_id, entry, path) for button_id, entry in data["buttons"].items()
    )
    if not buttons:
        raise ValueError(f"Layout defines no buttons: {path}")

    catalog = ButtonCatalog(name=str(data.get("name", path.stem)), buttons=buttons)
    logger.debug("Loaded layout '%s' with %d buttons", catalog.name, len(catalog))
    return catalog


@lru_cache(maxsize=None)
def default_catalog() -> ButtonCatalog:
    """The Jeffries layout, loaded once and shared."""
    return load_button_catalog(DEFAULT_LAYOUT_PATH)
