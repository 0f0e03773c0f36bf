"""Shared fixtures for the concertina engine tests."""

import pytest

from src.concertina_engine.button_catalog import ButtonCatalog, ButtonDefinition, default_catalog
from src.concertina_engine.cost_model import FingeringCostModel
from src.concertina_engine.note_index import build_note_index


@pytest.fixture
def jeffries():
    return default_catalog()


@pytest.fixture
def jeffries_index(jeffries):
    return build_note_index(jeffries)


@pytest.fixture
def cost_model():
    return FingeringCostModel()


@pytest.fixture
def hop_catalog():
    """Tiny layout where the cheapest button for E causes a finger hop after C."""
    return ButtonCatalog(
        name="hop test",
        buttons=(
            ButtonDefinition("A1", ("C", "D"), 1, "l1"),
            ButtonDefinition("B1", ("E", "F"), 1, "l1"),
            ButtonDefinition("C1", ("E", "G"), 5, "l2"),
        ),
    )


@pytest.fixture
def hop_index(hop_catalog):
    return build_note_index(hop_catalog)


@pytest.fixture
def write_yaml(tmp_path):
    """Write a YAML string to a temp file and return its path."""

    def _write(text, name="config.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
