"""Tests for notation helpers, the button catalog and the note index."""

import pytest

from src.concertina_engine.button_catalog import default_catalog, load_button_catalog
from src.concertina_engine.errors import NoButtonForNoteError
from src.concertina_engine.notation import canonical, parse_spelling, respell, Spelling

PAIRS = [
    ("^C", "_D"),
    ("^D", "_E"),
    ("^F", "_G"),
    ("^G", "_A"),
    ("^A", "_B"),
    ("^c'", "_d'"),
    ("_B,", "^A,"),
    ("^f", "_g"),
]


class TestNotation:
    """Spelling parser and enharmonic respelling."""

    def test_parse_spelling(self):
        assert parse_spelling("^f'") == Spelling("^", "F", 2)
        assert parse_spelling("_B,") == Spelling("_", "B", -1)
        assert parse_spelling("C") == Spelling("", "C", 0)

    def test_parse_rejects_non_notes(self):
        with pytest.raises(ValueError):
            parse_spelling("H")
        with pytest.raises(ValueError):
            parse_spelling("CD")

    def test_canonical_form(self):
        assert canonical("c,") == "C"
        assert canonical("C'") == "c"
        assert canonical("c''") == "c''"

    @pytest.mark.parametrize("first, second", PAIRS)
    def test_respelling_pairs(self, first, second):
        assert respell(first) == second
        assert respell(second) == first

    @pytest.mark.parametrize("note", [n for pair in PAIRS for n in pair])
    def test_respelling_is_involutive(self, note):
        assert respell(respell(note)) == note

    @pytest.mark.parametrize(
        "note, expected",
        [
            ("^B", "c"),
            ("^b", "c'"),
            ("_C", "B,"),
            ("_c", "B"),
            ("^E", "F"),
            ("_f", "e"),
        ],
    )
    def test_respelling_across_letters(self, note, expected):
        assert respell(note) == expected

    def test_naturals_are_not_respelled(self):
        assert respell("C") == "C"
        assert respell("g'") == "g'"


class TestButtonCatalog:
    """Layout loading from YAML."""

    def test_default_layout(self, jeffries):
        assert jeffries.name == "Jeffries 30-button C/G"
        assert len(jeffries) == 30
        assert jeffries.get("L3").note_pair == ("C", "D")
        assert jeffries.get("L3").finger == "l3"
        assert jeffries.buttons[0].id == "L1a"

    def test_default_layout_is_shared(self):
        assert default_catalog() is default_catalog()

    def test_unknown_button(self, jeffries):
        with pytest.raises(KeyError):
            jeffries.get("X9")

    def test_load_custom_layout(self, write_yaml):
        path = write_yaml(
            "name: Tiny\nbuttons:\n"
            '  B1: {notes: ["C", "D"], cost: 3, finger: l1}\n'
            '  B2: {notes: ["E", "F"], cost: 1, finger: l2}\n'
        )
        catalog = load_button_catalog(path)
        assert catalog.name == "Tiny"
        assert [b.id for b in catalog] == ["B1", "B2"]
        assert catalog.get("B1").cost == 3.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_button_catalog(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "entry",
        [
            '{notes: ["C", "D"], finger: l1}',
            '{notes: ["C"], cost: 1, finger: l1}',
            '{notes: ["C", "H"], cost: 1, finger: l1}',
            '{notes: ["C", "D"], cost: -1, finger: l1}',
        ],
    )
    def test_malformed_button(self, write_yaml, entry):
        path = write_yaml(f"buttons:\n  B1: {entry}\n")
        with pytest.raises(ValueError):
            load_button_catalog(path)

    def test_layout_without_buttons(self, write_yaml):
        with pytest.raises(ValueError):
            load_button_catalog(write_yaml("name: Empty\n"))


class TestNoteIndex:
    """Inverted layout lookups."""

    def test_candidates_sorted_by_cost(self, jeffries_index):
        found = jeffries_index.get("G")
        assert [c.button_id for c in found] == ["L5", "L8", "L4a"]
        assert [c.cost for c in found] == [1, 2, 10]

    def test_every_list_is_ascending(self, jeffries_index):
        for note in jeffries_index.notes():
            costs = [c.cost for c in jeffries_index.get(note)]
            assert costs == sorted(costs)

    def test_equal_costs_keep_layout_order(self, jeffries_index):
        assert [c.button_id for c in jeffries_index.get("e'")] == ["R5", "R9"]
        assert [c.button_id for c in jeffries_index.get("b")] == ["R7", "R10"]

    def test_keys_are_respelled(self, jeffries_index):
        assert "^F" not in jeffries_index
        assert "_G" in jeffries_index
        assert "^A," in jeffries_index

    def test_lookup_falls_back_to_respelling(self, jeffries_index):
        assert [c.button_id for c in jeffries_index.candidates("^F")] == ["L7"]
        assert [c.button_id for c in jeffries_index.candidates("_B")] == ["L5a"]
        assert [c.button_id for c in jeffries_index.candidates("_b")] == ["R3a"]

    def test_lookup_canonicalises_query(self, jeffries_index):
        assert [c.button_id for c in jeffries_index.candidates("c,")] == ["L3"]

    def test_candidate_carries_finger(self, jeffries_index):
        (candidate,) = jeffries_index.candidates("^F")
        assert candidate.finger == "l4"
        assert candidate.cost == 2

    @pytest.mark.parametrize("note", ["C,,", "^D,", "c'''"])
    def test_unplayable_note(self, jeffries_index, note):
        with pytest.raises(NoButtonForNoteError) as exc_info:
            jeffries_index.candidates(note)
        assert exc_info.value.note == note
