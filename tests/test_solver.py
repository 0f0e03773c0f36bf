"""Tests for the cost model and the DP solver."""

import itertools

import pytest

from src.concertina_engine.cost_model import FingeringCostModel
from src.concertina_engine.errors import NoButtonForNoteError
from src.concertina_engine.note_index import ButtonCandidate
from src.concertina_engine.solver import Assignment, solve


def brute_force_cost(notes, index, cost_model):
    """Cheapest sequence cost over every combination of candidates."""
    options = [index.candidates(note) for note in notes]
    return min(cost_model.sequence_cost(combo) for combo in itertools.product(*options))


class TestCostModel:
    """Cost weights loaded from YAML."""

    def test_default_config(self, cost_model):
        assert cost_model.hop_penalty == 100
        assert cost_model.button_cost_weight == 1.0

    def test_missing_key(self, write_yaml):
        with pytest.raises(ValueError, match="hop_penalty"):
            FingeringCostModel(write_yaml("button_cost_weight: 1.0\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FingeringCostModel(tmp_path / "missing.yaml")

    def test_negative_weight(self, write_yaml):
        with pytest.raises(ValueError):
            FingeringCostModel(write_yaml("hop_penalty: -5\nbutton_cost_weight: 1\n"))

    def test_hop_rules(self, cost_model):
        a = ButtonCandidate("L3", 1, "l3")
        same_finger = ButtonCandidate("L8", 2, "l3")
        other_finger = ButtonCandidate("L4", 1, "l2")
        assert cost_model.is_hop(a, same_finger)
        assert not cost_model.is_hop(a, a)
        assert not cost_model.is_hop(a, other_finger)
        assert cost_model.hop_cost(a, same_finger) == 100
        assert cost_model.transition_cost(a, same_finger) == 101
        assert cost_model.transition_cost(a, None) == 1

    def test_sequence_cost(self, cost_model):
        a = ButtonCandidate("L3", 1, "l3")
        b = ButtonCandidate("L8", 2, "l3")
        assert cost_model.sequence_cost([a, b, b]) == 1 + 100 + 2 + 2
        assert cost_model.sequence_cost([]) == 0


class TestSolver:
    """Optimal button sequences."""

    def test_empty_tune(self, hop_index, cost_model):
        assert solve([], hop_index, cost_model) == Assignment(buttons=(), total_cost=0.0)

    def test_single_note(self, hop_index, cost_model):
        result = solve(["E"], hop_index, cost_model)
        assert [b.button_id for b in result.buttons] == ["B1"]
        assert result.total_cost == 1

    def test_avoids_finger_hop(self, hop_index, cost_model):
        """The cheapest E (B1) shares a finger with A1, so C1 wins overall."""
        result = solve(["C", "E"], hop_index, cost_model)
        assert [b.button_id for b in result.buttons] == ["A1", "C1"]
        assert result.total_cost == 6

    def test_unavoidable_hop_is_charged(self, hop_index, cost_model):
        result = solve(["C", "F"], hop_index, cost_model)
        assert [b.button_id for b in result.buttons] == ["A1", "B1"]
        assert result.total_cost == 102

    def test_repeating_a_button_is_free(self, hop_index, cost_model):
        result = solve(["C", "D", "C"], hop_index, cost_model)
        assert [b.button_id for b in result.buttons] == ["A1", "A1", "A1"]
        assert result.total_cost == 3

    def test_hop_penalty_is_configurable(self, hop_index, write_yaml):
        cheap_hops = FingeringCostModel(write_yaml("hop_penalty: 0\nbutton_cost_weight: 1\n"))
        result = solve(["C", "E"], hop_index, cheap_hops)
        assert [b.button_id for b in result.buttons] == ["A1", "B1"]
        assert result.total_cost == 2

    def test_button_cost_weight(self, hop_index, write_yaml):
        doubled = FingeringCostModel(write_yaml("hop_penalty: 100\nbutton_cost_weight: 2\n"))
        assert solve(["C", "E"], hop_index, doubled).total_cost == 12

    def test_ties_go_to_first_candidate(self, jeffries_index, cost_model):
        result = solve(["e'"], jeffries_index, cost_model)
        assert result.buttons[0].button_id == "R5"

    def test_unplayable_note(self, hop_index, cost_model):
        with pytest.raises(NoButtonForNoteError):
            solve(["C", "A"], hop_index, cost_model)

    @pytest.mark.parametrize(
        "notes",
        [
            ["G", "A", "B", "c", "d", "e", "f", "g"],
            ["D", "^F", "A", "d", "^f", "a"],
            ["G", "G", "A", "B", "A", "G", "E", "D"],
            ["c", "B", "A", "G", "F", "E", "D", "C"],
        ],
    )
    def test_matches_brute_force(self, notes, jeffries_index, cost_model):
        result = solve(notes, jeffries_index, cost_model)
        assert len(result) == len(notes)
        assert result.total_cost == brute_force_cost(notes, jeffries_index, cost_model)
        assert cost_model.sequence_cost(result.buttons) == result.total_cost

    @pytest.mark.parametrize("length", [1, 2, 3, 4, 5, 6])
    def test_backtrack_covers_every_note(self, length, hop_index, cost_model):
        notes = (["C", "E"] * 3)[:length]
        result = solve(notes, hop_index, cost_model)
        assert len(result) == length
        assert cost_model.sequence_cost(result.buttons) == result.total_cost
        assert result.total_cost == brute_force_cost(notes, hop_index, cost_model)

    def test_long_tune(self, jeffries_index, cost_model):
        notes = ["C", "D"] * 2500
        result = solve(notes, jeffries_index, cost_model)
        assert len(result) == 5000
        assert {b.button_id for b in result.buttons} == {"L3"}
        assert result.total_cost == 5000
