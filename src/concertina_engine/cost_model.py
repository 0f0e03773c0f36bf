"""Cost Model — configurable costs for concertina button choices.

All weights are loaded from ``src/configs/fingering_costs.yaml``.
No hardcoded constants: if a required key is missing from the YAML,
a ``ValueError`` is raised with a clear message.

Methods:
    button_cost      – comfort cost of pressing a button
    is_hop           – same finger moving to a different button
    hop_cost         – penalty for a finger hop between consecutive notes
    transition_cost  – button cost plus the hop penalty to the next button
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_COSTS_PATH
from .note_index import ButtonCandidate


class FingeringCostModel:
    """Rule-based cost model for evaluating button sequences.

    Args:
        config_path: Path to the YAML configuration file.
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        if config_path is None:
            config_path = DEFAULT_COSTS_PATH
        else:
            config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Cost config not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as fh:
            self._cfg: dict[str, Any] = yaml.safe_load(fh) or {}

        required_keys = ["hop_penalty", "button_cost_weight"]
        for key in required_keys:
            if key not in self._cfg:
                raise ValueError(
                    f"Missing required key '{key}' in cost config: {config_path}"
                )

        self.hop_penalty: float = float(self._cfg["hop_penalty"])
        self.button_cost_weight: float = float(self._cfg["button_cost_weight"])

        if self.hop_penalty < 0 or self.button_cost_weight < 0:
            raise ValueError(f"Cost weights must be non-negative: {config_path}")

    # ── Individual cost components ────────────────────────────

    def button_cost(self, candidate: ButtonCandidate) -> float:
        """Weighted comfort cost of a single button."""
        return candidate.cost * self.button_cost_weight

    @staticmethod
    def is_hop(current: ButtonCandidate, following: ButtonCandidate) -> bool:
        """``True`` when one finger must move to another button.

        Repeating the same button is free.
        """
        return current.finger == following.finger and current.button_id != following.button_id

    def hop_cost(self, current: ButtonCandidate, following: ButtonCandidate) -> float:
        """Penalty for going from *current* to *following* on consecutive notes.

        Returns:
            ``hop_penalty`` for a finger hop, else 0.
        """
        if self.is_hop(current, following):
            return self.hop_penalty
        return 0.0

    # ── Aggregate ─────────────────────────────────────────────

    def transition_cost(
        self, current: ButtonCandidate, following: ButtonCandidate | None
    ) -> float:
        """Cost of playing *current* when *following* comes next.

        Args:
            current: Button for this note.
            following: Button for the next note, ``None`` at the end of the tune.

        Returns:
            Aggregated non-negative cost.
        """
        cost = self.button_cost(current)
        if following is not None:
            cost += self.hop_cost(current, following)
        return cost

    def sequence_cost(self, buttons: list[ButtonCandidate] | tuple[ButtonCandidate, ...]) -> float:
        """Total cost of a complete button sequence."""
        return sum(
            self.transition_cost(button, buttons[i + 1] if i + 1 < len(buttons) else None)
            for i, button in enumerate(buttons)
        )
