"""The complete state of a game: fields, fleets, scores and abilities."""

from __future__ import annotations

import json
from typing import Any, Iterable

from seabattle.abilities import AbilityManager
from seabattle.field import GameField
from seabattle.ship import ShipManager


class GameState:
    """Everything needed to save and resume a game."""

    def __init__(
        self, cols: int = 2, rows: int = 2, sizes: Iterable[int] = (1,)
    ) -> None:
        self.current_round = 0
        self.cols = cols
        self.rows = rows
        self.sizes = list(sizes)
        self.computer_score = len(self.sizes)
        self.user_score = len(self.sizes)
        self.comp_ships = ShipManager(self.sizes)
        self.user_ships = ShipManager(self.sizes)
        self.comp_field = GameField(cols, rows)
        self.user_field = GameField(cols, rows)
        self.abilities = AbilityManager()

    def __repr__(self) -> str:
        return (
            f"GameState(cols={self.cols}, rows={self.rows}, sizes={self.sizes}, "
            f"computer_score={self.computer_score}, user_score={self.user_score})"
        )

    def reset_comp_field(self) -> None:
        """Give the computer a fresh empty field and intact ships."""
        self.comp_field = GameField(self.cols, self.rows)
        self.comp_ships = ShipManager(self.sizes)

    def to_json(self) -> dict[str, Any]:
        return {
            "currentRound": self.current_round,
            "col": self.cols,
            "row": self.rows,
            "sizes": list(self.sizes),
            "computerScore": self.computer_score,
            "userScore": self.user_score,
            "compShipManager": self.comp_ships.to_json(),
            "userShipManager": self.user_ships.to_json(),
            "compGameField": self.comp_field.to_json(),
            "userGameField": self.user_field.to_json(),
            "Abilities": len(self.abilities),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> GameState:
        """Build a state; field cells are not yet linked to ship segments."""
        try:
            state = cls(int(data["col"]), int(data["row"]), list(data["sizes"]))
            state.current_round = int(data["currentRound"])
            state.computer_score = int(data["computerScore"])
            state.user_score = int(data["userScore"])
            state.comp_ships = ShipManager.from_json(data["compShipManager"])
            state.user_ships = ShipManager.from_json(data["userShipManager"])
            state.comp_field = GameField.from_json(data["compGameField"])
            state.user_field = GameField.from_json(data["userGameField"])
            ability_count = int(data["Abilities"])
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid game state: {exc}") from exc
        state.abilities.resize(ability_count)
        return state

    def dumps(self) -> str:
        return json.dumps(self.to_json(), indent=4)

    @classmethod
    def loads(cls, text: str) -> GameState:
        return cls.from_json(json.loads(text))