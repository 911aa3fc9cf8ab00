"""Saving a game state to a file and loading it back."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from seabattle.errors import GameException
from seabattle.state import GameState


class SaveFile:
    """A JSON file holding one saved game."""

    def __init__(self, path: Union[str, os.PathLike[str]]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"SaveFile({str(self.path)!r})"

    def save(self, state: GameState) -> bool:
        """Write the state to the file and check that the file exists."""
        try:
            self.path.write_text(state.dumps(), encoding="utf-8")
        except OSError as exc:
            raise GameException("Error saving: Unable to open file.") from exc
        if not self.path.is_file():
            raise GameException("Error saving: File verification failed.")
        return True

    def load(self) -> GameState:
        """Read a saved state and link its fields to its ships."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise GameException("Error loading: File not found.") from exc
        state = GameState.loads(text)
        state.comp_field.restore_connection(state.comp_ships)
        state.user_field.restore_connection(state.user_ships)
        return state