"""The game loop: placing fleets, taking turns, abilities, saving and loading."""

from __future__ import annotations

import argparse
import os
import random
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from seabattle.errors import (
    EmptyCell,
    GameException,
    IntersectShip,
    InvalidLen,
    NoAbilities,
    OutOfField,
    ShipOutOfByX,
    ShipOutOfByY,
)
from seabattle.field import CellStatus
from seabattle.output import Output
from seabattle.reader import Command, InputReader
from seabattle.ship import SegmentState
from seabattle.state import GameState
from seabattle.storage import SaveFile

_PLACEMENT_ERRORS = (OutOfField, ShipOutOfByX, ShipOutOfByY, IntersectShip)
_HIT_ERRORS = (OutOfField, EmptyCell)
_ABILITY_ERRORS = (NoAbilities, OutOfField, ValueError, RuntimeError)
_LOAD_ERRORS = (GameException, ValueError, InvalidLen, OutOfField, NoAbilities)
_MAX_PLACEMENT_ATTEMPTS = 1000
_ROLL_LIMIT = 2**31
_YES = ("y", "Y")


class GameOver(Exception):
    """Raised when the player chooses to leave the game."""


class Game:
    """One player against the computer on two fields of the same size."""

    def __init__(
        self,
        reader: Optional[InputReader] = None,
        output: Optional[Output] = None,
        save_path: Union[str, os.PathLike[str]] = "save.json",
        rng: Optional[random.Random] = None,
    ) -> None:
        self.output = output if output is not None else Output()
        self.reader = reader if reader is not None else InputReader(output=self.output)
        self.save_path = Path(save_path)
        self.rng = rng if rng is not None else random.Random()
        self.state = GameState(5, 5, [1, 1, 2, 3])

    @property
    def state(self) -> GameState:
        return self._state

    @state.setter
    def state(self, state: GameState) -> None:
        state.abilities.reader = self.reader
        state.abilities.rng = self.rng
        self._state = state

    def find_coordinates(self) -> bool:
        """Try to place every computer ship; return False if one did not fit."""
        cols, rows = self.state.cols, self.state.rows
        for index in range(len(self.state.sizes)):
            roll = self.rng.randrange(_ROLL_LIMIT)
            start = (roll % cols, (roll + roll) % rows)
            x, y = start
            ship = self.state.comp_ships[index]
            while True:
                try:
                    self.state.comp_field.add_ship(x, y, ship, index)
                    break
                except _PLACEMENT_ERRORS:
                    if x + 1 < cols:
                        x += 1
                    elif y + 1 < rows:
                        x, y = 0, y + 1
                    else:
                        x, y = 0, 0
                    if (x, y) == start:
                        return False
        return True

    def set_field_computer(self) -> None:
        """Place the computer's fleet, starting over until it fits."""
        for _ in range(_MAX_PLACEMENT_ATTEMPTS):
            if self.find_coordinates():
                break
            self.state.reset_comp_field()
        else:
            raise GameException("Unable to place the computer's ships.")
        self.state.computer_score = len(self.state.sizes)

    def set_field_user(self) -> None:
        """Ask the player where to put each of their ships."""
        prompt = "Enter coordinates to  add ship (x y): "
        for index, ship in enumerate(self.state.user_ships):
            self.output.print_string(prompt)
            x, y = self.reader.read_coordinates()
            while True:
                try:
                    self.state.user_field.add_ship(x, y, ship, index)
                    break
                except _PLACEMENT_ERRORS as exc:
                    self.output.print_string(f"There is a problem: {exc}")
                    self.output.print_string(prompt)
                    x, y = self.reader.read_coordinates()
            self.output.print_player_field(self.state.user_field)

    def use_ability(self) -> None:
        """Use the next queued ability, then take an ordinary attack."""
        state = self.state
        try:
            destroyed, status = state.abilities.apply_ability(
                state.comp_field, state.comp_ships
            )
            self.output.print_ability_result(status)
            if destroyed:
                self.output.print_string("You have received a new ability!\n")
                state.abilities.add_random_ability()
                state.computer_score -= 1
        except _ABILITY_ERRORS as exc:
            self.output.print_error(f"{exc}Try again")
            return

        self.output.print_string("Enemy field after your attack: \n")
        self.output.print_enemy_field(state.comp_field)
        self.check_end()
        self.turn_user()

    def turn_user(self) -> None:
        """Let the player attack, then let the computer answer."""
        state = self.state
        self.output.print_string("Enter coordinates to attack (x y): ")
        x, y = self.reader.read_coordinates()
        while True:
            try:
                ship_index = state.comp_field.hit(
                    x, y, state.abilities.take_double_hit()
                )
                break
            except _HIT_ERRORS as exc:
                self.output.print_string(f"There is a problem: {exc}")
                self.output.print_string("Enter coordinates to  hit (x y): ")
                x, y = self.reader.read_coordinates()

        if ship_index is not None and state.comp_ships[ship_index].is_destroyed():
            self.output.print_string("New ability!")
            state.abilities.add_random_ability()
            state.computer_score -= 1
        self.output.print_string("Enemy field after your attack: \n")
        self.output.print_enemy_field(state.comp_field)
        if not self.check_end():
            self.turn_comp()

    def _comp_targets(self, x: int, y: int):
        cols, rows = self.state.cols, self.state.rows
        for _ in range(cols * rows):
            yield x, y
            x += 1
            if x >= cols:
                x, y = 0, (y + 1) % rows

    def turn_comp(self) -> None:
        """The computer attacks the first open cell from a random start."""
        state = self.state
        field = state.user_field
        roll = self.rng.randrange(_ROLL_LIMIT)
        start_x, start_y = roll % state.cols, (roll * roll) % state.rows
        for x, y in self._comp_targets(start_x, start_y):
            if (
                field.status(x, y) is CellStatus.SHIP
                and field.segment_state(x, y) is SegmentState.DESTROYED
            ):
                continue
            try:
                ship_index = field.hit(x, y, False)
                break
            except _HIT_ERRORS:
                continue
        else:
            raise GameException("The computer has no cell left to attack.")

        shown = -1 if ship_index is None else ship_index
        self.output.print_string(f"IndShip= {shown}\n")
        if ship_index is not None and state.user_ships[ship_index].is_destroyed():
            state.user_score -= 1

        self.output.print_string("Your Field field after comp attack: \n")
        self.output.print_player_field(field)
        self.check_end()

    def load(self) -> None:
        """Replace the current state with the saved one, if it can be read."""
        try:
            self.state = SaveFile(self.save_path).load()
            self.output.print_string("The game has been loaded successfully!\n")
        except _LOAD_ERRORS as exc:
            self.output.print_error(f"Failed to load the game: {exc}")

        self.output.print_string("Field of a comp!\n")
        self.output.print_enemy_field(self.state.comp_field)
        self.output.print_string("Your Field\n")
        self.output.print_player_field(self.state.user_field)

    def save(self) -> None:
        try:
            if SaveFile(self.save_path).save(self.state):
                self.output.print_string("Game state saved successfully \n")
        except GameException as exc:
            self.output.print_error(f"Failed to save game state to file: {exc}")

    def check_end(self) -> bool:
        """Start a new round or a new game when a side has no ships left."""
        if self.state.computer_score == 0:
            self.output.print_string(
                "Congratulations, you won this round! Starting the next round...\n"
            )
            self.round()
            return True
        if self.state.user_score == 0:
            self.output.print_string(
                "You lost the game. Would you like to start a new game? (y/n): "
            )
            if self.reader.read_string() in _YES:
                self.begin_game()
            else:
                self.end_game()
            return True
        return False

    def end_game(self) -> None:
        self.output.print_string("Exiting the game. Thank you for playing!\n")
        raise GameOver()

    def round(self) -> None:
        self.output.print_string("Starting a new round!\n")
        self.set_field_computer()

    def begin_game(self) -> None:
        """Resume the saved game or set up a new one from the player's answers."""
        self.output.print_string("Do you want to download the previous game? (y/n): ")
        if self.reader.read_string() in _YES:
            self.load()
            return

        self.output.print_string("Starting a new game!\n")
        self.output.print_string("Type coloumns and rows\n")
        cols, rows = self.reader.read_coordinates()
        self.output.print_string("Type Count of Ships\n")
        count = self.reader.read_number()
        sizes = []
        for _ in range(count):
            self.output.print_string("Type size of Ship \n")
            sizes.append(self.reader.read_number())

        self.state = GameState(cols, rows, sizes)
        self.set_field_user()
        self.round()


class GameController:
    """Reads commands and passes them to the game."""

    def __init__(self, reader: InputReader, game: Game) -> None:
        self.reader = reader
        self.game = game
        self._handlers: dict[Command, Callable[[], None]] = {
            Command.START_GAME: game.begin_game,
            Command.SAVE_GAME: game.save,
            Command.LOAD_GAME: game.load,
            Command.END: game.end_game,
            Command.ATTACK: game.turn_user,
            Command.USE_ABILITY: game.use_ability,
        }

    def run(self) -> None:
        """Load key bindings and process commands until the game ends."""
        self.reader.load_commands()
        while True:
            command = self.reader.read_command()
            self.process_command(command)
            if command is Command.END:
                break

    def process_command(self, command: Command) -> None:
        self._handlers[command]()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play sea battle in the terminal.")
    parser.add_argument(
        "--save-file", default="save.json", help="where games are saved"
    )
    args = parser.parse_args(argv)

    output = Output()
    reader = InputReader(output=output)
    game = Game(reader, output, args.save_file)
    controller = GameController(reader, game)
    try:
        controller.run()
    except GameOver:
        return 1
    except EOFError:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())