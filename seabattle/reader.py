"""Reading numbers, coordinates, words and commands from a text stream."""

from __future__ import annotations

import json
import os
import re
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TextIO, TypeVar, Union

from seabattle.errors import FileError, InputError
from seabattle.output import Output

_T = TypeVar("_T")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_BAD_INPUT = "Incorrect data, enter it again!"


class Command(Enum):
    START_GAME = "game_start"
    SAVE_GAME = "save"
    LOAD_GAME = "load"
    END = "end"
    ATTACK = "attack"
    USE_ABILITY = "use_ability"


SHORT_COMMANDS: dict[str, Command] = {
    "g": Command.START_GAME,
    "s": Command.SAVE_GAME,
    "l": Command.LOAD_GAME,
    "e": Command.END,
    "a": Command.ATTACK,
    "u": Command.USE_ABILITY,
}


def _parse_int(token: str) -> int:
    if not _INT_PATTERN.fullmatch(token):
        raise InputError(_BAD_INPUT)
    value = int(token)
    if not _INT_MIN <= value <= _INT_MAX:
        raise InputError(_BAD_INPUT)
    return value


def _expect(tokens: list[str], count: int) -> list[str]:
    if len(tokens) != count:
        raise InputError(_BAD_INPUT)
    return tokens


class InputReader:
    """Reads user input line by line, asking again until a line is valid."""

    def __init__(
        self, stream: Optional[TextIO] = None, output: Optional[Output] = None
    ) -> None:
        self._stream = stream
        self.output = output if output is not None else Output()
        self.commands: dict[str, Command] = dict(SHORT_COMMANDS)

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    def _read(self, parse: Callable[[list[str]], _T]) -> _T:
        while True:
            line = self.stream.readline()
            if not line:
                raise EOFError("input ended")
            try:
                return parse(line.split())
            except InputError as exc:
                self.output.print_error(str(exc))

    def read_number(self) -> int:
        return self._read(lambda tokens: _parse_int(_expect(tokens, 1)[0]))

    def read_coordinates(self) -> tuple[int, int]:
        def parse(tokens: list[str]) -> tuple[int, int]:
            x, y = _expect(tokens, 2)
            return _parse_int(x), _parse_int(y)

        return self._read(parse)

    def read_string(self) -> str:
        return self._read(lambda tokens: _expect(tokens, 1)[0])

    def read_command(self) -> Command:
        """Prompt until a word whose first letter is a known command key."""
        while True:
            self.output.print_string("Enter the command: ")
            word = self.read_string()
            command = self.commands.get(word[0])
            if command is not None:
                return command
            self.output.print_error("The wrong command.")

    def check_commands(self) -> None:
        """Reject a command table in which one command has several keys."""
        seen: set[Command] = set()
        for command in self.commands.values():
            if command in seen:
                raise FileError("Duplicate commands in the list of commands.")
            seen.add(command)

    def load_commands(
        self, path: Union[str, os.PathLike[str]] = "commands.json"
    ) -> None:
        """Load key bindings from a JSON file, falling back to the defaults."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError:
            self.output.print_error("The command file cannot be opened.")
            self.commands = dict(SHORT_COMMANDS)
            return

        try:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise FileError(f"Invalid json: {exc}") from exc
            if not isinstance(data, dict):
                raise FileError("Invalid command in json.")

            self.commands = {}
            for key, value in data.items():
                try:
                    command = Command(value)
                except (ValueError, TypeError):
                    self.output.print_string(f"{value}\n")
                    raise FileError("Invalid command in json.") from None
                self.commands[key[:1]] = command

            if len(data) != len(Command):
                raise FileError("Incorrect number of commands in json.")
            self.check_commands()
        except FileError as exc:
            self.output.print_error(str(exc))
            self.commands = dict(SHORT_COMMANDS)