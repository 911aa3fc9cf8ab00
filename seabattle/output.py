"""Console output: messages, ability results and coloured field views."""

from __future__ import annotations

import sys
from enum import Enum
from typing import Optional, TextIO

from seabattle.abilities import AbilityStatus
from seabattle.field import CellStatus, GameField
from seabattle.ship import SegmentState

_RESET = "\033[0m"
_LABEL_COLOR = 36


class OutputStatus(Enum):
    HIDDEN = "hidden"
    OPENED = "opened"


def _color(foreground: int, background: int = 40, attributes: int = 0) -> str:
    return f"\033[{attributes};{foreground};{background}m"


def _label(text: str) -> str:
    return _color(_LABEL_COLOR) + text + _RESET


def _cell_view(field: GameField, x: int, y: int, status: OutputStatus) -> str:
    cell_status = field.status(x, y)
    segment_state = SegmentState.INTACT
    if cell_status is CellStatus.SHIP:
        segment_state = field.segment_state(x, y)

    hidden = status is OutputStatus.HIDDEN and segment_state is SegmentState.INTACT
    if cell_status is CellStatus.UNKNOWN or hidden:
        return _color(37, 40) + "   " + _RESET
    if cell_status is CellStatus.EMPTY:
        return _color(32, 40) + " - " + _RESET
    if segment_state is SegmentState.DAMAGED:
        return _color(33, 40) + " . " + _RESET
    if segment_state is SegmentState.DESTROYED:
        return _color(31, 40) + " x " + _RESET
    return _color(34, 40) + " 0 " + _RESET


def render_field(field: GameField, status: OutputStatus) -> str:
    """Draw the field as a coloured grid with numbered rows and columns."""
    separator = "   " + "----" * field.cols + "\n"
    lines = ["   " + "".join(_label(f"  {i} ") for i in range(field.cols)) + "\n"]
    for y in range(field.rows):
        lines.append(separator)
        cells = "".join(
            "|" + _cell_view(field, x, y, status) for x in range(field.cols)
        )
        lines.append(_label(f" {y} ") + cells + "|\n")
    lines.append(separator)
    return "".join(lines)


class Output:
    """Writes game messages to an output stream and errors to an error stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        error_stream: Optional[TextIO] = None,
    ) -> None:
        self._stream = stream
        self._error_stream = error_stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def error_stream(self) -> TextIO:
        return self._error_stream if self._error_stream is not None else sys.stderr

    def ability_status_to_string(self, status: AbilityStatus) -> str:
        if isinstance(status, AbilityStatus):
            return status.value
        return "Unknown Status"

    def print_string(self, message: str) -> None:
        self.stream.write(message)
        self.stream.flush()

    def print_ability_result(self, status: AbilityStatus) -> None:
        self.print_string(
            f"Using ability result: {self.ability_status_to_string(status)}\n"
        )

    def print_error(self, message: str) -> None:
        self.error_stream.write(f"{message}\n")
        self.error_stream.flush()

    def print_player_field(self, field: GameField) -> None:
        self.print_string(render_field(field, OutputStatus.OPENED))

    def print_enemy_field(self, field: GameField) -> None:
        self.print_string(render_field(field, OutputStatus.HIDDEN))