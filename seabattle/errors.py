"""Exceptions raised by the sea battle game."""

from __future__ import annotations


class NoAbilities(Exception):
    """Raised when an ability is requested but none is queued."""

    def __init__(self) -> None:
        super().__init__("No abilities available. \n")


class InvalidLen(Exception):
    """Raised when a ship length is outside the allowed range."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(
            f"Len of ship should be between 1 and 4. Your len: {length}. "
            "Please Type new len for ship: \n"
        )


class _CoordinateError(Exception):
    """Base for errors that concern a pair of coordinates."""

    _template = ""

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(self._template.format(x=x, y=y))


class OutOfField(_CoordinateError):
    """Raised when coordinates lie outside the field."""

    _template = (
        "The coordinates out of field: {x}, {y}. Please Type new coordinates: \n"
    )

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y)


class ShipOutOfByX(_CoordinateError):
    """Raised when a horizontal ship would stick out of the field."""

    _template = (
        "invalid coordinate x (ship out of field) {x}, {y}. "
        "Please type new x coordinate: \n"
    )

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y)


class ShipOutOfByY(_CoordinateError):
    """Raised when a vertical ship would stick out of the field."""

    _template = (
        "invalid coordinate y (ship out of field) {x}, {y}. "
        "Please type new y coordinate: \n"
    )

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y)


class IntersectShip(_CoordinateError):
    """Raised when a ship would touch or overlap another ship."""

    _template = (
        "There is a ship {x}, {y}. You need to place a ship in empty ceils. "
        "Please type new coordinates: \n"
    )

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y)


class EmptyCell(_CoordinateError):
    """Raised when a cell already known to be empty is attacked."""

    _template = (
        "invalid coorditaties (its empty) {x}, {y}. Please type new coordinates: \n"
    )

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y)


class GameException(RuntimeError):
    """Raised when saving or loading a game fails."""


class FileError(RuntimeError):
    """Raised when a configuration file is unusable."""


class InputError(RuntimeError):
    """Raised when user input cannot be parsed."""