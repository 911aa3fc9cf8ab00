"""Special abilities a player can use and the queue that hands them out."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Any, ClassVar, Optional

from seabattle.errors import NoAbilities
from seabattle.field import CellStatus, GameField
from seabattle.ship import SegmentState, ShipManager


class AbilityStatus(Enum):
    DESTROYED = "DESTROYED"
    NOT_DESTROYED = "NOT_DESTROYED"
    SHIP = "SHIP"
    EMPTY = "EMPTY"
    SUCCESS = "SUCCESS"


AbilityResult = tuple[bool, AbilityStatus]


class Ability(ABC):
    """An action applied to the enemy field and fleet."""

    name: ClassVar[str] = ""

    @abstractmethod
    def apply(
        self, field: GameField, ships: ShipManager, manager: AbilityManager
    ) -> AbilityResult:
        """Use the ability; return whether a ship was destroyed and a status."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DoubleHit(Ability):
    """Makes the next attack deal double damage."""

    name = "Double Damage"

    def apply(
        self, field: GameField, ships: ShipManager, manager: AbilityManager
    ) -> AbilityResult:
        manager.set_double_hit()
        return False, AbilityStatus.SUCCESS


class Scanner(Ability):
    """Reports whether a 2x2 area holds any part of a ship."""

    name = "Scanner"

    def apply(
        self, field: GameField, ships: ShipManager, manager: AbilityManager
    ) -> AbilityResult:
        if manager.reader is None:
            raise RuntimeError("the scanner needs an input reader")
        x, y = manager.reader.read_coordinates()[:2]
        field.validate_coordinates(x, y)
        cells = [
            (cx, cy)
            for cx, cy in ((x, y), (x, y + 1), (x + 1, y), (x + 1, y + 1))
            if cx < field.cols and cy < field.rows
        ]
        if any(field.status(cx, cy) is CellStatus.SHIP for cx, cy in cells):
            return True, AbilityStatus.SHIP
        return False, AbilityStatus.EMPTY


class Shelling(Ability):
    """Hits a random segment of a random ship that is not yet destroyed."""

    name = "Shelling"

    def apply(
        self, field: GameField, ships: ShipManager, manager: AbilityManager
    ) -> AbilityResult:
        if len(ships) == 0:
            raise ValueError("there are no ships to shell")
        roll = manager.rng.randrange(2**31)
        ship_index = roll % len(ships)
        seg_index = roll % len(ships[ship_index])

        order = [
            (s, g) for s, ship in enumerate(ships) for g in range(len(ship))
        ]
        start = order.index((ship_index, seg_index))
        for s, g in order[start:] + order[:start]:
            segment = ships[s].segment(g)
            if segment.state is not SegmentState.DESTROYED:
                break
        else:
            raise ValueError("every ship segment is already destroyed")

        if segment.hit() is SegmentState.DAMAGED:
            return False, AbilityStatus.NOT_DESTROYED
        return True, AbilityStatus.DESTROYED


_ABILITY_TYPES: tuple[type[Ability], ...] = (DoubleHit, Scanner, Shelling)


class AbilityManager:
    """A queue of abilities, starting with one of each kind in random order."""

    def __init__(
        self, reader: Any = None, rng: Optional[random.Random] = None
    ) -> None:
        self.reader = reader
        self.rng = rng if rng is not None else random.Random()
        self._double_hit = False
        initial = [kind() for kind in _ABILITY_TYPES]
        self.rng.shuffle(initial)
        self._queue: deque[Ability] = deque(initial)

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"AbilityManager(abilities={list(self._queue)!r})"

    def set_double_hit(self) -> None:
        self._double_hit = True

    def take_double_hit(self) -> bool:
        """Return whether double damage is pending, and clear it."""
        pending = self._double_hit
        self._double_hit = False
        return pending

    def add_random_ability(self) -> None:
        self._queue.append(self.rng.choice(_ABILITY_TYPES)())

    def apply_ability(self, field: GameField, ships: ShipManager) -> AbilityResult:
        """Take the next ability from the queue and use it."""
        if not self._queue:
            raise NoAbilities()
        ability = self._queue.popleft()
        return ability.apply(field, ships, self)

    def remove_ability(self) -> None:
        if not self._queue:
            raise NoAbilities()
        self._queue.popleft()

    def resize(self, count: int) -> None:
        """Add random abilities or drop queued ones until ``count`` remain."""
        if count < 0:
            raise ValueError(f"ability count cannot be negative: {count}")
        while len(self._queue) < count:
            self.add_random_ability()
        while len(self._queue) > count:
            self.remove_ability()