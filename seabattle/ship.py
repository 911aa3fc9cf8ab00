"""Ships, their segments and the collection of a player's ships."""

from __future__ import annotations

import copy
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator

from seabattle.errors import InvalidLen


class SegmentState(Enum):
    INTACT = "Intact"
    DAMAGED = "Damaged"
    DESTROYED = "Destroyed"


class Orientation(Enum):
    HORIZONTAL = "Horizontal"
    VERTICAL = "Vertical"


@dataclass
class ShipSegment:
    """One cell-sized piece of a ship."""

    state: SegmentState = SegmentState.INTACT

    def hit(self) -> SegmentState:
        """Damage the segment one step and return its new state."""
        if self.state is SegmentState.INTACT:
            self.state = SegmentState.DAMAGED
        elif self.state is SegmentState.DAMAGED:
            self.state = SegmentState.DESTROYED
        return self.state

    def to_json(self) -> dict[str, Any]:
        return {"state": self.state.value}

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ShipSegment:
        """Build a segment; an unknown state is reported and left intact."""
        try:
            state = SegmentState(data["state"])
        except (ValueError, TypeError):
            warnings.warn("problem in fromjson in segment", stacklevel=2)
            state = SegmentState.INTACT
        return cls(state)


class Ship:
    """A ship of one to four segments."""

    def __init__(
        self, length: int, orientation: Orientation = Orientation.HORIZONTAL
    ) -> None:
        if not 1 <= length <= 4:
            raise InvalidLen(length)
        self.orientation = orientation
        self.segments = [ShipSegment() for _ in range(length)]

    def __len__(self) -> int:
        return len(self.segments)

    def __repr__(self) -> str:
        return f"Ship(length={len(self)}, orientation={self.orientation.name})"

    def segment(self, index: int) -> ShipSegment:
        return self.segments[index]

    def segment_state(self, index: int) -> SegmentState:
        return self.segments[index].state

    def is_destroyed(self) -> bool:
        return all(seg.state is SegmentState.DESTROYED for seg in self.segments)

    def to_json(self) -> dict[str, Any]:
        return {
            "segments": [seg.to_json() for seg in self.segments],
            "orientation": self.orientation.value,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Ship:
        if "segments" not in data or "orientation" not in data:
            raise ValueError("problem in fromjson in ship : /")
        if not isinstance(data["segments"], list) or not isinstance(
            data["orientation"], str
        ):
            raise ValueError("problem in fromjson in ship : /")
        segments = [ShipSegment.from_json(item) for item in data["segments"]]
        ship = cls(len(segments))
        ship.segments = segments
        try:
            ship.orientation = Orientation(data["orientation"])
        except ValueError:
            raise ValueError("problem in fromjson in ship : / ") from None
        return ship


class ShipManager:
    """An ordered collection of ships belonging to one player."""

    def __init__(self, sizes: Iterable[int] = ()) -> None:
        self._ships = [Ship(size, Orientation.HORIZONTAL) for size in sizes]

    def __len__(self) -> int:
        return len(self._ships)

    def __getitem__(self, index: int) -> Ship:
        return self._ships[index]

    def __iter__(self) -> Iterator[Ship]:
        return iter(self._ships)

    def add_ship(self, ship: Ship) -> None:
        self._ships.append(copy.deepcopy(ship))

    def copy(self) -> ShipManager:
        """Return an independent copy with its own ships and segments."""
        other = ShipManager()
        other._ships = copy.deepcopy(self._ships)
        return other

    def to_json(self) -> dict[str, Any]:
        return {"ships": [ship.to_json() for ship in self._ships]}

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ShipManager:
        if "ships" not in data or not isinstance(data["ships"], list):
            raise ValueError("problem in fromjson in ShipMananger : /")
        manager = cls()
        manager._ships = [Ship.from_json(item) for item in data["ships"]]
        return manager