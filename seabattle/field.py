"""The playing field: a grid of cells that may hold ship segments."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from seabattle.errors import (
    EmptyCell,
    IntersectShip,
    OutOfField,
    ShipOutOfByX,
    ShipOutOfByY,
)
from seabattle.ship import Orientation, SegmentState, Ship, ShipManager, ShipSegment


class CellStatus(Enum):
    UNKNOWN = "Unknown"
    EMPTY = "Empty"
    SHIP = "Ship"


@dataclass
class Cell:
    """One square of the field."""

    status: CellStatus = CellStatus.UNKNOWN
    segment: Optional[ShipSegment] = None
    segment_index: int = -1
    ship_index: int = -1

    def to_json(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "IndexSegment": self.segment_index,
            "IndexShip": self.ship_index,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Cell:
        raw = data.get("status")
        try:
            if not isinstance(raw, str):
                raise ValueError
            status = CellStatus(raw)
        except ValueError:
            raise ValueError("Missing or invalid CellStatus in JSON: ") from None
        if "IndexSegment" not in data or "IndexShip" not in data:
            raise ValueError(
                "Missing or invalid IndexSegment or IndexShip in JSON: "
            )
        return cls(
            status=status,
            segment_index=int(data["IndexSegment"]),
            ship_index=int(data["IndexShip"]),
        )


class GameField:
    """A field of ``cols`` by ``rows`` cells addressed as (x, y)."""

    def __init__(self, cols: int, rows: int) -> None:
        if cols < 1 or rows < 1:
            raise OutOfField(cols, rows)
        self.cols = cols
        self.rows = rows
        self._grid = [[Cell() for _ in range(cols)] for _ in range(rows)]

    def _cell(self, x: int, y: int) -> Cell:
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise IndexError(f"cell ({x}, {y}) is outside the field")
        return self._grid[y][x]

    def status(self, x: int, y: int) -> CellStatus:
        return self._cell(x, y).status

    def segment_state(self, x: int, y: int) -> SegmentState:
        segment = self._cell(x, y).segment
        if segment is None:
            raise ValueError(f"no ship segment at ({x}, {y})")
        return segment.state

    def validate_coordinates(self, x: int, y: int) -> bool:
        if x < 0 or x >= self.cols or y < 0 or y >= self.rows:
            raise OutOfField(x, y)
        return True

    def check_location(
        self, x: int, y: int, length: int, orientation: Orientation
    ) -> bool:
        """Check that a ship fits here without touching another ship."""
        horizontal = orientation is Orientation.HORIZONTAL
        if horizontal and x + length > self.cols:
            raise ShipOutOfByX(x, y)
        if not horizontal and y + length > self.rows:
            raise ShipOutOfByY(x, y)

        min_x = max(0, x - 1)
        min_y = max(0, y - 1)
        max_x = min(self.cols - 1, x + (length if horizontal else 1))
        max_y = min(self.rows - 1, y + (1 if horizontal else length))
        for row in self._grid[min_y : max_y + 1]:
            if any(cell.status is CellStatus.SHIP for cell in row[min_x : max_x + 1]):
                raise IntersectShip(x, y)
        return True

    def add_ship(self, x: int, y: int, ship: Ship, ship_index: int) -> bool:
        self.validate_coordinates(x, y)
        self.check_location(x, y, len(ship), ship.orientation)
        horizontal = ship.orientation is Orientation.HORIZONTAL
        for i, segment in enumerate(ship.segments):
            cx, cy = (x + i, y) if horizontal else (x, y + i)
            cell = self._grid[cy][cx]
            cell.status = CellStatus.SHIP
            cell.segment = segment
            cell.segment_index = i
            cell.ship_index = ship_index
        return True

    def hit(self, x: int, y: int, double: bool) -> Optional[int]:
        """Attack a cell; return the index of the ship hit, or None on a miss."""
        self.validate_coordinates(x, y)
        cell = self._grid[y][x]
        if cell.status is CellStatus.EMPTY:
            raise EmptyCell(x, y)
        if cell.status is CellStatus.UNKNOWN:
            cell.status = CellStatus.EMPTY
            return None
        assert cell.segment is not None
        cell.segment.hit()
        if double:
            cell.segment.hit()
        return cell.ship_index

    def _render(self, intact_symbol: str) -> str:
        symbols = {
            SegmentState.INTACT: intact_symbol,
            SegmentState.DAMAGED: "1",
            SegmentState.DESTROYED: "0",
        }

        def symbol(cell: Cell) -> str:
            if cell.status is CellStatus.EMPTY:
                return "X"
            if cell.status is CellStatus.UNKNOWN or cell.segment is None:
                return "_"
            return symbols[cell.segment.state]

        return "".join(
            "".join(symbol(cell) for cell in row) + "\n" for row in self._grid
        )

    def render(self) -> str:
        """Plain text view with every ship shown."""
        return self._render("2")

    def render_hidden(self) -> str:
        """Plain text view with intact ship segments hidden."""
        return self._render("_")

    def copy(self) -> GameField:
        """Copy the grid; cells keep referring to the same ship segments."""
        other = GameField(self.cols, self.rows)
        other._grid = [[replace(cell) for cell in row] for row in self._grid]
        return other

    def to_json(self) -> dict[str, Any]:
        return {
            "row": self.rows,
            "col": self.cols,
            "field": [[cell.to_json() for cell in row] for row in self._grid],
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> GameField:
        if "row" not in data or "col" not in data:
            raise ValueError("problem in fromjson in GameField : /")
        field = cls(int(data["col"]), int(data["row"]))
        rows = data.get("field", [])
        if len(rows) > field.rows or any(len(row) > field.cols for row in rows):
            raise ValueError("problem in fromjson in GameField : /")
        for y, row in enumerate(rows):
            for x, item in enumerate(row):
                field._grid[y][x] = Cell.from_json(item)
        return field

    def restore_connection(self, manager: ShipManager) -> None:
        """Link ship cells to the segments of the ships in ``manager``."""
        for row in self._grid:
            for cell in row:
                if cell.status is not CellStatus.SHIP:
                    continue
                ship_index, seg_index = cell.ship_index, cell.segment_index
                if (
                    seg_index < 0
                    or ship_index < 0
                    or ship_index >= len(manager)
                    or seg_index >= len(manager[ship_index])
                ):
                    raise ValueError("problem in fromjson in restoreConnection : /")
                cell.segment = manager[ship_index].segment(seg_index)