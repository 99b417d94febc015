"""Per-cell knowledge about the opponent's board."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, Iterator

from .errors import OutOfBoundsError
from .geometry import DIAGONAL_DIRECTIONS, Coordinate

logger = logging.getLogger(__name__)


class CellStatus(Enum):
    """What the shooter knows about a cell.

    Transitions only move forward: HIDDEN -> WOUNDED -> KILLED, or
    HIDDEN -> MISSED.
    """

    HIDDEN = "hidden"
    WOUNDED = "wounded"
    KILLED = "killed"
    MISSED = "missed"


CellPredicate = Callable[[Coordinate, CellStatus], bool]

_SYMBOLS = {
    CellStatus.HIDDEN: ".",
    CellStatus.WOUNDED: "x",
    CellStatus.KILLED: "#",
    CellStatus.MISSED: "o",
}


class Grid:
    """Width x height store of :class:`CellStatus`, all hidden initially.

    Reads outside the board return ``MISSED`` so neighbourhood scans can run
    past the edges; writes outside the board raise :class:`OutOfBoundsError`.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}.")
        self.width = width
        self.height = height
        self._cells: list[CellStatus] = [CellStatus.HIDDEN] * (width * height)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    def _index(self, coord: Coordinate) -> int:
        return coord.y * self.width + coord.x

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def get(self, coord: Coordinate) -> CellStatus:
        if not self.in_bounds(coord):
            return CellStatus.MISSED
        return self._cells[self._index(coord)]

    def set(self, coord: Coordinate, status: CellStatus) -> None:
        """Overwrite a cell; callers are responsible for legal transitions."""
        if not self.in_bounds(coord):
            logger.error(
                "grid_write_out_of_bounds",
                extra={"x": coord.x, "y": coord.y, "width": self.width, "height": self.height},
            )
            raise OutOfBoundsError(f"{coord} is outside the {self.width}x{self.height} grid.")
        self._cells[self._index(coord)] = status

    def cells(self) -> Iterator[Coordinate]:
        for x in range(self.width):
            for y in range(self.height):
                yield Coordinate(x, y)

    def cells_where(self, predicate: CellPredicate) -> Iterator[Coordinate]:
        """Lazily yield in-bounds cells matching ``predicate``, column by column."""
        for coord in self.cells():
            if predicate(coord, self._cells[self._index(coord)]):
                yield coord

    def cells_with(self, *statuses: CellStatus) -> list[Coordinate]:
        wanted = set(statuses)
        return list(self.cells_where(lambda _, status: status in wanted))

    def count(self, status: CellStatus) -> int:
        return self._cells.count(status)

    def neighbors8(self, coord: Coordinate) -> Iterator[Coordinate]:
        """Yield the in-bounds cells of the 3x3 block centred on ``coord``.

        The centre is included; callers wanting the strict neighbourhood
        filter it out themselves.
        """
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                neighbour = Coordinate(coord.x + dx, coord.y + dy)
                if self.in_bounds(neighbour):
                    yield neighbour

    def neighbourhood(self, cells: Iterable[Coordinate]) -> set[Coordinate]:
        """Union of :meth:`neighbors8` over ``cells`` (the cells themselves included)."""
        area: set[Coordinate] = set()
        for cell in cells:
            area.update(self.neighbors8(cell))
        return area

    def diagonal_neighbors(self, coord: Coordinate) -> Iterator[Coordinate]:
        for direction in DIAGONAL_DIRECTIONS:
            neighbour = coord + direction
            if self.in_bounds(neighbour):
                yield neighbour

    def render(self) -> str:
        """ASCII view, one text row per grid row."""
        rows = []
        for y in range(self.height):
            rows.append(
                "".join(_SYMBOLS[self._cells[y * self.width + x]] for x in range(self.width))
            )
        return "\n".join(rows)
