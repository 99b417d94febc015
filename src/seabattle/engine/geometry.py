"""Coordinates and ship placements."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate; ``x`` is the column, ``y`` the row."""

    x: int
    y: int

    def __add__(self, other: Coordinate) -> Coordinate:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return Coordinate(self.x + other.x, self.y + other.y)

    def __mul__(self, factor: int) -> Coordinate:
        if not isinstance(factor, int):
            return NotImplemented
        return Coordinate(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> Coordinate:
        """Unit vector walked along by a ship with this orientation."""
        return STEP_RIGHT if self is Orientation.HORIZONTAL else STEP_DOWN


STEP_RIGHT = Coordinate(1, 0)
STEP_DOWN = Coordinate(0, 1)

AXIS_DIRECTIONS: tuple[Coordinate, ...] = (
    Coordinate(1, 0),
    Coordinate(-1, 0),
    Coordinate(0, 1),
    Coordinate(0, -1),
)
DIAGONAL_DIRECTIONS: tuple[Coordinate, ...] = (
    Coordinate(1, 1),
    Coordinate(1, -1),
    Coordinate(-1, 1),
    Coordinate(-1, -1),
)


def occupied_cells(origin: Coordinate, length: int, orientation: Orientation) -> list[Coordinate]:
    """Return the ``length`` cells covered by a ship starting at ``origin``.

    No bounds checking happens here; the placement validator does that.
    """
    step = orientation.step
    return [origin + step * offset for offset in range(length)]


@dataclass(frozen=True)
class Placement:
    """A hypothetical ship: origin, length and orientation."""

    origin: Coordinate
    length: int
    orientation: Orientation

    def cells(self) -> list[Coordinate]:
        return occupied_cells(self.origin, self.length, self.orientation)
