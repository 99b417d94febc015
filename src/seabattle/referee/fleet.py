"""Referee-side board: where the ships really are and how shots resolve."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from seabattle.engine.errors import OutOfBoundsError, SeaBattleError
from seabattle.engine.geometry import Coordinate, Orientation, occupied_cells
from seabattle.engine.match import ShotOutcome
from seabattle.telemetry import get_meter, get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.referee.fleet")
meter = get_meter("seabattle.referee.fleet")

PLACEMENT_COUNTER = meter.create_counter(
    "seabattle_referee_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

DEFAULT_PLACEMENT_ATTEMPTS = 1000


class PlacementError(SeaBattleError, RuntimeError):
    """A fleet could not be laid out on the board."""


@dataclass
class Ship:
    """A ship on the referee board and the cells of it not yet hit."""

    origin: Coordinate
    length: int
    orientation: Orientation
    alive_cells: set[Coordinate] = field(init=False)

    def __post_init__(self) -> None:
        self.alive_cells = set(self.cells())

    def cells(self) -> list[Coordinate]:
        return occupied_cells(self.origin, self.length, self.orientation)

    def is_alive(self) -> bool:
        return bool(self.alive_cells)


class FleetMap:
    """Ship layout for one match; ships never touch, not even diagonally."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.ships: list[Ship] = []
        self._ship_at: dict[Coordinate, Ship] = {}

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def ship_at(self, coord: Coordinate) -> Ship | None:
        return self._ship_at.get(coord)

    def can_place(self, origin: Coordinate, length: int, orientation: Orientation) -> bool:
        cells = occupied_cells(origin, length, orientation)
        if not all(self.in_bounds(cell) for cell in cells):
            return False
        for cell in cells:
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    if Coordinate(cell.x + dx, cell.y + dy) in self._ship_at:
                        return False
        return True

    def set_ship(self, origin: Coordinate, length: int, orientation: Orientation) -> bool:
        """Place a ship if it fits; return whether it was placed."""
        if not self.can_place(origin, length, orientation):
            PLACEMENT_COUNTER.add(1, attributes={"result": "failed"})
            return False
        ship = Ship(origin, length, orientation)
        self.ships.append(ship)
        for cell in ship.cells():
            self._ship_at[cell] = ship
        PLACEMENT_COUNTER.add(1, attributes={"result": "success"})
        logger.debug(
            "ship_placed",
            extra={
                "x": origin.x,
                "y": origin.y,
                "length": length,
                "orientation": orientation.value,
            },
        )
        return True

    def make_hit(self, target: Coordinate) -> ShotOutcome:
        """Resolve a shot. Repeated shots at a dead cell count as misses."""
        if not self.in_bounds(target):
            logger.error("shot_out_of_bounds", extra={"x": target.x, "y": target.y})
            raise OutOfBoundsError(f"Shot {target} is outside the board.")
        ship = self._ship_at.get(target)
        if ship is None or target not in ship.alive_cells:
            return ShotOutcome.MISS
        ship.alive_cells.discard(target)
        return ShotOutcome.WOUND if ship.is_alive() else ShotOutcome.KILL

    def has_alive_ships(self) -> bool:
        return any(ship.is_alive() for ship in self.ships)

    def render(self) -> str:
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                ship = self._ship_at.get(Coordinate(x, y))
                if ship is None:
                    row.append(".")
                elif Coordinate(x, y) in ship.alive_cells:
                    row.append("S")
                else:
                    row.append("#")
            rows.append("".join(row))
        return "\n".join(rows)


def random_fleet(
    width: int,
    height: int,
    ship_lengths: Sequence[int],
    rng: random.Random,
    max_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS,
) -> FleetMap:
    """Lay out ``ship_lengths`` at random, longest first, retrying each ship."""
    with tracer.start_as_current_span("referee.random_fleet") as span:
        span.set_attribute("board.width", width)
        span.set_attribute("board.height", height)
        fleet = FleetMap(width, height)
        for length in sorted(ship_lengths, reverse=True):
            for attempt in range(1, max_attempts + 1):
                orientation = rng.choice(list(Orientation))
                origin = Coordinate(rng.randrange(width), rng.randrange(height))
                if fleet.set_ship(origin, length, orientation):
                    break
            else:
                logger.error(
                    "fleet_placement_failed",
                    extra={"length": length, "attempts": max_attempts},
                )
                raise PlacementError(
                    f"Could not place a ship of length {length} on a {width}x{height} board "
                    f"after {max_attempts} attempts."
                )
            logger.debug("random_ship_placed", extra={"length": length, "attempts": attempt})
        return fleet
