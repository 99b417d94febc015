"""Single-match state: grid knowledge, fleet inventory and targeting mode."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Sequence

from seabattle.telemetry import get_meter, get_tracer

from .errors import InvalidMatchError, InvalidTransitionError, MatchStateError, OutOfBoundsError
from .geometry import AXIS_DIRECTIONS, Coordinate
from .grid import CellStatus, Grid
from .inventory import ShipInventory
from .strategy import TargetingMode, derive_mode, select_target

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.match")
meter = get_meter("seabattle.engine.match")

OUTCOME_COUNTER = meter.create_counter(
    "seabattle_engine_outcomes",
    unit="1",
    description="Shot outcomes recorded by matches",
)

TARGET_COUNTER = meter.create_counter(
    "seabattle_engine_targets",
    unit="1",
    description="Targets chosen, by targeting mode",
)


class ShotOutcome(Enum):
    """Referee verdict for a shot; values are the protocol tokens."""

    MISS = "Miss"
    WOUND = "Wound"
    KILL = "Kill"


_ALLOWED_BEFORE: dict[ShotOutcome, frozenset[CellStatus]] = {
    ShotOutcome.MISS: frozenset({CellStatus.HIDDEN, CellStatus.MISSED}),
    ShotOutcome.WOUND: frozenset({CellStatus.HIDDEN}),
    ShotOutcome.KILL: frozenset({CellStatus.HIDDEN, CellStatus.WOUNDED}),
}
_SHIP_STATUSES = (CellStatus.WOUNDED, CellStatus.KILLED)


def reconstruct_ship(grid: Grid, target: Coordinate) -> list[Coordinate]:
    """Return the ship through ``target``: contiguous wounded/killed cells on both axes.

    Reads past the edge return MISSED, so every walk stops at the border.
    """
    cells = [target]
    for direction in AXIS_DIRECTIONS:
        distance = 1
        while True:
            cell = target + direction * distance
            if grid.get(cell) not in _SHIP_STATUSES:
                break
            cells.append(cell)
            distance += 1
    return cells


class Match:
    """One game against one referee board.

    The match owns its grid and inventory; nothing else writes to them.
    """

    def __init__(
        self,
        width: int,
        height: int,
        ship_lengths: Sequence[int],
        rng: random.Random | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise InvalidMatchError(f"Board must be at least 1x1, got {width}x{height}.")
        self.grid = Grid(width, height)
        self.inventory = ShipInventory(ship_lengths)
        self.rng = rng or random.Random()
        self.mode = derive_mode(self.grid, self.inventory)
        self.shots = 0
        logger.info(
            "match_started",
            extra={
                "width": width,
                "height": height,
                "ship_lengths": list(ship_lengths),
                "mode": self.mode.value,
            },
        )

    @property
    def remaining_cells(self) -> int:
        return self.inventory.remaining_cells

    def is_over(self) -> bool:
        return self.inventory.remaining_cells == 0

    def accepts_kill(self, target: Coordinate) -> bool:
        """Whether a ``Kill`` at ``target`` agrees with the grid and the alive fleet."""
        if self.is_over() or self.grid.get(target) not in _ALLOWED_BEFORE[ShotOutcome.KILL]:
            return False
        return len(reconstruct_ship(self.grid, target)) in self.inventory

    def next_target(self) -> Coordinate:
        """Choose the next cell to shoot at."""
        if self.is_over():
            raise MatchStateError("The match is over; no more targets.")
        with tracer.start_as_current_span("match.next_target") as span:
            span.set_attribute("match.mode", self.mode.value)
            target = select_target(self.mode, self.grid, self.inventory, self.rng)
            span.set_attribute("target.x", target.x)
            span.set_attribute("target.y", target.y)
        TARGET_COUNTER.add(1, attributes={"mode": self.mode.value})
        logger.debug("target_chosen", extra={"x": target.x, "y": target.y, "mode": self.mode.value})
        return target

    def record_outcome(self, target: Coordinate, outcome: ShotOutcome) -> None:
        """Apply the referee's verdict for ``target`` and update the mode."""
        with tracer.start_as_current_span("match.record_outcome") as span:
            span.set_attribute("shot.x", target.x)
            span.set_attribute("shot.y", target.y)
            span.set_attribute("shot.outcome", outcome.value)
            if self.is_over():
                raise MatchStateError("The match is over; no outcome can be recorded.")
            if not self.grid.in_bounds(target):
                logger.error(
                    "outcome_out_of_bounds",
                    extra={"x": target.x, "y": target.y, "outcome": outcome.value},
                )
                raise OutOfBoundsError(f"Shot {target} is outside the board.")

            before = self.grid.get(target)
            if before not in _ALLOWED_BEFORE[outcome]:
                logger.error(
                    "outcome_contradicts_grid",
                    extra={"x": target.x, "y": target.y, "outcome": outcome.value, "cell": before.value},
                )
                raise InvalidTransitionError(
                    f"{outcome.value} reported at {target}, but the cell is {before.value}."
                )

            if outcome is ShotOutcome.MISS:
                self.grid.set(target, CellStatus.MISSED)
            elif outcome is ShotOutcome.WOUND:
                self._record_wound(target)
            else:
                self._record_kill(target, before)

            self.shots += 1
            self.mode = derive_mode(self.grid, self.inventory)
            span.set_attribute("match.mode", self.mode.value)
            span.set_attribute("match.remaining_cells", self.remaining_cells)

        OUTCOME_COUNTER.add(1, attributes={"outcome": outcome.value})
        logger.info(
            "shot_recorded",
            extra={
                "x": target.x,
                "y": target.y,
                "outcome": outcome.value,
                "mode": self.mode.value,
                "remaining_cells": self.remaining_cells,
            },
        )
        if self.is_over():
            logger.info("match_finished", extra={"shots": self.shots})

    def _record_wound(self, target: Coordinate) -> None:
        self.inventory.mark_cell_hit()
        self.grid.set(target, CellStatus.WOUNDED)
        # Ships never touch, so no diagonal neighbour of a hit can hold a ship.
        for cell in self.grid.diagonal_neighbors(target):
            if self.grid.get(cell) is CellStatus.HIDDEN:
                self.grid.set(cell, CellStatus.MISSED)

    def _record_kill(self, target: Coordinate, before: CellStatus) -> None:
        ship = reconstruct_ship(self.grid, target)
        if len(ship) not in self.inventory:
            logger.error(
                "killed_ship_unknown",
                extra={"x": target.x, "y": target.y, "length": len(ship)},
            )
            raise InvalidTransitionError(
                f"Kill at {target} implies a ship of length {len(ship)}, "
                f"but alive lengths are {self.inventory.multiplicity}."
            )

        if before is CellStatus.HIDDEN:
            self.inventory.mark_cell_hit()
        self.inventory.remove(len(ship))
        for cell in ship:
            self.grid.set(cell, CellStatus.KILLED)
        for cell in self.grid.neighbourhood(ship):
            status = self.grid.get(cell)
            if status is CellStatus.HIDDEN:
                self.grid.set(cell, CellStatus.MISSED)
            elif status is CellStatus.WOUNDED:
                self.grid.set(cell, CellStatus.KILLED)
        logger.info(
            "ship_killed",
            extra={"length": len(ship), "alive": self.inventory.multiplicity},
        )
