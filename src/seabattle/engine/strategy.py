"""Target selection for each targeting mode."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable

from .errors import NoValidTargetError
from .field import ScoreField, build_field
from .geometry import Coordinate
from .grid import CellStatus, Grid
from .inventory import ShipInventory

logger = logging.getLogger(__name__)


class TargetingMode(Enum):
    """SEARCH hunts for a new ship, FINISH sinks a wounded one, TRIVIAL fires at random."""

    SEARCH = "search"
    FINISH = "finish"
    TRIVIAL = "trivial"


def random_hidden_target(grid: Grid, rng: random.Random) -> Coordinate:
    hidden = grid.cells_with(CellStatus.HIDDEN)
    if not hidden:
        raise NoValidTargetError("No hidden cell is left to target.")
    return rng.choice(hidden)


def best_target(grid: Grid, field: ScoreField, rng: random.Random) -> Coordinate:
    """Pick uniformly among the hidden cells with the highest score.

    Falls back to a random hidden cell when every hidden cell scores zero.
    """
    hidden = grid.cells_with(CellStatus.HIDDEN)
    if not hidden:
        raise NoValidTargetError("No hidden cell is left to target.")
    top = max(int(field[cell.x, cell.y]) for cell in hidden)
    if top == 0:
        logger.info("field_empty_fallback", extra={"hidden_cells": len(hidden)})
        return rng.choice(hidden)
    candidates = [cell for cell in hidden if field[cell.x, cell.y] == top]
    return rng.choice(candidates)


def search_target(grid: Grid, inventory: ShipInventory, rng: random.Random) -> Coordinate:
    active = grid.cells_where(lambda _, status: status is not CellStatus.MISSED)
    field = build_field(grid, inventory.alive_lengths(), inventory.multiplicity, list(active))
    return best_target(grid, field, rng)


def finish_target(grid: Grid, inventory: ShipInventory, rng: random.Random) -> Coordinate:
    wounded = grid.cells_with(CellStatus.WOUNDED)
    field = build_field(
        grid, inventory.alive_lengths(), inventory.multiplicity, wounded, wound_bias=True
    )
    return best_target(grid, field, rng)


def trivial_target(grid: Grid, inventory: ShipInventory, rng: random.Random) -> Coordinate:
    return random_hidden_target(grid, rng)


_SELECTORS: dict[TargetingMode, Callable[[Grid, ShipInventory, random.Random], Coordinate]] = {
    TargetingMode.SEARCH: search_target,
    TargetingMode.FINISH: finish_target,
    TargetingMode.TRIVIAL: trivial_target,
}


def select_target(
    mode: TargetingMode, grid: Grid, inventory: ShipInventory, rng: random.Random
) -> Coordinate:
    return _SELECTORS[mode](grid, inventory, rng)


def derive_mode(grid: Grid, inventory: ShipInventory) -> TargetingMode:
    """Mode implied by the current knowledge."""
    if not inventory.has_long_ships():
        return TargetingMode.TRIVIAL
    if grid.count(CellStatus.WOUNDED):
        return TargetingMode.FINISH
    return TargetingMode.SEARCH
