"""Consistency check for hypothetical ship placements."""

from __future__ import annotations

from .geometry import Coordinate, Orientation, occupied_cells
from .grid import CellStatus, Grid

_NEIGHBOUR_OK = (CellStatus.HIDDEN, CellStatus.MISSED)


def can_place(grid: Grid, origin: Coordinate, length: int, orientation: Orientation) -> bool:
    """Return True if a ship could still occupy these cells given what the grid shows.

    The ship must lie on the board, avoid missed cells, and have no wounded or
    killed cell touching it (diagonals included) outside its own cells.
    """
    cells = occupied_cells(origin, length, orientation)
    if not all(grid.in_bounds(cell) for cell in cells):
        return False
    if any(grid.get(cell) is CellStatus.MISSED for cell in cells):
        return False

    own = set(cells)
    for neighbour in grid.neighbourhood(cells):
        if neighbour in own:
            continue
        if grid.get(neighbour) not in _NEIGHBOUR_OK:
            return False
    return True
