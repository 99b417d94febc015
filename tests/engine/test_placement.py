"""Tests for the placement validator."""

from seabattle.engine.geometry import Coordinate, Orientation
from seabattle.engine.grid import CellStatus, Grid
from seabattle.engine.placement import can_place

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


def test_empty_grid_accepts_in_bounds_ships() -> None:
    grid = Grid(5, 5)
    assert can_place(grid, Coordinate(0, 0), 5, H)
    assert can_place(grid, Coordinate(4, 0), 5, V)


def test_rejects_ship_leaving_the_board() -> None:
    grid = Grid(5, 5)
    assert not can_place(grid, Coordinate(1, 0), 5, H)
    assert not can_place(grid, Coordinate(0, 4), 2, V)
    assert not can_place(grid, Coordinate(-1, 0), 2, H)


def test_rejects_ship_over_missed_cell() -> None:
    grid = Grid(5, 5)
    grid.set(Coordinate(2, 0), CellStatus.MISSED)
    assert not can_place(grid, Coordinate(0, 0), 3, H)
    assert can_place(grid, Coordinate(0, 0), 2, H)


def test_ship_may_cover_wounded_cells() -> None:
    grid = Grid(5, 5)
    grid.set(Coordinate(1, 1), CellStatus.WOUNDED)
    assert can_place(grid, Coordinate(0, 1), 3, H)


def test_rejects_ship_touching_wounded_or_killed_cell() -> None:
    grid = Grid(5, 5)
    grid.set(Coordinate(2, 2), CellStatus.WOUNDED)
    assert not can_place(grid, Coordinate(0, 1), 2, H)  # diagonal contact
    assert not can_place(grid, Coordinate(3, 0), 3, V)  # side contact

    grid = Grid(5, 5)
    grid.set(Coordinate(2, 2), CellStatus.KILLED)
    assert not can_place(grid, Coordinate(2, 3), 2, V)
    assert can_place(grid, Coordinate(0, 4), 2, H)


def test_missed_neighbours_are_fine() -> None:
    grid = Grid(5, 5)
    for cell in grid.neighbors8(Coordinate(2, 2)):
        if cell != Coordinate(2, 2):
            grid.set(cell, CellStatus.MISSED)
    assert can_place(grid, Coordinate(2, 2), 1, H)
