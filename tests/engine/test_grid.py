"""Tests for the shooter's grid."""

import pytest

from seabattle.engine.errors import OutOfBoundsError
from seabattle.engine.geometry import Coordinate
from seabattle.engine.grid import CellStatus, Grid


def test_new_grid_is_hidden() -> None:
    grid = Grid(4, 3)
    assert all(grid.get(cell) is CellStatus.HIDDEN for cell in grid.cells())
    assert grid.count(CellStatus.HIDDEN) == 12


def test_out_of_bounds_read_is_missed() -> None:
    grid = Grid(3, 3)
    for coord in (Coordinate(-1, 0), Coordinate(0, -1), Coordinate(3, 0), Coordinate(0, 3)):
        assert grid.get(coord) is CellStatus.MISSED


def test_out_of_bounds_write_raises() -> None:
    grid = Grid(3, 3)
    with pytest.raises(OutOfBoundsError):
        grid.set(Coordinate(3, 1), CellStatus.MISSED)
    with pytest.raises(IndexError):
        grid.set(Coordinate(0, -1), CellStatus.MISSED)


def test_set_and_get_use_x_as_column() -> None:
    grid = Grid(5, 2)
    grid.set(Coordinate(4, 1), CellStatus.WOUNDED)
    assert grid.get(Coordinate(4, 1)) is CellStatus.WOUNDED
    assert grid.get(Coordinate(1, 4)) is CellStatus.MISSED
    assert grid.render().splitlines() == [".....", "....x"]


def test_rejects_empty_dimensions() -> None:
    with pytest.raises(ValueError):
        Grid(0, 5)


def test_cells_where_is_deterministic_and_filtered() -> None:
    grid = Grid(2, 2)
    grid.set(Coordinate(1, 0), CellStatus.MISSED)
    hidden = list(grid.cells_where(lambda _, status: status is CellStatus.HIDDEN))
    assert hidden == [Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1)]
    assert hidden == list(grid.cells_where(lambda _, status: status is CellStatus.HIDDEN))


def test_neighbors8_includes_centre_and_clips_edges() -> None:
    grid = Grid(5, 5)
    assert len(list(grid.neighbors8(Coordinate(2, 2)))) == 9
    corner = set(grid.neighbors8(Coordinate(0, 0)))
    assert corner == {Coordinate(0, 0), Coordinate(1, 0), Coordinate(0, 1), Coordinate(1, 1)}


def test_diagonal_neighbors() -> None:
    grid = Grid(5, 5)
    assert set(grid.diagonal_neighbors(Coordinate(2, 2))) == {
        Coordinate(1, 1),
        Coordinate(1, 3),
        Coordinate(3, 1),
        Coordinate(3, 3),
    }
    assert list(grid.diagonal_neighbors(Coordinate(0, 0))) == [Coordinate(1, 1)]


def test_neighbourhood_of_ship() -> None:
    grid = Grid(5, 5)
    area = grid.neighbourhood([Coordinate(0, 0), Coordinate(1, 0)])
    assert len(area) == 6
    assert Coordinate(2, 1) in area
