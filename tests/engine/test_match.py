"""Tests for match bookkeeping and outcome transitions."""

import random

import pytest

from seabattle.engine.ai import TargetingAi
from seabattle.engine.errors import (
    InvalidMatchError,
    InvalidTransitionError,
    MatchStateError,
    OutOfBoundsError,
)
from seabattle.engine.field import build_field
from seabattle.engine.geometry import Coordinate
from seabattle.engine.grid import CellStatus
from seabattle.engine.inventory import ShipInventory
from seabattle.engine.match import Match, ShotOutcome, reconstruct_ship
from seabattle.engine.strategy import TargetingMode

STANDARD_FLEET = [4, 3, 3, 2, 2, 2, 1, 1, 1, 1]


def test_initial_mode_depends_on_fleet() -> None:
    assert Match(10, 10, STANDARD_FLEET).mode is TargetingMode.SEARCH
    assert Match(3, 3, [1, 1]).mode is TargetingMode.TRIVIAL


def test_invalid_match_parameters() -> None:
    with pytest.raises(InvalidMatchError):
        Match(0, 10, [2])
    with pytest.raises(InvalidMatchError):
        Match(10, 10, [])
    with pytest.raises(InvalidMatchError):
        Match(10, 10, [2, 0])


def test_miss_marks_cell_and_keeps_count() -> None:
    match = Match(10, 10, STANDARD_FLEET)
    before = match.remaining_cells
    match.record_outcome(Coordinate(3, 3), ShotOutcome.MISS)
    assert match.grid.get(Coordinate(3, 3)) is CellStatus.MISSED
    assert match.remaining_cells == before
    assert match.mode is TargetingMode.SEARCH


def test_wound_marks_diagonals_and_switches_to_finish() -> None:
    match = Match(5, 5, [3, 1])
    match.record_outcome(Coordinate(2, 2), ShotOutcome.WOUND)
    assert match.grid.get(Coordinate(2, 2)) is CellStatus.WOUNDED
    for cell in (Coordinate(1, 1), Coordinate(1, 3), Coordinate(3, 1), Coordinate(3, 3)):
        assert match.grid.get(cell) is CellStatus.MISSED
    assert match.grid.get(Coordinate(2, 1)) is CellStatus.HIDDEN
    assert match.remaining_cells == 3
    assert match.mode is TargetingMode.FINISH


def test_wound_on_corner_only_touches_board_cells() -> None:
    match = Match(3, 3, [2])
    match.record_outcome(Coordinate(0, 0), ShotOutcome.WOUND)
    assert match.grid.get(Coordinate(1, 1)) is CellStatus.MISSED
    assert match.grid.count(CellStatus.MISSED) == 1


def test_kill_marks_ship_and_surroundings() -> None:
    match = Match(6, 6, [3, 2])
    match.record_outcome(Coordinate(2, 2), ShotOutcome.WOUND)
    match.record_outcome(Coordinate(3, 2), ShotOutcome.WOUND)
    match.record_outcome(Coordinate(4, 2), ShotOutcome.KILL)

    ship = [Coordinate(2, 2), Coordinate(3, 2), Coordinate(4, 2)]
    for cell in ship:
        assert match.grid.get(cell) is CellStatus.KILLED
    for cell in match.grid.neighbourhood(ship):
        assert match.grid.get(cell) is not CellStatus.HIDDEN
    assert match.inventory.count(3) == 0
    assert match.inventory.count(2) == 1
    assert match.remaining_cells == 2
    assert match.mode is TargetingMode.SEARCH


def test_kill_of_last_long_ship_switches_to_trivial() -> None:
    match = Match(5, 5, [2, 1])
    match.record_outcome(Coordinate(0, 0), ShotOutcome.WOUND)
    match.record_outcome(Coordinate(0, 1), ShotOutcome.KILL)
    assert match.mode is TargetingMode.TRIVIAL
    assert match.remaining_cells == 1


def test_kill_with_unknown_length_is_rejected_untouched() -> None:
    match = Match(6, 6, [2, 2])
    match.record_outcome(Coordinate(0, 0), ShotOutcome.WOUND)
    match.record_outcome(Coordinate(1, 0), ShotOutcome.WOUND)
    with pytest.raises(InvalidTransitionError):
        match.record_outcome(Coordinate(2, 0), ShotOutcome.KILL)
    assert match.grid.get(Coordinate(2, 0)) is CellStatus.HIDDEN
    assert match.remaining_cells == 2


def test_contradictory_outcomes_raise() -> None:
    match = Match(5, 5, [3, 2])
    match.record_outcome(Coordinate(1, 1), ShotOutcome.MISS)
    with pytest.raises(InvalidTransitionError):
        match.record_outcome(Coordinate(1, 1), ShotOutcome.KILL)
    with pytest.raises(InvalidTransitionError):
        match.record_outcome(Coordinate(1, 1), ShotOutcome.WOUND)
    match.record_outcome(Coordinate(3, 3), ShotOutcome.WOUND)
    with pytest.raises(InvalidTransitionError):
        match.record_outcome(Coordinate(3, 3), ShotOutcome.MISS)


def test_out_of_bounds_outcome_raises() -> None:
    match = Match(5, 5, [2])
    with pytest.raises(OutOfBoundsError):
        match.record_outcome(Coordinate(5, 0), ShotOutcome.MISS)


def test_reconstruct_ship_stops_at_gaps_and_edges() -> None:
    match = Match(6, 1, [3, 1])
    grid = match.grid
    grid.set(Coordinate(0, 0), CellStatus.WOUNDED)
    grid.set(Coordinate(1, 0), CellStatus.WOUNDED)
    grid.set(Coordinate(3, 0), CellStatus.WOUNDED)
    cells = reconstruct_ship(grid, Coordinate(2, 0))
    assert set(cells) == {Coordinate(0, 0), Coordinate(1, 0), Coordinate(2, 0), Coordinate(3, 0)}
    assert reconstruct_ship(grid, Coordinate(5, 0)) == [Coordinate(5, 0)]


def test_single_cell_board() -> None:
    match = Match(1, 1, [1], rng=random.Random(0))
    assert match.next_target() == Coordinate(0, 0)
    match.record_outcome(Coordinate(0, 0), ShotOutcome.KILL)
    assert match.is_over()
    assert match.grid.get(Coordinate(0, 0)) is CellStatus.KILLED
    with pytest.raises(MatchStateError):
        match.next_target()
    with pytest.raises(MatchStateError):
        match.record_outcome(Coordinate(0, 0), ShotOutcome.KILL)
    assert match.is_over()


def test_first_search_target_on_standard_board() -> None:
    match = Match(10, 10, STANDARD_FLEET, rng=random.Random(2015))
    target = match.next_target()
    inventory = ShipInventory(STANDARD_FLEET)
    field = build_field(match.grid, inventory.alive_lengths(), inventory.multiplicity, list(match.grid.cells()))
    assert match.grid.get(target) is CellStatus.HIDDEN
    assert field[target.x, target.y] == field.max()
    assert Match(10, 10, STANDARD_FLEET, rng=random.Random(2015)).next_target() == target


def test_ai_requires_init() -> None:
    ai = TargetingAi(seed=1)
    with pytest.raises(MatchStateError):
        ai.next_target()
    with pytest.raises(MatchStateError):
        ai.record_outcome(Coordinate(0, 0), ShotOutcome.MISS)
    with pytest.raises(MatchStateError):
        ai.is_over()


def test_ai_starts_fresh_matches() -> None:
    ai = TargetingAi(seed=1)
    first = ai.init_match(1, 1, [1])
    ai.record_outcome(ai.next_target(), ShotOutcome.KILL)
    assert ai.is_over()
    second = ai.init_match(2, 2, [1])
    assert second is not first
    assert not ai.is_over()
    assert ai.matches_played == 2


def test_accepts_kill_checks_grid_and_fleet() -> None:
    match = Match(6, 6, [2])
    assert not match.accepts_kill(Coordinate(0, 0))

    match.record_outcome(Coordinate(0, 0), ShotOutcome.WOUND)
    match.record_outcome(Coordinate(3, 3), ShotOutcome.MISS)
    assert match.accepts_kill(Coordinate(1, 0))
    assert match.accepts_kill(Coordinate(0, 1))
    assert not match.accepts_kill(Coordinate(0, 0))
    assert not match.accepts_kill(Coordinate(3, 3))
    assert not match.accepts_kill(Coordinate(9, 9))

    match.record_outcome(Coordinate(1, 0), ShotOutcome.KILL)
    assert match.is_over()
    assert not match.accepts_kill(Coordinate(5, 5))
