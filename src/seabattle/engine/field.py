"""Expectation field: how many consistent ship placements cover each cell."""

from __future__ import annotations

import logging
from typing import Collection, Iterable, Iterator, Mapping, TypeAlias

import numpy as np
import numpy.typing as npt

from seabattle.telemetry import get_tracer

from .geometry import Coordinate, Orientation, Placement
from .grid import CellStatus, Grid
from .placement import can_place

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.field")

ScoreField: TypeAlias = npt.NDArray[np.int64]


def wound_coefficient(grid: Grid, multiplicity: Mapping[int, int]) -> int:
    """Per-wound bonus large enough to outrank any single placement's base weight."""
    max_count = max(multiplicity.values(), default=1)
    return max(grid.width, grid.height) * max_count + 1


def candidate_placements(grid: Grid, lengths: Iterable[int]) -> Iterator[Placement]:
    """Yield every placement of the given lengths whose cells all lie on the grid."""
    for length in lengths:
        for orientation in Orientation:
            step = orientation.step
            span_x = (length - 1) * step.x
            span_y = (length - 1) * step.y
            for x in range(grid.width - span_x):
                for y in range(grid.height - span_y):
                    yield Placement(Coordinate(x, y), length, orientation)


def build_field(
    grid: Grid,
    alive_lengths: Iterable[int],
    multiplicity: Mapping[int, int],
    active_cells: Collection[Coordinate],
    wound_bias: bool = False,
) -> ScoreField:
    """Sum placement weights over every placement consistent with ``grid``.

    Only placements covering at least one of ``active_cells`` count. Each one
    adds ``length * multiplicity[length]`` to every cell it covers, plus
    ``wound_coefficient * wounded cells covered`` when ``wound_bias`` is set.
    The result is indexed ``[x, y]``.
    """
    lengths = [length for length in alive_lengths if length > 1]
    field: ScoreField = np.zeros((grid.width, grid.height), dtype=np.int64)
    if not lengths:
        return field

    active = set(active_cells)
    coefficient = wound_coefficient(grid, multiplicity) if wound_bias else 0

    with tracer.start_as_current_span("field.build") as span:
        span.set_attribute("field.lengths", lengths)
        span.set_attribute("field.active_cells", len(active))
        span.set_attribute("field.wound_bias", wound_bias)
        considered = 0
        for placement in candidate_placements(grid, lengths):
            cells = placement.cells()
            if active.isdisjoint(cells):
                continue
            if not can_place(grid, placement.origin, placement.length, placement.orientation):
                continue
            considered += 1
            weight = placement.length * multiplicity.get(placement.length, 0)
            if coefficient:
                wounded = sum(1 for cell in cells if grid.get(cell) is CellStatus.WOUNDED)
                weight += wounded * coefficient
            for cell in cells:
                field[cell.x, cell.y] += weight
        span.set_attribute("field.placements", considered)

    logger.debug(
        "field_built",
        extra={"lengths": lengths, "placements": considered, "max_score": int(field.max())},
    )
    return field
