"""Deterministic constraint propagation.

Every undetermined cell is checked against four local rules, in order:

1. lane saturation: half of the lane already holds one value;
2. preceding pair: the two previous cells are equal;
3. following pair: the two next cells are equal;
4. surrounding pair: both neighbours are equal.

The first rule that applies fixes the cell to the value that keeps the lane
legal. Rounds sweep all rows, then all columns, and repeat until a round
changes nothing.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from ..core.constants import CellValue
from ..core.models import Cell, Lane
from ..utils.logger import get_logger
from .grid import TakuzuGrid


LOGGER = get_logger(__name__)


def _opposite_of_pair(first: Cell, second: Cell) -> Cell:
    if first is not None and first == second:
        return first.opposite
    return None


def _saturated_complement(grid: TakuzuGrid, lane: Lane) -> Cell:
    for value in CellValue:
        if grid.count(lane, value) >= lane.half:
            return value.opposite
    return None


def deduce(grid: TakuzuGrid, lane: Lane, position: int) -> Optional[CellValue]:
    """Return the value forced at ``position`` of ``lane``, or ``None``."""

    values: List[Cell] = grid.values(lane)
    size = lane.length

    value = _saturated_complement(grid, lane)
    if value is None and position >= 2:
        value = _opposite_of_pair(values[position - 2], values[position - 1])
    if value is None and position + 2 < size:
        value = _opposite_of_pair(values[position + 1], values[position + 2])
    if value is None and 1 <= position < size - 1:
        value = _opposite_of_pair(values[position - 1], values[position + 1])
    return value


def _sweep(grid: TakuzuGrid, lanes: List[Lane]) -> int:
    changed = 0
    for lane in lanes:
        for position, (row, col) in enumerate(lane.cells):
            if grid[row, col] is not None:
                continue
            value = deduce(grid, lane, position)
            if value is not None:
                grid[row, col] = value
                changed += 1
    return changed


def propagate_round(grid: TakuzuGrid) -> int:
    """Run one row sweep and one column sweep; return the number of cells set."""

    return _sweep(grid, grid.rows()) + _sweep(grid, grid.columns())


def propagate_rounds(grid: TakuzuGrid) -> Iterator[int]:
    """Yield the number of cells set by each productive round.

    The grid is validated after every productive round, before the count is
    yielded, so a contradiction surfaces as soon as it appears.
    """

    while True:
        changed = propagate_round(grid)
        if not changed:
            return
        grid.validate()
        yield changed


def propagate(grid: TakuzuGrid) -> int:
    """Propagate to a fixed point, validating after every productive round.

    Raises :class:`~takuzu.core.exceptions.InvalidGridError` as soon as a
    round produces a contradiction.
    """

    total = 0
    rounds = 0
    for changed in propagate_rounds(grid):
        rounds += 1
        total += changed
    LOGGER.debug("Propagation set %d cells in %d rounds", total, rounds)
    return total
