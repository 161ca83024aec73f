"""Near-saturation look-ahead.

Local propagation misses cells that only become forced a few moves ahead. For
a lane whose dominant value is one or two cells short of half the lane, every
way of placing the missing cells is tried on a copy of the lane; positions that
never receive the dominant value in a legal completion must hold the other one.
"""

from __future__ import annotations

from itertools import combinations
from typing import List, Optional, Set, Tuple

from ..core.constants import CellValue
from ..core.exceptions import InvalidGridError
from ..core.models import Cell, Lane
from ..utils.logger import get_logger
from .grid import TakuzuGrid, lane_violations


LOGGER = get_logger(__name__)

MAX_MISSING = 2


def _surplus(grid: TakuzuGrid, lane: Lane) -> Optional[Tuple[CellValue, int]]:
    zeros = grid.count(lane, CellValue.ZERO)
    ones = grid.count(lane, CellValue.ONE)
    if zeros == ones:
        return None
    value, count = (CellValue.ZERO, zeros) if zeros > ones else (CellValue.ONE, ones)
    missing = lane.half - count
    if 1 <= missing <= MAX_MISSING:
        return value, missing
    return None


def _is_legal(values: List[Cell], lane: Lane, complete_neighbours: List[List[Cell]]) -> bool:
    if next(lane_violations(values, lane.label), None) is not None:
        return False
    return values not in complete_neighbours


def forced_positions(grid: TakuzuGrid, lane: Lane) -> List[int]:
    """Return lane positions provably holding the deficient value.

    Raises :class:`InvalidGridError` when no completion of the lane is legal.
    """

    surplus = _surplus(grid, lane)
    if surplus is None:
        return []
    value, missing = surplus
    deficient = value.opposite

    values = grid.values(lane)
    open_positions = [i for i, cell in enumerate(values) if cell is None]
    complete_neighbours = [
        grid.values(other)
        for other in grid.parallel_lanes(lane)
        if other.index != lane.index and grid.is_lane_complete(other)
    ]

    filled = [deficient if cell is None else cell for cell in values]
    possible: Set[int] = set()
    for chosen in combinations(open_positions, missing):
        trial = list(filled)
        for position in chosen:
            trial[position] = value
        if _is_legal(trial, lane, complete_neighbours):
            possible.update(chosen)

    if not possible:
        raise InvalidGridError(f"{lane.label.capitalize()} admits no legal completion")
    return [position for position in open_positions if position not in possible]


def apply_heuristics(grid: TakuzuGrid) -> int:
    """Commit every forced cell found on rows, then columns; return the count."""

    committed = 0
    for lane in grid.lanes():
        surplus = _surplus(grid, lane)
        if surplus is None:
            continue
        positions = forced_positions(grid, lane)
        if not positions:
            continue
        deficient = surplus[0].opposite
        for position in positions:
            grid[lane.cells[position]] = deficient
        committed += len(positions)
        LOGGER.debug(
            "Look-ahead fixed %d cells of %s to %s",
            len(positions),
            lane.label,
            deficient.value,
        )
    return committed
