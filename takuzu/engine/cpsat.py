"""CP-SAT Takuzu solver using OR-Tools.

Independent of the propagation/search engine; useful as a cross-check and as
an alternative backend for larger grids.
"""

from __future__ import annotations

from itertools import combinations
from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.constants import CellValue
from ..core.exceptions import SearchLimitError
from ..core.models import Lane
from ..utils.logger import get_logger
from .grid import TakuzuGrid

LOGGER = get_logger(__name__)


def solve_with_cp_sat(grid: TakuzuGrid, timeout: float = 10.0) -> Optional[TakuzuGrid]:
    """Fill ``grid`` via CP-SAT.

    Args:
        grid: Partially filled grid; it is not modified.
        timeout: Solver time limit in seconds.

    Returns:
        A solved copy of the grid, or None if the model is infeasible.

    Raises:
        SearchLimitError: the time limit expired before a verdict.
    """
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: One boolean per cell, givens fixed
    # ------------------------------------------------------------------
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    for r in range(grid.height):
        for c in range(grid.width):
            var = model.new_bool_var(f"x_{r}_{c}")
            given = grid[r, c]
            if given is not None:
                model.add(var == (1 if given == CellValue.ONE else 0))
            cell_vars[(r, c)] = var

    # ------------------------------------------------------------------
    # Step 2: Balance and run constraints per lane
    # ------------------------------------------------------------------
    for lane in grid.lanes():
        lane_vars = [cell_vars[position] for position in lane.cells]
        model.add(sum(lane_vars) == lane.half)
        for i in range(lane.length - 2):
            window = lane_vars[i:i + 3]
            model.add(sum(window) >= 1)
            model.add(sum(window) <= 2)

    # ------------------------------------------------------------------
    # Step 3: Parallel lanes must differ somewhere
    # ------------------------------------------------------------------
    for group in (grid.rows(), grid.columns()):
        for lane_a, lane_b in combinations(group, 2):
            _add_differ_constraint(model, cell_vars, lane_a, lane_b)

    # ------------------------------------------------------------------
    # Step 4: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4

    LOGGER.info(
        "CP-SAT: %dx%d grid, %d open cells, solving (timeout=%0.1fs)...",
        grid.height,
        grid.width,
        grid.height * grid.width - grid.determined_count,
        timeout,
    )

    status = solver.solve(model)

    if status == cp_model.INFEASIBLE:
        LOGGER.warning("CP-SAT: model is infeasible")
        return None
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: gave up (status=%s)", solver.status_name(status))
        raise SearchLimitError(
            f"CP-SAT reached no verdict within {timeout:0.1f}s "
            f"(status={solver.status_name(status)})"
        )

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 5: Extract solution
    # ------------------------------------------------------------------
    solution = grid.clone()
    for (r, c), var in cell_vars.items():
        solution[r, c] = CellValue.ONE if solver.value(var) else CellValue.ZERO
    return solution


def _add_differ_constraint(
    model: cp_model.CpModel,
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar],
    lane_a: Lane,
    lane_b: Lane,
) -> None:
    """Ensure two parallel lanes are not identical."""
    diffs: List[cp_model.IntVar] = []
    for pos, (cell_a, cell_b) in enumerate(zip(lane_a.cells, lane_b.cells)):
        b = model.new_bool_var(f"d_{lane_a.kind.value}_{lane_a.index}_{lane_b.index}_{pos}")
        model.add(cell_vars[cell_a] != cell_vars[cell_b]).only_enforce_if(b)
        diffs.append(b)
    model.add_bool_or(diffs)
