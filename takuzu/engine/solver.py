"""Solver orchestration.

Three escalating strategies run over a :class:`TakuzuGrid`:

  1. Propagation: local rules applied until a fixed point.
  2. Look-ahead: near-saturated lanes checked for cells forced a few moves ahead.
  3. Search: when both stall, branch on an undetermined cell and solve each
     hypothesis on its own clone, keeping the first that succeeds.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..core.constants import BRANCH_VALUES, BranchStrategy
from ..core.exceptions import InvalidGridError, NoSolutionError, SearchLimitError
from ..utils.logger import get_logger
from .grid import TakuzuGrid
from .heuristics import apply_heuristics
from .propagation import propagate_rounds
from .validator import GridValidator


LOGGER = get_logger(__name__)


@dataclass
class SolverConfig:
    """Tunables for the search; none of them changes which grids are solvable."""

    use_heuristics: bool = True
    branching: BranchStrategy = BranchStrategy.FIRST
    max_branches: Optional[int] = None


@dataclass
class SolveStats:
    propagation_rounds: int = 0
    propagated_cells: int = 0
    heuristic_cells: int = 0
    branches: int = 0
    dead_branches: int = 0
    max_depth: int = 0
    elapsed_seconds: float = 0.0

    def to_jsonable(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SolveResult:
    grid: TakuzuGrid
    stats: SolveStats = field(default_factory=SolveStats)
    validation_messages: List[str] = field(default_factory=list)


class TakuzuSolver:
    """Propagation, look-ahead, then depth-first search over grid clones."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()
        self.validator = GridValidator()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def solve(self, grid: TakuzuGrid) -> SolveResult:
        """Solve a copy of ``grid``; the caller's grid is left untouched.

        Raises :class:`InvalidGridError` if ``grid`` breaks a constraint,
        either as given or once reduced before any branching,
        :class:`NoSolutionError` if every branch fails and
        :class:`SearchLimitError` if ``max_branches`` is exhausted.
        """

        grid.validate()
        stats = SolveStats()
        started = time.perf_counter()
        LOGGER.info(
            "Solving %sx%s grid (%d of %d cells given)",
            grid.height,
            grid.width,
            grid.determined_count,
            grid.height * grid.width,
        )
        try:
            solution = self._search(grid.clone(), stats)
        finally:
            stats.elapsed_seconds = time.perf_counter() - started

        validation = self.validator.validate(solution, require_complete=True)
        if not validation.ok:
            raise InvalidGridError(f"Search produced an invalid grid: {validation.messages}")
        LOGGER.info(
            "Solved in %.3fs (%d branches, depth %d)",
            stats.elapsed_seconds,
            stats.branches,
            stats.max_depth,
        )
        return SolveResult(grid=solution, stats=stats, validation_messages=validation.messages)

    # ------------------------------------------------------------------
    # Deduction
    # ------------------------------------------------------------------
    def reduce(self, grid: TakuzuGrid, stats: Optional[SolveStats] = None) -> None:
        """Alternate propagation and look-ahead until neither changes ``grid``."""

        stats = stats if stats is not None else SolveStats()
        grid.validate()
        while True:
            for changed in propagate_rounds(grid):
                stats.propagation_rounds += 1
                stats.propagated_cells += changed
            if not self.config.use_heuristics:
                return
            committed = apply_heuristics(grid)
            if not committed:
                return
            stats.heuristic_cells += committed
            grid.validate()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def choose_cell(self, grid: TakuzuGrid) -> Optional[Tuple[int, int]]:
        if self.config.branching == BranchStrategy.CONSTRAINED:
            return self._most_constrained_cell(grid)
        return grid.first_undetermined()

    @staticmethod
    def _most_constrained_cell(grid: TakuzuGrid) -> Optional[Tuple[int, int]]:
        best_lane = None
        best_open = 0
        for lane in grid.lanes():
            open_cells = grid.count(lane, None)
            if open_cells and (best_lane is None or open_cells < best_open):
                best_lane, best_open = lane, open_cells
        if best_lane is None:
            return None
        return next(position for position in best_lane.cells if grid[position] is None)

    def _search(self, root: TakuzuGrid, stats: SolveStats) -> TakuzuGrid:
        # Each stack entry is an independent solve attempt on a private clone;
        # popping ZERO before ONE reproduces recursive depth-first order.
        stack: List[Tuple[TakuzuGrid, int]] = [(root, 0)]
        last_error: Optional[InvalidGridError] = None
        while stack:
            grid, depth = stack.pop()
            try:
                self.reduce(grid, stats)
            except InvalidGridError as exc:
                # No hypothesis yet: the puzzle itself is contradictory.
                if depth == 0:
                    raise
                stats.dead_branches += 1
                last_error = exc
                LOGGER.debug("Dropping branch at depth %d: %s", depth, exc)
                continue

            position = self.choose_cell(grid)
            if position is None:
                return grid

            if self.config.max_branches is not None and stats.branches >= self.config.max_branches:
                raise SearchLimitError(
                    f"Search gave up after {stats.branches} branches"
                )
            stats.branches += 1
            stats.max_depth = max(stats.max_depth, depth + 1)
            LOGGER.debug("Branching on %s at depth %d", position, depth)
            for value in reversed(BRANCH_VALUES):
                branch = grid.clone()
                branch[position] = value
                stack.append((branch, depth + 1))

        raise NoSolutionError("Puzzle has no solution") from last_error


def solve(grid: TakuzuGrid, config: Optional[SolverConfig] = None) -> SolveResult:
    """Solve ``grid`` with a fresh :class:`TakuzuSolver`."""

    return TakuzuSolver(config).solve(grid)
