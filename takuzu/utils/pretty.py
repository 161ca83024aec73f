"""Pretty-print helpers for Takuzu grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ..engine.grid import cell_symbol

if TYPE_CHECKING:
    from ..engine.grid import TakuzuGrid
    from ..engine.solver import SolveResult


def format_grid(grid: TakuzuGrid, *, coordinates: bool = False) -> str:
    """Render one row per line; ``coordinates`` adds row and column headers."""

    if not coordinates:
        return str(grid)
    width = grid.width
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.height):
        row_cells = [cell_symbol(grid.cell(r, c)) for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: TakuzuGrid, *, label: str | None = None, coordinates: bool = False, stream=None) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid, coordinates=coordinates), file=stream)


def print_solve_stats(result: SolveResult, *, stream=None) -> None:
    """Print counters collected while solving."""

    stream = stream or sys.stdout
    stats = result.stats
    grid = result.grid
    total_cells = grid.height * grid.width

    print(file=stream)
    print("--- Search ---", file=stream)
    print(f"  Size:            {grid.height} x {grid.width} ({total_cells} cells)", file=stream)
    print(f"  Propagated:      {stats.propagated_cells} cells in {stats.propagation_rounds} rounds", file=stream)
    print(f"  Look-ahead:      {stats.heuristic_cells}", file=stream)
    print(f"  Branches:        {stats.branches} ({stats.dead_branches} dead)", file=stream)
    print(f"  Max depth:       {stats.max_depth}", file=stream)
    print(f"  Elapsed:         {stats.elapsed_seconds:.3f}s", file=stream)

    if result.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation_messages:
            print(f"  {msg}", file=stream)
