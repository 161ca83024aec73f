"""CLI entrypoint for the Takuzu solver."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from takuzu.core.constants import BranchStrategy
from takuzu.core.exceptions import NoSolutionError, TakuzuError
from takuzu.engine.cpsat import solve_with_cp_sat
from takuzu.engine.grid import TakuzuGrid
from takuzu.engine.solver import SolveResult, SolverConfig, TakuzuSolver
from takuzu.io.reader import read_puzzle_lines
from takuzu.utils.logger import configure_logging, get_logger
from takuzu.utils.pretty import pretty_print_grid, print_solve_stats

LOGGER = get_logger("takuzu.cli")

EXIT_UNREADABLE = 6


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve Takuzu (Binairo) puzzles",
    )
    parser.add_argument(
        "puzzle",
        type=str,
        help="Puzzle file with rows of 0, 1 and - (use - for stdin)",
    )
    parser.add_argument(
        "--backend",
        type=str,
        choices=["search", "cpsat"],
        default="search",
        help="Propagation and backtracking search, or OR-Tools CP-SAT",
    )
    parser.add_argument(
        "--branching",
        type=str,
        choices=[s.value for s in BranchStrategy],
        default=BranchStrategy.FIRST.value,
        help="Cell choice when the search has to guess",
    )
    parser.add_argument(
        "--no-heuristics",
        action="store_true",
        help="Disable the near-saturation look-ahead",
    )
    parser.add_argument(
        "--max-branches",
        type=int,
        default=None,
        help="Give up after this many branching decisions",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="CP-SAT time limit in seconds",
    )
    parser.add_argument("--coordinates", action="store_true", help="Print row and column headers")
    parser.add_argument("--stats", action="store_true", help="Print search statistics")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def write_payload(path: Path, payload: Dict[str, Any]) -> None:
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.max_branches is not None and args.max_branches < 0:
        parser.error("--max-branches must be non-negative")
    if args.backend == "cpsat" and (args.no_heuristics or args.max_branches is not None):
        parser.error("--no-heuristics and --max-branches only apply to --backend search")

    try:
        lines = read_puzzle_lines(args.puzzle)
    except OSError as exc:
        LOGGER.error("Cannot read puzzle %s: %s", args.puzzle, exc)
        print(f"Error: cannot read {args.puzzle}: {exc}", file=sys.stderr)
        return EXIT_UNREADABLE

    payload: Dict[str, Any] = {
        "input": None,
        "solution": None,
        "status": "solved",
        "message": None,
        "stats": None,
    }

    try:
        grid = TakuzuGrid.parse(lines)
        payload["input"] = grid.to_jsonable()
        pretty_print_grid(grid, label="Input:", coordinates=args.coordinates)

        if args.backend == "cpsat":
            solution = solve_with_cp_sat(grid, timeout=args.timeout)
            if solution is None:
                raise NoSolutionError("CP-SAT proved the puzzle has no solution")
            result = SolveResult(grid=solution)
        else:
            config = SolverConfig(
                use_heuristics=not args.no_heuristics,
                branching=BranchStrategy(args.branching),
                max_branches=args.max_branches,
            )
            result = TakuzuSolver(config).solve(grid)
    except TakuzuError as exc:
        LOGGER.error("%s: %s", type(exc).__name__, exc)
        print(f"Error: {exc}", file=sys.stderr)
        payload["status"] = exc.status
        payload["message"] = str(exc)
        if args.output:
            write_payload(args.output, payload)
        return exc.exit_code

    pretty_print_grid(result.grid, label="Solution:", coordinates=args.coordinates)
    if args.stats:
        print_solve_stats(result)

    payload["solution"] = result.grid.to_jsonable()
    payload["stats"] = result.stats.to_jsonable()
    if args.output:
        write_payload(args.output, payload)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
