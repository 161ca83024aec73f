"""Takuzu (Binairo) puzzle solver.

This package exposes the public API surface via:

- ``takuzu.engine.grid.TakuzuGrid``: parses, stores and validates grids.
- ``takuzu.engine.solver.TakuzuSolver``: propagation, look-ahead and search.
- ``takuzu.engine.cpsat.solve_with_cp_sat``: OR-Tools backend.
"""

from .engine.grid import TakuzuGrid
from .engine.solver import SolveResult, SolverConfig, TakuzuSolver, solve

__all__ = [
    "TakuzuGrid",
    "TakuzuSolver",
    "SolverConfig",
    "SolveResult",
    "solve",
]

__version__ = "0.1.0"
