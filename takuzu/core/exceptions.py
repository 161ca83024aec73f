"""Custom exception hierarchy for Takuzu parsing and solving."""

from __future__ import annotations


class TakuzuError(Exception):
    """Base exception for solver failures."""

    exit_code = 1
    status = "error"


class GridParseError(TakuzuError):
    """Raised when puzzle text cannot be turned into a grid."""

    exit_code = 4
    status = "parse_error"


class EmptyGridError(GridParseError):
    """Raised when the input holds no rows."""

    def __init__(self) -> None:
        super().__init__("Grid is empty")


class InvalidCharError(GridParseError):
    """Raised when a token is not one of ``0``, ``1`` or ``-``."""

    def __init__(self, char: str) -> None:
        super().__init__(f"Invalid character {char!r}")
        self.char = char


class WidthMismatchError(GridParseError):
    """Raised when a row length differs from the first row."""

    def __init__(self, expected: int, found: int) -> None:
        super().__init__(f"Row has {found} cells, expected {expected}")
        self.expected = expected
        self.found = found


class OddDimensionError(GridParseError):
    """Raised when the width or the height is odd."""

    def __init__(self, dimension: str, size: int) -> None:
        super().__init__(f"Grid {dimension} must be even, got {size}")
        self.dimension = dimension
        self.size = size


class InvalidGridError(TakuzuError):
    """Raised when a structural constraint is violated."""

    exit_code = 3
    status = "invalid_grid"


class AdjacentCellsError(InvalidGridError):
    """Three consecutive equal cells in a lane."""


class UnbalancedLaneError(InvalidGridError):
    """A lane holds more than half of one value."""


class DuplicateLaneError(InvalidGridError):
    """Two fully determined parallel lanes are identical."""


class NoSolutionError(TakuzuError):
    """Raised when the search exhausts every branch."""

    exit_code = 1
    status = "no_solution"


class SearchLimitError(TakuzuError):
    """Raised when the search exceeds its branch budget."""

    exit_code = 5
    status = "search_limit"
