"""Shared constants and enumerations for the Takuzu solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellValue(str, Enum):
    """The two determined values a cell can hold."""

    ZERO = "0"
    ONE = "1"

    @property
    def opposite(self) -> "CellValue":
        return CellValue.ONE if self is CellValue.ZERO else CellValue.ZERO


class LaneKind(str, Enum):
    """Orientation of a lane."""

    ROW = "ROW"
    COLUMN = "COLUMN"


class BranchStrategy(str, Enum):
    """How the search picks the cell to branch on."""

    FIRST = "first"
    CONSTRAINED = "constrained"


UNKNOWN_SYMBOL = "-"
COMMENT_PREFIX = "#"

# Values are tried in this order when branching.
BRANCH_VALUES: Tuple[CellValue, ...] = (CellValue.ZERO, CellValue.ONE)


@dataclass(frozen=True)
class Bounds:
    """Grid dimensions."""

    rows: int
    cols: int
