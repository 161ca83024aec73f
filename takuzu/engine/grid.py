"""Grid representation and lane helpers."""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import COMMENT_PREFIX, UNKNOWN_SYMBOL, Bounds, CellValue, LaneKind
from ..core.exceptions import (AdjacentCellsError, DuplicateLaneError, EmptyGridError,
                               InvalidCharError, InvalidGridError, OddDimensionError,
                               UnbalancedLaneError, WidthMismatchError)
from ..core.models import Cell, Lane
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

SYMBOLS: Dict[str, Cell] = {
    CellValue.ZERO.value: CellValue.ZERO,
    CellValue.ONE.value: CellValue.ONE,
    UNKNOWN_SYMBOL: None,
}


def cell_symbol(cell: Cell) -> str:
    return cell.value if cell is not None else UNKNOWN_SYMBOL


def tokenize(line: str) -> List[Cell]:
    """Turn one text row into cells, ignoring whitespace and ``#`` comments."""

    text = line.split(COMMENT_PREFIX, 1)[0]
    cells: List[Cell] = []
    for char in text:
        if char.isspace():
            continue
        if char not in SYMBOLS:
            raise InvalidCharError(char)
        cells.append(SYMBOLS[char])
    return cells


def lane_violations(values: Sequence[Cell], label: str) -> Iterator[InvalidGridError]:
    """Yield the triple-run and balance violations of a single lane.

    Undetermined cells never take part in a run, and a partial lane is only
    rejected once one value exceeds half of the lane.
    """

    for i in range(len(values) - 2):
        first = values[i]
        if first is not None and first == values[i + 1] == values[i + 2]:
            yield AdjacentCellsError(
                f"Three consecutive {first.value} in {label} starting at {i}"
            )
    half = len(values) // 2
    counts = Counter(values)
    for value in CellValue:
        if counts[value] > half:
            yield UnbalancedLaneError(
                f"{label.capitalize()} holds {counts[value]} x {value.value}, at most {half} allowed"
            )


class TakuzuGrid:
    """Rectangular matrix of cells with per-lane histograms."""

    def __init__(self, cells: Sequence[Sequence[Cell]]) -> None:
        rows = [list(row) for row in cells]
        self._check_dimensions(rows)
        self.cells: List[List[Cell]] = rows
        self.bounds = Bounds(rows=len(rows), cols=len(rows[0]))
        self._rows = [Lane(LaneKind.ROW, r, self.bounds.cols) for r in range(self.bounds.rows)]
        self._columns = [Lane(LaneKind.COLUMN, c, self.bounds.rows) for c in range(self.bounds.cols)]
        self._histograms: Dict[Tuple[LaneKind, int], Counter] = {}
        for lane in self.lanes():
            self._histograms[(lane.kind, lane.index)] = Counter(self.values(lane))

    @staticmethod
    def _check_dimensions(rows: List[List[Cell]]) -> None:
        if not rows or not rows[0]:
            raise EmptyGridError()
        width = len(rows[0])
        if width % 2:
            raise OddDimensionError("width", width)
        for row in rows[1:]:
            if len(row) != width:
                raise WidthMismatchError(width, len(row))
        if len(rows) % 2:
            raise OddDimensionError("height", len(rows))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def parse(cls, lines: Iterable[str]) -> "TakuzuGrid":
        """Build a grid from text rows and check it against every constraint.

        Each non-whitespace character outside a ``#`` comment is one cell
        (``0``, ``1`` or ``-``); rows without cells are skipped.
        """

        rows: List[List[Cell]] = []
        for line in lines:
            cells = tokenize(line)
            if not cells:
                continue
            if not rows:
                if len(cells) % 2:
                    raise OddDimensionError("width", len(cells))
            elif len(cells) != len(rows[0]):
                raise WidthMismatchError(len(rows[0]), len(cells))
            rows.append(cells)

        grid = cls(rows)
        grid.validate()
        LOGGER.debug(
            "Parsed %sx%s grid with %s given cells",
            grid.height,
            grid.width,
            grid.determined_count,
        )
        return grid

    def clone(self) -> "TakuzuGrid":
        """Return an independent copy; lanes are shared since they only hold coordinates."""

        other = TakuzuGrid.__new__(TakuzuGrid)
        other.cells = [row[:] for row in self.cells]
        other.bounds = self.bounds
        other._rows = self._rows
        other._columns = self._columns
        other._histograms = {key: Counter(hist) for key, hist in self._histograms.items()}
        return other

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self.bounds.cols

    @property
    def height(self) -> int:
        return self.bounds.rows

    def __getitem__(self, position: Tuple[int, int]) -> Cell:
        row, col = position
        return self.cells[row][col]

    def __setitem__(self, position: Tuple[int, int], value: Cell) -> None:
        row, col = position
        old = self.cells[row][col]
        if old is value:
            return
        for key in ((LaneKind.ROW, row), (LaneKind.COLUMN, col)):
            histogram = self._histograms[key]
            histogram[old] -= 1
            histogram[value] += 1
        self.cells[row][col] = value

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    # ------------------------------------------------------------------
    # Lane queries
    # ------------------------------------------------------------------
    def rows(self) -> List[Lane]:
        return list(self._rows)

    def columns(self) -> List[Lane]:
        return list(self._columns)

    def lanes(self) -> List[Lane]:
        return self._rows + self._columns

    def lane(self, kind: LaneKind, index: int) -> Lane:
        return self._rows[index] if kind == LaneKind.ROW else self._columns[index]

    def parallel_lanes(self, lane: Lane) -> List[Lane]:
        return self.rows() if lane.kind == LaneKind.ROW else self.columns()

    def values(self, lane: Lane) -> List[Cell]:
        return [self.cells[row][col] for row, col in lane.cells]

    def count(self, lane: Lane, value: Cell) -> int:
        return self._histograms[(lane.kind, lane.index)][value]

    def is_lane_complete(self, lane: Lane) -> bool:
        return self.count(lane, None) == 0

    def undetermined_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield undetermined positions in row-major order."""

        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell is None:
                    yield r, c

    def first_undetermined(self) -> Optional[Tuple[int, int]]:
        return next(self.undetermined_cells(), None)

    @property
    def determined_count(self) -> int:
        return sum(lane.length - self.count(lane, None) for lane in self._rows)

    def is_filled(self) -> bool:
        return all(self.is_lane_complete(lane) for lane in self._rows)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def iter_violations(self) -> Iterator[InvalidGridError]:
        """Yield every constraint violation currently present in the grid."""

        for lane in self.lanes():
            yield from lane_violations(self.values(lane), lane.label)

        for group in (self._rows, self._columns):
            complete = [(lane, self.values(lane)) for lane in group if self.is_lane_complete(lane)]
            for (lane_a, values_a), (lane_b, values_b) in combinations(complete, 2):
                if values_a == values_b:
                    yield DuplicateLaneError(
                        f"{lane_a.label.capitalize()} and {lane_b.label} are identical"
                    )

    def validate(self) -> None:
        """Raise the first violation found, if any."""

        for violation in self.iter_violations():
            raise violation

    def is_valid(self) -> bool:
        return next(self.iter_violations(), None) is None

    def is_solved(self) -> bool:
        return self.is_filled() and self.is_valid()

    # ------------------------------------------------------------------
    # Rendering and serialization
    # ------------------------------------------------------------------
    def to_lines(self) -> List[str]:
        return [" ".join(cell_symbol(cell) for cell in row) for row in self.cells]

    def to_jsonable(self) -> List[List[Optional[str]]]:
        return [[cell.value if cell is not None else None for cell in row] for row in self.cells]

    def __str__(self) -> str:
        return "\n".join(self.to_lines())

    def __repr__(self) -> str:
        return f"TakuzuGrid({self.height}x{self.width}, determined={self.determined_count})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TakuzuGrid):
            return NotImplemented
        return self.cells == other.cells

    __hash__ = None  # type: ignore[assignment]
