"""Data models supporting the Takuzu solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import CellValue, LaneKind

Cell = Optional[CellValue]


@dataclass
class Lane:
    """A row or a column of the grid, addressed by its index."""

    kind: LaneKind
    index: int
    length: int
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            if self.kind == LaneKind.ROW:
                self._cells = [(self.index, i) for i in range(self.length)]
            else:
                self._cells = [(i, self.index) for i in range(self.length)]
        return self._cells

    @property
    def half(self) -> int:
        return self.length // 2

    @property
    def label(self) -> str:
        return f"{self.kind.value.lower()} {self.index}"
