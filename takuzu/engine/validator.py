"""Deterministic rule validation for Takuzu grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .grid import TakuzuGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Collects every violation of a grid instead of stopping at the first."""

    def validate(self, grid: TakuzuGrid, require_complete: bool = False) -> ValidationResult:
        messages: List[str] = []
        if require_complete:
            messages.extend(
                f"Cell ({row},{col}) is undetermined" for row, col in grid.undetermined_cells()
            )
        messages.extend(str(violation) for violation in grid.iter_violations())
        if messages:
            LOGGER.error("Validation failed: %s", "; ".join(messages))
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])
