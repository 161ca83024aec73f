"""Puzzle file loading."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

from ..engine.grid import TakuzuGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

STDIN_PATH = "-"


def read_puzzle_lines(path: Path | str) -> List[str]:
    """Read raw puzzle rows from ``path``; ``-`` reads standard input."""

    if str(path) == STDIN_PATH:
        return sys.stdin.read().splitlines()
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    LOGGER.debug("Read %d lines from %s", len(lines), path)
    return lines


def load_grid(path: Path | str) -> TakuzuGrid:
    return TakuzuGrid.parse(read_puzzle_lines(path))
