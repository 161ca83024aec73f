"""Logging utilities for the Takuzu solver.

Loggers live under the ``takuzu`` namespace. The search clones and discards
many grids, so branch-level messages go to DEBUG and only the outcome of a
solve is logged at INFO.
"""

from __future__ import annotations

import logging
from typing import Optional, Union


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging with a sensible formatter.

    ``level`` is a :mod:`logging` level or its name (``"debug"``, ``"WARNING"``),
    as passed on the command line. Unknown names fall back to WARNING.
    """

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``takuzu`` namespace, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    if not name or name == "takuzu":
        return logging.getLogger("takuzu")
    if not name.startswith("takuzu."):
        name = f"takuzu.{name}"
    return logging.getLogger(name)
