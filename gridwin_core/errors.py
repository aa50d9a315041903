"""
Error hierarchy for the gridwin core.

Every error signals a programming or configuration mistake in the caller and
is raised at the point of construction or access. UI-level races (clicking a
filled cell, jumping to a stale step) never raise; the timeline ignores them.
"""
from __future__ import annotations

__all__ = [
    "GridError",
    "InvalidSize",
    "RaggedPattern",
    "EmptyPattern",
    "CellOccupied",
    "OutOfBounds",
]


class GridError(ValueError):
    """Base class for all gridwin errors."""
    code: str = "GRID_ERROR"


class InvalidSize(GridError):
    """A board or pattern dimension is not a positive integer."""
    code = "INVALID_SIZE"


class RaggedPattern(GridError):
    """Pattern rows do not all have the same length."""
    code = "RAGGED_PATTERN"


class EmptyPattern(GridError):
    """Pattern has no rows."""
    code = "EMPTY_PATTERN"


class CellOccupied(GridError):
    """Attempt to mark a cell that already holds a mark."""
    code = "CELL_OCCUPIED"


class OutOfBounds(GridError, IndexError):
    """Index or coordinate outside the grid extent."""
    code = "OUT_OF_BOUNDS"
