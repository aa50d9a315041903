"""
Win-condition matching.

A pattern matches at an origin when every required cell of the mask, translated
by the origin, holds the same mark on the board. Patterns are only translated,
never rotated or mirrored. Search order is: patterns in configured order, then
origins top-to-bottom, left-to-right.
"""
from __future__ import annotations

from typing import Iterator, Optional, Sequence, Tuple

from .geometry import Point
from .grid import Grid, Mark
from .pattern import PatternMask
from .victory import VictoryResult


def match_at(board: Grid, mask: PatternMask, origin: Point) -> Optional[Mark]:
    """Returns the common mark if `mask` matches `board` at `origin`, else None."""
    if origin.x < 0 or origin.y < 0:
        return None
    if origin.y + mask.height > board.height or origin.x + mask.width > board.width:
        return None
    candidate: Optional[Mark] = None
    cells = board.cells
    for my in range(mask.height):
        row_start = (origin.y + my) * board.width + origin.x
        for mx in range(mask.width):
            if not mask.is_required(mx, my):
                continue
            mark = cells[row_start + mx]
            if mark is None:
                return None
            if candidate is None:
                candidate = mark
            elif mark != candidate:
                return None
    # A mask with no required cells leaves candidate unset and never wins.
    return candidate


def origins(board: Grid, mask: PatternMask) -> Iterator[Point]:
    """All origins at which `mask` fits inside `board`, row-major."""
    for y in range(board.height - mask.height + 1):
        for x in range(board.width - mask.width + 1):
            yield Point(x, y)


def iter_victories(board: Grid, masks: Sequence[PatternMask]) -> Iterator[Tuple[int, VictoryResult]]:
    """Yields (pattern index, result) for every match, in search order."""
    for i, mask in enumerate(masks):
        for origin in origins(board, mask):
            winner = match_at(board, mask, origin)
            if winner is not None:
                yield i, VictoryResult(winner=winner, mask=mask, origin=origin)


def find_victory(board: Grid, masks: Sequence[PatternMask]) -> Optional[VictoryResult]:
    """Finds the first pattern occurring on the board, or None."""
    for _, result in iter_victories(board, masks):
        return result
    return None
