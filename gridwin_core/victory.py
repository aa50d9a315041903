from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .geometry import Point, Size
from .grid import Mark
from .pattern import PatternMask


@dataclass(frozen=True)
class VictoryResult:
    """Records a successful match: who won, with which pattern, and where."""
    winner: Mark
    mask: PatternMask
    origin: Point

    def winning_cells(self) -> List[Point]:
        """Board coordinates of the mask's required cells at this origin."""
        return [p.offset(self.origin.x, self.origin.y) for p in self.mask.required_cells()]

    def winning_indices(self, board_size: Size) -> List[int]:
        return [p.y * board_size.width + p.x for p in self.winning_cells() if board_size.contains(p.x, p.y)]

    def highlight_mask(self, board_size: Size) -> Tuple[bool, ...]:
        """Maps the winning cells onto a full-board boolean array for highlighting."""
        lit = [False] * board_size.area()
        for i in self.winning_indices(board_size):
            lit[i] = True
        return tuple(lit)
