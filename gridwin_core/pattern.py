from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import EmptyPattern, InvalidSize, RaggedPattern
from .geometry import Point, Size
from .grid import Grid

REQUIRED = '*'
DONT_CARE = '.'


@dataclass(frozen=True)
class PatternMask:
    """A win-condition template: a Grid whose set cells are required and unset cells are don't-care."""
    grid: Grid

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'PatternMask':
        """Parses authored rows; '*' marks a required cell, anything else is don't-care."""
        if len(rows) == 0:
            raise EmptyPattern("pattern needs at least one row")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise RaggedPattern(f"row {i} has length {len(row)}, expected {width}")
        if width == 0:
            raise InvalidSize("pattern rows must not be empty")
        cells = tuple(REQUIRED if ch == REQUIRED else None for row in rows for ch in row)
        return cls(Grid(Size(width, len(rows)), cells))

    @classmethod
    def blank(cls, size: Size) -> 'PatternMask':
        return cls(Grid.create(size))

    @property
    def size(self) -> Size:
        return self.grid.size

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def is_required(self, x: int, y: int) -> bool:
        return self.grid.get(x, y) is not None

    def required_cells(self) -> List[Point]:
        return [p for p in self.grid.coords() if self.grid.get(p.x, p.y) is not None]

    @property
    def required_count(self) -> int:
        return sum(1 for c in self.grid.cells if c is not None)

    def resize(self, new_size: Size) -> 'PatternMask':
        return PatternMask(self.grid.resize(new_size))

    def toggle(self, index: int) -> 'PatternMask':
        """Flips required/don't-care at `index`."""
        flipped = None if self.grid.at_index(index) is not None else REQUIRED
        return PatternMask(self.grid.with_cell(index, flipped))

    def to_rows(self) -> List[str]:
        return [''.join(REQUIRED if c is not None else DONT_CARE for c in row) for row in self.grid.rows()]

    def __str__(self) -> str:
        return '\n'.join(self.to_rows())


def line_patterns(length: int) -> Tuple[PatternMask, ...]:
    """Builds the 'length in a row' set: horizontal, vertical and both diagonals."""
    if length <= 0:
        raise InvalidSize(f"line length must be positive, got {length}")
    if length == 1:
        return (PatternMask.from_rows([REQUIRED]),)
    horizontal = PatternMask.from_rows([REQUIRED * length])
    vertical = PatternMask.from_rows([REQUIRED] * length)
    diagonal = PatternMask.from_rows(
        [DONT_CARE * i + REQUIRED + DONT_CARE * (length - i - 1) for i in range(length)]
    )
    anti_diagonal = PatternMask.from_rows(
        [DONT_CARE * (length - i - 1) + REQUIRED + DONT_CARE * i for i in range(length)]
    )
    return (horizontal, vertical, diagonal, anti_diagonal)


# Classic tic-tac-toe: three in a row, column or diagonal.
DEFAULT_PATTERNS: Tuple[PatternMask, ...] = line_patterns(3)
