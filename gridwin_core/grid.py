from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import CellOccupied, InvalidSize, OutOfBounds
from .geometry import Point, Size

Mark = str  # 'X', 'O', or '*' for pattern masks
Cell = Optional[Mark]


def _check_size(size: Size) -> None:
    if size.width <= 0 or size.height <= 0:
        raise InvalidSize(f"size must be positive, got {size.width}x{size.height}")


@dataclass(frozen=True)
class Grid:
    """An immutable rectangular board of optional single-character marks."""
    size: Size
    cells: Tuple[Cell, ...]  # row-major, length == width * height

    def __post_init__(self) -> None:
        _check_size(self.size)
        if len(self.cells) != self.size.area():
            raise InvalidSize(
                f"expected {self.size.area()} cells for {self.size.width}x{self.size.height}, got {len(self.cells)}"
            )

    @classmethod
    def create(cls, size: Size) -> 'Grid':
        """Creates a grid of the given size with every cell unset."""
        _check_size(size)
        return cls(size, (None,) * size.area())

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Cell]]) -> 'Grid':
        """Builds a grid from a list of equal-length rows; mostly handy in tests."""
        rows = [tuple(r) for r in rows]
        if not rows or not rows[0]:
            raise InvalidSize("rows must be non-empty")
        width = len(rows[0])
        flat: List[Cell] = []
        for r in rows:
            if len(r) != width:
                raise InvalidSize("rows must all have the same length")
            flat.extend(r)
        return cls(Size(width, len(rows)), tuple(flat))

    @property
    def width(self) -> int:
        return self.size.width

    @property
    def height(self) -> int:
        return self.size.height

    def index(self, x: int, y: int) -> int:
        """Calculates the 1D index for a given column and row."""
        if not self.size.contains(x, y):
            raise OutOfBounds(f"({x}, {y}) outside {self.width}x{self.height}")
        return y * self.width + x

    def get(self, x: int, y: int) -> Cell:
        return self.cells[self.index(x, y)]

    def at_index(self, index: int) -> Cell:
        if not 0 <= index < len(self.cells):
            raise OutOfBounds(f"index {index} outside [0, {len(self.cells)})")
        return self.cells[index]

    def coords(self) -> Iterator[Point]:
        """Iterates over all coordinates in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Point(x, y)

    def with_mark(self, index: int, mark: Mark) -> 'Grid':
        """Returns a copy with cell `index` set to `mark`. Never overwrites."""
        if self.at_index(index) is not None:
            raise CellOccupied(f"cell {index} already holds {self.cells[index]!r}")
        cells = list(self.cells)
        cells[index] = mark
        return Grid(self.size, tuple(cells))

    def with_cell(self, index: int, value: Cell) -> 'Grid':
        """Returns a copy with cell `index` replaced, occupied or not."""
        self.at_index(index)
        cells = list(self.cells)
        cells[index] = value
        return Grid(self.size, tuple(cells))

    def resize(self, new_size: Size) -> 'Grid':
        """Returns a grid of `new_size` keeping the top-left aligned overlap."""
        _check_size(new_size)
        cells: List[Cell] = [None] * new_size.area()
        for y in range(min(self.height, new_size.height)):
            for x in range(min(self.width, new_size.width)):
                cells[y * new_size.width + x] = self.cells[y * self.width + x]
        return Grid(new_size, tuple(cells))

    def is_full(self) -> bool:
        return all(c is not None for c in self.cells)

    def empty_indices(self) -> List[int]:
        return [i for i, c in enumerate(self.cells) if c is None]

    def rows(self) -> List[Tuple[Cell, ...]]:
        w = self.width
        return [self.cells[y * w:(y + 1) * w] for y in range(self.height)]

    def pretty(self, highlight: Optional[Iterable[bool]] = None) -> str:
        """Generates a human-readable rendering; highlighted marks are bracketed."""
        lit = tuple(highlight) if highlight is not None else (False,) * len(self.cells)
        lines: List[str] = []
        for y, row in enumerate(self.rows()):
            out: List[str] = []
            for x, cell in enumerate(row):
                text = cell if cell is not None else "."
                out.append(f"[{text}]" if lit[y * self.width + x] else f" {text} ")
            lines.append("".join(out))
        return "\n".join(lines)
