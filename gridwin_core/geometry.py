from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> 'Point':
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    origin: Point
    size: Size

    def points(self) -> Iterator[Point]:
        """Iterates over the covered points in row-major order."""
        for y in range(self.origin.y, self.origin.y + self.size.height):
            for x in range(self.origin.x, self.origin.x + self.size.width):
                yield Point(x, y)


def area(size: Size) -> int:
    return size.area()
