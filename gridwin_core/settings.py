from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Sequence, Tuple

from .errors import GridError, InvalidSize, OutOfBounds
from .geometry import Size
from .grid import Mark
from .pattern import DEFAULT_PATTERNS, PatternMask, line_patterns

DEFAULT_MARKS: Tuple[Mark, Mark] = ('X', 'O')


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise GridError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class GameSettings:
    """Board size, ordered win patterns and the two player marks. Every edit returns a new object."""
    board_size: Size
    win_masks: Tuple[PatternMask, ...] = DEFAULT_PATTERNS
    marks: Tuple[Mark, Mark] = DEFAULT_MARKS

    def __post_init__(self) -> None:
        if self.board_size.width <= 0 or self.board_size.height <= 0:
            raise InvalidSize(
                f"board size must be positive, got {self.board_size.width}x{self.board_size.height}"
            )
        if len(self.marks) != 2 or self.marks[0] == self.marks[1]:
            raise GridError(f"need two distinct marks, got {self.marks!r}")
        for mark in self.marks:
            if not isinstance(mark, str) or len(mark) != 1:
                raise GridError(f"marks must be single characters, got {mark!r}")

    def with_board_size(self, size: Size) -> 'GameSettings':
        return replace(self, board_size=size)

    def with_masks(self, masks: Sequence[PatternMask]) -> 'GameSettings':
        return replace(self, win_masks=tuple(masks))

    def with_mask(self, position: int, mask: PatternMask) -> 'GameSettings':
        """Replaces the pattern at `position`."""
        self._check_position(position)
        masks = list(self.win_masks)
        masks[position] = mask
        return replace(self, win_masks=tuple(masks))

    def add_mask(self, mask: PatternMask) -> 'GameSettings':
        return replace(self, win_masks=self.win_masks + (mask,))

    def remove_mask(self, position: int) -> 'GameSettings':
        self._check_position(position)
        masks = list(self.win_masks)
        del masks[position]
        return replace(self, win_masks=tuple(masks))

    def _check_position(self, position: int) -> None:
        if not 0 <= position < len(self.win_masks):
            raise OutOfBounds(f"pattern {position} outside [0, {len(self.win_masks)})")


def default_settings() -> GameSettings:
    """Settings from GRIDWIN_WIDTH / GRIDWIN_HEIGHT / GRIDWIN_LINE, falling back to classic 3x3."""
    width = _env_int('GRIDWIN_WIDTH', 3)
    height = _env_int('GRIDWIN_HEIGHT', 3)
    line = _env_int('GRIDWIN_LINE', 0)
    masks = line_patterns(line) if line > 0 else DEFAULT_PATTERNS
    return GameSettings(board_size=Size(width, height), win_masks=masks)


def max_editable_size() -> int:
    """Upper bound the editing surfaces put on board and pattern dimensions."""
    return _env_int('GRIDWIN_MAX_SIZE', 5)
