from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple, Union

from .errors import GridError, InvalidSize, OutOfBounds
from .geometry import Size
from .grid import Grid, Mark
from .matcher import find_victory
from .pattern import PatternMask
from .settings import GameSettings
from .victory import VictoryResult

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    IN_PROGRESS = 'in_progress'
    WON = 'won'
    TIED = 'tied'


@dataclass(frozen=True)
class GameTimeline:
    """Linear history of boards plus a cursor. Moves after a jump discard the later entries."""
    settings: GameSettings
    history: Tuple[Grid, ...]
    cursor: int = 0

    def __post_init__(self) -> None:
        if not self.history:
            raise GridError("history needs at least the empty board")
        if any(c is not None for c in self.history[0].cells):
            raise GridError("history must start from the empty board")
        for step, board in enumerate(self.history):
            if board.size != self.settings.board_size:
                raise InvalidSize(
                    f"step {step} is {board.width}x{board.height}, board is "
                    f"{self.settings.board_size.width}x{self.settings.board_size.height}"
                )
        if not 0 <= self.cursor < len(self.history):
            raise OutOfBounds(f"cursor {self.cursor} outside [0, {len(self.history)})")

    @classmethod
    def start(
        cls,
        settings: Union[GameSettings, Size],
        masks: Optional[Sequence[PatternMask]] = None,
    ) -> 'GameTimeline':
        """Creates a timeline holding only the empty board."""
        if isinstance(settings, Size):
            settings = GameSettings(board_size=settings)
        if masks is not None:
            settings = settings.with_masks(masks)
        return cls(settings=settings, history=(Grid.create(settings.board_size),), cursor=0)

    def reset(self) -> 'GameTimeline':
        return GameTimeline.start(self.settings)

    @property
    def board_size(self) -> Size:
        return self.settings.board_size

    @property
    def masks(self) -> Tuple[PatternMask, ...]:
        return self.settings.win_masks

    @property
    def current(self) -> Grid:
        return self.history[self.cursor]

    @property
    def turn(self) -> int:
        return len(self.history)

    @property
    def next_mark(self) -> Mark:
        first, second = self.settings.marks
        return first if self.cursor % 2 == 0 else second

    def _clamp(self, step: int) -> int:
        return max(0, min(step, len(self.history) - 1))

    def victory(self, step: Optional[int] = None) -> Optional[VictoryResult]:
        board = self.current if step is None else self.history[self._clamp(step)]
        return find_victory(board, self.masks)

    def status(self, step: Optional[int] = None) -> Status:
        """Won if a pattern matches, else tied if the board is full, else in progress."""
        board = self.current if step is None else self.history[self._clamp(step)]
        if find_victory(board, self.masks) is not None:
            return Status.WON
        if board.is_full():
            return Status.TIED
        return Status.IN_PROGRESS

    def winner(self, step: Optional[int] = None) -> Optional[Mark]:
        result = self.victory(step)
        return result.winner if result is not None else None

    @property
    def active_victory(self) -> Optional[VictoryResult]:
        return self.victory()

    @property
    def current_status(self) -> Status:
        return self.status()

    def highlight(self) -> Tuple[bool, ...]:
        result = self.active_victory
        if result is None:
            return (False,) * self.board_size.area()
        return result.highlight_mask(self.board_size)

    def apply_move(self, index: int) -> 'GameTimeline':
        """Places the next mark at `index`. Illegal requests return this timeline unchanged."""
        board = self.current
        if not 0 <= index < len(board.cells):
            logger.debug("ignoring move %d: outside board of %d cells", index, len(board.cells))
            return self
        if board.cells[index] is not None:
            logger.debug("ignoring move %d: cell holds %r", index, board.cells[index])
            return self
        if self.status() is not Status.IN_PROGRESS:
            logger.debug("ignoring move %d: game already decided at step %d", index, self.cursor)
            return self
        new_board = board.with_mark(index, self.next_mark)
        history = self.history[:self.cursor + 1] + (new_board,)
        return replace(self, history=history, cursor=len(history) - 1)

    def jump_to(self, step: int) -> 'GameTimeline':
        """Moves the cursor without touching history; out-of-range steps are clamped."""
        return replace(self, cursor=self._clamp(step))

    def status_text(self) -> str:
        text = f"Turn {self.turn}. "
        result = self.active_victory
        if result is not None:
            return text + f"Winner: {result.winner}"
        if self.current.is_full():
            return text + "Tie"
        return text + f"Next player: {self.next_mark}"

    def moves(self) -> List[str]:
        """Labels for the history list, one per entry."""
        return ['Go to move #%d' % step if step else 'Go to game start' for step in range(len(self.history))]
