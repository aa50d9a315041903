from __future__ import annotations

# Facade module that re-exports the gridwin core.
# The Flask app, the CLI entry point and the tests import from here;
# single-responsibility modules live under gridwin_core/*.

from gridwin_core.errors import (  # noqa: F401
    GridError,
    InvalidSize,
    RaggedPattern,
    EmptyPattern,
    CellOccupied,
    OutOfBounds,
)
from gridwin_core.geometry import Point, Rect, Size, area  # noqa: F401
from gridwin_core.grid import Cell, Grid, Mark  # noqa: F401
from gridwin_core.pattern import (  # noqa: F401
    DEFAULT_PATTERNS,
    DONT_CARE,
    REQUIRED,
    PatternMask,
    line_patterns,
)
from gridwin_core.matcher import find_victory, iter_victories, match_at, origins  # noqa: F401
from gridwin_core.victory import VictoryResult  # noqa: F401
from gridwin_core.settings import (  # noqa: F401
    DEFAULT_MARKS,
    GameSettings,
    default_settings,
    max_editable_size,
)
from gridwin_core.timeline import GameTimeline, Status  # noqa: F401


def main() -> None:
    # CLI driver delegated to gridwin_core.cli
    from gridwin_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
