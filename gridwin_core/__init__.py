"""
gridwin core Python package.

Pure data structures and logic for a tic-tac-toe style game played on a board
of any size, won by any rectangular pattern of cells.
Modules:
- geometry.py: Size, Point, Rect
- grid.py: Grid (immutable board of optional marks)
- pattern.py: PatternMask, default pattern sets
- matcher.py: match_at, find_victory
- victory.py: VictoryResult
- timeline.py: GameTimeline, Status
- settings.py: GameSettings and environment defaults
"""
