from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

from .errors import GridError
from .geometry import Size
from .matcher import iter_victories
from .pattern import PatternMask, line_patterns
from .settings import GameSettings, default_settings
from .timeline import GameTimeline, Status


def _parse_moves(text: str) -> List[int]:
    return [int(t) for t in text.replace(' ', ',').split(',') if t != '']


def _build_settings(args: argparse.Namespace) -> GameSettings:
    settings = default_settings()
    size = Size(
        args.width if args.width is not None else settings.board_size.width,
        args.height if args.height is not None else settings.board_size.height,
    )
    settings = settings.with_board_size(size)
    if args.pattern:
        settings = settings.with_masks([PatternMask.from_rows(p.split(',')) for p in args.pattern])
    elif args.line is not None:
        settings = settings.with_masks(line_patterns(args.line))
    return settings


def _show(timeline: GameTimeline) -> None:
    print(timeline.current.pretty(timeline.highlight()))
    print(timeline.status_text())


def _explain(timeline: GameTimeline) -> None:
    found = False
    for position, result in iter_victories(timeline.current, timeline.masks):
        found = True
        print(f"pattern #{position} matches for {result.winner} at "
              f"x={result.origin.x}, y={result.origin.y}")
    if not found:
        print('no pattern matches')


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Tic-tac-toe on any board with any win pattern')
    parser.add_argument('--width', type=int, default=None, help='Board width (default from GRIDWIN_WIDTH or 3)')
    parser.add_argument('--height', type=int, default=None, help='Board height (default from GRIDWIN_HEIGHT or 3)')
    parser.add_argument('--pattern', action='append', default=[],
                        help="Win pattern as comma separated rows, '*' = required (repeatable)")
    parser.add_argument('--line', type=int, default=None, help='Use the N-in-a-row pattern set')
    parser.add_argument('--moves', default=None, help='Replay cell indices non-interactively, e.g. 0,4,1')
    parser.add_argument('--explain', action='store_true', help='List every pattern match on the final board')
    args = parser.parse_args(argv)

    try:
        settings = _build_settings(args)
    except GridError as e:
        parser.error(str(e))
    timeline = GameTimeline.start(settings)

    if args.moves is not None:
        try:
            moves = _parse_moves(args.moves)
        except ValueError:
            parser.error(f'could not parse moves: {args.moves!r}')
        for index in moves:
            after = timeline.apply_move(index)
            if after is timeline:
                print(f'Move {index} ignored.')
            timeline = after
        _show(timeline)
        if args.explain:
            _explain(timeline)
        return

    print(f'Board {settings.board_size.width}x{settings.board_size.height}, win patterns:')
    for mask in settings.win_masks:
        print(mask)
        print()
    _show(timeline)

    while True:
        try:
            text = input("Cell index, 'j N' to jump to step N, or 'q' to quit: ").strip()
        except EOFError:
            print()
            break
        if text == 'q':
            break
        try:
            if text.startswith('j'):
                timeline = timeline.jump_to(int(text[1:].strip()))
            else:
                index = int(text)
                after = timeline.apply_move(index)
                if after is timeline:
                    if timeline.current_status is not Status.IN_PROGRESS:
                        print("Game over. Jump back with 'j N' or quit with 'q'.")
                    else:
                        print('Illegal move. Try again.')
                    continue
                timeline = after
        except ValueError:
            print('Could not parse. Try again.')
            continue
        _show(timeline)

    if args.explain:
        _explain(timeline)


if __name__ == '__main__':
    main()
