import unittest

from game import (
    DEFAULT_PATTERNS,
    GameSettings,
    GameTimeline,
    Grid,
    GridError,
    InvalidSize,
    OutOfBounds,
    PatternMask,
    Point,
    Size,
    Status,
)


def play(timeline, moves):
    for index in moves:
        timeline = timeline.apply_move(index)
    return timeline


class TestGameTimeline(unittest.TestCase):
    def setUp(self):
        self.t0 = GameTimeline.start(GameSettings(board_size=Size(3, 3)))

    def test_given_new_timeline_then_single_empty_entry(self):
        self.assertEqual(len(self.t0.history), 1)
        self.assertEqual(self.t0.cursor, 0)
        self.assertEqual(self.t0.current, Grid.create(Size(3, 3)))
        self.assertEqual(self.t0.next_mark, 'X')
        self.assertEqual(self.t0.current_status, Status.IN_PROGRESS)
        self.assertIsNone(self.t0.active_victory)
        self.assertEqual(self.t0.status_text(), 'Turn 1. Next player: X')
        self.assertEqual(self.t0.highlight(), (False,) * 9)

    def test_given_size_and_masks_when_start_then_settings_built(self):
        row = PatternMask.from_rows(['**'])
        t = GameTimeline.start(Size(2, 4), [row])
        self.assertEqual(t.board_size, Size(2, 4))
        self.assertEqual(t.masks, (row,))
        self.assertEqual(len(t.current.cells), 8)

    def test_given_moves_then_marks_alternate_and_history_grows(self):
        t = play(self.t0, [4, 0])
        self.assertEqual(len(t.history), 3)
        self.assertEqual(t.cursor, 2)
        self.assertEqual(t.current.at_index(4), 'X')
        self.assertEqual(t.current.at_index(0), 'O')
        self.assertEqual(t.next_mark, 'X')
        self.assertIsNone(t.history[1].at_index(0))

    def test_given_occupied_cell_when_apply_move_then_noop(self):
        t = play(self.t0, [4])
        again = t.apply_move(4)
        self.assertIs(again, t)
        self.assertEqual(len(again.history), 2)
        self.assertEqual(again.cursor, 1)

    def test_given_out_of_range_index_when_apply_move_then_noop(self):
        self.assertIs(self.t0.apply_move(9), self.t0)
        self.assertIs(self.t0.apply_move(-1), self.t0)

    def test_given_top_row_win_then_won_and_further_moves_ignored(self):
        t = play(self.t0, [0, 3, 1, 4, 2])
        self.assertEqual(t.current_status, Status.WON)
        self.assertEqual(t.winner(), 'X')
        v = t.active_victory
        assert v is not None
        self.assertEqual(v.origin, Point(0, 0))
        self.assertEqual(t.status_text(), 'Turn 6. Winner: X')
        self.assertEqual([i for i, on in enumerate(t.highlight()) if on], [0, 1, 2])
        self.assertIs(t.apply_move(8), t)

    def test_given_full_board_without_line_then_tied(self):
        t = play(self.t0, [0, 1, 2, 4, 3, 5, 7, 6, 8])
        self.assertEqual(len(t.history), 10)
        self.assertEqual(t.current_status, Status.TIED)
        self.assertIsNone(t.active_victory)
        self.assertEqual(t.status_text(), 'Turn 10. Tie')
        self.assertEqual(t.status(0), Status.IN_PROGRESS)

    def test_given_jump_then_cursor_moves_and_history_kept(self):
        t = play(self.t0, [0, 3, 1])
        back = t.jump_to(1)
        self.assertEqual(back.cursor, 1)
        self.assertEqual(back.history, t.history)
        self.assertEqual(back.next_mark, 'O')
        self.assertEqual(back.jump_to(2).next_mark, 'X')
        self.assertEqual(back.current, t.history[1])

    def test_given_step_out_of_range_when_jump_then_clamped(self):
        t = play(self.t0, [0, 3])
        self.assertEqual(t.jump_to(99).cursor, 2)
        self.assertEqual(t.jump_to(-4).cursor, 0)

    def test_given_jump_back_when_move_then_later_entries_discarded(self):
        t = play(self.t0, [0, 3, 1, 4])
        branched = t.jump_to(1).apply_move(8)
        self.assertEqual(len(branched.history), 3)
        self.assertEqual(branched.cursor, 2)
        self.assertEqual(branched.current.at_index(8), 'O')
        self.assertIsNone(branched.current.at_index(1))
        self.assertEqual(branched.history[:2], t.history[:2])

    def test_given_won_entry_when_jump_back_then_status_recomputed(self):
        t = play(self.t0, [0, 3, 1, 4, 2])
        self.assertEqual(t.status(5), Status.WON)
        earlier = t.jump_to(4)
        self.assertEqual(earlier.current_status, Status.IN_PROGRESS)
        self.assertIsNone(earlier.active_victory)
        self.assertEqual(earlier.next_mark, 'X')

    def test_given_settings_change_then_fresh_timeline(self):
        t = play(self.t0, [0, 1])
        bigger = GameTimeline.start(t.settings.with_board_size(Size(4, 4)))
        self.assertEqual(len(bigger.history), 1)
        self.assertEqual(bigger.current.size, Size(4, 4))
        self.assertEqual(t.reset().history, self.t0.history)

    def test_given_no_masks_then_never_won(self):
        t = play(GameTimeline.start(Size(3, 1), []), [0, 1, 2])
        self.assertEqual(t.current_status, Status.TIED)

    def test_given_custom_marks_then_used_in_turn_order(self):
        settings = GameSettings(board_size=Size(2, 1), win_masks=DEFAULT_PATTERNS, marks=('A', 'B'))
        t = play(GameTimeline.start(settings), [1, 0])
        self.assertEqual(t.current.cells, ('B', 'A'))

    def test_given_history_labels_then_start_and_moves(self):
        t = play(self.t0, [0, 1])
        self.assertEqual(t.moves(), ['Go to game start', 'Go to move #1', 'Go to move #2'])

    def test_given_inconsistent_history_then_errors(self):
        settings = GameSettings(board_size=Size(3, 3))
        with self.assertRaises(InvalidSize):
            GameTimeline(settings=settings, history=(Grid.create(Size(2, 2)),))
        with self.assertRaises(OutOfBounds):
            GameTimeline(settings=settings, history=(Grid.create(Size(3, 3)),), cursor=1)
        with self.assertRaises(GridError):
            GameTimeline(settings=settings, history=())

    def test_given_marked_start_board_then_rejected(self):
        settings = GameSettings(board_size=Size(3, 3))
        top_row = Grid.create(Size(3, 3)).with_mark(0, 'X').with_mark(1, 'X').with_mark(2, 'X')
        with self.assertRaises(GridError):
            GameTimeline(settings=settings, history=(top_row,))
        with self.assertRaises(GridError):
            GameTimeline(settings=settings, history=(top_row, top_row.with_mark(4, 'O')), cursor=1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
