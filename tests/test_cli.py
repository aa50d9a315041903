import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from gridwin_core.cli import main


def run_cli(argv):
    out = io.StringIO()
    with redirect_stdout(out):
        main(argv)
    return out.getvalue()


class TestCli(unittest.TestCase):
    def test_given_winning_replay_then_winner_and_highlight_printed(self):
        text = run_cli(["--width", "3", "--height", "3", "--moves", "0,3,1,4,2", "--explain"])
        self.assertIn("Turn 6. Winner: X", text)
        self.assertIn("[X][X][X]", text)
        self.assertIn("pattern #0 matches for X at x=0, y=0", text)

    def test_given_repeated_cell_then_move_reported_ignored(self):
        text = run_cli(["--width", "3", "--height", "3", "--moves", "0 0"])
        self.assertIn("Move 0 ignored.", text)
        self.assertIn("Next player: O", text)

    def test_given_custom_pattern_then_used_for_matching(self):
        text = run_cli(["--width", "2", "--height", "2", "--pattern", "*.,.*", "--moves", "0,1,3", "--explain"])
        self.assertIn("Winner: X", text)
        self.assertIn("pattern #0 matches for X at x=0, y=0", text)

    def test_given_line_option_then_n_in_a_row(self):
        text = run_cli(["--width", "4", "--height", "4", "--line", "4", "--moves", "0,4,1,5,2,6", "--explain"])
        self.assertIn("Next player: X", text)
        self.assertIn("no pattern matches", text)

    def test_given_ragged_pattern_then_exit_code_2(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--pattern", "**,*"])
        self.assertEqual(ctx.exception.code, 2)

    def test_given_interactive_input_then_plays_until_win(self):
        answers = iter(["0", "0", "3", "j 0", "4", "1", "x", "3", "2", "5", "q"])
        with patch("builtins.input", lambda prompt="": next(answers)):
            text = run_cli(["--width", "3", "--height", "3"])
        self.assertIn("Illegal move. Try again.", text)
        self.assertIn("Could not parse. Try again.", text)
        self.assertIn("Turn 6. Winner: X", text)

    def test_given_won_game_then_can_jump_back_and_keep_playing(self):
        answers = iter(["0", "3", "1", "4", "2", "8", "j 4", "5", "q"])
        with patch("builtins.input", lambda prompt="": next(answers)):
            text = run_cli(["--width", "3", "--height", "3"])
        self.assertIn("Turn 6. Winner: X", text)
        self.assertIn("Game over. Jump back with 'j N' or quit with 'q'.", text)
        self.assertIn("Turn 6. Next player: X", text)
        self.assertIn("Turn 6. Next player: O", text)

    def test_given_end_of_input_then_quits_cleanly(self):
        def _eof(prompt=""):
            raise EOFError
        with patch("builtins.input", _eof):
            text = run_cli(["--width", "3", "--height", "3", "--explain"])
        self.assertIn("Turn 1. Next player: X", text)
        self.assertIn("no pattern matches", text)

    def test_given_quit_then_returns(self):
        with patch("builtins.input", lambda prompt="": "q"):
            text = run_cli(["--width", "3", "--height", "3"])
        self.assertIn("Turn 1. Next player: X", text)


if __name__ == "__main__":
    unittest.main(verbosity=2)
