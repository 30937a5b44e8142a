import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from game import Player, create_board, load_pits
from kalah_core.cli import main, run


class TestCli(unittest.TestCase):
    def test_given_bad_then_legal_input_when_running_then_final_score_printed(self):
        board = create_board(6)
        load_pits(board, [0, 0, 0, 0, 1, 0, 19, 0, 0, 0, 0, 0, 0, 10])
        out = io.StringIO()
        with patch('builtins.input', side_effect=['x', '7', '5']), redirect_stdout(out):
            score = run(board)
        self.assertEqual(score, (20, 10))
        text = out.getvalue()
        self.assertIn('Could not parse', text)
        self.assertIn('Illegal move', text)
        self.assertIn('Player 1 wins! Score is 20:10', text)

    def test_given_second_player_turn_when_prompting_then_their_pits_offered(self):
        board = create_board(6)
        board.current_player = Player.SECOND
        load_pits(board, [0, 0, 0, 0, 0, 0, 20, 0, 0, 0, 0, 0, 1, 9])
        out = io.StringIO()
        with patch('builtins.input', side_effect=['13']), redirect_stdout(out):
            score = run(board)
        self.assertEqual(score, (20, 10))
        self.assertIn('Player 2 to move. Legal pits: [13]', out.getvalue())

    def test_given_one_stone_board_when_main_runs_then_draw(self):
        out = io.StringIO()
        with patch('builtins.input', side_effect=['1']), redirect_stdout(out):
            main(['--stones', '1'])
        self.assertIn('Draw! Score is 1:1', out.getvalue())

    def test_given_eof_when_prompting_then_exits_cleanly(self):
        out = io.StringIO()
        with patch('builtins.input', side_effect=EOFError), redirect_stdout(out):
            main([])
        self.assertIn('bye', out.getvalue())


if __name__ == '__main__':
    unittest.main(verbosity=2)
