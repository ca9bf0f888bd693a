import unittest

from auto_opponent import AutoOpponentScheduler
from board_model import IN_PROGRESS, X, Outcome, new_board
from game_context import MODE_DUO, MODE_SOLO, MODE_UNSELECTED, PAUSED, RUNNING, GameContext
from game_modes import ModeSelector
from pause_controller import PauseController
from turn_controller import TurnController


class TestPauseController(unittest.TestCase):
    def setUp(self) -> None:
        self.ctx = GameContext()
        self.turns = TurnController(self.ctx)
        self.modes = ModeSelector(self.ctx)
        self.opponent = AutoOpponentScheduler(self.ctx, self.turns.submit_move)
        self.pause = PauseController(self.ctx, self.turns, self.modes, self.opponent)

    def test_cannot_pause_before_mode(self) -> None:
        self.assertFalse(self.pause.pause())
        self.assertEqual(self.ctx.pause_state, RUNNING)

    def test_cannot_pause_finished_game(self) -> None:
        self.modes.select_mode(MODE_DUO)
        for idx in (0, 3, 1, 4, 2):
            self.turns.submit_move(idx)
        self.assertFalse(self.pause.pause())

    def test_pause_and_resume(self) -> None:
        self.modes.select_mode(MODE_DUO)
        self.turns.submit_move(4)
        self.assertTrue(self.pause.pause())
        self.assertEqual(self.ctx.pause_state, PAUSED)
        self.assertFalse(self.pause.pause())
        self.assertTrue(self.pause.resume())
        self.assertEqual(self.ctx.pause_state, RUNNING)
        self.assertEqual(self.ctx.board[4], X)

    def test_resume_needs_pause(self) -> None:
        self.modes.select_mode(MODE_DUO)
        self.assertFalse(self.pause.resume())
        self.assertEqual(self.ctx.pause_state, RUNNING)
        self.assertEqual(self.ctx.mode, MODE_DUO)

    def test_restart_from_running_game(self) -> None:
        self.modes.select_mode(MODE_DUO)
        self.turns.submit_move(4)
        self.assertTrue(self.pause.restart())
        self.assertEqual(self.ctx.board, new_board())
        self.assertEqual(self.ctx.current_player, X)
        self.assertEqual(self.ctx.mode, MODE_DUO)
        self.assertEqual(self.ctx.pause_state, RUNNING)

    def test_quit_from_finished_game(self) -> None:
        self.modes.select_mode(MODE_DUO)
        for idx in (0, 3, 1, 4, 2):
            self.turns.submit_move(idx)
        self.assertEqual(self.ctx.outcome, Outcome.win(X))
        self.assertTrue(self.pause.quit())
        self.assertEqual(self.ctx.mode, MODE_UNSELECTED)
        self.assertEqual(self.ctx.board, new_board())
        self.assertEqual(self.ctx.current_player, X)
        self.assertEqual(self.ctx.outcome, IN_PROGRESS)
        self.assertEqual(self.ctx.pause_state, RUNNING)

    def test_quit_before_any_mode(self) -> None:
        self.assertTrue(self.pause.quit())
        self.assertEqual(self.ctx.mode, MODE_UNSELECTED)
        self.assertEqual(self.ctx.board, new_board())

    def test_pause_disarms_opponent(self) -> None:
        self.modes.select_mode(MODE_SOLO)
        self.turns.submit_move(4)
        self.opponent.reevaluate()
        self.assertTrue(self.opponent.armed)
        self.pause.pause()
        self.assertFalse(self.opponent.armed)
        self.pause.resume()
        self.assertTrue(self.opponent.armed)

    def test_restart_keeps_mode(self) -> None:
        self.modes.select_mode(MODE_SOLO)
        self.turns.submit_move(4)
        self.pause.pause()
        self.assertTrue(self.pause.restart())
        self.assertEqual(self.ctx.board, new_board())
        self.assertEqual(self.ctx.current_player, X)
        self.assertEqual(self.ctx.mode, MODE_SOLO)
        self.assertEqual(self.ctx.pause_state, RUNNING)
        self.assertFalse(self.opponent.armed)

    def test_quit_resets_everything(self) -> None:
        self.modes.select_mode(MODE_SOLO)
        self.turns.submit_move(4)
        self.pause.pause()
        self.assertTrue(self.pause.quit())
        self.assertEqual(self.ctx.board, new_board())
        self.assertEqual(self.ctx.current_player, X)
        self.assertTrue(self.ctx.in_progress)
        self.assertEqual(self.ctx.mode, MODE_UNSELECTED)
        self.assertEqual(self.ctx.pause_state, RUNNING)
        self.assertFalse(self.opponent.armed)

if __name__ == "__main__":
    unittest.main()
