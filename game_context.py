"""
game_context.py
---------------
Shared session state for one tic-tac-toe screen.
Owned by GameSession and handed by reference to each controller.
Tracks board, whose turn it is, the chosen mode and the pause state.
"""

from board_model import IN_PROGRESS, X, evaluate, new_board

MODE_UNSELECTED = "unselected"
MODE_SOLO = "solo"
MODE_DUO = "duo"
MODES = (MODE_SOLO, MODE_DUO)

RUNNING = "running"
PAUSED = "paused"


class GameContext:
    def __init__(self):
        self.board = new_board()
        self.current_player = X
        self.mode = MODE_UNSELECTED
        self.pause_state = RUNNING
        self.moves_played = 0

    # -----------------------------------------------------
    #   Derived state
    # -----------------------------------------------------
    @property
    def outcome(self):
        """Always recomputed from the board; never cached."""
        return evaluate(self.board)

    @property
    def in_progress(self):
        return self.outcome == IN_PROGRESS

    @property
    def paused(self):
        return self.pause_state == PAUSED

    @property
    def mode_selected(self):
        return self.mode != MODE_UNSELECTED

    # -----------------------------------------------------
    #   Core logic
    # -----------------------------------------------------
    def reset_board(self):
        """Empty board, X to move. Mode and pause state are untouched."""
        self.board = new_board()
        self.current_player = X
        self.moves_played = 0

    def __repr__(self):
        cells = "".join(v or "_" for v in self.board)
        return (
            f"<GameContext board={cells} turn={self.current_player} "
            f"outcome={self.outcome} mode={self.mode} {self.pause_state}>"
        )
