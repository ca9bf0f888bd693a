import logging

from board_model import InvalidMove, apply_move, other

log = logging.getLogger(__name__)


class TurnController:
    """Validates and applies moves against the shared GameContext."""

    def __init__(self, context):
        self.context = context

    def can_move(self):
        ctx = self.context
        return ctx.mode_selected and ctx.in_progress

    def submit_move(self, index):
        """Place the current player's mark at ``index``.

        Returns True when the move was accepted. Moves after the game ended,
        before a mode is chosen, or onto a taken/out-of-range cell are
        ignored rather than reported.
        """
        ctx = self.context
        if not self.can_move():
            return False
        player = ctx.current_player
        try:
            ctx.board = apply_move(ctx.board, index, player)
        except InvalidMove as exc:
            log.debug("[Turn] Ignored %s", exc)
            return False
        ctx.moves_played += 1
        if ctx.in_progress:
            ctx.current_player = other(player)
        else:
            log.info("[Turn] Game over after %d moves: %s", ctx.moves_played, ctx.outcome)
        return True

    def reset(self):
        self.context.reset_board()
