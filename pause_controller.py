import logging

from game_context import PAUSED, RUNNING

log = logging.getLogger(__name__)


class PauseController:
    """Running/Paused state machine behind the pause overlay.

    Pausing de-arms the automated opponent straight away; every way out of
    Paused lets the opponent re-check whether it should move.
    """

    def __init__(self, context, turns, modes, opponent):
        self.context = context
        self.turns = turns
        self.modes = modes
        self.opponent = opponent

    @property
    def paused(self):
        return self.context.pause_state == PAUSED

    def can_pause(self):
        ctx = self.context
        return ctx.pause_state == RUNNING and ctx.mode_selected and ctx.in_progress

    def pause(self):
        if not self.can_pause():
            return False
        self.context.pause_state = PAUSED
        self.opponent.cancel()
        log.info("[Pause] Paused")
        return True

    def resume(self):
        if not self.paused:
            log.debug("[Pause] Resume ignored while running")
            return False
        self.context.pause_state = RUNNING
        log.info("[Pause] Resume")
        self.opponent.reevaluate()
        return True

    def restart(self):
        """New board, same mode. Works whether or not the game is paused."""
        self._leave_pause("restart")
        self.turns.reset()
        self.opponent.reevaluate()
        return True

    def quit(self):
        """Back to mode select with an empty board, from any state."""
        self._leave_pause("quit")
        self.turns.reset()
        self.modes.clear()
        self.opponent.reevaluate()
        return True

    def _leave_pause(self, action):
        if self.paused:
            self.context.pause_state = RUNNING
            log.info("[Pause] %s", action.capitalize())
        else:
            log.info("[Pause] %s from a running game", action.capitalize())
