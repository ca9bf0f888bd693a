"""
game_session.py
---------------
One tic-tac-toe session: wires the shared GameContext to the turn, mode,
opponent, pause and music controllers. Every mutating entry point finishes
by re-checking the opponent timer and pushing the new state to the
presenter.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from auto_opponent import AutoOpponentScheduler
from game_context import GameContext
from game_modes import ModeSelector
from pause_controller import PauseController
from sound_engine import MusicSessionManager
from turn_controller import TurnController

log = logging.getLogger(__name__)


class NullPresenter:
    def present_board(self, board, outcome, current_player):
        pass


class GameSession:
    def __init__(self, config, backend, presenter=None, rng: Optional[random.Random] = None):
        self.config = config
        self.context = GameContext()
        self.presenter = presenter or NullPresenter()
        if rng is None:
            rng = random.Random(config.seed)
        self.turns = TurnController(self.context)
        self.modes = ModeSelector(self.context)
        self.opponent = AutoOpponentScheduler(
            self.context, self.submit_move, delay_ms=config.ai_delay_ms, rng=rng
        )
        self.pause_ctl = PauseController(self.context, self.turns, self.modes, self.opponent)
        self.music = MusicSessionManager(
            backend,
            config.playlist,
            volume=config.initial_volume,
            index=config.initial_track,
            mute_fallback=config.mute_fallback_volume,
        )
        self.closed = False

    # --- lifecycle ---
    def start(self):
        self.music.start()
        if self.config.start_muted:
            self.music.toggle_mute()
        if self.config.start_mode:
            self.modes.select_mode(self.config.start_mode)
        log.info("[Session] Started on track %d", self.music.index)
        self._sync()

    def teardown(self):
        if self.closed:
            return
        self.closed = True
        self.opponent.close()
        self.music.teardown()
        log.info("[Session] Closed")

    # --- game input ---
    def select_mode(self, mode):
        if self.closed:
            return False
        changed = self.modes.select_mode(mode)
        self._sync()
        return changed

    def submit_move(self, index):
        if self.closed:
            return False
        accepted = self.turns.submit_move(index)
        self._sync()
        return accepted

    def play_again(self):
        """Reset the board without touching mode or pause state."""
        if self.closed or self.context.paused:
            return
        self.turns.reset()
        self._sync()

    # --- pause overlay ---
    def pause(self):
        return self._transition(self.pause_ctl.pause)

    def resume(self):
        return self._transition(self.pause_ctl.resume)

    def restart(self):
        return self._transition(self.pause_ctl.restart)

    def quit(self):
        return self._transition(self.pause_ctl.quit)

    def _transition(self, action):
        if self.closed:
            return False
        changed = action()
        self._sync()
        return changed

    # --- music shortcuts for the overlay ---
    def next_track(self):
        self.music.next()

    def previous_track(self):
        self.music.previous()

    def set_volume(self, value):
        self.music.set_volume(value)

    def toggle_mute(self):
        self.music.toggle_mute()

    # --- loop hooks ---
    def handle_event(self, event):
        return self.music.handle_event(event)

    def update(self, dt):
        if self.closed:
            return
        self.opponent.update(dt)

    def _sync(self):
        if self.closed:
            return
        self.opponent.reevaluate()
        ctx = self.context
        self.presenter.present_board(ctx.board, ctx.outcome, ctx.current_player)

    @property
    def can_pause(self):
        return not self.closed and self.pause_ctl.can_pause()

    def status_text(self, names=None):
        names = names or {}
        ctx = self.context
        outcome = ctx.outcome
        if outcome.kind == "draw":
            return "Draw!"
        if outcome.kind == "win":
            return f"{names.get(outcome.winner, outcome.winner)} wins"
        return f"{names.get(ctx.current_player, ctx.current_player)}'s turn"
