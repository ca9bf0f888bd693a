"""Delayed random-move opponent for solo games."""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from board_model import O, empty_cells
from game_context import MODE_SOLO, RUNNING

log = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 300


class DelayTimer:
    """Single-shot countdown advanced by the frame delta."""

    def __init__(self, duration: float, callback: Callable[[], None]):
        self.remaining = duration
        self.callback = callback
        self.active = True

    def cancel(self):
        self.active = False

    def update(self, dt: float) -> bool:
        if not self.active:
            return False
        self.remaining -= dt
        if self.remaining <= 0:
            self.active = False
            self.callback()
            return True
        return False


class AutoOpponentScheduler:
    """Plays O's move in solo games after a short delay.

    The pending delay is tied to the state it was armed for; any change to
    the board, turn, mode or pause state cancels it before it can fire.
    """

    def __init__(self, context, submit, delay_ms: int = DEFAULT_DELAY_MS, rng: Optional[random.Random] = None):
        self.context = context
        self.submit = submit
        self.delay = max(0, delay_ms) / 1000.0
        self.rng = rng or random.Random()
        self._timer: Optional[DelayTimer] = None
        self._armed_for = None
        self._closed = False

    @property
    def armed(self) -> bool:
        return self._timer is not None and self._timer.active

    def should_arm(self) -> bool:
        ctx = self.context
        return (
            not self._closed
            and ctx.mode == MODE_SOLO
            and ctx.in_progress
            and ctx.current_player == O
            and ctx.pause_state == RUNNING
        )

    def _arming_key(self):
        ctx = self.context
        return (ctx.board, ctx.current_player, ctx.mode, ctx.pause_state)

    def reevaluate(self):
        """Cancel a stale delay and arm a fresh one if O should move."""
        key = self._arming_key()
        if self.armed and self._armed_for == key:
            return
        self.cancel()
        if not self.should_arm():
            return
        self._armed_for = key
        self._timer = DelayTimer(self.delay, self._fire)
        log.debug("[Opponent] Armed for %.0f ms", self.delay * 1000)

    def cancel(self):
        if self._timer is not None:
            if self._timer.active:
                log.debug("[Opponent] Cancelled pending move")
            self._timer.cancel()
        self._timer = None
        self._armed_for = None

    def update(self, dt: float):
        if self._timer is not None:
            self._timer.update(dt)

    def _fire(self):
        # state may have moved on without a reevaluate(); check again
        if self._armed_for != self._arming_key() or not self.should_arm():
            self._timer = None
            self._armed_for = None
            return
        self._timer = None
        self._armed_for = None
        choices = empty_cells(self.context.board)
        if not choices:
            return
        index = self.rng.choice(choices)
        log.debug("[Opponent] Playing %d", index)
        self.submit(index)

    def close(self):
        self.cancel()
        self._closed = True
