import logging

from game_context import MODE_DUO, MODE_SOLO, MODE_UNSELECTED, MODES

log = logging.getLogger(__name__)

MODE_LABELS = {
    MODE_SOLO: ("1 Player", "You vs Bot"),
    MODE_DUO: ("2 Players", "Pass & Play"),
}


class ModeSelector:
    """Picks solo or local two-player once per session; only Quit clears it."""

    def __init__(self, context):
        self.context = context

    def select_mode(self, mode):
        if self.context.mode != MODE_UNSELECTED:
            log.debug("[Mode] Already playing %s; ignoring %s", self.context.mode, mode)
            return False
        if mode not in MODES:
            log.warning("[Mode] Unknown mode %r", mode)
            return False
        self.context.mode = mode
        log.info("[Mode] Selected %s", mode)
        return True

    def clear(self):
        self.context.mode = MODE_UNSELECTED
