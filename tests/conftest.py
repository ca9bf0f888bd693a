import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, os.fspath(PROJECT_ROOT))

from config import DEFAULT_PLAYLIST, SessionConfig  # noqa: E402
from sound_engine import PlaybackError  # noqa: E402


class FakeHandle:
    def __init__(self, backend, track, serial):
        self.backend = backend
        self.track = track
        self.name = f"{track.file}#{serial}"
        self.loops = None
        self.volume = None
        self.plays = 0
        self.on_complete = None
        self.stopped = False
        self.released = False
        self.fail_stop = False

    def set_loop_count(self, loops):
        self.loops = loops

    def set_volume(self, volume):
        self.volume = volume

    def play(self, on_complete):
        self.plays += 1
        self.on_complete = on_complete
        self.backend.log.append(("play", self.name))

    def stop(self):
        self.backend.log.append(("stop", self.name))
        if self.fail_stop:
            raise PlaybackError("handle in a bad state")
        self.stopped = True

    def release(self):
        self.backend.log.append(("release", self.name))
        self.released = True

    def finish(self, success=True):
        callback, self.on_complete = self.on_complete, None
        callback(success)

    @property
    def live(self):
        return not self.released


class FakeBackend:
    """Records every playback call; loads complete at once unless deferred."""

    def __init__(self, deferred=False, failing=()):
        self.deferred = deferred
        self.failing = set(failing)
        self.pending = []
        self.handles = []
        self.log = []
        self._serial = 0

    def load(self, track, on_loaded):
        self.log.append(("load", track.file))
        if self.deferred:
            self.pending.append((track, on_loaded))
            return
        self._complete(track, on_loaded)

    def _complete(self, track, on_loaded):
        if track.file in self.failing:
            on_loaded(None, PlaybackError(f"missing music file: {track.file}"))
            return
        self._serial += 1
        handle = FakeHandle(self, track, self._serial)
        self.handles.append(handle)
        on_loaded(handle, None)

    def complete_pending(self, index=0):
        track, on_loaded = self.pending.pop(index)
        self._complete(track, on_loaded)

    def live_handles(self):
        return [h for h in self.handles if h.live]


class RecordingPresenter:
    def __init__(self):
        self.frames = []

    def present_board(self, board, outcome, current_player):
        self.frames.append((board, outcome, current_player))


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def config(tmp_path):
    return SessionConfig(music_dir=tmp_path, playlist=list(DEFAULT_PLAYLIST), seed=7)


@pytest.fixture
def presenter():
    return RecordingPresenter()
