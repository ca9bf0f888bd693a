"""
sound_engine.py: background music session for the game screen
---------------------------------------------------------------
Handles:
 • MusicSessionManager → owns the one live track handle, playlist index,
                         looping, volume and mute
 • PygamePlayback      → pygame.mixer.music backend streaming one track at a time
 • PlaybackError       → raised/reported when a track cannot be loaded or played
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import pygame

log = logging.getLogger(__name__)

# --- settings ---
MIXER_ARGS = (44100, -16, 2, 1024)
MUSIC_EXTENSIONS = (".ogg", ".mp3", ".wav")
LOOP_FOREVER = -1
MUTE_FALLBACK_VOLUME = 0.5


class PlaybackError(RuntimeError):
    """A track could not be loaded or started."""


def clamp_volume(value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if value != value:  # NaN
        return 0.0
    return max(0.0, min(1.0, value))


# -----------------------------------------------------------------
# pygame backend
# -----------------------------------------------------------------
class PygameTrackHandle:
    """One track opened on the pygame.mixer.music stream."""

    def __init__(self, backend: "PygamePlayback", path: Path, name: str):
        self.backend = backend
        self.path = path
        self.name = name
        self.loops = 0
        self.volume = 1.0
        self.released = False

    def set_loop_count(self, loops: int):
        self.loops = int(loops)

    def set_volume(self, volume: float):
        self.volume = clamp_volume(volume)
        self.backend.apply_volume(self)

    def play(self, on_complete: Callable[[bool], None]):
        if self.released:
            raise PlaybackError(f"{self.name} was already released")
        self.backend.start(self, on_complete)

    def stop(self):
        if self.released:
            raise PlaybackError(f"{self.name} was already released")
        self.backend.halt(self)

    def release(self):
        if self.released:
            return
        self.backend.unload(self)
        self.released = True

    def __repr__(self):
        state = "released" if self.released else "live"
        return f"<PygameTrackHandle {self.name} {state}>"


class PygamePlayback:
    """pygame.mixer.music backend. Streams tracks from ``music_dir``.

    Only one track is open on the stream at a time. Completion is reported
    through ``end_event``, which the scene loop feeds back into
    ``handle_event``.
    """

    def __init__(self, music_dir):
        self.music_dir = Path(music_dir)
        self.end_event = pygame.USEREVENT + 1
        self.available = False
        self._loaded: Optional[PygameTrackHandle] = None
        self._playing: Optional[PygameTrackHandle] = None
        self._on_complete: Optional[Callable[[bool], None]] = None
        self._init_mixer()

    def _init_mixer(self):
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.pre_init(*MIXER_ARGS)
                pygame.mixer.init()
            pygame.mixer.music.set_endevent(self.end_event)
            self.available = True
        except pygame.error as exc:
            log.warning("[Sound] Mixer unavailable, music disabled: %s", exc)

    def resolve(self, track) -> Optional[Path]:
        base = self.music_dir / track.file
        if base.suffix and base.exists():
            return base
        for ext in MUSIC_EXTENSIONS:
            candidate = base.with_name(base.name + ext)
            if candidate.exists():
                return candidate
        return None

    @property
    def loaded(self) -> Optional[PygameTrackHandle]:
        return self._loaded

    def load(self, track, on_loaded):
        if not self.available:
            on_loaded(None, PlaybackError("mixer unavailable"))
            return
        path = self.resolve(track)
        if path is None:
            on_loaded(None, PlaybackError(f"missing music file: {track.file}"))
            return
        # music.load only opens the stream; decoding happens during playback
        try:
            pygame.mixer.music.load(str(path))
        except (pygame.error, OSError) as exc:
            on_loaded(None, PlaybackError(f"{path.name}: {exc}"))
            return
        handle = PygameTrackHandle(self, path, track.title)
        self._loaded = handle
        on_loaded(handle, None)

    def apply_volume(self, handle: PygameTrackHandle):
        if self._loaded is handle:
            pygame.mixer.music.set_volume(handle.volume)

    def start(self, handle: PygameTrackHandle, on_complete):
        if self._loaded is not handle:
            raise PlaybackError(f"{handle.name} is no longer loaded")
        self._playing = handle
        self._on_complete = on_complete
        pygame.mixer.music.set_volume(handle.volume)
        pygame.mixer.music.play(loops=handle.loops)

    def halt(self, handle: PygameTrackHandle):
        if self._playing is not handle:
            return
        # forget the callback first; the stop posts an end event we must ignore
        self._playing = None
        self._on_complete = None
        pygame.mixer.music.stop()

    def unload(self, handle: PygameTrackHandle):
        self.halt(handle)
        if self._loaded is not handle:
            return
        self._loaded = None
        pygame.mixer.music.unload()

    def handle_event(self, event) -> bool:
        if event.type != self.end_event:
            return False
        if self._playing is None:
            return True
        if pygame.mixer.music.get_busy():
            # stale event from a halted track; a newer one is already playing
            return True
        callback = self._on_complete
        self._playing = None
        self._on_complete = None
        if callback:
            callback(True)
        return True


# -----------------------------------------------------------------
# session manager
# -----------------------------------------------------------------
class MusicSessionManager:
    """Owns the single live playback handle for a game session.

    Each load gets a generation number; load and play completions tagged
    with an older generation are ignored; a superseded track never
    restarts on top of the current one.
    """

    def __init__(self, backend, playlist, volume: float = 1.0, index: int = 0,
                 mute_fallback: float = MUTE_FALLBACK_VOLUME):
        if not playlist:
            raise ValueError("playlist must contain at least one track")
        self.backend = backend
        self.playlist = list(playlist)
        self.index = int(index) % len(self.playlist)
        self.volume = clamp_volume(volume)
        self.mute_fallback = clamp_volume(mute_fallback) or MUTE_FALLBACK_VOLUME
        self.muted = False
        self.saved_volume = self.mute_fallback
        self.handle = None
        self.generation = 0
        self.closed = False

    # --- state ---
    @property
    def current_track(self):
        return self.playlist[self.index]

    @property
    def effective_volume(self) -> float:
        return 0.0 if self.muted else self.volume

    @property
    def volume_icon(self) -> str:
        vol = self.effective_volume
        if self.muted or vol == 0:
            return "muted"
        if vol < 0.3:
            return "low"
        if vol < 0.7:
            return "medium"
        return "high"

    # --- track control ---
    def start(self):
        self.load_and_play(self.index)

    def next(self):
        if self.closed:
            return
        self.load_and_play((self.index + 1) % len(self.playlist))

    def previous(self):
        if self.closed:
            return
        self.load_and_play((self.index - 1) % len(self.playlist))

    def load_and_play(self, index: int):
        if self.closed:
            return
        self.index = int(index) % len(self.playlist)
        self._release_handle()
        self.generation += 1
        generation = self.generation
        track = self.current_track
        log.info("[Sound] Loading %s", track.title)
        self.backend.load(
            track, lambda handle, error: self._on_loaded(generation, track, handle, error)
        )

    def _on_loaded(self, generation, track, handle, error):
        if error is not None or handle is None:
            log.warning("[Sound] Failed to load music %s: %s", track.title, error)
            if handle is not None:
                self._discard(handle)
            return
        if generation != self.generation or self.closed:
            log.debug("[Sound] Dropping superseded load of %s", track.title)
            self._discard(handle)
            return
        try:
            handle.set_loop_count(LOOP_FOREVER)
            handle.set_volume(self.effective_volume)
        except Exception as exc:
            log.warning("[Sound] Could not configure %s: %s", track.title, exc)
            self._discard(handle)
            return
        self.handle = handle
        self._play(generation)

    def _play(self, generation):
        if generation != self.generation or self.handle is None:
            return
        try:
            self.handle.play(lambda success: self._on_complete(generation, success))
        except Exception as exc:
            log.warning("[Sound] Playback failed: %s", exc)

    def _on_complete(self, generation, success):
        if generation != self.generation or self.closed:
            return
        if not success:
            log.warning("[Sound] Playback failed for %s", self.current_track.title)
            return
        self._play(generation)

    def _release_handle(self):
        handle, self.handle = self.handle, None
        if handle is not None:
            self._discard(handle)

    def _discard(self, handle):
        try:
            handle.stop()
        except Exception as exc:
            log.debug("[Sound] Ignoring stop error: %s", exc)
        try:
            handle.release()
        except Exception as exc:
            log.debug("[Sound] Ignoring release error: %s", exc)

    # --- volume ---
    def _apply_volume(self):
        if self.handle is None:
            return
        try:
            self.handle.set_volume(self.effective_volume)
        except Exception as exc:
            log.debug("[Sound] Volume change failed: %s", exc)

    def set_volume(self, value):
        if self.closed:
            return
        self.volume = clamp_volume(value)
        if self.volume > 0:
            self.muted = False
        self._apply_volume()

    def toggle_mute(self):
        if self.closed:
            return
        if self.muted:
            self.muted = False
            self.volume = self.saved_volume if self.saved_volume > 0 else self.mute_fallback
        else:
            self.saved_volume = self.volume if self.volume > 0 else self.mute_fallback
            self.muted = True
            self.volume = 0.0
        self._apply_volume()

    # --- events / teardown ---
    def handle_event(self, event) -> bool:
        dispatch = getattr(self.backend, "handle_event", None)
        if self.closed or not callable(dispatch):
            return False
        return dispatch(event)

    def teardown(self):
        if self.closed:
            return
        self.closed = True
        self.generation += 1
        self._release_handle()
        log.info("[Sound] Music session closed")
