from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple

from auto_opponent import DEFAULT_DELAY_MS
from game_context import MODES
from sound_engine import MUTE_FALLBACK_VOLUME, clamp_volume

MUSIC_DIR_ENV = "TICTACTOE_MUSIC_DIR"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Track(NamedTuple):
    title: str
    file: str


DEFAULT_PLAYLIST = [
    Track("Dream Thing", "dream_thing"),
    Track("Deluge-ional - Stavros Markonis", "deluge_ional"),
    Track("specialist - アトラスサウンドチーム", "specialist"),
    Track("Through The Glades_ Pt. 1 - Karl Flodin", "through_the_glades"),
]


def resource_path(*parts: str | Path) -> str:
    """Resolve asset paths for dev runs and PyInstaller bundles."""
    # PyInstaller sets sys._MEIPASS to the temp extraction dir.
    base = getattr(sys, "_MEIPASS", None)
    path = Path(base) if base else Path(__file__).resolve().parent
    for part in parts:
        path = path / Path(part)
    return str(path)


def default_music_dir() -> Path:
    override = os.getenv(MUSIC_DIR_ENV)
    if override:
        return Path(override)
    return Path(resource_path("audio", "music"))


@dataclass
class SessionConfig:
    ai_delay_ms: int = DEFAULT_DELAY_MS
    initial_volume: float = 1.0
    mute_fallback_volume: float = MUTE_FALLBACK_VOLUME
    initial_track: int = 0
    start_muted: bool = False
    start_mode: Optional[str] = None
    seed: Optional[int] = None
    music_dir: Path = field(default_factory=default_music_dir)
    playlist: List[Track] = field(default_factory=lambda: list(DEFAULT_PLAYLIST))
    screen_size: Tuple[int, int] = (960, 540)
    fps: int = 60
    log_level: str = "INFO"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tic-tac-toe with a pause menu and background music.")
    parser.add_argument("--mode", choices=MODES, default=None, help="skip the mode picker")
    parser.add_argument("--volume", type=float, default=1.0)
    parser.add_argument("--muted", action="store_true", default=False)
    parser.add_argument("--track", type=int, default=0, help="playlist index to start on")
    parser.add_argument("--music-dir", default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--ai-delay-ms", type=int, default=DEFAULT_DELAY_MS)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS)
    return parser


def parse_args(argv=None) -> SessionConfig:
    args = build_parser().parse_args(argv)
    config = SessionConfig(
        ai_delay_ms=max(0, args.ai_delay_ms),
        initial_volume=clamp_volume(args.volume),
        initial_track=args.track,
        start_muted=args.muted,
        start_mode=args.mode,
        seed=args.seed,
        fps=max(1, args.fps),
        log_level=args.log_level,
    )
    if args.music_dir:
        config.music_dir = Path(args.music_dir)
    config.initial_track %= len(config.playlist)
    return config


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
