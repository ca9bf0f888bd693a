import logging
import sys

import pygame

from config import configure_logging, parse_args
from game_scene import TITLE, launch
from scene_manager import SceneManager

log = logging.getLogger(__name__)


def main(argv=None):
    config = parse_args(argv)
    configure_logging(config.log_level)
    pygame.init()
    log.info("[Boot] Music directory: %s", config.music_dir)
    manager = SceneManager(
        lambda m: launch(m, config),
        size=config.screen_size,
        caption=TITLE,
        fps=config.fps,
    )
    manager.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
