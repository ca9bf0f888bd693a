import logging

import pygame

log = logging.getLogger(__name__)


class Scene:
    """Base scene with no-op event/update/draw/exit hooks."""

    def __init__(self, manager):
        self.manager = manager

    def handle_event(self, event):
        pass

    def update(self, dt):
        pass

    def draw(self):
        pass

    def on_exit(self):
        """Called once when the scene leaves the stack."""
        pass


class SceneManager:
    """Controls scene stack and main loop."""

    def __init__(self, first_scene_class, size=(960, 540), caption="Tic Tac Toe", fps=60):
        pygame.init()
        self.screen = pygame.display.set_mode(size)
        self.size = self.screen.get_size()
        pygame.display.set_caption(caption)
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.running = True
        self.scenes = []

        # Initialize first scene
        if callable(first_scene_class):
            first_scene = first_scene_class(self)
            self.scenes.append(first_scene)
        else:
            raise ValueError("First scene must be a class reference.")

    @property
    def current(self):
        return self.scenes[-1] if self.scenes else None

    def push(self, scene):
        self.scenes.append(scene)

    def pop(self):
        if self.scenes:
            self._exit(self.scenes.pop())
        if not self.scenes:
            self.running = False

    def _exit(self, scene):
        try:
            scene.on_exit()
        except Exception:
            log.exception("[Scenes] Exit hook failed for %s", type(scene).__name__)

    def close(self):
        while self.scenes:
            self._exit(self.scenes.pop())
        self.running = False

    def step(self, dt, events=()):
        """Run one frame against ``events``; the main loop and tests share this."""
        current = self.current
        if current is None:
            self.running = False
            return
        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
                return
            try:
                current.handle_event(event)
            except Exception:
                log.exception("[Scenes] Event error in %s", type(current).__name__)
            # a handler may have pushed or popped scenes
            current = self.current
            if current is None:
                return

        try:
            current.update(dt)
            if self.current is not None:
                self.current.draw()
        except Exception:
            log.exception("[Scenes] Frame error in %s", type(current).__name__)

    def run(self):
        """Main loop."""
        while self.running:
            dt = self.clock.tick(self.fps) / 1000.0
            self.step(dt, pygame.event.get())
            pygame.display.flip()

        self.close()
        pygame.quit()
