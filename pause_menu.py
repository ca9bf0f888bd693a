import logging

import pygame

from game_scene import Button
from scene_manager import Scene

log = logging.getLogger(__name__)

FADE_BG = (0, 0, 0, 110)  # translucent overlay
PANEL_BG = (44, 62, 80)
SECTION_BG = (52, 73, 94)
SLIDER_FILL = (76, 175, 80)
SLIDER_TRACK = (85, 85, 85)
OPTION_COLORS = {
    "Resume": (76, 175, 80),
    "Restart": (255, 152, 0),
    "Quit": (231, 76, 60),
}
VOLUME_ICONS = {"muted": "x", "low": ")", "medium": "))", "high": ")))"}
VOLUME_STEP = 0.1


class PauseMenuScene(Scene):
    """Overlay shown while the game is paused: music, volume, Resume/Restart/Quit."""

    def __init__(self, manager, session, parent_scene):
        super().__init__(manager)
        self.session = session
        self.music = session.music
        self.parent = parent_scene  # the paused game scene, drawn underneath
        self.screen = manager.screen
        self.font_big = pygame.font.SysFont(None, 60)
        self.font = pygame.font.SysFont(None, 30)
        self.font_small = pygame.font.SysFont(None, 24)
        self.options = ["Resume", "Restart", "Quit"]
        self.sel = 0
        self.dragging = False
        self._layout()

    def _layout(self):
        w, h = self.screen.get_size()
        pw, ph = 400, 470
        self.panel = pygame.Rect(w // 2 - pw // 2, h // 2 - ph // 2, pw, ph)
        inner_x = self.panel.x + 24
        inner_w = pw - 48
        self.music_box = pygame.Rect(inner_x, self.panel.y + 70, inner_w, 80)
        self.volume_box = pygame.Rect(inner_x, self.music_box.bottom + 12, inner_w, 70)
        self.prev_btn = Button((inner_x + 10, self.music_box.y + 32, 40, 36), "<<", self.font, color=SECTION_BG)
        self.next_btn = Button((self.music_box.right - 50, self.music_box.y + 32, 40, 36), ">>", self.font, color=SECTION_BG)
        self.mute_btn = Button((inner_x + 10, self.volume_box.y + 28, 40, 34), "", self.font_small, color=SECTION_BG)
        self.slider = pygame.Rect(inner_x + 62, self.volume_box.y + 40, inner_w - 140, 10)
        self.option_buttons = []
        y = self.volume_box.bottom + 18
        for label in self.options:
            self.option_buttons.append(Button((inner_x, y, inner_w, 44), label, self.font, color=OPTION_COLORS[label]))
            y += 54

    # --- Input ---
    def handle_event(self, event):
        # music completions still arrive while the overlay is on top
        if self.session.handle_event(event):
            return
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_p):
                self._choose("Resume")
            elif event.key in (pygame.K_UP, pygame.K_w):
                self.sel = (self.sel - 1) % len(self.options)
            elif event.key in (pygame.K_DOWN, pygame.K_s):
                self.sel = (self.sel + 1) % len(self.options)
            elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self._choose(self.options[self.sel])
            elif event.key == pygame.K_LEFT:
                self._nudge_volume(-VOLUME_STEP)
            elif event.key == pygame.K_RIGHT:
                self._nudge_volume(+VOLUME_STEP)
            elif event.key == pygame.K_m:
                self.session.toggle_mute()
            elif event.key in (pygame.K_LEFTBRACKET, pygame.K_COMMA):
                self.session.previous_track()
            elif event.key in (pygame.K_RIGHTBRACKET, pygame.K_PERIOD):
                self.session.next_track()
        elif event.type == pygame.MOUSEMOTION:
            if self.dragging:
                self._slide_to(event.pos[0])
            for i, btn in enumerate(self.option_buttons):
                btn.hover = btn.hit(event.pos)
                if btn.hover:
                    self.sel = i
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._click(event.pos)

    def _click(self, pos):
        if self.prev_btn.hit(pos):
            self.session.previous_track()
        elif self.next_btn.hit(pos):
            self.session.next_track()
        elif self.mute_btn.hit(pos):
            self.session.toggle_mute()
        elif self.slider.inflate(0, 16).collidepoint(pos):
            if not self.music.muted:
                self.dragging = True
                self._slide_to(pos[0])
        else:
            for i, btn in enumerate(self.option_buttons):
                if btn.hit(pos):
                    self.sel = i
                    self._choose(self.options[i])
                    break

    # --- Actions ---
    def _nudge_volume(self, delta):
        if self.music.muted:
            return
        self.session.set_volume(self.music.volume + delta)

    def _slide_to(self, x):
        frac = (x - self.slider.x) / float(self.slider.width)
        self.session.set_volume(frac)

    def _choose(self, choice):
        # close the overlay first so the game scene owns input again
        self.manager.pop()
        if choice == "Resume":
            self.session.resume()
        elif choice == "Restart":
            self.session.restart()
        elif choice == "Quit":
            log.info("[Pause] Player quit back to mode select.")
            self.session.quit()

    # --- No game updates while paused ---
    def update(self, dt):
        pass

    # --- Draw overlay ---
    def draw(self):
        self.parent.draw()  # draw the paused scene underneath
        fade = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        fade.fill(FADE_BG)
        self.screen.blit(fade, (0, 0))

        pygame.draw.rect(self.screen, PANEL_BG, self.panel, border_radius=20)
        title = self.font_big.render("PAUSED", True, (255, 255, 255))
        self.screen.blit(title, title.get_rect(center=(self.panel.centerx, self.panel.y + 38)))

        # Music block
        pygame.draw.rect(self.screen, SECTION_BG, self.music_box, border_radius=12)
        self.screen.blit(self.font_small.render("Music", True, (189, 195, 199)), (self.music_box.x + 12, self.music_box.y + 8))
        self.prev_btn.draw(self.screen)
        self.next_btn.draw(self.screen)
        name = self._fit(self.music.current_track.title, self.music_box.width - 130)
        track = self.font_small.render(name, True, (255, 255, 255))
        self.screen.blit(track, track.get_rect(center=(self.music_box.centerx, self.music_box.y + 50)))

        # Volume block
        pygame.draw.rect(self.screen, SECTION_BG, self.volume_box, border_radius=12)
        self.screen.blit(self.font_small.render("Volume", True, (189, 195, 199)), (self.volume_box.x + 12, self.volume_box.y + 6))
        self.mute_btn.text = VOLUME_ICONS[self.music.volume_icon]
        self.mute_btn.draw(self.screen)
        pygame.draw.rect(self.screen, SLIDER_TRACK, self.slider, border_radius=5)
        shown = self.music.effective_volume
        fill = self.slider.copy()
        fill.width = int(self.slider.width * shown)
        if fill.width:
            pygame.draw.rect(self.screen, SLIDER_FILL, fill, border_radius=5)
        pygame.draw.circle(self.screen, SLIDER_FILL, (self.slider.x + fill.width, self.slider.centery), 9)
        pct = self.font_small.render(f"{round(shown * 100)}%", True, (255, 255, 255))
        self.screen.blit(pct, pct.get_rect(midright=(self.volume_box.right - 12, self.slider.centery)))

        # Menu options
        for i, btn in enumerate(self.option_buttons):
            btn.hover = i == self.sel
            btn.draw(self.screen)

    def _fit(self, text, max_w):
        if self.font_small.size(text)[0] <= max_w:
            return text
        while text and self.font_small.size(text + "...")[0] > max_w:
            text = text[:-1]
        return text + "..."
