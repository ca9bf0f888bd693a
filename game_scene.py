# game_scene.py
# Tic-Tac-Toe screen: mode picker, 3x3 board, status line, pause button, Play Again

import pygame

from board_model import O, X, winning_line
from game_context import MODE_DUO, MODE_SOLO
from game_modes import MODE_LABELS
from game_session import GameSession
from scene_manager import Scene

TITLE = "Tic Tac Toe"
PLAYER_NAMES = {X: "Jinx", O: "Bingus"}

BG = (15, 23, 42)
BOARD_BG = (30, 41, 59)
GRID_COLOR = (51, 65, 85)
TEXT = (226, 232, 240)
X_COLOR = (240, 230, 120)
O_COLOR = (130, 200, 255)
WIN_COLOR = (255, 255, 255)
MODE_OVERLAY = (15, 23, 42, 235)
MODE_BTN = (14, 165, 233)
MODE_TEXT = (11, 17, 32)
RESET_BTN = (34, 197, 94)
PAUSE_BTN = (51, 65, 85)

KEY_CELLS = {getattr(pygame, f"K_{n}"): n - 1 for n in range(1, 10)}
for _n in range(1, 10):
    _kp = getattr(pygame, f"K_KP{_n}", None) or getattr(pygame, f"K_KP_{_n}", None)
    if _kp is not None:
        KEY_CELLS[_kp] = _n - 1


class Button:
    def __init__(self, rect, text, font, color=(50, 50, 70), text_color=(240, 240, 255), hint=None, hint_font=None):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.color = color
        self.text_color = text_color
        self.hint = hint
        self.hint_font = hint_font
        self.hover = False

    def draw(self, surf):
        bg = self.color if not self.hover else tuple(min(255, c + 30) for c in self.color)
        pygame.draw.rect(surf, bg, self.rect, border_radius=10)
        pygame.draw.rect(surf, (180, 180, 220), self.rect, 2, border_radius=10)
        txt = self.font.render(self.text, True, self.text_color)
        if self.hint and self.hint_font:
            surf.blit(txt, txt.get_rect(center=(self.rect.centerx, self.rect.centery - 9)))
            hint = self.hint_font.render(self.hint, True, self.text_color)
            surf.blit(hint, hint.get_rect(center=(self.rect.centerx, self.rect.centery + 14)))
        else:
            surf.blit(txt, txt.get_rect(center=self.rect.center))

    def hit(self, pos):
        return self.rect.collidepoint(pos)


class TicTacToeScene(Scene):
    """Presentation for a GameSession; all state lives in the session."""

    def __init__(self, manager, config, backend, rng=None):
        super().__init__(manager)
        self.screen = manager.screen
        self.w, self.h = manager.size
        self.big = pygame.font.SysFont(None, 56)
        self.font = pygame.font.SysFont(None, 32)
        self.small = pygame.font.SysFont(None, 22)

        # last state handed over by the session
        self.board = None
        self.outcome = None
        self.current_player = X

        self.session = GameSession(config, backend, presenter=self, rng=rng)

        # Geometry
        self.board_px = int(min(self.w, self.h) * 0.62)
        self.left = (self.w - self.board_px) // 2
        self.top = (self.h - self.board_px) // 2 - 10
        self.cell_size = self.board_px / 3
        self.board_rect = pygame.Rect(self.left, self.top, self.board_px, self.board_px)

        self.pause_btn = Button((self.w - 70, 16, 54, 44), "II", self.font, color=PAUSE_BTN)
        self.reset_btn = Button(
            (self.w // 2 - 80, self.board_rect.bottom + 44, 160, 40),
            "Play Again", self.font, color=RESET_BTN, text_color=MODE_TEXT,
        )
        bw, bh = int(self.board_px * 0.8), 64
        bx = self.board_rect.centerx - bw // 2
        self.mode_buttons = {}
        for i, mode in enumerate((MODE_SOLO, MODE_DUO)):
            label, hint = MODE_LABELS[mode]
            rect = (bx, self.board_rect.centery - 20 + i * (bh + 12), bw, bh)
            self.mode_buttons[mode] = Button(
                rect, label, self.font, color=MODE_BTN, text_color=MODE_TEXT, hint=hint, hint_font=self.small
            )

        self.session.start()

    # ---------- presenter ----------
    def present_board(self, board, outcome, current_player):
        self.board = board
        self.outcome = outcome
        self.current_player = current_player

    # ---------- math helpers ----------
    def _cell_rect(self, idx):
        r, c = divmod(idx, 3)
        return pygame.Rect(
            int(self.left + c * self.cell_size),
            int(self.top + r * self.cell_size),
            int(self.cell_size),
            int(self.cell_size),
        )

    def _pos_to_cell(self, mx, my):
        if not self.board_rect.collidepoint(mx, my):
            return None
        c = min(2, int((mx - self.left) // self.cell_size))
        r = min(2, int((my - self.top) // self.cell_size))
        return r * 3 + c

    # ---------- actions ----------
    def _open_pause(self):
        if not self.session.pause():
            return
        from pause_menu import PauseMenuScene

        self.manager.push(PauseMenuScene(self.manager, self.session, self))

    # ---------- scene API ----------
    def handle_event(self, event):
        if self.session.handle_event(event):
            return
        ctx = self.session.context

        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_p):
                self._open_pause()
            elif event.key == pygame.K_r:
                self.session.play_again()
            elif not ctx.mode_selected:
                if event.key == pygame.K_1:
                    self.session.select_mode(MODE_SOLO)
                elif event.key == pygame.K_2:
                    self.session.select_mode(MODE_DUO)
            elif event.key in KEY_CELLS:
                self.session.submit_move(KEY_CELLS[event.key])
        elif event.type == pygame.MOUSEMOTION:
            for btn in self._visible_buttons():
                btn.hover = btn.hit(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            pos = event.pos
            if self.session.can_pause and self.pause_btn.hit(pos):
                self._open_pause()
                return
            if self.reset_btn.hit(pos):
                self.session.play_again()
                return
            if not ctx.mode_selected:
                for mode, btn in self.mode_buttons.items():
                    if btn.hit(pos):
                        self.session.select_mode(mode)
                        return
                return
            idx = self._pos_to_cell(*pos)
            if idx is not None:
                self.session.submit_move(idx)

    def _visible_buttons(self):
        buttons = [self.reset_btn]
        if self.session.can_pause:
            buttons.append(self.pause_btn)
        if not self.session.context.mode_selected:
            buttons.extend(self.mode_buttons.values())
        return buttons

    def update(self, dt):
        self.session.update(dt)

    def on_exit(self):
        self.session.teardown()

    # ---------- drawing ----------
    def draw(self):
        surf = self.screen
        surf.fill(BG)
        title = self.big.render(TITLE, True, TEXT)
        surf.blit(title, title.get_rect(center=(self.w // 2, 40)))
        if self.session.can_pause:
            self.pause_btn.draw(surf)

        self._draw_board(surf)
        if not self.session.context.mode_selected:
            self._draw_mode_overlay(surf)

        status = self.font.render(self.session.status_text(PLAYER_NAMES), True, TEXT)
        surf.blit(status, status.get_rect(center=(self.w // 2, self.board_rect.bottom + 22)))
        self.reset_btn.draw(surf)

    def _draw_board(self, surf):
        pygame.draw.rect(surf, BOARD_BG, self.board_rect, border_radius=16)
        for i in range(1, 3):
            x = int(self.left + i * self.cell_size)
            pygame.draw.line(surf, GRID_COLOR, (x, self.top), (x, self.board_rect.bottom), 2)
            y = int(self.top + i * self.cell_size)
            pygame.draw.line(surf, GRID_COLOR, (self.left, y), (self.board_rect.right, y), 2)
        pygame.draw.rect(surf, GRID_COLOR, self.board_rect, 2, border_radius=16)

        board = self.board or ()
        for idx, v in enumerate(board):
            if not v:
                continue
            r = self._cell_rect(idx).inflate(-int(self.cell_size * 0.3), -int(self.cell_size * 0.3))
            if v == X:
                pygame.draw.line(surf, X_COLOR, r.topleft, r.bottomright, 8)
                pygame.draw.line(surf, X_COLOR, r.topright, r.bottomleft, 8)
            else:
                pygame.draw.ellipse(surf, O_COLOR, r, 8)

        line = winning_line(board) if board else None
        if line:
            start = self._cell_rect(line[0]).center
            end = self._cell_rect(line[2]).center
            pygame.draw.line(surf, WIN_COLOR, start, end, 6)

    def _draw_mode_overlay(self, surf):
        overlay = pygame.Surface(self.board_rect.size, pygame.SRCALPHA)
        overlay.fill(MODE_OVERLAY)
        surf.blit(overlay, self.board_rect.topleft)
        prompt = self.font.render("Choose a mode", True, TEXT)
        surf.blit(prompt, prompt.get_rect(center=(self.board_rect.centerx, self.board_rect.centery - 60)))
        for btn in self.mode_buttons.values():
            btn.draw(surf)


def launch(manager, config, backend=None, rng=None):
    if backend is None:
        from sound_engine import PygamePlayback

        backend = PygamePlayback(config.music_dir)
    return TicTacToeScene(manager, config, backend, rng=rng)
