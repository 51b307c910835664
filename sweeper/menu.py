import logging

import pygame

from scene_manager import Scene

from .board import EASY, HARD, NORMAL

log = logging.getLogger(__name__)

FADE_BG = (0, 0, 0, 180)  # translucent overlay
OPTIONS = ["Resume", "New Game", "Easy", "Normal", "Hard", "Custom", "Quit"]
CONFIRM_OPTIONS = ["Exit", "Cancel"]
CONFIRM_TEXT = "Are you sure you want to exit?"
ROW_H = 24


class GameMenuScene(Scene):
    """Overlay menu on top of the minefield: new game, difficulty, quit."""

    def __init__(self, manager, parent_scene):
        super().__init__(manager)
        self.parent = parent_scene
        self.screen = manager.screen
        self.font_big = pygame.font.Font(None, 44)
        self.font_small = pygame.font.Font(None, 24)
        self.options = list(OPTIONS)
        self.sel = 0
        self.confirm_quit = False

    def _options_top(self):
        return 130

    def _option_rect(self, i):
        w, _ = self.screen.get_size()
        return pygame.Rect(w // 2 - 90, self._options_top() + ROW_H * i - 4, 180, ROW_H)

    def _option_at(self, pos):
        for i in range(len(self.options)):
            if self._option_rect(i).collidepoint(pos):
                return i
        return None

    def label(self, choice):
        """Text shown for a menu row; Custom shows the size it will start."""
        if choice == "Custom":
            w, h, bombs = self.parent.config.custom_difficulty().values()
            return f"Custom {w}x{h}, {bombs}"
        return choice

    # --- Input ---
    def handle_event(self, event):
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_p):
                if self.confirm_quit:
                    self.activate("Cancel")
                else:
                    self.manager.pop()  # resume
            elif event.key in (pygame.K_UP, pygame.K_w):
                self.sel = (self.sel - 1) % len(self.options)
            elif event.key in (pygame.K_DOWN, pygame.K_s):
                self.sel = (self.sel + 1) % len(self.options)
            elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self.activate(self.options[self.sel])
        elif event.type == pygame.MOUSEMOTION:
            i = self._option_at(event.pos)
            if i is not None:
                self.sel = i
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            i = self._option_at(event.pos)
            if i is not None:
                self.sel = i
                self.activate(self.options[i])

    # --- Actions ---
    def activate(self, choice):
        presets = {"Easy": EASY, "Normal": NORMAL, "Hard": HARD}
        if choice == "Resume":
            self.manager.pop()
        elif choice == "New Game":
            self.manager.pop()
            self.parent.new_game()
        elif choice in presets:
            self.manager.pop()
            self.parent.new_game(presets[choice])
        elif choice == "Custom":
            self.manager.pop()
            self.parent.new_game(self.parent.config.custom_difficulty())
        elif choice == "Quit":
            self.confirm_quit = True
            self.options = list(CONFIRM_OPTIONS)
            self.sel = 1  # Cancel
        elif choice == "Cancel":
            self.confirm_quit = False
            self.options = list(OPTIONS)
            self.sel = OPTIONS.index("Quit")
        elif choice == "Exit":
            log.info("Player quit: %r", self.parent.context)
            self.manager.quit()

    # --- No updates while the menu is open ---
    def update(self, dt):
        pass

    # --- Draw overlay ---
    def draw(self):
        self.parent.draw()  # draw the minefield underneath
        fade = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        fade.fill(FADE_BG)
        self.screen.blit(fade, (0, 0))
        w, _ = self.screen.get_size()

        title = self.font_big.render("Game", True, (255, 255, 200))
        self.screen.blit(title, title.get_rect(center=(w // 2, 34)))

        if self.confirm_quit:
            lines = [CONFIRM_TEXT]
        else:
            stats = self.parent.context.stats
            best = self.parent.context.best_time(self.parent.difficulty.name)
            lines = [
                self.parent.difficulty.label,
                f"Wins: {stats['wins']}  Losses: {stats['losses']}",
                f"Best: {best:.1f} s" if best is not None else "Best: --",
            ]
        y = 62
        for text in lines:
            t = self.font_small.render(text, True, (230, 230, 230))
            self.screen.blit(t, t.get_rect(midtop=(w // 2, y)))
            y += 20

        for i, choice in enumerate(self.options):
            color = (255, 235, 140) if i == self.sel else (200, 200, 200)
            surf = self.font_small.render(self.label(choice), True, color)
            self.screen.blit(surf, surf.get_rect(center=self._option_rect(i).center))
