"""
Minefield scene
---------------
- LMB release digs, RMB flags (RMB on a flag erases flags while dragged)
- MMB, LMB+RMB or Shift+LMB release chords
- Esc opens the game menu, F2 / R starts a new game, the face button does too
- Space after a loss sets off the nearest live bomb straight away
- HUD: flags left, timer (starts on the first dig, freezes when the game ends)

Everything game related goes through the Board; this file only maps input to it.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Set

import pygame

import sound_engine
from game_context import GameContext
from scene_manager import Scene

from .board import Board, Difficulty, GameState, SetFlagMode, Tile
from .config import SweeperConfig
from .exploder import Exploder
from .graphics import SCREEN_FILL, Graphics, Layout, desktop_size, fit_cell_size

log = logging.getLogger(__name__)

# ------------------------- CONFIG (easy tuning) -------------------------
SHAKE_S = 0.25  # screen shake after each explosion notification
SHAKE_PX = 3
RESULT_FADE_S = 1.2
FIRST_HINT_FADE_S = 1.0
HINT = "LMB dig  RMB flag  MMB chord  Esc menu"


class MineSweepScene(Scene):
    def __init__(self, manager, config: Optional[SweeperConfig] = None, context: Optional[GameContext] = None):
        super().__init__(manager)
        self.config = config or SweeperConfig()
        self.context = context or GameContext()
        self.rng = random.Random(self.config.seed)  # board layouts only
        self.jitter_rng = random.Random()
        self.gfx = Graphics(cell_size=self.config.cell_size)
        self.exploder = Exploder(on_explode=self._on_explode)

        sound_engine.set_volume(self.config.sfx_volume)
        sound_engine.set_muted(self.config.mute)

        self.difficulty: Difficulty = self.config.resolve_difficulty()
        self.new_game(self.difficulty)

    # ---------- game lifecycle ----------
    def new_game(self, difficulty: Optional[Difficulty] = None):
        if difficulty is not None:
            self.difficulty = difficulty
        self.board = Board(self.difficulty, rng=self.rng)
        self.exploder.reset()
        limit = self._screen_limit()
        cell = fit_cell_size(self.board.width, self.board.height, self.config.cell_size, limit)
        if cell != self.gfx.cell:
            self.gfx = Graphics(cell_size=cell)
        self.layout = Layout(self.board.width, self.board.height, cell)
        self.manager.resize(self.layout.size)
        self.screen = self.manager.screen

        self.timer: Optional[float] = None
        self.losing_tile: Optional[int] = None
        self.hover: Optional[int] = None
        self.buttons: Set[int] = set()
        self.flag_mode: Optional[SetFlagMode] = None
        self.chording = False
        self.chorded = False
        self.face_pressed = False
        self.shake = 0.0
        self.result_fade = 0.0
        self.hint_alpha = 255
        log.info("New game: %s", self.difficulty.label)

    def _screen_limit(self):
        desktop = desktop_size()
        if desktop is None:
            return None
        return int(desktop[0] * SCREEN_FILL), int(desktop[1] * SCREEN_FILL)

    def _after_action(self, prev_state: GameState, origin: int):
        state = self.board.state
        if state is prev_state:
            return
        if state is GameState.LOSE:
            self.losing_tile = origin
            self.exploder.initialise(origin, self.board)
            self.result_fade = 1.0
            log.info("Lost at tile %d after %.1fs", origin, self.timer or 0.0)
            self.context.record(self.difficulty.name, "lose", self.timer)
        elif state is GameState.WIN:
            self.result_fade = 1.0
            sound_engine.play_win()
            log.info("Won %s in %.1fs", self.difficulty.name, self.timer or 0.0)
            self.context.record(self.difficulty.name, "win", self.timer)

    def _on_explode(self):
        self.shake = SHAKE_S
        sound_engine.play_explosion()

    # ---------- actions ----------
    def _dig(self, index: Optional[int]):
        if index is None:
            return
        prev = self.board.state
        if self.board.dig(index):
            if self.timer is None:
                self.timer = 0.0
            self._after_action(prev, index)

    def _chord(self, index: Optional[int]):
        if index is None:
            return
        prev = self.board.state
        bomb = self.board.chord(index)
        self._after_action(prev, bomb if bomb is not None else index)

    def _flag(self, index: Optional[int]):
        if index is None:
            return
        # RMB on a flag starts erasing, anywhere else places a single flag
        mode = SetFlagMode.REMOVE if self.board.tile_at(index) is Tile.FLAG else SetFlagMode.FLAG
        if self.board.set_flag(mode, index) and mode is SetFlagMode.FLAG:
            sound_engine.play_flag()
        self.flag_mode = mode if mode is SetFlagMode.REMOVE else None

    def _detonate_next(self):
        if self.board.state is not GameState.LOSE:
            return
        bomb = self.exploder.manual_candidate(self.board)
        if bomb is not None:
            self.exploder.detonate(bomb)

    # ---------- events ----------
    def handle_event(self, ev):
        if ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_ESCAPE:
                self._open_menu()
            elif ev.key in (pygame.K_F2, pygame.K_r):
                self.new_game()
            elif ev.key == pygame.K_SPACE:
                self._detonate_next()
        elif ev.type == pygame.MOUSEMOTION:
            self.hover = self.layout.screen_to_index(*ev.pos)
            if self.flag_mode is SetFlagMode.REMOVE and not self.chording and self.hover is not None:
                self.board.set_flag(SetFlagMode.REMOVE, self.hover)
        elif ev.type == pygame.MOUSEBUTTONDOWN:
            self._on_mouse_down(ev)
        elif ev.type == pygame.MOUSEBUTTONUP:
            self._on_mouse_up(ev)

    def _on_mouse_down(self, ev):
        if ev.button not in (1, 2, 3):
            return
        self.buttons.add(ev.button)
        if ev.button == 1 and self.layout.face_rect.collidepoint(ev.pos):
            self.face_pressed = True
            return
        index = self.layout.screen_to_index(*ev.pos)
        self.hover = index

        shift = pygame.key.get_mods() & pygame.KMOD_SHIFT
        self.chording = (
            2 in self.buttons
            or {1, 3} <= self.buttons
            or (ev.button == 1 and bool(shift))
        )
        if self.chording:
            self.flag_mode = None
            return
        if ev.button == 3:
            self._flag(index)

    def _on_mouse_up(self, ev):
        if ev.button not in (1, 2, 3):
            return
        self.buttons.discard(ev.button)
        if ev.button == 1 and self.face_pressed:
            self.face_pressed = False
            if self.layout.face_rect.collidepoint(ev.pos):
                self.new_game()
            return
        index = self.layout.screen_to_index(*ev.pos)

        if self.chording:
            # first release ends the chord; the rest of the buttons must not dig
            self.chording = False
            self.chorded = True
            self._chord(index)
        elif ev.button == 1 and not self.chorded:
            self._dig(index)
        if ev.button == 3:
            self.flag_mode = None
        if not self.buttons:
            self.chorded = False

    def _open_menu(self):
        from .menu import GameMenuScene

        self.buttons.clear()
        self.chording = self.chorded = self.face_pressed = False
        self.flag_mode = None
        self.manager.push(GameMenuScene(self.manager, self))

    # ---------- update & draw ----------
    def update(self, dt: float):
        state = self.board.state
        if self.timer is not None and state is GameState.PLAYING:
            self.timer += dt
        if self.board.in_progress:
            self.context.add_playtime(dt)
        if state is GameState.LOSE:
            self.exploder.tick(dt)

        self.shake = max(0.0, self.shake - dt)
        if self.result_fade > 0:
            self.result_fade = max(0.0, self.result_fade - dt / RESULT_FADE_S)
        if self.board.turns and self.hint_alpha > 0:
            decay = int(255 * dt / max(0.0001, FIRST_HINT_FADE_S))
            self.hint_alpha = max(0, self.hint_alpha - decay)

    def face(self) -> str:
        if self.board.state is GameState.LOSE:
            return "dead"
        if self.board.state is GameState.WIN:
            return "happy"
        if self.buttons and self.hover is not None and not self.face_pressed:
            return "eek"
        return "normal"

    def pressed_tiles(self) -> Set[int]:
        """Tiles drawn sunken under the pointer while a button is held."""
        if self.hover is None or not self.board.playing:
            return set()
        if self.chording:
            around = self.board.neighbours(self.hover) + [self.hover]
            return {i for i in around if self.board.tile_at(i) is Tile.UNOPENED}
        if 1 in self.buttons and not self.chorded and self.board.diggable(self.hover):
            return {self.hover}
        return set()

    def shake_offset(self):
        if self.shake <= 0:
            return 0, 0
        k = self.shake / SHAKE_S
        return (
            int(round(self.jitter_rng.uniform(-1, 1) * SHAKE_PX * k)),
            int(round(self.jitter_rng.uniform(-1, 1) * SHAKE_PX * k)),
        )

    def draw(self):
        self.gfx.draw_background(self.screen)
        self.gfx.draw_status(
            self.screen,
            self.layout,
            flags_left=self.board.flags_left,
            timer_s=self.timer,
            face=self.face(),
            face_pressed=self.face_pressed,
        )
        self.gfx.draw_board(
            self.screen,
            self.layout,
            self.board,
            self.exploder,
            losing_tile=self.losing_tile,
            hover=self.hover,
            pressed=self.pressed_tiles(),
            offset=self.shake_offset(),
        )
        self.gfx.draw_result_overlay(self.screen, self.board.state, self.result_fade)
        self.gfx.draw_hint(self.screen, HINT, self.hint_alpha)


def launch(manager, config=None, context=None):
    """Entry point used by boot.py."""
    return MineSweepScene(manager, config, context)
