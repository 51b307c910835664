from __future__ import annotations

import math
from typing import Dict, Iterable, Optional, Tuple

import pygame

from .board import Board, GameState, Tile

PAD = 12  # gap around the minefield
STATUS_H = 44  # status bar above the minefield
FACE_SIZE = 30
MIN_WIN_W, MIN_WIN_H = 280, 320

MIN_CELL = 8
SCREEN_FILL = 0.9  # share of the desktop a window may take


def desktop_size() -> Optional[Tuple[int, int]]:
    """Size of the first desktop, or None before the display is up."""
    if not pygame.display.get_init():
        return None
    sizes = pygame.display.get_desktop_sizes()
    return tuple(sizes[0]) if sizes else None


def fit_cell_size(board_w: int, board_h: int, cell: int, limit: Optional[Tuple[int, int]]) -> int:
    """Largest cell size up to `cell` whose window fits inside `limit`."""
    if not limit or limit[0] <= 0 or limit[1] <= 0:
        return cell
    fit_w = (limit[0] - PAD * 2) // board_w
    fit_h = (limit[1] - STATUS_H - PAD * 2) // board_h
    return max(MIN_CELL, min(cell, fit_w, fit_h))


COLORS = {
    "bg": (18, 20, 24),
    "board_bg": (28, 32, 38),
    "hidden": (56, 62, 72),
    "hidden_hi": (66, 74, 86),
    "revealed": (196, 203, 214),
    "grid": (32, 36, 42),
    "outline": (22, 25, 30),
    "flag": (220, 60, 60),
    "flag_pole": (40, 40, 48),
    "mine": (30, 30, 30),
    "det_red": (255, 60, 60),
    "wrong": (255, 200, 40),
    "hud": (230, 236, 244),
    "hud_dim": (180, 186, 194),
    "counter_bg": (10, 10, 12),
    "counter": (255, 70, 60),
    "face": (250, 200, 70),
    "face_ink": (40, 30, 20),
    "win_flash": (255, 255, 255),
}
NUMBER_COLORS = {
    1: (47, 104, 222),  # blue
    2: (38, 145, 62),  # green
    3: (214, 60, 60),  # red
    4: (112, 64, 196),  # purple
    5: (128, 28, 48),  # maroon
    6: (24, 132, 132),  # teal
    7: (30, 34, 40),  # near-black
    8: (96, 106, 118),  # gray
}


class Layout:
    """Window size and where the minefield and face button sit in it."""

    def __init__(self, board_w: int, board_h: int, cell: int):
        self.cell = cell
        self.board_w, self.board_h = board_w, board_h
        self.board_px_w = board_w * cell
        self.board_px_h = board_h * cell
        self.win_w = max(MIN_WIN_W, self.board_px_w + PAD * 2)
        self.win_h = max(MIN_WIN_H, STATUS_H + self.board_px_h + PAD * 2)
        self.origin_x = (self.win_w - self.board_px_w) // 2
        self.origin_y = STATUS_H + PAD
        self.face_rect = pygame.Rect(
            self.win_w // 2 - FACE_SIZE // 2, (STATUS_H - FACE_SIZE) // 2 + 4, FACE_SIZE, FACE_SIZE
        )

    @property
    def size(self) -> Tuple[int, int]:
        return self.win_w, self.win_h

    def screen_to_index(self, px: int, py: int) -> Optional[int]:
        x = (px - self.origin_x) // self.cell
        y = (py - self.origin_y) // self.cell
        if 0 <= x < self.board_w and 0 <= y < self.board_h:
            return int(y) * self.board_w + int(x)
        return None

    def tile_rect(self, index: int, offset: Tuple[int, int] = (0, 0)) -> pygame.Rect:
        x, y = index % self.board_w, index // self.board_w
        return pygame.Rect(
            self.origin_x + x * self.cell + offset[0],
            self.origin_y + y * self.cell + offset[1],
            self.cell,
            self.cell,
        )


class Graphics:
    def __init__(
        self,
        cell_size: int,
        colors: Dict[str, Tuple[int, int, int]] = COLORS,
        number_colors: Dict[int, Tuple[int, int, int]] = NUMBER_COLORS,
    ):
        self.cell = cell_size
        self.colors = colors
        self.number_colors = number_colors

        if not pygame.font.get_init():
            pygame.font.init()
        self.hud_font = pygame.font.Font(None, 30)
        self.small_font = pygame.font.Font(None, 20)
        self.num_font = pygame.font.Font(None, max(16, int(self.cell * 0.9)))

    # ------------------------- basic passes -------------------------
    def draw_background(self, surface: pygame.Surface):
        surface.fill(self.colors["bg"])

    def draw_board(
        self,
        surface: pygame.Surface,
        layout: Layout,
        board: Board,
        exploder,
        losing_tile: Optional[int],
        hover: Optional[int],
        pressed: Iterable[int] = (),
        offset: Tuple[int, int] = (0, 0),
    ):
        cell = layout.cell
        slab = pygame.Rect(
            layout.origin_x - 6 + offset[0],
            layout.origin_y - 6 + offset[1],
            layout.board_px_w + 12,
            layout.board_px_h + 12,
        )
        pygame.draw.rect(surface, self.colors["board_bg"], slab, border_radius=8)
        pressed = set(pressed)
        lost = board.state is GameState.LOSE

        for i, tile in enumerate(board.board):
            r = layout.tile_rect(i, offset)
            exploded = exploder.is_exploded(i)

            # tile base
            if i == losing_tile:
                base = self.colors["det_red"]
            elif tile is Tile.DUG:
                base = self.colors["revealed"]
            elif tile is Tile.FLAG and exploded is not True:
                base = self.colors["hidden"]
            elif exploded is not None or i in pressed:
                base = self.colors["revealed"]
            else:
                base = self.colors["hidden_hi"] if i == hover else self.colors["hidden"]
            pygame.draw.rect(surface, base, r, border_radius=3)
            pygame.draw.rect(surface, self.colors["grid"], r, width=1, border_radius=3)

            # icon on top
            if tile is Tile.FLAG:
                if exploded is None and lost:
                    self._draw_flag(surface, r.centerx, r.centery)
                    self._draw_cross(surface, r)  # flag on a safe tile
                elif exploded:
                    self._draw_mine(surface, r.centerx, r.centery, detonated=True)
                else:
                    self._draw_flag(surface, r.centerx, r.centery)
            elif exploded is not None:
                self._draw_mine(surface, r.centerx, r.centery, detonated=exploded)
            elif tile is Tile.DUG:
                n = board.neighbour_count_at(i)
                if n > 0:
                    col = self.number_colors.get(n, self.number_colors[8])
                    txt = self.num_font.render(str(n), True, col)
                    surface.blit(txt, txt.get_rect(center=r.center))

    def draw_status(
        self,
        surface: pygame.Surface,
        layout: Layout,
        flags_left: int,
        timer_s: Optional[float],
        face: str,
        face_pressed: bool = False,
    ):
        # flags left (left sixth), timer (right sixth)
        counter = f"{min(flags_left, 999):03d}"
        self._draw_counter(surface, counter, (layout.win_w // 6, layout.face_rect.centery))

        if timer_s is None:
            clock = "--:--"
        else:
            seconds = min(int(timer_s), 60 * 100 - 1)
            clock = f"{seconds // 60:02d}:{seconds % 60:02d}"
        self._draw_counter(surface, clock, (layout.win_w * 5 // 6, layout.face_rect.centery))

        self.draw_face(surface, layout.face_rect, face, face_pressed)

    def draw_face(self, surface: pygame.Surface, rect: pygame.Rect, face: str, pressed: bool):
        r = rect.move(1, 1) if pressed else rect
        pygame.draw.rect(surface, self.colors["hidden"], r, border_radius=5)
        pygame.draw.rect(surface, self.colors["outline"], r, width=1, border_radius=5)
        cx, cy = r.center
        rad = r.w // 2 - 4
        ink = self.colors["face_ink"]
        pygame.draw.circle(surface, self.colors["face"], (cx, cy), rad)
        ex, ey = rad // 3, rad // 4

        if face == "dead":
            for sx in (-ex, ex):
                pygame.draw.line(surface, ink, (cx + sx - 2, cy - ey - 2), (cx + sx + 2, cy - ey + 2), 2)
                pygame.draw.line(surface, ink, (cx + sx - 2, cy - ey + 2), (cx + sx + 2, cy - ey - 2), 2)
        elif face == "happy" or pressed:
            for sx in (-ex, ex):
                pygame.draw.line(surface, ink, (cx + sx - 2, cy - ey), (cx + sx + 2, cy - ey), 2)
        else:
            for sx in (-ex, ex):
                pygame.draw.circle(surface, ink, (cx + sx, cy - ey), 2)

        mouth = pygame.Rect(cx - rad // 2, cy, rad, rad // 2)
        if face == "eek":
            pygame.draw.circle(surface, ink, (cx, cy + rad // 3), max(2, rad // 5), width=2)
        elif face == "dead":
            pygame.draw.arc(surface, ink, mouth.move(0, rad // 4), 0, math.pi, 2)
        else:
            pygame.draw.arc(surface, ink, mouth.move(0, -rad // 4), math.pi, 2 * math.pi, 2)

    def draw_result_overlay(self, surface: pygame.Surface, state: GameState, fade: float):
        """fade runs 1 -> 0 after the game ends."""
        if not state.terminal or fade <= 0:
            return
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        if state is GameState.WIN:
            overlay.fill((*self.colors["win_flash"], int(100 * fade)))
        else:
            overlay.fill((*self.colors["det_red"], int(90 * fade)))
        surface.blit(overlay, (0, 0))

    def draw_hint(self, surface: pygame.Surface, text: str, alpha: int):
        if alpha <= 0:
            return
        ht = self.small_font.render(text, True, self.colors["hud_dim"])
        ht.set_alpha(alpha)
        w, h = surface.get_size()
        surface.blit(ht, ht.get_rect(midbottom=(w // 2, h - 2)))

    # ------------------------- icons/shapes -------------------------
    def _draw_counter(self, surface: pygame.Surface, text: str, center: Tuple[int, int]):
        txt = self.hud_font.render(text, True, self.colors["counter"])
        bg = txt.get_rect(center=center).inflate(10, 6)
        pygame.draw.rect(surface, self.colors["counter_bg"], bg, border_radius=4)
        surface.blit(txt, txt.get_rect(center=center))

    def _draw_flag(self, surface: pygame.Surface, cx: int, cy: int):
        # simple pole + triangular cloth
        pole_h = int(self.cell * 0.6)
        pole_w = max(2, int(self.cell * 0.08))
        x = cx - pole_w // 2
        y = cy - pole_h // 2
        pygame.draw.rect(surface, self.colors["flag_pole"], (x, y, pole_w, pole_h), border_radius=1)
        tri_w = int(self.cell * 0.4)
        tri_h = int(self.cell * 0.3)
        p1 = (x + pole_w, y)
        p2 = (p1[0] + tri_w, p1[1] + tri_h // 2)
        p3 = (x + pole_w, y + tri_h)
        pygame.draw.polygon(surface, self.colors["flag"], (p1, p2, p3))

    def _draw_cross(self, surface: pygame.Surface, r: pygame.Rect):
        inner = r.inflate(-r.w // 3, -r.h // 3)
        pygame.draw.line(surface, self.colors["wrong"], inner.topleft, inner.bottomright, 2)
        pygame.draw.line(surface, self.colors["wrong"], inner.bottomleft, inner.topright, 2)

    def _draw_mine(self, surface: pygame.Surface, cx: int, cy: int, detonated: bool):
        r = max(2, int(self.cell * 0.2))
        core_color = self.colors["mine"]
        pygame.draw.circle(surface, core_color, (cx, cy), r)
        for i in range(8):
            ang = i * math.pi / 4
            x1 = cx + int(r * 0.4 * math.cos(ang))
            y1 = cy + int(r * 0.4 * math.sin(ang))
            x2 = cx + int((r + self.cell * 0.15) * math.cos(ang))
            y2 = cy + int((r + self.cell * 0.15) * math.sin(ang))
            pygame.draw.line(surface, core_color, (x1, y1), (x2, y2), width=2)
        if detonated:
            pygame.draw.circle(surface, self.colors["det_red"], (cx, cy), int(r * 1.5), width=2)
