"""Detonates the bombs of a lost board in a circle spreading out from the losing tile."""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Optional

from .board import Board, Tile

log = logging.getLogger(__name__)

FIRST_POP_S = 0.7  # time for the radius to reach the first bomb
EFFECT_COOLDOWN_S = 0.1  # min gap between shake/sound notifications


class Blast:
    __slots__ = ("index", "distance_sq", "exploded")

    def __init__(self, index: int, distance_sq: float):
        self.index = index
        self.distance_sq = distance_sq
        self.exploded = False


class Exploder:
    def __init__(self, on_explode: Optional[Callable[[], None]] = None):
        self.on_explode = on_explode
        self.blasts: List[Blast] = []
        self._by_index: Dict[int, Blast] = {}
        self.skip = 0
        self.radius = 0.0
        self.radius_expansion = 0.0
        self.effect_timer = math.inf

    def reset(self):
        self.blasts = []
        self._by_index = {}
        self.skip = 0
        self.radius = 0.0
        self.radius_expansion = 0.0
        self.effect_timer = math.inf

    def initialise(self, origin_index: int, board: Board):
        self.reset()
        ox, oy = board.coords(origin_index)
        for bomb in board.bombs:
            x, y = board.coords(bomb)
            self.blasts.append(Blast(bomb, float((ox - x) ** 2 + (oy - y) ** 2)))
        # stable: equal distances keep generation order
        self.blasts.sort(key=lambda b: b.distance_sq)
        self._by_index = {b.index: b for b in self.blasts}
        self.radius_expansion = math.sqrt(max(board.width, board.height)) * 2.0
        log.debug("Exploding %d bombs from tile %d", len(self.blasts), origin_index)

    # ---------- queries ----------
    @property
    def done(self) -> bool:
        return self.skip == len(self.blasts)

    @property
    def order(self) -> List[int]:
        return [b.index for b in self.blasts]

    @property
    def exploded_count(self) -> int:
        return sum(1 for b in self.blasts if b.exploded)

    def contains(self, index: int) -> bool:
        return index in self._by_index

    def is_exploded(self, index: int) -> Optional[bool]:
        blast = self._by_index.get(index)
        return None if blast is None else blast.exploded

    # ---------- per frame ----------
    def tick(self, dt: float) -> bool:
        """Grow the blast radius by dt seconds. Returns True if a notification fired."""
        if self.done:
            return False
        dt = max(0.0, float(dt))
        self.radius += dt * (1.0 / FIRST_POP_S if self.radius < 1.0 else self.radius_expansion)
        radius_sq = self.radius * self.radius

        newly = 0
        while self.skip < len(self.blasts):
            blast = self.blasts[self.skip]
            if blast.distance_sq >= radius_sq:
                break  # sorted, so every later bomb is outside too
            if not blast.exploded:
                blast.exploded = True
                newly += 1
            self.skip += 1

        self.effect_timer += dt
        if newly and self.effect_timer > EFFECT_COOLDOWN_S:
            self._notify()
            return True
        return False

    # ---------- manual override ----------
    def manual_candidate(self, board: Board) -> Optional[int]:
        """Nearest bomb that hasn't exploded and isn't under a flag."""
        for blast in self.blasts[self.skip:]:
            if not blast.exploded and board.tile_at(blast.index) is not Tile.FLAG:
                return blast.index
        return None

    def detonate(self, index: int) -> bool:
        blast = self._by_index.get(index)
        if blast is None or blast.exploded:
            return False
        blast.exploded = True
        # keep skip pointing at the first unexploded blast
        while self.skip < len(self.blasts) and self.blasts[self.skip].exploded:
            self.skip += 1
        self._notify()
        return True

    def _notify(self):
        self.effect_timer = 0.0
        if callable(self.on_explode):
            self.on_explode()
