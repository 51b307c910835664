"""
Board engine
------------
- Flat board of width*height tiles, indexed row * width + col
- Bombs are placed on the first dig (never at construction) so the first dig is safe
- Flood fill digs in waves, chording digs around a satisfied number
- No rendering, input or timing in here; the scene polls it every frame
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

log = logging.getLogger(__name__)

# ------------------------------ LIMITS ----------------------------------
MIN_WIDTH, MAX_WIDTH = 4, 200
MIN_HEIGHT, MAX_HEIGHT = 4, 100

NEIGHBORS8 = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]
NEIGHBORS4 = [(0, -1), (-1, 0), (1, 0), (0, 1)]


def max_bombs(width: int, height: int) -> int:
    """Largest bomb count a custom board of this size may hold."""
    return max(0, width - 1) * max(0, height - 1)


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))


# ---------------------------- DIFFICULTY --------------------------------


@dataclass(frozen=True)
class Difficulty:
    name: str
    width: int
    height: int
    bomb_count: int

    @classmethod
    def custom(cls, width: int, height: int, bomb_count: int) -> "Difficulty":
        width = _clamp(width, MIN_WIDTH, MAX_WIDTH)
        height = _clamp(height, MIN_HEIGHT, MAX_HEIGHT)
        bomb_count = _clamp(bomb_count, 0, max_bombs(width, height))
        return cls("custom", width, height, bomb_count)

    @classmethod
    def from_name(
        cls,
        name: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        bomb_count: Optional[int] = None,
    ) -> "Difficulty":
        key = (name or "").strip().lower()
        if key == "custom":
            return cls.custom(
                width if width is not None else EASY.width,
                height if height is not None else EASY.height,
                bomb_count if bomb_count is not None else EASY.bomb_count,
            )
        if key not in PRESETS:
            raise ValueError(f"Unknown difficulty: {name!r}")
        return PRESETS[key]

    def values(self) -> Tuple[int, int, int]:
        return self.width, self.height, self.bomb_count

    @property
    def label(self) -> str:
        return f"{self.name.title()} {self.width}x{self.height}, {self.bomb_count}"


EASY = Difficulty("easy", 10, 10, 9)
NORMAL = Difficulty("normal", 16, 16, 40)
HARD = Difficulty("hard", 30, 16, 100)
PRESETS = {d.name: d for d in (EASY, NORMAL, HARD)}


# ------------------------------- MODEL ----------------------------------


class GameState(Enum):
    PRELUDE = "prelude"
    PLAYING = "playing"
    WIN = "win"
    LOSE = "lose"

    @property
    def terminal(self) -> bool:
        return self in (GameState.WIN, GameState.LOSE)


class Tile(Enum):
    UNOPENED = "unopened"
    FLAG = "flag"
    DUG = "dug"


class SetFlagMode(Enum):
    FLAG = "flag"
    REMOVE = "remove"
    TOGGLE = "toggle"


class Board:
    """One game of Minesweeper. Replace it wholesale to start a new game."""

    def __init__(self, difficulty: Difficulty = EASY, rng: Optional[random.Random] = None):
        resolved = Difficulty.custom(*difficulty.values())
        if resolved.values() != difficulty.values():
            log.warning("Clamped %s to %dx%d with %d bombs", difficulty, *resolved.values())
        self.difficulty = difficulty
        self._width, self._height, self._bomb_count = resolved.values()
        self.rng = rng if rng is not None else random.Random()

        cells = self._width * self._height
        self._board: List[Tile] = [Tile.UNOPENED] * cells
        self._bombs: List[int] = []
        self._bomb_set: frozenset = frozenset()
        self._neighbour_counts: List[int] = [0] * cells
        self._state = GameState.PRELUDE
        self._turns = 0

    @classmethod
    def from_layout(cls, width: int, height: int, bombs: Iterable[int]) -> "Board":
        """Build an already generated board from a fixed bomb layout."""
        if not (MIN_WIDTH <= width <= MAX_WIDTH and MIN_HEIGHT <= height <= MAX_HEIGHT):
            raise ValueError(f"Board size {width}x{height} is outside the limits")
        bombs = list(dict.fromkeys(bombs))
        bad = [b for b in bombs if not 0 <= b < width * height]
        if bad:
            raise ValueError(f"Bomb indices outside a {width}x{height} board: {bad}")
        board = cls(Difficulty("custom", width, height, 0))
        board.difficulty = Difficulty("custom", width, height, len(bombs))
        board._bomb_count = len(bombs)
        board._set_bombs(bombs)
        board._state = GameState.PLAYING
        return board

    # ---------- queries ----------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def bomb_count(self) -> int:
        return self._bomb_count

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def turns(self) -> int:
        return self._turns

    @property
    def board(self) -> Sequence[Tile]:
        return tuple(self._board)

    @property
    def bombs(self) -> Sequence[int]:
        return tuple(self._bombs)

    @property
    def playing(self) -> bool:
        return self._state in (GameState.PRELUDE, GameState.PLAYING)

    @property
    def in_progress(self) -> bool:
        return self._state is GameState.PLAYING and self._turns > 0

    @property
    def flags_placed(self) -> int:
        return sum(1 for t in self._board if t is Tile.FLAG)

    @property
    def flags_left(self) -> int:
        return max(0, self._bomb_count - self.flags_placed)

    def tile_at(self, index: int) -> Optional[Tile]:
        return self._board[index] if self.in_bounds(index) else None

    def neighbour_count_at(self, index: int) -> int:
        return self._neighbour_counts[index] if self.in_bounds(index) else 0

    def is_bomb(self, index: int) -> bool:
        return index in self._bomb_set

    def diggable(self, index: int) -> bool:
        return self.playing and self.tile_at(index) is Tile.UNOPENED

    def in_bounds(self, index) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._board)

    def index_of(self, x: int, y: int) -> Optional[int]:
        if 0 <= x < self._width and 0 <= y < self._height:
            return y * self._width + x
        return None

    def coords(self, index: int) -> Tuple[int, int]:
        return index % self._width, index // self._width

    def neighbours(self, index: int, offsets=NEIGHBORS8) -> List[int]:
        x, y = self.coords(index)
        found = []
        for dx, dy in offsets:
            n = self.index_of(x + dx, y + dy)
            if n is not None:
                found.append(n)
        return found

    # ---------- generation ----------
    def _populate(self, safe_index: int):
        safe_zone = set(self.neighbours(safe_index))
        safe_zone.add(safe_index)
        spots = [i for i in range(len(self._board)) if i not in safe_zone]
        if len(spots) < self._bomb_count:
            # Too dense for a 3x3 opening; only the dug cell stays clear
            spots = [i for i in range(len(self._board)) if i != safe_index]
        self.rng.shuffle(spots)
        self._set_bombs(spots[: self._bomb_count])

    def _set_bombs(self, bombs: List[int]):
        self._bombs = list(bombs)
        self._bomb_set = frozenset(self._bombs)
        self._neighbour_counts = [
            sum(1 for n in self.neighbours(i) if n in self._bomb_set)
            for i in range(len(self._board))
        ]

    # ---------- actions ----------
    def dig(self, index: int) -> bool:
        if not self.diggable(index):
            log.debug("Ignoring dig at %r (state=%s)", index, self._state.value)
            return False
        if self._state is GameState.PRELUDE:
            self._populate(index)
            self._state = GameState.PLAYING
        self._turns += 1

        if index in self._bomb_set:
            self._state = GameState.LOSE
            return True
        self._flood_fill([index])
        self._check_win()
        return True

    def set_flag(self, mode: SetFlagMode, index: int) -> bool:
        if not self.playing or not self.in_bounds(index):
            log.debug("Ignoring flag at %r (state=%s)", index, self._state.value)
            return False
        tile = self._board[index]
        if tile is Tile.UNOPENED and mode in (SetFlagMode.FLAG, SetFlagMode.TOGGLE):
            self._board[index] = Tile.FLAG
        elif tile is Tile.FLAG and mode in (SetFlagMode.REMOVE, SetFlagMode.TOGGLE):
            self._board[index] = Tile.UNOPENED
        else:
            return False
        self._turns += 1
        return True

    def chord(self, index: int) -> Optional[int]:
        """Dig around a number whose flags are all placed.

        Returns the bomb that was hit when a wrong flag makes the chord lose the
        game, otherwise None.
        """
        if self._state is not GameState.PLAYING or self.tile_at(index) is not Tile.DUG:
            return None
        count = self._neighbour_counts[index]
        if count == 0:
            return None
        around = self.neighbours(index)
        flags = sum(1 for n in around if self._board[n] is Tile.FLAG)
        if flags != count:
            return None
        targets = [n for n in around if self._board[n] is Tile.UNOPENED]
        if not targets:
            return None
        self._turns += 1

        for n in targets:
            if n in self._bomb_set:
                self._state = GameState.LOSE
                return n
        self._flood_fill(targets)
        self._check_win()
        return None

    def _flood_fill(self, start: List[int]):
        current = sorted(set(start))
        while current:
            upcoming = set()
            for i in current:
                self._board[i] = Tile.DUG
                if self._neighbour_counts[i] == 0:
                    upcoming.update(self.neighbours(i, NEIGHBORS4))
            current = sorted(n for n in upcoming if self._board[n] is Tile.UNOPENED)

    def _check_win(self):
        for i, tile in enumerate(self._board):
            if tile is not Tile.DUG and i not in self._bomb_set:
                return
        self._state = GameState.WIN

    # ---------- debug ----------
    def render_ascii(self, reveal: bool = False) -> str:
        rows = []
        for y in range(self._height):
            row = []
            for x in range(self._width):
                i = y * self._width + x
                t = self._board[i]
                if reveal and i in self._bomb_set:
                    row.append("*")
                elif t is Tile.FLAG:
                    row.append("F")
                elif t is Tile.UNOPENED:
                    row.append("#")
                elif self._neighbour_counts[i] == 0:
                    row.append(".")
                else:
                    row.append(str(self._neighbour_counts[i]))
            rows.append(" ".join(row))
        return "\n".join(rows)
