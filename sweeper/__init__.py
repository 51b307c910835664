"""Minesweeper board engine, explosion sequencer and the pygame minefield scene."""

from .board import (
    EASY,
    HARD,
    MAX_HEIGHT,
    MAX_WIDTH,
    MIN_HEIGHT,
    MIN_WIDTH,
    NORMAL,
    Board,
    Difficulty,
    GameState,
    SetFlagMode,
    Tile,
    max_bombs,
)
from .exploder import Exploder

__all__ = [
    "Board",
    "Difficulty",
    "GameState",
    "SetFlagMode",
    "Tile",
    "Exploder",
    "EASY",
    "NORMAL",
    "HARD",
    "MIN_WIDTH",
    "MAX_WIDTH",
    "MIN_HEIGHT",
    "MAX_HEIGHT",
    "max_bombs",
]
