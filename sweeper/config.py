from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

from .board import EASY, PRESETS, Difficulty

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class SweeperConfig:
    difficulty: str = "easy"
    width: int = EASY.width
    height: int = EASY.height
    bombs: int = EASY.bomb_count
    cell_size: int = 24
    fps: int = 60
    seed: Optional[int] = None
    mute: bool = False
    sfx_volume: float = 0.8
    log_level: str = "INFO"

    def resolve_difficulty(self) -> Difficulty:
        return Difficulty.from_name(self.difficulty, self.width, self.height, self.bombs)

    def custom_difficulty(self) -> Difficulty:
        return Difficulty.custom(self.width, self.height, self.bombs)


def build_parser() -> argparse.ArgumentParser:
    defaults = SweeperConfig()
    parser = argparse.ArgumentParser(prog="sweeper", description="Minesweeper")
    parser.add_argument(
        "--difficulty",
        choices=sorted(PRESETS) + ["custom"],
        default=defaults.difficulty,
    )
    parser.add_argument("--width", type=int, default=defaults.width, help="Custom board width")
    parser.add_argument("--height", type=int, default=defaults.height, help="Custom board height")
    parser.add_argument("--bombs", type=int, default=defaults.bombs, help="Custom bomb count")
    parser.add_argument("--cell-size", type=int, default=defaults.cell_size)
    parser.add_argument("--fps", type=int, default=defaults.fps)
    parser.add_argument("--seed", type=int, default=None, help="Seed board generation; random if omitted")
    parser.add_argument("--mute", action="store_true")
    parser.add_argument("--sfx-volume", type=float, default=defaults.sfx_volume)
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=defaults.log_level)
    return parser


def config_from_args(argv: Optional[Sequence[str]] = None) -> SweeperConfig:
    args = build_parser().parse_args(argv)
    return SweeperConfig(
        difficulty=args.difficulty,
        width=args.width,
        height=args.height,
        bombs=args.bombs,
        cell_size=max(8, args.cell_size),
        fps=max(1, args.fps),
        seed=args.seed,
        mute=args.mute,
        sfx_volume=max(0.0, min(1.0, args.sfx_volume)),
        log_level=args.log_level,
    )
