"""
Difficulty presets and custom clamping
"""

import pytest

from sweeper.board import (
    EASY,
    HARD,
    MAX_HEIGHT,
    MAX_WIDTH,
    MIN_HEIGHT,
    MIN_WIDTH,
    NORMAL,
    Difficulty,
    max_bombs,
)


def test_presets():
    assert EASY.values() == (10, 10, 9)
    assert NORMAL.values() == (16, 16, 40)
    assert HARD.values() == (30, 16, 100)


@pytest.mark.parametrize(
    "given, expected",
    [
        ((1, 1, 50), (MIN_WIDTH, MIN_HEIGHT, 9)),
        ((500, 500, 10), (MAX_WIDTH, MAX_HEIGHT, 10)),
        ((12, 8, -3), (12, 8, 0)),
        ((12, 8, 1000), (12, 8, 77)),
    ],
)
def test_custom_clamps(given, expected):
    d = Difficulty.custom(*given)
    assert d.values() == expected
    assert d.name == "custom"


def test_max_bombs():
    assert max_bombs(4, 4) == 9
    assert max_bombs(200, 100) == 199 * 99
    assert max_bombs(0, 5) == 0
    assert max_bombs(1, 1) == 0
    assert max_bombs(-3, -3) == 0
    assert max_bombs(0, 0) == 0


def test_from_name():
    assert Difficulty.from_name("Hard") is HARD
    assert Difficulty.from_name(" easy ") is EASY
    assert Difficulty.from_name("custom", 20, 10, 30).values() == (20, 10, 30)
    assert Difficulty.from_name("custom").values() == EASY.values()
    with pytest.raises(ValueError):
        Difficulty.from_name("impossible")


def test_label():
    assert NORMAL.label == "Normal 16x16, 40"
