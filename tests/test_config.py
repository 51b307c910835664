"""
Command line configuration
"""

import pytest

from sweeper.board import HARD
from sweeper.config import SweeperConfig, config_from_args


def test_defaults():
    config = config_from_args([])
    assert config == SweeperConfig()
    assert config.resolve_difficulty().name == "easy"


def test_preset_and_seed():
    config = config_from_args(["--difficulty", "hard", "--seed", "7", "--mute"])
    assert config.resolve_difficulty() is HARD
    assert config.seed == 7
    assert config.mute


def test_custom_is_clamped():
    config = config_from_args(["--difficulty", "custom", "--width", "2", "--height", "9", "--bombs", "999"])
    assert config.resolve_difficulty().values() == (4, 9, 24)
    assert config.custom_difficulty() == config.resolve_difficulty()


def test_numbers_are_clamped():
    config = config_from_args(["--cell-size", "2", "--fps", "0", "--sfx-volume", "3"])
    assert config.cell_size == 8
    assert config.fps == 1
    assert config.sfx_volume == 1.0


def test_unknown_difficulty_exits():
    with pytest.raises(SystemExit):
        config_from_args(["--difficulty", "nightmare"])
