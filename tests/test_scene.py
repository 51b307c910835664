"""
Minefield scene driven with synthetic pygame events (dummy SDL drivers)
"""

import pygame
import pytest

from game_context import GameContext
from sweeper import game
from sweeper.board import HARD, Board, GameState, Tile
from sweeper.config import SweeperConfig
from sweeper.game import SHAKE_S, MineSweepScene, launch
from sweeper.graphics import Layout
from sweeper.menu import GameMenuScene


@pytest.fixture
def scene(manager, monkeypatch):
    monkeypatch.setattr(game, "desktop_size", lambda: None)
    return launch(manager, SweeperConfig(seed=5, mute=True), GameContext())


def click(scene, index, button=1):
    pos = scene.layout.tile_rect(index).center
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos))
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=button, pos=pos))


def key(scene, k):
    scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=k))


def test_window_fits_board(scene, manager):
    assert isinstance(scene, MineSweepScene)
    assert manager.resized[-1] == Layout(10, 10, 24).size
    assert scene.board.state is GameState.PRELUDE
    assert scene.face() == "normal"


def test_left_click_digs_and_starts_timer(scene):
    assert scene.timer is None
    click(scene, 0)
    assert scene.board.tile_at(0) is Tile.DUG
    assert scene.board.state in (GameState.PLAYING, GameState.WIN)
    assert scene.timer == 0.0
    scene.update(0.5)
    if scene.board.state is GameState.PLAYING:
        assert scene.timer == pytest.approx(0.5)


def test_right_click_flags_and_unflags(scene):
    click(scene, 5, button=3)
    assert scene.board.tile_at(5) is Tile.FLAG
    assert scene.flag_mode is None
    click(scene, 5)  # left click on a flag does nothing
    assert scene.board.tile_at(5) is Tile.FLAG
    click(scene, 5, button=3)
    assert scene.board.tile_at(5) is Tile.UNOPENED


def test_loss_runs_the_explosions(scene):
    scene.board = Board.from_layout(10, 10, [0, 99])
    click(scene, 0)
    assert scene.board.state is GameState.LOSE
    assert scene.losing_tile == 0
    assert scene.face() == "dead"
    assert scene.context.stats["losses"] == 1

    for _ in range(600):
        if scene.exploder.done:
            break
        scene.update(1 / 30)
    assert scene.exploder.done
    assert scene.exploder.exploded_count == 2
    scene.draw()


def test_space_sets_off_next_bomb(scene):
    scene.board = Board.from_layout(10, 10, [0, 99])
    click(scene, 0)
    key(scene, pygame.K_SPACE)
    assert scene.exploder.is_exploded(0) is True
    assert scene.shake == SHAKE_S


def test_win_is_recorded(scene):
    scene.board = Board.from_layout(10, 10, [99])
    click(scene, 0)
    assert scene.board.state is GameState.WIN
    assert scene.face() == "happy"
    assert scene.context.stats["wins"] == 1
    assert scene.context.best_time("custom") is None
    assert scene.context.best_time(scene.difficulty.name) == 0.0


def test_middle_click_chords(scene):
    scene.board = Board.from_layout(10, 10, [0, 2])
    click(scene, 11)
    assert scene.board.neighbour_count_at(11) == 2
    click(scene, 0, button=3)
    click(scene, 2, button=3)
    click(scene, 11, button=2)
    assert scene.board.tile_at(10) is Tile.DUG
    assert scene.board.state is GameState.WIN


def test_face_starts_new_game(scene):
    click(scene, 0)
    old = scene.board
    pos = scene.layout.face_rect.center
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos))
    assert scene.face_pressed
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=pos))
    assert scene.board is not old
    assert scene.board.state is GameState.PRELUDE
    assert scene.timer is None


def test_new_game_key(scene):
    click(scene, 0)
    key(scene, pygame.K_F2)
    assert scene.board.turns == 0


def test_menu_switches_difficulty(scene, manager):
    manager.push(scene)
    key(scene, pygame.K_ESCAPE)
    menu = manager.scenes[-1]
    assert isinstance(menu, GameMenuScene)
    menu.draw()

    menu.activate("Hard")
    assert manager.scenes == [scene]
    assert scene.difficulty is HARD
    assert (scene.board.width, scene.board.height) == (30, 16)
    assert manager.resized[-1] == Layout(30, 16, 24).size
    assert scene.screen is manager.screen
    scene.draw()


def test_menu_quit_asks_first(scene, manager):
    menu = GameMenuScene(manager, scene)
    menu.activate("Quit")
    assert manager.running
    assert menu.confirm_quit
    assert menu.options == ["Exit", "Cancel"]
    menu.draw()

    menu.activate("Cancel")
    assert not menu.confirm_quit
    assert "Quit" in menu.options

    menu.activate("Quit")
    menu.activate("Exit")
    assert not manager.running


def test_escape_cancels_quit_prompt(scene, manager):
    menu = GameMenuScene(manager, scene)
    manager.push(menu)
    menu.activate("Quit")
    key(menu, pygame.K_ESCAPE)
    assert not menu.confirm_quit
    assert manager.scenes == [menu]


def test_custom_row_shows_its_size(manager, monkeypatch):
    monkeypatch.setattr(game, "desktop_size", lambda: None)
    config = SweeperConfig(seed=1, mute=True, width=20, height=12, bombs=30)
    scene = launch(manager, config, GameContext())
    menu = GameMenuScene(manager, scene)
    assert menu.label("Custom") == "Custom 20x12, 30"
    assert menu.label("Hard") == "Hard"

    menu.activate("Custom")
    assert scene.board.difficulty.values() == (20, 12, 30)


def seeded_second_board(manager, frames):
    scene = launch(manager, SweeperConfig(seed=5, mute=True), GameContext())
    click(scene, 0)
    scene.shake = SHAKE_S
    for _ in range(frames):
        scene.draw()
    key(scene, pygame.K_F2)
    click(scene, 55)
    return scene.board.bombs


def test_shake_frames_do_not_change_seeded_boards(manager, monkeypatch):
    monkeypatch.setattr(game, "desktop_size", lambda: None)
    assert seeded_second_board(manager, 0) == seeded_second_board(manager, 5)


def test_large_board_shrinks_cells_to_fit(manager, monkeypatch):
    monkeypatch.setattr(game, "desktop_size", lambda: (800, 600))
    config = SweeperConfig(difficulty="custom", width=60, height=30, bombs=200, mute=True)
    scene = launch(manager, config, GameContext())
    w, h = manager.resized[-1]
    assert scene.layout.cell < config.cell_size
    assert scene.gfx.cell == scene.layout.cell
    assert w <= 720 and h <= 540
    scene.draw()
