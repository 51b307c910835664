"""
Pytest configuration and shared fixtures.
"""
import os
import random

# headless pygame: must be set before pygame is imported anywhere
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from sweeper.board import EASY, Board


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def easy_board(rng) -> Board:
    """A fresh Easy board (10x10, 9 bombs) with a seeded generator."""
    return Board(EASY, rng=rng)


@pytest.fixture
def chord_board() -> Board:
    """4x4 with bombs at (0,0) and (2,0); tile 5 at (1,1) touches both."""
    return Board.from_layout(4, 4, [0, 2])


@pytest.fixture
def pg():
    pygame.init()
    yield pygame
    pygame.quit()


class FakeManager:
    """Just enough of SceneManager for driving a scene without a window."""

    def __init__(self, size=(480, 360)):
        self.screen = pygame.Surface(size)
        self.size = size
        self.scenes = []
        self.running = True
        self.resized = []

    def resize(self, size):
        self.screen = pygame.Surface(size)
        self.size = tuple(size)
        self.resized.append(self.size)
        for scene in self.scenes:
            scene.screen = self.screen

    def push(self, scene):
        self.scenes.append(scene)

    def pop(self):
        if self.scenes:
            self.scenes.pop()

    def quit(self):
        self.running = False


@pytest.fixture
def manager(pg) -> FakeManager:
    return FakeManager()
