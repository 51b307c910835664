"""
Scene stack and frame loop with the dummy video driver
"""

import pygame

import sound_engine
from scene_manager import Scene, SceneManager


class CountingScene(Scene):
    def __init__(self, manager, frames=3):
        super().__init__(manager)
        self.frames = frames
        self.updates = 0
        self.draws = 0

    def update(self, dt):
        self.updates += 1
        if self.updates >= self.frames:
            self.manager.quit()

    def draw(self):
        self.draws += 1


def test_run_until_quit():
    manager = SceneManager(CountingScene, size=(300, 200), fps=1000)
    scene = manager.scenes[0]
    manager.run()
    assert scene.updates == 3
    assert scene.draws == 3


def test_stack_and_resize():
    manager = SceneManager(CountingScene, size=(300, 200), fps=1000)
    first = manager.scenes[0]
    second = CountingScene(manager)
    manager.push(second)
    manager.resize((320, 240))
    assert manager.size == (320, 240)
    assert first.screen is manager.screen
    assert second.screen is manager.screen

    manager.switch(CountingScene(manager))
    assert len(manager.scenes) == 2
    manager.pop()
    manager.pop()
    assert not manager.running
    pygame.quit()


def test_muted_sound_plays_nothing():
    sound_engine.set_muted(True)
    try:
        assert not sound_engine.play_explosion()
    finally:
        sound_engine.set_muted(False)
    sound_engine.set_volume(5)
    assert sound_engine.SFX_VOL == 1.0
