import logging

import pygame

log = logging.getLogger("SceneManager")


class Scene:
    """Base scene with no-op event/update/draw hooks."""

    def __init__(self, manager):
        self.manager = manager

    def handle_event(self, event):
        pass

    def update(self, dt):
        pass

    def draw(self):
        pass


class SceneManager:
    """Controls the scene stack, the window, and the main loop."""

    def __init__(self, first_scene, size=(480, 360), caption="Sweeper", fps=60):
        pygame.init()
        self.screen = pygame.display.set_mode(size)
        self.size = self.screen.get_size()
        pygame.display.set_caption(caption)
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.running = True
        self.scenes = []

        # first_scene is a factory taking the manager
        if callable(first_scene):
            self.scenes.append(first_scene(self))
        else:
            raise ValueError("First scene must be a callable taking the manager.")

    def resize(self, size):
        """Reopen the window when a new board needs a different size."""
        size = (int(size[0]), int(size[1]))
        if size == self.size:
            return
        self.screen = pygame.display.set_mode(size)
        self.size = self.screen.get_size()
        for scene in self.scenes:
            scene.screen = self.screen

    def push(self, scene):
        self.scenes.append(scene)

    def pop(self):
        if self.scenes:
            self.scenes.pop()
        if not self.scenes:
            self.running = False

    def switch(self, scene):
        if self.scenes:
            self.scenes.pop()
        self.push(scene)

    def quit(self):
        self.running = False

    def run(self):
        """Main loop."""
        while self.running:
            dt = self.clock.tick(self.fps) / 1000.0
            if not self.scenes:
                break
            current = self.scenes[-1]

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                try:
                    current.handle_event(event)
                except Exception:
                    log.exception("Event handler crashed")

            if not self.running or not self.scenes:
                break
            current = self.scenes[-1]
            try:
                current.update(dt)
                current.draw()
            except Exception:
                log.exception("Frame crashed")

            pygame.display.flip()

        pygame.quit()
