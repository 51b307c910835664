import logging

from scene_manager import SceneManager
from sweeper.config import config_from_args
from sweeper.game import launch


def main(argv=None):
    config = config_from_args(argv)
    logging.basicConfig(level=config.log_level, format="[%(name)s] %(message)s")

    # the scene sizes the window to its board once the display is up
    manager = SceneManager(lambda m: launch(m, config), caption="Sweeper", fps=config.fps)
    manager.run()


if __name__ == "__main__":
    main()
