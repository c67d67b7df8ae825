"""Obstacle factory with score-scaled sizes."""

import logging
import random
from typing import Optional

from astrorun.config.settings import GameSettings
from astrorun.game.entities import Obstacle

logger = logging.getLogger(__name__)


class ObstacleSpawner:
    """Creates obstacles just beyond the right edge, resting on the ground.

    The lower bound of the height range rises with score (up to a cap),
    so short, easy obstacles become rarer as a run goes on. When to spawn
    is decided by the difficulty controller, not here.
    """

    def __init__(self, settings: GameSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self._rng = rng or random.Random()

    def height_range(self, current_score: int) -> tuple[float, float]:
        """(min, max) obstacle height for the given score."""
        cfg = self.settings
        min_h = min(
            cfg.obstacle_min_height_cap,
            cfg.obstacle_min_height + current_score / cfg.obstacle_height_divisor,
        )
        return min_h, cfg.obstacle_max_height

    def spawn(self, current_score: int, field_width: float, ground_y: float) -> Obstacle:
        """Create a new obstacle. The caller appends it to the active list."""
        cfg = self.settings
        min_h, max_h = self.height_range(current_score)

        height = self._rng.uniform(min_h, max_h)
        width = self._rng.uniform(cfg.obstacle_min_width, cfg.obstacle_max_width)
        color_seed = self._rng.random()

        obstacle = Obstacle(
            x=field_width + width,
            y=ground_y - height,
            width=width,
            height=height,
            color_seed=color_seed,
        )
        logger.debug(f"Spawned {obstacle} at score {current_score}")
        return obstacle
