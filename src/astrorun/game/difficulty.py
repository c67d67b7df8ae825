"""Score, speed ramp, spawn cadence and environment milestones."""

from dataclasses import dataclass
import logging
import random
from typing import Optional

from astrorun.config.settings import GameSettings

logger = logging.getLogger(__name__)


@dataclass
class RunState:
    """Per-run counters plus the cross-run high score."""

    score: int = 0
    high_score: int = 0
    obstacle_speed: float = 4.0
    spawn_interval: float = 90.0
    spawn_timer: float = 90.0
    environment_index: int = 0
    next_milestone: int = 100


class DifficultyController:
    """Advances a RunState by one PLAYING tick.

    Score grows by one per tick, obstacle speed grows without bound and
    the spawn interval shrinks toward its floor. Every milestone_step
    points the environment index moves on by exactly one.
    """

    def __init__(self, settings: GameSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self._rng = rng or random.Random()

    def new_run_state(self, high_score: int = 0) -> RunState:
        """Fresh state for process start."""
        cfg = self.settings
        return RunState(
            score=0,
            high_score=high_score,
            obstacle_speed=cfg.start_speed,
            spawn_interval=cfg.spawn_interval_start,
            spawn_timer=cfg.spawn_interval_start,
            environment_index=0,
            next_milestone=cfg.milestone_step,
        )

    def spawn_interval_for(self, score: int) -> float:
        """Ticks between spawns at the given score, never below the floor."""
        cfg = self.settings
        return max(
            cfg.spawn_interval_floor,
            cfg.spawn_interval_start - score / cfg.spawn_interval_divisor,
        )

    def tick(self, run: RunState) -> bool:
        """Advance score and difficulty by one tick.

        Returns:
            True if an obstacle is due; the caller spawns it and then
            calls rearm_spawn_timer()
        """
        cfg = self.settings

        run.score += 1
        run.obstacle_speed += cfg.speed_increase
        run.spawn_interval = self.spawn_interval_for(run.score)

        if run.score >= run.next_milestone:
            run.environment_index += 1
            run.next_milestone += cfg.milestone_step
            logger.info(
                f"Milestone reached at score {run.score}: environment {run.environment_index}"
            )

        run.spawn_timer -= 1
        return run.spawn_timer <= 0

    def rearm_spawn_timer(self, run: RunState) -> float:
        """Draw the next countdown around the current interval."""
        jitter = self.settings.spawn_jitter
        run.spawn_timer = self._rng.uniform(
            run.spawn_interval * (1 - jitter),
            run.spawn_interval * (1 + jitter),
        )
        return run.spawn_timer

    def reset_run(self, run: RunState) -> None:
        """Reset per-run counters. The high score is kept.

        spawn_interval is not reset, and the first countdown of the new
        run starts from whatever interval the previous run left behind.
        """
        cfg = self.settings
        run.score = 0
        run.environment_index = 0
        run.next_milestone = cfg.milestone_step
        run.obstacle_speed = cfg.start_speed
        run.spawn_timer = run.spawn_interval
