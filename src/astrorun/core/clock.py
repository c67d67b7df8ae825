"""Fixed-timestep accumulator decoupling simulation ticks from frame rate."""

import logging

logger = logging.getLogger(__name__)


class FixedStepClock:
    """Converts elapsed wall time into a whole number of simulation ticks.

    Leftover time is carried into the next frame, so the tick rate stays
    constant regardless of display refresh. Long stalls are clamped to
    max_steps ticks and the backlog beyond that is dropped.
    """

    def __init__(self, tick_rate: int = 60, max_steps: int = 5) -> None:
        if tick_rate <= 0:
            raise ValueError("tick_rate must be positive")
        if max_steps <= 0:
            raise ValueError("max_steps must be positive")

        self.tick_rate = tick_rate
        self.max_steps = max_steps
        self._step = 1.0 / tick_rate
        self._accumulator = 0.0
        self._total_ticks = 0

    @property
    def step_seconds(self) -> float:
        """Duration of one tick in seconds."""
        return self._step

    @property
    def total_ticks(self) -> int:
        """Ticks produced since creation or last reset."""
        return self._total_ticks

    @property
    def alpha(self) -> float:
        """Fraction of the next tick already accumulated (0.0 to 1.0)."""
        return self._accumulator / self._step

    def advance(self, elapsed: float) -> int:
        """Add elapsed seconds and return how many ticks to run now."""
        if elapsed < 0:
            elapsed = 0.0

        self._accumulator += elapsed
        ticks = int(self._accumulator // self._step)

        if ticks > self.max_steps:
            logger.debug(f"Clock backlog of {ticks} ticks clamped to {self.max_steps}")
            ticks = self.max_steps
            self._accumulator = 0.0
        else:
            self._accumulator -= ticks * self._step

        self._total_ticks += ticks
        return ticks

    def reset(self) -> None:
        """Drop accumulated time."""
        self._accumulator = 0.0
        self._total_ticks = 0
