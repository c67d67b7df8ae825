"""Cosmetic jetpack particles. Never read by the simulation."""

from dataclasses import dataclass
from typing import List, Optional
import math
import random


@dataclass
class Particle:
    """A single exhaust particle."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    ay: float = 0.05  # gentle drag toward the ground
    lifespan: float = 100.0  # doubles as alpha, 100 = opaque
    size: float = 5.0
    hue: float = 200.0
    saturation: float = 85.0

    FADE_PER_TICK = 2.5

    @property
    def is_dead(self) -> bool:
        return self.lifespan <= 0

    def update(self) -> None:
        """Advance one tick."""
        self.vy += self.ay
        self.x += self.vx
        self.y += self.vy
        self.lifespan -= self.FADE_PER_TICK


class JetpackBurst:
    """Emits and ages bursts of blue exhaust particles."""

    def __init__(self, rng: Optional[random.Random] = None, max_particles: int = 400):
        self._rng = rng or random.Random()
        self.max_particles = max_particles
        self.particles: List[Particle] = []

    def emit(self, x: float, y: float, count: int = 10) -> int:
        """Emit up to count particles at (x, y). Returns how many were added."""
        room = max(0, self.max_particles - len(self.particles))
        count = min(count, room)

        for _ in range(count):
            angle = self._rng.uniform(0.0, 2 * math.pi)
            speed = self._rng.uniform(1.0, 4.0)
            vx = math.cos(angle) * speed
            vy = math.sin(angle) * speed + self._rng.uniform(-3.0, -1.0)
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=vx,
                vy=vy,
                size=self._rng.uniform(3.0, 7.0),
                hue=self._rng.uniform(180.0, 220.0),
                saturation=self._rng.uniform(70.0, 100.0),
            ))
        return count

    def update(self) -> None:
        """Age every particle by one tick and drop the dead ones."""
        for particle in self.particles:
            particle.update()
        self.particles = [p for p in self.particles if not p.is_dead]

    def clear(self) -> None:
        self.particles.clear()

    def __len__(self) -> int:
        return len(self.particles)
