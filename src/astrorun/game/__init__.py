"""Endless runner simulation."""

from .entities import BoundingBox, Obstacle, PlayerEntity
from .collision import overlaps
from .spawner import ObstacleSpawner
from .difficulty import DifficultyController, RunState
from .particles import JetpackBurst, Particle
from .session import GameSession, Snapshot

__all__ = [
    "BoundingBox",
    "Obstacle",
    "PlayerEntity",
    "overlaps",
    "ObstacleSpawner",
    "DifficultyController",
    "RunState",
    "JetpackBurst",
    "Particle",
    "GameSession",
    "Snapshot",
]
