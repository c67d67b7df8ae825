"""Shared fixtures for the ASTRO RUN tests."""

import random

import pytest

from astrorun.config.settings import GameSettings
from astrorun.core.events import EventBus, EventType
from astrorun.game.entities import Obstacle
from astrorun.game.session import GameSession
from astrorun.storage.base import KeyValueStore, MemoryStore


class FailingStore(KeyValueStore):
    """Store whose disk is gone: every call raises OSError."""

    def __init__(self) -> None:
        self.set_calls = 0

    def get(self, key):
        raise OSError("store unavailable")

    def set(self, key, value):
        self.set_calls += 1
        raise OSError("store unavailable")


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def session(settings, store, bus) -> GameSession:
    return GameSession(settings, store, rng=random.Random(7), effects_rng=random.Random(8), event_bus=bus)


@pytest.fixture
def playing(session) -> GameSession:
    """A session one tick into its first run."""
    session.step([EventType.JUMP_PRESSED])
    return session


def obstacle_on_player(session: GameSession, height: float = 50.0) -> Obstacle:
    """An obstacle that will still overlap the player after one advance."""
    player = session.player
    speed = session.run.obstacle_speed + session.settings.speed_increase
    return Obstacle(
        x=player.x - 10 + speed,
        y=session.ground_y - height,
        width=40.0,
        height=height,
    )
