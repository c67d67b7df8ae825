"""Core framework components for ASTRO RUN."""

from .state import GamePhase, StateMachine
from .events import EventBus, Event, EventType, InputQueue
from .clock import FixedStepClock

__all__ = [
    "GamePhase",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "InputQueue",
    "FixedStepClock",
]
