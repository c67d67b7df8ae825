"""
Event bus system for ASTRO RUN.

Provides pub/sub messaging between the host window and the game session.
Input events are edge-triggered: each key press becomes exactly one event.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
from collections import defaultdict
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    JUMP_PRESSED = auto()
    RESTART_PRESSED = auto()

    # Session events
    PHASE_CHANGED = auto()
    RUN_STARTED = auto()
    RUN_ENDED = auto()
    NEW_HIGH_SCORE = auto()

    # System events
    SHUTDOWN = auto()


INPUT_EVENTS = frozenset({EventType.JUMP_PRESSED, EventType.RESTART_PRESSED})


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Handlers run synchronously in subscription order. A failing
    handler is logged and does not stop the others.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to all events. Returns an unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately."""
        self._add_to_history(event)

        handlers = self._handlers.get(event.type, []) + self._global_handlers
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


class InputQueue:
    """
    Collects input events from the bus until the next simulation tick.

    Each event is handed out by drain() exactly once, in arrival order.
    """

    def __init__(self, event_bus: EventBus) -> None:
        self._pending: list[EventType] = []
        self._unsubscribers = [
            event_bus.subscribe(event_type, self._on_input)
            for event_type in sorted(INPUT_EVENTS, key=lambda t: t.value)
        ]

    def _on_input(self, event: Event) -> None:
        self._pending.append(event.type)

    def __len__(self) -> int:
        return len(self._pending)

    def drain(self) -> list[EventType]:
        """Return pending input events and clear the queue."""
        pending, self._pending = self._pending, []
        return pending

    def close(self) -> None:
        """Stop listening to the bus."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()


# Convenience functions for creating common events
def jump_event(source: str = "keyboard") -> Event:
    """Create a jump press event."""
    return Event(EventType.JUMP_PRESSED, source=source)


def restart_event(source: str = "keyboard") -> Event:
    """Create a restart press event."""
    return Event(EventType.RESTART_PRESSED, source=source)
