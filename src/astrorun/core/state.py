"""
Phase state machine for a game session.

States:
    START: Title screen, player idle on the ground
    PLAYING: Simulation running
    GAME_OVER: Simulation frozen until restart
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Game phases."""
    START = auto()
    PLAYING = auto()
    GAME_OVER = auto()


PhaseListener = Callable[[GamePhase, GamePhase], None]


class StateMachine:
    """
    Tracks the active game phase and validates transitions.

    Exactly one phase is active at a time. Listeners are notified
    after every successful transition.
    """

    # Valid phase transitions
    VALID_TRANSITIONS: list[tuple[GamePhase, GamePhase]] = [
        (GamePhase.START, GamePhase.PLAYING),
        (GamePhase.PLAYING, GamePhase.GAME_OVER),
        (GamePhase.GAME_OVER, GamePhase.PLAYING),  # Restart
    ]

    def __init__(self, initial_phase: GamePhase = GamePhase.START) -> None:
        self._phase = initial_phase
        self._initial_phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> GamePhase:
        """Get current phase."""
        return self._phase

    def can_transition(self, to_phase: GamePhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: GamePhase) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_phase: Target phase

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase

        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")
        self._notify(old_phase, to_phase)
        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Reset state machine to its initial phase."""
        old_phase = self._phase
        self._phase = self._initial_phase
        self._notify(old_phase, self._initial_phase)
        logger.info(f"StateMachine reset to {self._initial_phase.name}")

    def _notify(self, old_phase: GamePhase, new_phase: GamePhase) -> None:
        for listener in self._listeners:
            try:
                listener(old_phase, new_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")
