"""
Session state machine for the dodger engine.

States:
    RUNNING: Ticks advance the simulation
    PAUSED: Ticks are suspended, all state retained
    GAME_OVER: Frozen for display until an explicit restart
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Session phases."""
    RUNNING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


Listener = Callable[["Phase", "Phase"], None]


class StateMachine:
    """
    Guards session phase changes.

    Only transitions listed in VALID_TRANSITIONS are accepted. Listeners
    are told about every accepted change, including restarts that stay
    in RUNNING.
    """

    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        # From RUNNING
        (Phase.RUNNING, Phase.PAUSED),
        (Phase.RUNNING, Phase.GAME_OVER),
        (Phase.RUNNING, Phase.RUNNING),  # Restart mid-run

        # From PAUSED
        (Phase.PAUSED, Phase.RUNNING),  # Resume or restart

        # From GAME_OVER
        (Phase.GAME_OVER, Phase.RUNNING),  # Restart
    ]

    def __init__(self, initial_phase: Phase = Phase.RUNNING) -> None:
        self._phase = initial_phase
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._phase == Phase.RUNNING

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
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

        logger.debug(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Force the machine back to RUNNING without notifying listeners."""
        self._phase = Phase.RUNNING
