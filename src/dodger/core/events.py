"""
Event bus for the dodger engine.

The engine publishes what happened during a tick; hosts and persistence
subscribe without touching game state. Dispatch is synchronous and runs
inside the tick that produced the event.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
import logging
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events published by the engine."""
    # Session events
    SESSION_STARTED = auto()
    SESSION_PAUSED = auto()
    SESSION_RESUMED = auto()
    SESSION_RESTARTED = auto()
    GAME_OVER = auto()

    # Entity events
    OBSTACLE_SPAWNED = auto()
    OBSTACLE_PASSED = auto()
    OBSTACLE_NEUTRALIZED = auto()
    POWER_UP_SPAWNED = auto()
    POWER_UP_COLLECTED = auto()
    POWER_UP_EXPIRED = auto()

    # Emitted after every tick with the fresh snapshot
    TICK = auto()


@dataclass
class Event:
    """An engine event and its payload."""
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)


Handler = Callable[[Event], None]


class EventBus:
    """
    Routes engine events to subscribers.

    A failing handler is logged and skipped so one bad subscriber cannot
    stall the tick or starve the others.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Called with each matching Event

        Returns:
            Unsubscribe function
        """
        handlers = self._handlers[event_type]
        handlers.append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type.name}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver an event to every handler subscribed to its type."""
        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in {event.type.name} handler: {e}")
