"""Core framework components for the dodger engine."""

from .state import Phase, StateMachine
from .events import EventBus, Event, EventType
from .errors import ConfigurationError

__all__ = [
    "Phase",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "ConfigurationError",
]
