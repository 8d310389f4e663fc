"""Core framework components for Dragon Runner."""

from .state import Phase, Trigger, Action, StateMachine, StateTransition
from .events import EventBus, Event, EventType

__all__ = [
    "Phase",
    "Trigger",
    "Action",
    "StateMachine",
    "StateTransition",
    "EventBus",
    "Event",
    "EventType",
]
