"""
Event bus for Dragon Runner.

Carries input from the host (jump, restart, resize, frame ticks) into the
game and publishes what happened in the game back out to listeners.
Everything is dispatched synchronously on the caller's thread.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    JUMP = auto()
    RESTART = auto()
    RESIZE = auto()

    # Game events
    PHASE_CHANGED = auto()
    COLLISION = auto()
    DIFFICULTY_UP = auto()
    NEW_HIGH_SCORE = auto()

    # System events
    TICK = auto()  # Frame tick
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Events can be emitted immediately or queued and drained once per frame,
    which is how the simulator window hands input to the game between steps.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._queue: deque[Event] = deque()
        self._event_history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
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
        self._event_history.append(event)
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for the next process_queue() call."""
        self._queue.append(event)

    def process_queue(self) -> int:
        """Dispatch all queued events in arrival order. Returns how many ran."""
        processed = 0
        while self._queue:
            self.emit(self._queue.popleft())
            processed += 1
        return processed

    @property
    def pending(self) -> int:
        return len(self._queue)

    def _dispatch(self, event: Event) -> None:
        handlers = list(self._handlers.get(event.type, [])) + self._global_handlers

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = list(self._event_history)
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]


# Convenience functions for creating common events
def jump_event(source: str = "input") -> Event:
    """Create a jump request event."""
    return Event(EventType.JUMP, source=source)


def restart_event(source: str = "input") -> Event:
    """Create a restart request event."""
    return Event(EventType.RESTART, source=source)


def resize_event(width: int, height: int, source: str = "window") -> Event:
    """Create a viewport resize event."""
    return Event(EventType.RESIZE, data={"width": width, "height": height}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
