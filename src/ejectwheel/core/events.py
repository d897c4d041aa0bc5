"""
Event bus for the elimination wheel.

Carries lifecycle events from the sequencer and input/tick events from the
host loop. Dispatch is synchronous and runs on the caller's loop iteration.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input
    KEY_PRESS = auto()

    # Wheel lifecycle
    WIDGET_OPENED = auto()
    SPIN_STARTED = auto()
    RESULT_REVEALED = auto()
    PARTICIPANT_ELIMINATED = auto()
    WIDGET_CLOSED = auto()
    SEQUENCE_RESET = auto()

    # Accessibility
    ANNOUNCEMENT = auto()

    # Host loop
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type
        data: Event payload
        source: Component that emitted the event
        timestamp: Wall-clock creation time
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None]


class EventBus:
    """Publish/subscribe hub with a bounded history of recent events."""

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Returns:
            Unsubscribe function (safe to call more than once)
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Record the event and call every matching handler.

        A failing handler is logged and does not stop the others.
        """
        self._history.append(event)
        if len(self._history) > self._history_limit:
            self._history.pop(0)

        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type.name}: {e}")

    def get_history(self, event_type: EventType | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first."""
        history = self._history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        self._history.clear()


def key_event(key: str, source: str = "keyboard") -> Event:
    """Create a key press event."""
    return Event(EventType.KEY_PRESS, data={"key": key}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event; delta is in seconds."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
