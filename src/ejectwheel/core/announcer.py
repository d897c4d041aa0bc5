"""Status announcements for assistive technology (polite live region)."""

from typing import Callable, Optional
import logging

from ejectwheel.core.events import EventBus, Event, EventType

logger = logging.getLogger(__name__)

SPIN_IN_PROGRESS = "Emergency meeting in progress"
ELIMINATED_TEMPLATE = "{name} has been eliminated"


class LiveRegion:
    """Holds the latest status message and forwards it to listeners.

    Announcements are fire-and-forget: a failing listener is logged and
    never interrupts the caller.
    """

    role = "status"
    politeness = "polite"

    def __init__(self, event_bus: Optional[EventBus] = None) -> None:
        self._message = ""
        self._event_bus = event_bus
        self._listeners: list[Callable[[str], None]] = []

    @property
    def message(self) -> str:
        return self._message

    def on_announce(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """Register a listener. Returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def announce(self, message: str) -> None:
        self._message = message
        logger.debug(f"Announce: {message}")

        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception as e:
                logger.error(f"Error in announcement listener: {e}")

        if self._event_bus:
            self._event_bus.emit(Event(
                EventType.ANNOUNCEMENT,
                data={"message": message, "politeness": self.politeness},
                source="live_region",
            ))

    def clear(self) -> None:
        self._message = ""


def eliminated_message(name: str) -> str:
    return ELIMINATED_TEMPLATE.format(name=name)
