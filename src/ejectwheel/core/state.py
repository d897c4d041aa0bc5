"""
State machine for the elimination wheel session.

States:
    CLOSED: Widget hidden; nothing scheduled, display state at initial values
    IDLE: Widget open and waiting for start()
    SPINNING: Outcome chosen, wheel turning toward the target rotation
    REVEALING: Chosen name being revealed; elimination then close follow
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

from ejectwheel.core.selector import SpinOutcome

logger = logging.getLogger(__name__)


class SequenceState(Enum):
    """Session states."""
    CLOSED = auto()
    IDLE = auto()
    SPINNING = auto()
    REVEALING = auto()


@dataclass
class SessionState:
    """Everything the sequencer owns for one session.

    Reset replaces the whole bundle with a fresh instance.
    """
    state: SequenceState = SequenceState.CLOSED
    participants: tuple[str, ...] = ()
    outcome: SpinOutcome | None = None
    rotation: float = 0.0
    result: str | None = None
    typed_text: str = ""
    show_reveal: bool = False
    eliminated: bool = False

    @property
    def reveal_text(self) -> str:
        """Full text the typed reveal grows toward."""
        return self.result.upper() if self.result else ""


Listener = Callable[[SequenceState, SequenceState, SessionState], None]


class StateMachine:
    """
    Manages the session state and transitions.

    Only transitions in VALID_TRANSITIONS are accepted through transition();
    reset() is the unconditional path used for teardown.
    """

    VALID_TRANSITIONS: list[tuple[SequenceState, SequenceState]] = [
        # From CLOSED
        (SequenceState.CLOSED, SequenceState.IDLE),  # Host opens the widget

        # From IDLE
        (SequenceState.IDLE, SequenceState.SPINNING),
        (SequenceState.IDLE, SequenceState.CLOSED),  # Dismiss

        # From SPINNING
        (SequenceState.SPINNING, SequenceState.REVEALING),

        # From REVEALING
        (SequenceState.REVEALING, SequenceState.CLOSED),  # Auto-close or dismiss
    ]

    def __init__(self, initial_state: SequenceState = SequenceState.CLOSED) -> None:
        self._context = SessionState(state=initial_state)
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> SequenceState:
        """Get current state."""
        return self._context.state

    @property
    def context(self) -> SessionState:
        """Get current session bundle."""
        return self._context

    def can_transition(self, to_state: SequenceState) -> bool:
        """Check if transition to given state is valid."""
        return (self.state, to_state) in self._valid_transitions

    def transition(self, to_state: SequenceState, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state
            **context_updates: Fields of the session bundle to update

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self.state.name} -> {to_state.name}"
            )
            return False

        old_state = self.state
        self._context.state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)
            else:
                logger.warning(f"Unknown session field ignored: {key}")

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def update(self, **context_updates: Any) -> None:
        """Update the session bundle without changing state."""
        for key, value in context_updates.items():
            setattr(self._context, key, value)

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self, to_state: SequenceState = SequenceState.CLOSED) -> None:
        """Replace the session bundle with its initial value."""
        old_state = self.state
        self._context = SessionState(state=to_state)

        if old_state != to_state:
            self._notify(old_state, to_state)

        logger.debug(f"StateMachine reset to {to_state.name}")

    def _notify(self, old_state: SequenceState, new_state: SequenceState) -> None:
        for listener in list(self._listeners):
            try:
                listener(old_state, new_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
