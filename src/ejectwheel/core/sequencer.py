"""
Spin sequencer for the elimination wheel.

Drives one widget session through CLOSED -> IDLE -> SPINNING -> REVEALING
-> CLOSED. Each timer in the chain is scheduled from inside the callback of
the one before it, so a session runs at most one chain:

    start()          schedule "reveal"     (spin duration + settle grace)
    reveal fires     schedule "eliminate"  (fixed reveal duration)
                     schedule "typing"     (per-character reveal pacing)
    eliminate fires  on_eliminate(name), schedule "close" (auto-close delay)
    close fires      on_close()

Hiding or destroying the widget cancels the whole group and replaces the
session bundle with its initial value.
"""

from typing import Callable, Optional, Sequence
import logging
import random

from ejectwheel.config.settings import WheelSettings, TimingSettings
from ejectwheel.core.announcer import LiveRegion, SPIN_IN_PROGRESS, eliminated_message
from ejectwheel.core.events import EventBus, Event, EventType
from ejectwheel.core.selector import RandomSource, select_outcome
from ejectwheel.core.state import SequenceState, SessionState, StateMachine
from ejectwheel.core.timers import Scheduler, TimerGroup

logger = logging.getLogger(__name__)

TIMER_REVEAL = "reveal"
TIMER_ELIMINATE = "eliminate"
TIMER_CLOSE = "close"
TIMER_TYPING = "typing"


class Sequencer:
    """Owns the session state bundle and the pending timer group.

    Nothing outside this class mutates the bundle; readers use `session`.
    Refused operations (double start, start with nobody to choose, dismissal
    mid-spin) return False without side effects.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_eliminate: Callable[[str], None],
        on_close: Callable[[], None],
        wheel: Optional[WheelSettings] = None,
        timing: Optional[TimingSettings] = None,
        random_source: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None,
        live_region: Optional[LiveRegion] = None,
    ) -> None:
        self.wheel = wheel or WheelSettings()
        self.timing = timing or TimingSettings()
        self.event_bus = event_bus or EventBus()
        self.live_region = live_region or LiveRegion(self.event_bus)

        self._on_eliminate = on_eliminate
        self._on_close = on_close
        self._random_source = random_source or random.random

        self._machine = StateMachine()
        self._timers = TimerGroup(scheduler)
        self._destroyed = False

    # Read-only views
    @property
    def state(self) -> SequenceState:
        return self._machine.state

    @property
    def session(self) -> SessionState:
        return self._machine.context

    @property
    def state_machine(self) -> StateMachine:
        return self._machine

    @property
    def pending_timers(self) -> list[str]:
        return self._timers.pending

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def spin_delay_ms(self) -> int:
        """Delay from start() to the reveal."""
        return round(self.wheel.spin_duration * 1000 + self.timing.spin_settle_ms)

    @property
    def can_dismiss(self) -> bool:
        return not self._destroyed and self._machine.can_transition(SequenceState.CLOSED)

    # Lifecycle
    def open(self) -> bool:
        """Make start() callable. Does not start a spin."""
        if self._destroyed:
            logger.debug("open() ignored: sequencer destroyed")
            return False
        if self.state != SequenceState.CLOSED:
            return False
        self._machine.transition(SequenceState.IDLE)
        self._emit(EventType.WIDGET_OPENED)
        return True

    def hide(self) -> None:
        """Forced teardown: cancel everything and reset to initial values.

        Safe to call from any state, any number of times.
        """
        cancelled = self._timers.cancel_all()
        was = self.state
        self._machine.reset(SequenceState.CLOSED)
        self.live_region.clear()
        if was != SequenceState.CLOSED or cancelled:
            logger.info(f"Session reset from {was.name} ({cancelled} timer(s) cancelled)")
            self._emit(EventType.SEQUENCE_RESET, previous=was.name, cancelled=cancelled)

    def destroy(self) -> None:
        """Teardown for an instance that will not be used again."""
        if self._destroyed:
            return
        self.hide()
        self._destroyed = True
        logger.debug("Sequencer destroyed")

    # Triggers
    def start(self, participants: Sequence[str]) -> bool:
        """Choose a participant and begin the spin.

        Returns:
            True if a spin started
        """
        if self.state != SequenceState.IDLE:
            logger.debug(f"start() ignored in state {self.state.name}")
            return False

        roster = tuple(participants)
        outcome = select_outcome(
            len(roster),
            self.wheel.rotations,
            self._random_source,
            self.wheel.jitter_fraction,
        )
        if outcome is None:
            logger.debug("start() ignored: no participants")
            return False

        # Scheduled first so a failing scheduler leaves the session untouched
        self._timers.schedule(TIMER_REVEAL, self.spin_delay_ms, self._reveal)

        self._machine.transition(
            SequenceState.SPINNING,
            participants=roster,
            outcome=outcome,
            rotation=outcome.target_rotation,
            result=None,
            typed_text="",
            show_reveal=False,
        )
        self.live_region.announce(SPIN_IN_PROGRESS)
        self._emit(
            EventType.SPIN_STARTED,
            index=outcome.chosen_index,
            rotation=outcome.target_rotation,
            participants=len(roster),
        )
        logger.info(f"Spin started: {len(roster)} participant(s), target {outcome.target_rotation:.1f} deg")
        return True

    def dismiss(self) -> bool:
        """User cancel. Refused while the wheel is spinning."""
        if self._destroyed or not self._machine.can_transition(SequenceState.CLOSED):
            logger.debug(f"dismiss() refused in state {self.state.name}")
            return False

        self._timers.cancel_all()
        was = self.state
        self._machine.reset(SequenceState.CLOSED)
        self.live_region.clear()
        logger.info(f"Dismissed from {was.name}")
        self._emit(EventType.WIDGET_CLOSED, reason="dismissed")
        self._on_close()
        return True

    # Timer callbacks
    def _reveal(self) -> None:
        session = self.session
        chosen = session.participants[session.outcome.chosen_index]

        self._machine.transition(
            SequenceState.REVEALING,
            result=chosen,
            show_reveal=True,
            typed_text="",
        )
        self.live_region.announce(eliminated_message(chosen))
        self._emit(EventType.RESULT_REVEALED, name=chosen, index=session.outcome.chosen_index)
        logger.info(f"Participant chosen: {chosen}")

        self._timers.schedule(TIMER_ELIMINATE, self.timing.reveal_duration_ms, self._eliminate)
        self._timers.schedule(TIMER_TYPING, self.timing.typing_interval_ms, self._type_next)

    def _type_next(self) -> None:
        session = self.session
        full_text = session.reveal_text
        if len(session.typed_text) >= len(full_text):
            return

        self._machine.update(typed_text=full_text[:len(session.typed_text) + 1])
        if len(session.typed_text) < len(full_text):
            self._timers.schedule(TIMER_TYPING, self.timing.typing_interval_ms, self._type_next)

    def _eliminate(self) -> None:
        chosen = self.session.result
        self._machine.update(eliminated=True)
        self._emit(EventType.PARTICIPANT_ELIMINATED, name=chosen)
        logger.info(f"Participant eliminated: {chosen}")

        self._on_eliminate(chosen)
        # The host may have hidden the widget from inside on_eliminate
        if self.state == SequenceState.REVEALING:
            self._timers.schedule(TIMER_CLOSE, self.timing.auto_close_delay_ms, self._close)

    def _close(self) -> None:
        self._timers.cancel_all()
        self._machine.reset(SequenceState.CLOSED)
        self.live_region.clear()
        self._emit(EventType.WIDGET_CLOSED, reason="completed")
        logger.info("Session complete")
        self._on_close()

    def _emit(self, event_type: EventType, **data) -> None:
        self.event_bus.emit(Event(event_type, data=data, source="sequencer"))
