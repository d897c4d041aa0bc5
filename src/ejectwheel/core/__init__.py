"""Core selection and sequencing for the elimination wheel."""

from .selector import SpinOutcome, select_outcome, segment_angle, segment_at
from .state import SequenceState, SessionState, StateMachine
from .events import EventBus, Event, EventType
from .timers import FrameScheduler, AsyncioScheduler, TimerGroup, TimerHandle
from .sequencer import Sequencer

__all__ = [
    "SpinOutcome",
    "select_outcome",
    "segment_angle",
    "segment_at",
    "SequenceState",
    "SessionState",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "FrameScheduler",
    "AsyncioScheduler",
    "TimerGroup",
    "TimerHandle",
    "Sequencer",
]
