"""Elimination wheel: fair random selection with a timed reveal sequence."""

from ejectwheel.core.selector import SpinOutcome, select_outcome
from ejectwheel.core.sequencer import Sequencer
from ejectwheel.core.state import SequenceState
from ejectwheel.core.timers import FrameScheduler, AsyncioScheduler
from ejectwheel.widget import SpinWheel, WheelView

__version__ = "0.1.0"

__all__ = [
    "SpinOutcome",
    "select_outcome",
    "Sequencer",
    "SequenceState",
    "FrameScheduler",
    "AsyncioScheduler",
    "SpinWheel",
    "WheelView",
]
