"""Host-facing elimination wheel widget.

The host supplies the participant list, the open flag and two callbacks:

    roster = ["Red", "Blue", "Green"]
    wheel = SpinWheel(
        members=roster,
        on_eliminate=roster.remove,
        on_close=lambda: wheel.set_open(False),
        scheduler=FrameScheduler(),
    )
    wheel.set_open(True)
    wheel.handle_key("Enter")

The wheel reads `members` live, so a host that edits its own list in
`on_eliminate` is seen by the next spin. Renderers read `view()`, an
immutable snapshot of everything they need.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence
import asyncio
import logging

from ejectwheel.config.settings import Settings, WheelSettings, get_settings
from ejectwheel.core.announcer import LiveRegion
from ejectwheel.core.events import EventBus
from ejectwheel.core.selector import RandomSource, segment_angle
from ejectwheel.core.sequencer import Sequencer
from ejectwheel.core.state import SequenceState
from ejectwheel.core.timers import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)

START_LABEL = "START VOTE"
SPINNING_LABEL = "VOTING..."

KEY_ESCAPE = "Escape"
KEY_ENTER = "Enter"
KEY_SPACE = " "
START_KEYS = (KEY_ENTER, KEY_SPACE, "Space")


@dataclass(frozen=True)
class WheelView:
    """Snapshot of the widget for rendering."""

    open: bool
    state: SequenceState
    members: tuple[str, ...]
    segment_angle: float
    rotation: float
    spinning: bool
    spin_duration: float
    result: Optional[str]
    show_reveal: bool
    typed_text: str
    show_cursor: bool
    status_message: str
    start_label: str
    can_start: bool
    can_dismiss: bool


class SpinWheel:
    """Elimination wheel bound to one host.

    Args:
        members: Participant names, in wheel order
        on_eliminate: Called once per completed spin with the chosen name
        on_close: Called when the session ends (completion or dismissal)
        rotations: Full turns per spin (overrides settings)
        spin_duration: Visual spin length in seconds (overrides settings)
        settings: Application settings (defaults to get_settings())
        scheduler: Timer source (defaults to the running asyncio loop)
        random_source: Uniform [0, 1) source (defaults to random.random)
        event_bus: Bus for lifecycle events
    """

    def __init__(
        self,
        members: Sequence[str],
        on_eliminate: Callable[[str], None],
        on_close: Callable[[], None],
        rotations: Optional[int] = None,
        spin_duration: Optional[float] = None,
        settings: Optional[Settings] = None,
        scheduler: Optional[Scheduler] = None,
        random_source: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.event_bus = event_bus or EventBus()
        self.live_region = LiveRegion(self.event_bus)

        overrides = {
            key: value
            for key, value in (("rotations", rotations), ("spin_duration", spin_duration))
            if value is not None
        }
        wheel = WheelSettings.model_validate({**self.settings.wheel.model_dump(), **overrides})

        if scheduler is None:
            try:
                scheduler = AsyncioScheduler(asyncio.get_running_loop())
            except RuntimeError as e:
                raise RuntimeError(
                    "SpinWheel needs a running asyncio loop or an explicit scheduler"
                ) from e

        # Host-owned; snapshotted by the sequencer when a spin starts
        self._members: Sequence[str] = members
        self._open = False
        self.sequencer = Sequencer(
            scheduler=scheduler,
            on_eliminate=on_eliminate,
            on_close=on_close,
            wheel=wheel,
            timing=self.settings.timing,
            random_source=random_source,
            event_bus=self.event_bus,
            live_region=self.live_region,
        )

    @property
    def members(self) -> tuple[str, ...]:
        return tuple(self._members)

    def set_members(self, members: Sequence[str]) -> None:
        """Point the wheel at a different participant list.

        A spin in progress keeps its own copy.
        """
        self._members = members

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def state(self) -> SequenceState:
        return self.sequencer.state

    def set_open(self, open: bool) -> None:
        """Apply the host's visibility flag.

        Closing always cancels every pending timer and resets the wheel,
        whatever state it was in.
        """
        if self.sequencer.destroyed:
            return
        if open:
            self._open = True
            self.sequencer.open()
        else:
            self._open = False
            self.sequencer.hide()

    def destroy(self) -> None:
        """Unmount: same cancellation as closing, and no further use."""
        self._open = False
        self.sequencer.destroy()

    # Controls
    @property
    def can_start(self) -> bool:
        return self._open and self.state == SequenceState.IDLE and len(self._members) > 0

    def start(self) -> bool:
        if not self._open:
            logger.debug("start() ignored: widget closed")
            return False
        return self.sequencer.start(self._members)

    def dismiss(self) -> bool:
        """Close button. Disabled while the wheel is spinning."""
        if not self._open:
            return False
        return self.sequencer.dismiss()

    def handle_key(self, key: str) -> bool:
        """Keyboard surface.

        Escape dismisses unless a spin or reveal is running; Enter or Space
        starts a spin when idle with participants.

        Returns:
            True if the key was handled
        """
        if not self._open:
            return False

        busy = self.state in (SequenceState.SPINNING, SequenceState.REVEALING)

        if key == KEY_ESCAPE:
            if busy:
                return False
            return self.dismiss()

        if key in START_KEYS:
            if busy or not self._members:
                return False
            return self.start()

        return False

    def view(self) -> WheelView:
        session = self.sequencer.session
        spinning = session.state == SequenceState.SPINNING
        members = session.participants if session.participants else tuple(self._members)
        reveal_text = session.reveal_text

        return WheelView(
            open=self._open,
            state=session.state,
            members=members,
            segment_angle=segment_angle(len(members)),
            rotation=session.rotation,
            spinning=spinning,
            spin_duration=self.sequencer.wheel.spin_duration,
            result=session.result,
            show_reveal=session.show_reveal,
            typed_text=session.typed_text,
            show_cursor=session.show_reveal and len(session.typed_text) < len(reveal_text),
            status_message=self.live_region.message,
            start_label=SPINNING_LABEL if spinning else START_LABEL,
            can_start=self.can_start,
            can_dismiss=self._open and self.sequencer.can_dismiss,
        )
