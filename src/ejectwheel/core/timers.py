"""
Cancellable one-shot timers.

Two schedulers share one interface:
    FrameScheduler: virtual clock advanced by frame ticks (simulator, tests)
    AsyncioScheduler: real delays on the running asyncio event loop

TimerGroup owns the outstanding timers of one widget session and cancels
them as a group. Cancelling is idempotent everywhere.
"""

from dataclasses import dataclass, field
from typing import Callable, Protocol
import asyncio
import heapq
import itertools
import logging

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


@dataclass
class TimerHandle:
    """Handle to a single scheduled callback."""

    name: str
    due_ms: float
    callback: Callback = field(repr=False)
    _cancelled: bool = field(default=False, repr=False)
    _fired: bool = field(default=False, repr=False)
    _on_cancel: Callable[[], None] | None = field(default=None, repr=False)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def active(self) -> bool:
        """True while the callback can still run."""
        return not (self._cancelled or self._fired)

    def cancel(self) -> bool:
        """Cancel the timer.

        Returns:
            True if the timer was still pending
        """
        if not self.active:
            return False
        self._cancelled = True
        if self._on_cancel:
            self._on_cancel()
        return True

    def _run(self) -> None:
        if not self.active:
            return
        self._fired = True
        self.callback()


class Scheduler(Protocol):
    """Anything that can run a callback after a delay."""

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def call_later(self, delay_ms: float, callback: Callback, name: str = "timer") -> TimerHandle:
        """Schedule callback to run once after delay_ms."""
        ...


class FrameScheduler:
    """Scheduler driven by explicit time steps.

    The owner calls update(delta_ms) once per frame; every timer whose due
    time has been reached fires in (due time, scheduling order).
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._heap: list[tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callback, name: str = "timer") -> TimerHandle:
        handle = TimerHandle(name=name, due_ms=self._now + max(0.0, delay_ms), callback=callback)
        heapq.heappush(self._heap, (handle.due_ms, next(self._sequence), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of timers that can still fire."""
        return sum(1 for _, _, handle in self._heap if handle.active)

    def update(self, delta_ms: float) -> int:
        """Advance the clock and fire due timers.

        Args:
            delta_ms: Time elapsed since last update in milliseconds

        Returns:
            Number of callbacks that ran
        """
        target = self._now + max(0.0, delta_ms)
        fired = 0

        while self._heap and self._heap[0][0] <= target:
            due, _, handle = heapq.heappop(self._heap)
            if not handle.active:
                continue
            # Callbacks see the clock at their own due time
            self._now = max(self._now, due)
            handle._run()
            fired += 1

        self._now = target
        return fired

    def advance_to(self, time_ms: float) -> int:
        """Advance the clock to an absolute time."""
        return self.update(time_ms - self._now)

    def run_all(self, limit: int = 1000) -> int:
        """Fire timers until none remain (bounded, for chained timers)."""
        fired = 0
        while fired < limit:
            live = [entry for entry in self._heap if entry[2].active]
            if not live:
                break
            fired += self.advance_to(min(entry[0] for entry in live))
        return fired


class AsyncioScheduler:
    """Scheduler backed by the asyncio event loop's call_later."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callback, name: str = "timer") -> TimerHandle:
        handle = TimerHandle(name=name, due_ms=self.now() + max(0.0, delay_ms), callback=callback)
        loop_handle = self.loop.call_later(max(0.0, delay_ms) / 1000.0, handle._run)
        handle._on_cancel = loop_handle.cancel
        return handle


class TimerGroup:
    """The set of outstanding timers owned by one sequencer.

    Every callback is bound to the generation it was scheduled in;
    cancel_all() bumps the generation, so a callback that slipped past
    cancellation still refuses to run.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self._handles: dict[str, TimerHandle] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> list[str]:
        """Names of timers that can still fire."""
        return [name for name, handle in self._handles.items() if handle.active]

    def __len__(self) -> int:
        return len(self.pending)

    def __contains__(self, name: str) -> bool:
        handle = self._handles.get(name)
        return handle is not None and handle.active

    def schedule(self, name: str, delay_ms: float, callback: Callback) -> TimerHandle:
        """Schedule a named timer, replacing any pending timer of that name."""
        previous = self._handles.get(name)
        if previous is not None:
            previous.cancel()

        generation = self._generation

        def guarded() -> None:
            if generation != self._generation:
                logger.debug(f"Stale timer ignored: {name} (generation {generation})")
                return
            self._handles.pop(name, None)
            callback()

        handle = self.scheduler.call_later(delay_ms, guarded, name=name)
        self._handles[name] = handle
        logger.debug(f"Timer scheduled: {name} in {delay_ms:.0f}ms")
        return handle

    def cancel(self, name: str) -> bool:
        """Cancel a single named timer."""
        handle = self._handles.pop(name, None)
        return handle.cancel() if handle else False

    def cancel_all(self) -> int:
        """Cancel every outstanding timer and invalidate their callbacks.

        Returns:
            Number of timers that were still pending
        """
        self._generation += 1
        cancelled = sum(1 for handle in self._handles.values() if handle.cancel())
        self._handles.clear()
        if cancelled:
            logger.debug(f"Cancelled {cancelled} pending timer(s)")
        return cancelled
