"""Tween of the displayed wheel angle toward the sequencer's rotation."""

import logging

from ejectwheel.animation.easing import Easing
from ejectwheel.animation.timeline import Timeline

logger = logging.getLogger(__name__)

SETTLE_DURATION_MS = 300.0


class SpinAnimator:
    """Follows a target rotation the way a CSS transform transition would.

    A new target while spinning eases over the spin duration with the spin
    curve; any other change (e.g. snapping back to 0 after a reset) eases
    out over SETTLE_DURATION_MS.
    """

    def __init__(self) -> None:
        self._angle = 0.0
        self._target = 0.0
        self._timeline: Timeline | None = None

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def target(self) -> float:
        return self._target

    @property
    def is_animating(self) -> bool:
        return self._timeline is not None and self._timeline.is_playing

    def set_target(self, rotation: float, spinning: bool, spin_duration_ms: float) -> None:
        if rotation == self._target:
            return

        if spinning:
            duration, easing = spin_duration_ms, Easing.SPIN
        else:
            duration, easing = SETTLE_DURATION_MS, Easing.EASE_OUT_CUBIC

        self._target = rotation
        self._timeline = Timeline.tween(
            "rotation", self._angle, rotation, duration, easing, name="wheel_spin"
        ).play(from_start=True)
        logger.debug(f"Wheel tween: {self._angle:.1f} -> {rotation:.1f} over {duration:.0f}ms")

    def update(self, delta_ms: float) -> float:
        if self._timeline is not None:
            values = self._timeline.update(delta_ms)
            self._angle = values["rotation"]
            if self._timeline.is_finished:
                self._timeline = None
        return self._angle
