"""Animation module for the elimination wheel."""

from ejectwheel.animation.easing import Easing, cubic_bezier, get_easing, interpolate
from ejectwheel.animation.timeline import Timeline, Track, Keyframe, PlayState
from ejectwheel.animation.spin import SpinAnimator

__all__ = [
    # Easing
    "Easing",
    "cubic_bezier",
    "get_easing",
    "interpolate",
    # Timeline
    "Timeline",
    "Track",
    "Keyframe",
    "PlayState",
    # Wheel
    "SpinAnimator",
]
