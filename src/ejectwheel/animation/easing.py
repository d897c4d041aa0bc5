"""Easing curves for the wheel animation.

Every curve maps normalized time t in [0, 1] to normalized progress.
"""

from enum import Enum, auto
from typing import Callable


class Easing(Enum):
    """Available easing curves."""

    LINEAR = auto()
    EASE_OUT_CUBIC = auto()

    # Wheel spin: cubic-bezier(0.25, 0.46, 0.45, 0.94)
    SPIN = auto()


EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_out_cubic(t: float) -> float:
    """Decelerate to zero velocity (cubic)."""
    return 1 - pow(1 - t, 3)


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFunc:
    """Build a CSS-style cubic-bezier timing function.

    The curve runs from (0, 0) to (1, 1) with control points (x1, y1) and
    (x2, y2). For a given t the curve parameter is found with Newton's
    method, falling back to bisection.
    """

    def sample(a1: float, a2: float, s: float) -> float:
        return ((1 - 3 * a2 + 3 * a1) * s + (3 * a2 - 6 * a1)) * s * s + 3 * a1 * s

    def slope(a1: float, a2: float, s: float) -> float:
        return 3 * (1 - 3 * a2 + 3 * a1) * s * s + 2 * (3 * a2 - 6 * a1) * s + 3 * a1

    def solve_s(x: float) -> float:
        s = x
        for _ in range(8):
            error = sample(x1, x2, s) - x
            if abs(error) < 1e-6:
                return s
            d = slope(x1, x2, s)
            if abs(d) < 1e-6:
                break
            s -= error / d

        lo, hi = 0.0, 1.0
        s = x
        while hi - lo > 1e-7:
            if sample(x1, x2, s) < x:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2
        return s

    def ease(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return sample(y1, y2, solve_s(t))

    return ease


spin = cubic_bezier(0.25, 0.46, 0.45, 0.94)


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.SPIN: spin,
}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Look up a curve by enum member or case-insensitive name.

    Raises:
        ValueError: If the name is not recognized
    """
    if isinstance(easing, str):
        try:
            easing = Easing[easing.upper()]
        except KeyError:
            raise ValueError(f"Unknown easing function: {easing}") from None
    return _EASING_FUNCTIONS[easing]


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Ease between two values; t is clamped to [0, 1]."""
    return start + (end - start) * get_easing(easing)(max(0.0, min(1.0, t)))
