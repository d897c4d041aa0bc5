"""
Outcome selection for the elimination wheel.

Turns a uniformly random index into the rotation that parks that
participant's segment under the fixed pointer at the top of the wheel.

Geometry:
    Segment i spans [i * angle, (i + 1) * angle) degrees clockwise from the
    pointer when the wheel is at rest (rotation 0). Rotating the wheel
    clockwise by R degrees brings the wheel point at (360 - R) mod 360 under
    the pointer.
"""

from dataclasses import dataclass
from typing import Callable, Optional
import math
import logging

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]

# Upper bound (exclusive) for the jitter fraction. Half a segment on either
# side of the midpoint is the segment boundary.
MAX_JITTER_FRACTION = 0.5


@dataclass(frozen=True)
class SpinOutcome:
    """Result of one spin, created once per spin cycle.

    Attributes:
        chosen_index: Index of the chosen participant, in [0, n)
        target_rotation: Absolute clockwise rotation in degrees
        jitter: Offset from the segment midpoint, in degrees
    """

    chosen_index: int
    target_rotation: float
    jitter: float = 0.0


def segment_angle(n: int) -> float:
    """Width of one segment in degrees (0.0 when there are no participants)."""
    return 360.0 / n if n > 0 else 0.0


def jitter_bound(n: int, jitter_fraction: float = 0.1) -> float:
    """Largest absolute jitter, in degrees, for a wheel of n segments."""
    return segment_angle(n) * jitter_fraction


def _draw(random_source: RandomSource) -> float:
    """Draw from the source, clamped to [0, 1)."""
    value = random_source()
    if value < 0.0:
        return 0.0
    if value >= 1.0:
        return math.nextafter(1.0, 0.0)
    return value


def select_outcome(
    n: int,
    rounds: int,
    random_source: RandomSource,
    jitter_fraction: float = 0.1,
) -> Optional[SpinOutcome]:
    """Choose a participant and the rotation that lands on it.

    Draws twice from random_source: once for the index, once for the jitter.

    Args:
        n: Number of participants
        rounds: Full revolutions added before the landing angle
        random_source: Callable returning uniform reals in [0, 1)
        jitter_fraction: Jitter on each side of the midpoint, as a fraction
            of one segment width

    Returns:
        The SpinOutcome, or None when there is nobody to choose

    Raises:
        ValueError: On negative n, rounds < 1 or an out-of-range jitter fraction
    """
    if n < 0:
        raise ValueError(f"Participant count must be >= 0, got {n}")
    if rounds < 1:
        raise ValueError(f"Rounds must be >= 1, got {rounds}")
    if not 0.0 <= jitter_fraction < MAX_JITTER_FRACTION:
        raise ValueError(
            f"Jitter fraction must be in [0, {MAX_JITTER_FRACTION}), got {jitter_fraction}"
        )

    if n == 0:
        return None

    angle = segment_angle(n)
    target_index = min(int(_draw(random_source) * n), n - 1)

    midpoint = target_index * angle + angle / 2
    needed = (360.0 - midpoint) % 360.0

    # Symmetric offset so the pointer does not always stop dead-center
    span = angle * jitter_fraction
    jitter = _draw(random_source) * (2 * span) - span

    outcome = SpinOutcome(
        chosen_index=target_index,
        target_rotation=rounds * 360.0 + needed + jitter,
        jitter=jitter,
    )
    logger.debug(
        f"Outcome selected: index={target_index}/{n} "
        f"rotation={outcome.target_rotation:.2f} jitter={jitter:+.2f}"
    )
    return outcome


def segment_at(rotation: float, n: int) -> Optional[int]:
    """Index of the segment under the pointer for a given wheel rotation."""
    if n <= 0:
        return None
    under_pointer = (360.0 - rotation % 360.0) % 360.0
    return min(int(under_pointer / segment_angle(n)), n - 1)
