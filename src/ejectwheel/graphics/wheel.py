"""Wheel geometry and labels for renderers.

Angles are in degrees, measured clockwise from the pointer at the top.
Screen coordinates have y pointing down.
"""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]

CREWMATE_COLORS: list[Color] = [
    (0xC5, 0x11, 0x11), (0x13, 0x2E, 0xD1), (0x11, 0x7F, 0x2D), (0xED, 0x54, 0xBA),
    (0xEF, 0x7D, 0x0D), (0xF5, 0xF5, 0x57), (0x3F, 0x47, 0x4E), (0xD6, 0xE0, 0xF0),
    (0x9B, 0x59, 0xD6), (0x6B, 0x2F, 0xBB), (0x38, 0xFE, 0xDB), (0x50, 0xEF, 0x39),
]

LABEL_MAX_CHARS = 8
LABEL_KEEP_CHARS = 6
ELLIPSIS = "…"


def segment_color(index: int) -> Color:
    """Palette colour for a segment, cycling through the crew colours."""
    return CREWMATE_COLORS[index % len(CREWMATE_COLORS)]


def truncate_label(name: str) -> str:
    """Shorten long names so they fit inside a segment."""
    if len(name) > LABEL_MAX_CHARS:
        return name[:LABEL_KEEP_CHARS] + ELLIPSIS
    return name


def point_on_wheel(center: Point, radius: float, angle_deg: float) -> Point:
    """Screen position of a point at angle_deg on a circle around center."""
    rad = np.radians(angle_deg)
    return (
        float(center[0] + radius * np.sin(rad)),
        float(center[1] - radius * np.cos(rad)),
    )


def segment_polygon(
    center: Point,
    radius: float,
    index: int,
    n: int,
    rotation: float = 0.0,
    steps: int = 24,
) -> NDArray[np.float64]:
    """Polygon outlining one segment of a wheel rotated by `rotation`.

    Args:
        center: Wheel center in screen coordinates
        radius: Wheel radius in pixels
        index: Segment index
        n: Number of segments
        rotation: Clockwise wheel rotation in degrees
        steps: Arc subdivisions

    Returns:
        Array of shape (steps + 2, 2): the center followed by the arc points
    """
    angle = 360.0 / n
    start = index * angle + rotation
    arc = np.radians(np.linspace(start, start + angle, steps + 1))

    points = np.empty((steps + 2, 2))
    points[0] = center
    points[1:, 0] = center[0] + radius * np.sin(arc)
    points[1:, 1] = center[1] - radius * np.cos(arc)
    return points


def label_position(
    center: Point,
    radius: float,
    index: int,
    n: int,
    rotation: float = 0.0,
) -> Point:
    """Where a segment's label sits: its midpoint at two thirds of the radius."""
    angle = 360.0 / n
    return point_on_wheel(center, radius * 2 / 3, index * angle + angle / 2 + rotation)
