"""Rendering helpers for the elimination wheel."""

from ejectwheel.graphics.wheel import (
    CREWMATE_COLORS,
    segment_color,
    truncate_label,
    segment_polygon,
    label_position,
)

__all__ = [
    "CREWMATE_COLORS",
    "segment_color",
    "truncate_label",
    "segment_polygon",
    "label_position",
]
