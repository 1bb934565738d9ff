"""RGB palette shared by the domain model and the front ends.

Colors are plain ``(r, g, b)`` tuples so they serialize to JSON unchanged.
"""
from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
YELLOW: Color = (255, 255, 0)
ORANGE: Color = (255, 127, 0)
VIOLET: Color = (127, 0, 255)
SKY: Color = (0, 191, 255)
LIGHT_GREEN: Color = (63, 255, 63)
LIGHT_YELLOW: Color = (255, 255, 63)
LIGHT_GREY: Color = (159, 159, 159)
DARK_RED: Color = (191, 0, 0)
DARKER_GREEN: Color = (0, 127, 0)
DARKER_ORANGE: Color = (127, 63, 0)

# Map tiles: {visible, remembered} x {wall, ground}
COLOR_DARK_WALL: Color = (0, 0, 100)
COLOR_LIGHT_WALL: Color = (130, 110, 50)
COLOR_DARK_GROUND: Color = (50, 50, 150)
COLOR_LIGHT_GROUND: Color = (200, 180, 50)


def as_color(value) -> Color:  # noqa: ANN001
    """Coerce a JSON list (or any 3-sequence) back into a color tuple."""
    r, g, b = value
    return (int(r), int(g), int(b))
