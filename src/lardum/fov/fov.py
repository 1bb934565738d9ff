"""
Torch-radius field of view.

Sight is traced per target tile along a Bresenham line. A tile within the
Euclidean radius is visible when every tile strictly between it and the
origin lets light through; with ``light_walls`` the target itself may be
opaque, so the walls bordering a lit area show up.

The functions accept anything with ``width``, ``height``, ``in_bounds`` and
``is_transparent``: a ``TileGrid`` or the cached ``TransparencyMap``.
"""
from __future__ import annotations

import logging
import math
from typing import Iterator, List, Protocol, Set, Tuple

from ..dungeon.tiles import TileGrid

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class SightGrid(Protocol):
    width: int
    height: int

    def in_bounds(self, x: int, y: int) -> bool:
        ...

    def is_transparent(self, x: int, y: int) -> bool:
        ...


class TransparencyMap:
    """Snapshot of which tiles let light through, taken once per level."""

    def __init__(self, width: int, height: int, rows: List[List[bool]]) -> None:
        self.width = width
        self.height = height
        self._rows = rows

    @classmethod
    def from_grid(cls, grid: TileGrid) -> "TransparencyMap":
        rows = [[grid.is_transparent(x, y) for x in range(grid.width)] for y in range(grid.height)]
        return cls(grid.width, grid.height, rows)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_transparent(self, x: int, y: int) -> bool:
        return self._rows[y][x]


def _walk(x0: int, y0: int, x1: int, y1: int) -> Iterator[Coord]:
    dx, dy = abs(x1 - x0), abs(y1 - y0)
    step_x = 1 if x1 > x0 else -1
    step_y = 1 if y1 > y0 else -1
    err = dx - dy
    x, y = x0, y0
    yield x, y
    while (x, y) != (x1, y1):
        doubled = err * 2
        if doubled > -dy:
            err -= dy
            x += step_x
        if doubled < dx:
            err += dx
            y += step_y
        yield x, y


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Coord]:
    """Cells from (x0, y0) to (x1, y1), both ends included."""
    return list(_walk(x0, y0, x1, y1))


def is_visible_line(grid: SightGrid, x0: int, y0: int, x1: int, y1: int, *, light_walls: bool = True) -> bool:
    if not (grid.in_bounds(x0, y0) and grid.in_bounds(x1, y1)):
        return False
    for x, y in _walk(x0, y0, x1, y1):
        if (x, y) == (x0, y0):
            continue
        if (x, y) == (x1, y1):
            return light_walls or grid.is_transparent(x, y)
        if not grid.is_transparent(x, y):
            return False
    # Target is the origin itself
    return True


def compute_fov(grid: SightGrid, origin: Coord, radius: int, *, light_walls: bool = True) -> Set[Coord]:
    """Tiles seen from ``origin``; the origin is always among them."""
    ox, oy = origin
    if not grid.in_bounds(ox, oy):
        raise ValueError(f"FOV origin {origin} is outside the map")
    if radius < 0:
        raise ValueError("radius must be >= 0")

    seen: Set[Coord] = {origin}
    for dy in range(-radius, radius + 1):
        y = oy + dy
        if not 0 <= y < grid.height:
            continue
        # Widest column offset still inside the circle on this row
        span = math.isqrt(radius * radius - dy * dy)
        for x in range(max(0, ox - span), min(grid.width - 1, ox + span) + 1):
            if (x, y) not in seen and is_visible_line(grid, ox, oy, x, y, light_walls=light_walls):
                seen.add((x, y))

    logger.debug("FOV from %s radius %d: %d tiles", origin, radius, len(seen))
    return seen
