from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

# Bit flags used by the compact serialized form
_BLOCKED = 1
_BLOCK_SIGHT = 2
_EXPLORED = 4


@dataclass
class Tile:
    """A single map cell.

    ``explored`` only ever goes from False to True; use ``mark_explored``.
    """

    blocked: bool = False
    block_sight: bool = False
    explored: bool = False

    @classmethod
    def floor(cls) -> "Tile":
        return cls(blocked=False, block_sight=False)

    @classmethod
    def wall(cls) -> "Tile":
        return cls(blocked=True, block_sight=True)

    def mark_explored(self) -> None:
        self.explored = True

    def to_bits(self) -> int:
        return (
            (_BLOCKED if self.blocked else 0)
            | (_BLOCK_SIGHT if self.block_sight else 0)
            | (_EXPLORED if self.explored else 0)
        )

    @classmethod
    def from_bits(cls, bits: int) -> "Tile":
        return cls(
            blocked=bool(bits & _BLOCKED),
            block_sight=bool(bits & _BLOCK_SIGHT),
            explored=bool(bits & _EXPLORED),
        )


@dataclass(frozen=True)
class Rect:
    """Axis-aligned room footprint. The carved interior is (x1, x2) x (y1, y2), exclusive."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    def center(self) -> Coord:
        return ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: "Rect") -> bool:
        # Inclusive: rooms that merely share a wall line also count
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self) -> Iterator[Coord]:
        for y in range(self.y1 + 1, self.y2):
            for x in range(self.x1 + 1, self.x2):
                yield x, y


class TileGrid:
    """
    The per-level tile map. Provides bounds-checked access, carving helpers
    used by generation and the explored history used by the visibility
    tracker. Tiles are stored row-major as ``tiles[y][x]``.
    """

    def __init__(self, width: int, height: int, *, walled: bool = True) -> None:
        if width < 1 or height < 1:
            raise ValueError("TileGrid dimensions must be positive")
        self.width = width
        self.height = height
        make = Tile.wall if walled else Tile.floor
        self._tiles: List[List[Tile]] = [[make() for _ in range(width)] for _ in range(height)]

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return self._tiles[y][x]

    def set(self, x: int, y: int, tile: Tile) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cannot write tile out of bounds at ({x},{y})")
        self._tiles[y][x] = tile

    def __iter__(self) -> Iterator[Tuple[int, int, Tile]]:
        for y, row in enumerate(self._tiles):
            for x, tile in enumerate(row):
                yield x, y, tile

    # ---- Query -----------------------------------------------------------
    def is_blocked(self, x: int, y: int) -> bool:
        """Out-of-bounds counts as blocked."""
        if not self.in_bounds(x, y):
            return True
        return self._tiles[y][x].blocked

    def is_transparent(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return not self._tiles[y][x].block_sight

    def is_explored(self, x: int, y: int) -> bool:
        return self.get(x, y).explored

    def mark_explored(self, x: int, y: int) -> None:
        self.get(x, y).mark_explored()

    def explored_count(self) -> int:
        return sum(1 for _, _, t in self if t.explored)

    def open_tiles(self) -> Iterator[Coord]:
        for x, y, t in self:
            if not t.blocked:
                yield x, y

    # ---- Carving helpers -------------------------------------------------
    def carve_room(self, room: Rect) -> None:
        for x, y in room.interior():
            self.set(x, y, Tile.floor())

    def carve_h_tunnel(self, x1: int, x2: int, y: int) -> None:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            self.set(x, y, Tile.floor())

    def carve_v_tunnel(self, y1: int, y2: int, x: int) -> None:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            self.set(x, y, Tile.floor())

    # ---- Export / Compare -----------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self._tiles == other._tiles

    def to_str_lines(self) -> List[str]:
        return ["".join("#" if t.blocked else "." for t in row) for row in self._tiles]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "tiles": [[t.to_bits() for t in row] for row in self._tiles],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TileGrid":
        width, height = int(data["width"]), int(data["height"])
        rows = data["tiles"]
        if len(rows) != height or any(len(row) != width for row in rows):
            raise ValueError("Tile rows do not match grid dimensions")
        grid = cls(width, height)
        grid._tiles = [[Tile.from_bits(int(bits)) for bits in row] for row in rows]
        return grid
