from collections import deque
from typing import Iterator, Optional, Set, Tuple

from .tiles import TileGrid

Coord = Tuple[int, int]

# Same step set as player movement: cardinals and diagonals
_STEPS = ((0, -1), (1, 0), (0, 1), (-1, 0), (-1, -1), (1, -1), (-1, 1), (1, 1))


def _neighbors(grid: TileGrid, x: int, y: int) -> Iterator[Coord]:
    for dx, dy in _STEPS:
        nx, ny = x + dx, y + dy
        if grid.in_bounds(nx, ny) and not grid.is_blocked(nx, ny):
            yield nx, ny


def find_path_length(grid: TileGrid, start: Coord, goal: Coord) -> Optional[int]:
    """Breadth-first search over open tiles; returns the number of steps or None."""
    if grid.is_blocked(*start) or grid.is_blocked(*goal):
        return None

    q = deque([(start, 0)])
    seen = {start}
    while q:
        (x, y), d = q.popleft()
        if (x, y) == goal:
            return d
        for n in _neighbors(grid, x, y):
            if n not in seen:
                seen.add(n)
                q.append((n, d + 1))
    return None


def path_exists(grid: TileGrid, start: Coord, goal: Coord) -> bool:
    return find_path_length(grid, start, goal) is not None


def reachable_from(grid: TileGrid, start: Coord) -> Set[Coord]:
    """All open tiles connected to ``start``."""
    if grid.is_blocked(*start):
        return set()
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for n in _neighbors(grid, x, y):
            if n not in seen:
                seen.add(n)
                q.append(n)
    return seen
