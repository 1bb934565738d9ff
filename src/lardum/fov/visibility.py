from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set, Tuple

from .. import colors
from ..colors import Color
from ..config import FovConfig
from ..dungeon.tiles import TileGrid
from ..entities.entity import Entity
from .fov import TransparencyMap, compute_fov

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class VisibilityTracker:
    """
    Tracks what the player currently sees and folds it into the map's
    explored history.

    - ``initialise`` derives the static transparency data from a grid; call it
      after generation, after each level transition and after a load.
    - ``update`` recomputes only when the origin moved since the last call.
    - Tile explored flags live on the grid itself, so they are persisted with
      it; this class never clears them.

    Entity eligibility for drawing: currently visible, or flagged
    ``always_visible`` and standing on an explored tile. Terrain is remembered
    but monsters that walk out of sight are not.
    """

    def __init__(self, settings: Optional[FovConfig] = None) -> None:
        self.settings = settings or FovConfig()
        self._visible: Set[Coord] = set()
        self._origin: Optional[Coord] = None
        self._transparency: Optional[TransparencyMap] = None

    def initialise(self, grid: TileGrid) -> None:
        self._transparency = TransparencyMap.from_grid(grid)
        self._visible = set()
        self._origin = None
        logger.debug("Visibility initialised for %dx%d grid", grid.width, grid.height)

    @property
    def origin(self) -> Optional[Coord]:
        return self._origin

    def recompute(self, origin: Coord, grid: TileGrid) -> Set[Coord]:
        cached = self._transparency
        if cached is None or (cached.width, cached.height) != (grid.width, grid.height):
            self.initialise(grid)
        self._visible = compute_fov(
            self._transparency, origin, self.settings.torch_radius, light_walls=self.settings.light_walls
        )
        self._origin = origin
        for x, y in self._visible:
            grid.mark_explored(x, y)
        return set(self._visible)

    def update(self, origin: Coord, grid: TileGrid) -> bool:
        """Recompute if ``origin`` differs from the previous one. Returns True when it did."""
        if origin == self._origin:
            return False
        self.recompute(origin, grid)
        return True

    def is_visible(self, x: int, y: int) -> bool:
        return (x, y) in self._visible

    def visible_tiles(self) -> Set[Coord]:
        return set(self._visible)

    def tile_color(self, x: int, y: int, grid: TileGrid) -> Optional[Color]:
        """Palette entry for a tile, or None when it was never explored."""
        tile = grid.get(x, y)
        wall = tile.block_sight
        if self.is_visible(x, y):
            return colors.COLOR_LIGHT_WALL if wall else colors.COLOR_LIGHT_GROUND
        if tile.explored:
            return colors.COLOR_DARK_WALL if wall else colors.COLOR_DARK_GROUND
        return None

    def is_entity_renderable(self, entity: Entity, grid: TileGrid) -> bool:
        if self.is_visible(entity.x, entity.y):
            return True
        return entity.always_visible and grid.in_bounds(entity.x, entity.y) and grid.is_explored(entity.x, entity.y)

    def renderable_entities(self, entities: Iterable[Entity], grid: TileGrid) -> List[Entity]:
        """Eligible entities, non-blocking ones first so actors draw on top."""
        eligible = [e for e in entities if self.is_entity_renderable(e, grid)]
        return sorted(eligible, key=lambda e: e.blocks)

    def names_under(self, x: int, y: int, entities: Iterable[Entity]) -> str:
        if not self.is_visible(x, y):
            return ""
        return ", ".join(e.name for e in entities if e.x == x and e.y == y)
