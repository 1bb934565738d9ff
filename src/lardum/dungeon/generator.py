from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import MapConfig
from ..entities.entity import Entity
from ..entities.factory import make_item, make_stairs
from ..entities.store import EntityStore
from ..exceptions import GenerationError
from ..rng import RandomSource, weights_snapshot
from .leveled import item_weights, max_items_per_room
from .pathfinding import path_exists
from .tiles import Coord, Rect, TileGrid

logger = logging.getLogger(__name__)


@dataclass
class GeneratedLevel:
    grid: TileGrid
    entities: EntityStore
    rooms: List[Rect] = field(default_factory=list)
    start: Coord = (0, 0)
    stairs: Coord = (0, 0)
    stairs_id: int = -1


class DungeonGenerator:
    """Rooms-and-tunnels level generator.

    Candidate rooms are sampled at random and dropped when they touch an
    already accepted room. Each accepted room is tunnelled to the previously
    accepted one with an L-shaped corridor, so the rooms form a chain from
    the player's start (first room) to the stairs (last room). Items are
    spread over the rooms according to the leveled tables.

    Deterministic for a given seeded ``RandomSource``.
    """

    def __init__(self, config: Optional[MapConfig] = None, rng: Optional[RandomSource] = None) -> None:
        self.config = config or MapConfig()
        self.rng = rng or RandomSource()

    def generate(self, level: int, player: Entity, next_id: int = 0) -> GeneratedLevel:
        """Build a fresh level holding ``player`` plus its items and stairs.

        ``next_id`` seeds the new entity store so ids never collide with
        entities carried over from earlier levels (inventory items).
        Raises GenerationError if no room could be placed.
        """
        cfg = self.config
        logger.info("Generating dungeon level %d (%dx%d)", level, cfg.width, cfg.height)
        grid = TileGrid(cfg.width, cfg.height, walled=True)
        entities = EntityStore(next_id=next_id)
        entities.add(player)

        rooms: List[Rect] = []
        for _ in range(cfg.max_rooms):
            w = self.rng.randint(cfg.room_min_size, cfg.room_max_size)
            h = self.rng.randint(cfg.room_min_size, cfg.room_max_size)
            x = self.rng.randrange(0, cfg.width - w)
            y = self.rng.randrange(0, cfg.height - h)
            new_room = Rect.from_size(x, y, w, h)

            if any(new_room.intersects(other) for other in rooms):
                continue

            grid.carve_room(new_room)
            new_x, new_y = new_room.center()
            if not rooms:
                player.set_pos(new_x, new_y)
            else:
                prev_x, prev_y = rooms[-1].center()
                self._connect(grid, (prev_x, prev_y), (new_x, new_y))
            self._place_items(new_room, grid, entities, level)
            rooms.append(new_room)

        if not rooms:
            raise GenerationError(
                f"No room could be placed on level {level} "
                f"(map {cfg.width}x{cfg.height}, rooms {cfg.room_min_size}..{cfg.room_max_size})"
            )

        stairs_x, stairs_y = rooms[-1].center()
        stairs_id = entities.add(make_stairs(stairs_x, stairs_y))

        logger.info("Level %d: %d rooms, %d entities", level, len(rooms), len(entities))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Level %d: stairs reachable from start: %s",
                level,
                path_exists(grid, player.pos(), (stairs_x, stairs_y)),
            )
        return GeneratedLevel(
            grid=grid,
            entities=entities,
            rooms=rooms,
            start=player.pos(),
            stairs=(stairs_x, stairs_y),
            stairs_id=stairs_id,
        )

    def _connect(self, grid: TileGrid, prev: Tuple[int, int], new: Tuple[int, int]) -> None:
        (prev_x, prev_y), (new_x, new_y) = prev, new
        if self.rng.coin_flip():
            # horizontal first, then vertical
            grid.carve_h_tunnel(prev_x, new_x, prev_y)
            grid.carve_v_tunnel(prev_y, new_y, new_x)
        else:
            grid.carve_v_tunnel(prev_y, new_y, prev_x)
            grid.carve_h_tunnel(prev_x, new_x, new_y)

    def _place_items(self, room: Rect, grid: TileGrid, entities: EntityStore, level: int) -> None:
        max_items = max_items_per_room(level)
        weights = item_weights(level)
        num_items = self.rng.randint(0, max_items)
        if num_items:
            logger.debug("Placing %d item(s) in %s from %s", num_items, room, weights_snapshot(weights))

        for _ in range(num_items):
            spot = self._free_spot(room, grid, entities)
            if spot is None:
                logger.debug("No free spot left in %s; skipping item", room)
                continue
            kind = self.rng.weighted_choice(weights)
            entities.add(make_item(kind, *spot))

    def _free_spot(self, room: Rect, grid: TileGrid, entities: EntityStore) -> Optional[Coord]:
        for _ in range(self.config.placement_attempts):
            x = self.rng.randrange(room.x1 + 1, room.x2)
            y = self.rng.randrange(room.y1 + 1, room.y2)
            if grid.is_blocked(x, y) or entities.blocking_at(x, y) is not None:
                continue
            if entities.first_item_at(x, y) is not None:
                continue
            return x, y
        return None
