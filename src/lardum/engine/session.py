from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from .. import colors
from ..config import DEFAULT_CONFIG, GameConfig
from ..dungeon.generator import DungeonGenerator
from ..dungeon.tiles import TileGrid
from ..entities.entity import Entity
from ..entities.factory import is_stairs, make_player, make_starting_dagger
from ..entities.store import EntityStore
from ..items.inventory import Inventory
from ..messages import MessageLog

if TYPE_CHECKING:  # pragma: no cover
    from ..fov.visibility import VisibilityTracker

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to your new home!"
DESCEND_TEXT = "After a rare moment of peace, you descend deeper into the heart of the dungeon..."


class GameSession:
    """Everything that makes up a game in progress.

    The grid and entity store describe the current level only and are
    replaced on every level transition; the inventory, message log and the
    player entity (with its stats) survive it. ``player_id`` addresses the
    player inside ``entities``.
    """

    def __init__(
        self,
        grid: TileGrid,
        entities: EntityStore,
        inventory: Inventory,
        log: Optional[MessageLog] = None,
        dungeon_level: int = 1,
        player_id: int = 0,
        config: GameConfig = DEFAULT_CONFIG,
    ) -> None:
        self.grid = grid
        self.entities = entities
        self.inventory = inventory
        self.log = log if log is not None else MessageLog()
        self.dungeon_level = dungeon_level
        self.player_id = player_id
        self.config = config

    @property
    def player(self) -> Entity:
        return self.entities.get(self.player_id)

    @classmethod
    def new_game(cls, generator: DungeonGenerator, config: GameConfig = DEFAULT_CONFIG) -> "GameSession":
        """Level 1, a fresh player with full stats and the starting dagger equipped."""
        player = make_player()
        level = generator.generate(1, player)
        inventory = Inventory(capacity=config.inventory.capacity)
        dagger = make_starting_dagger()
        level.entities.allocate_id(dagger)
        inventory.append(dagger)

        session = cls(
            grid=level.grid,
            entities=level.entities,
            inventory=inventory,
            dungeon_level=1,
            player_id=player.id,
            config=config,
        )
        session.log.add(WELCOME_TEXT, colors.RED)
        logger.info("New game started; player at %s", player.pos())
        return session

    def next_level(self, generator: DungeonGenerator, visibility: Optional["VisibilityTracker"] = None) -> None:
        """Descend: regenerate the grid and entity store, keeping the player and inventory."""
        self.log.add(DESCEND_TEXT, colors.RED)
        self.dungeon_level += 1
        player = self.player
        level = generator.generate(self.dungeon_level, player, next_id=self.entities.next_id)
        self.grid = level.grid
        self.entities = level.entities
        if visibility is not None:
            visibility.initialise(self.grid)
        logger.info("Descended to dungeon level %d", self.dungeon_level)

    def player_on_stairs(self) -> bool:
        player = self.player
        return any(is_stairs(e) for e in self.entities.at(player.x, player.y))

    # ---- Serialization ---------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "dungeon_level": self.dungeon_level,
            "player_id": self.player_id,
            "grid": self.grid.to_dict(),
            "entities": self.entities.to_dict(),
            "inventory": self.inventory.to_dict(),
            "log": self.log.to_list(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config: GameConfig = DEFAULT_CONFIG) -> "GameSession":
        session = cls(
            grid=TileGrid.from_dict(data["grid"]),
            entities=EntityStore.from_dict(data["entities"]),
            inventory=Inventory.from_dict(data["inventory"]),
            log=MessageLog.from_list(data.get("log", [])),
            dungeon_level=int(data["dungeon_level"]),
            player_id=int(data["player_id"]),
            config=config,
        )
        if session.player_id not in session.entities:
            raise ValueError(f"Player #{session.player_id} missing from entity store")
        return session

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameSession):
            return NotImplemented
        return (
            self.dungeon_level == other.dungeon_level
            and self.player_id == other.player_id
            and self.grid == other.grid
            and self.entities == other.entities
            and self.inventory == other.inventory
            and self.log == other.log
        )
