"""
Dungeon systems for Lardum.

Contains the tile grid, the rooms-and-tunnels level generator, the leveled
content tables and reachability helpers.
"""
from .generator import DungeonGenerator, GeneratedLevel
from .leveled import Transition, from_dungeon_level
from .tiles import Rect, Tile, TileGrid

__all__ = [
    "DungeonGenerator",
    "GeneratedLevel",
    "Rect",
    "Tile",
    "TileGrid",
    "Transition",
    "from_dungeon_level",
]
