import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from lardum.config import MapConfig  # noqa: E402
from lardum.dungeon.generator import DungeonGenerator  # noqa: E402
from lardum.dungeon.tiles import TileGrid  # noqa: E402
from lardum.engine.session import GameSession  # noqa: E402
from lardum.entities.factory import make_player  # noqa: E402
from lardum.entities.store import EntityStore  # noqa: E402
from lardum.items.inventory import Inventory  # noqa: E402
from lardum.rng import RandomSource  # noqa: E402


@pytest.fixture
def session_factory():
    """Builds a session on an open (wall-less) grid with the player at ``player_pos``."""

    def _make(width: int = 20, height: int = 12, player_pos=(5, 5), capacity: int = 26) -> GameSession:
        grid = TileGrid(width, height, walled=False)
        entities = EntityStore()
        player = make_player(*player_pos)
        entities.add(player)
        return GameSession(grid, entities, Inventory(capacity=capacity), player_id=player.id)

    return _make


@pytest.fixture
def session(session_factory) -> GameSession:
    return session_factory()


@pytest.fixture
def small_map() -> MapConfig:
    return MapConfig(width=40, height=30, max_rooms=12)


@pytest.fixture
def generator(small_map) -> DungeonGenerator:
    return DungeonGenerator(small_map, RandomSource(seed=1234))
