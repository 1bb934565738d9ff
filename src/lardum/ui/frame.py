"""
Render-ready snapshot of a session.

``build_frame`` gathers everything a front end needs to draw one screen:
tile colors for explored cells, the entities to draw (in draw order), the
message log tail that fits the panel, the eight stat bars and the names
under the mouse. Front ends only translate a Frame into draw calls.
"""
from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .. import colors
from ..colors import Color
from ..config import UiConfig
from ..engine.session import GameSession
from ..entities.entity import Entity
from ..fov.visibility import VisibilityTracker
from ..messages import Message

Coord = Tuple[int, int]

# (label, gauge) per column, top to bottom
LEFT_BARS = (("Hunger", "hunger"), ("Comfort", "comfort"), ("Hygiene", "hygiene"), ("Bladder", "bladder"))
RIGHT_BARS = (("Energy", "energy"), ("Fun", "fun"), ("Social", "social"), ("Room", "room"))


@dataclass(frozen=True)
class StatBar:
    name: str
    value: int
    maximum: int
    x: int
    y: int
    width: int
    bar_color: Color = colors.LIGHT_GREEN
    back_color: Color = colors.DARKER_GREEN

    @property
    def filled(self) -> int:
        if self.maximum <= 0:
            return 0
        return int(self.value / self.maximum * self.width)

    @property
    def text(self) -> str:
        return f"{self.name:>7}: {self.value}/{self.maximum}"


@dataclass
class Frame:
    width: int
    height: int
    tiles: List[List[Optional[Color]]]
    entities: List[Entity] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)
    bars: List[StatBar] = field(default_factory=list)
    names_under_mouse: str = ""
    dungeon_level: int = 1

    def tile_color(self, x: int, y: int) -> Optional[Color]:
        return self.tiles[y][x]


def message_tail(messages: List[Message], width: int, height: int) -> List[Message]:
    """Newest messages whose wrapped text fits ``height`` lines, oldest first."""
    shown: List[Message] = []
    used = 0
    for msg in reversed(messages):
        lines = max(1, len(textwrap.wrap(msg.text, width=max(1, width))))
        if used + lines > height:
            break
        used += lines
        shown.append(msg)
    shown.reverse()
    return shown


def stat_bars(session: GameSession, ui: UiConfig) -> List[StatBar]:
    stats = session.player.stats
    bars: List[StatBar] = []
    columns = (
        (ui.screen_width - 2 * ui.bar_width - ui.bar_left_padding, LEFT_BARS),
        (ui.screen_width - ui.bar_width, RIGHT_BARS),
    )
    for x, column in columns:
        for row, (label, gauge) in enumerate(column, start=1):
            value = stats.value(gauge) if stats is not None else 0
            maximum = stats.max_of(gauge) if stats is not None else 0
            bars.append(StatBar(label, value, maximum, x, ui.bar_top_padding + row, ui.bar_width))
    return bars


def build_frame(
    session: GameSession,
    visibility: VisibilityTracker,
    mouse: Optional[Coord] = None,
    ui: Optional[UiConfig] = None,
) -> Frame:
    ui = ui or session.config.ui
    grid = session.grid
    tiles = [[visibility.tile_color(x, y, grid) for x in range(grid.width)] for y in range(grid.height)]
    names = ""
    if mouse is not None and grid.in_bounds(*mouse):
        names = visibility.names_under(mouse[0], mouse[1], session.entities)
    return Frame(
        width=grid.width,
        height=grid.height,
        tiles=tiles,
        entities=visibility.renderable_entities(session.entities, grid),
        messages=message_tail(session.log.messages(), ui.msg_width, ui.msg_height),
        bars=stat_bars(session, ui),
        names_under_mouse=names,
        dungeon_level=session.dungeon_level,
    )
