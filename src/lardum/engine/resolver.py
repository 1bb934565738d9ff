from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..config import UiConfig
from ..dungeon.generator import DungeonGenerator
from ..fov.visibility import VisibilityTracker
from ..items.effects import use_item
from ..items.inventory import drop, pick_up
from .commands import Command, MoveCommand, PlayerAction, PlayerCommand
from .prompts import Prompter
from .session import GameSession

logger = logging.getLogger(__name__)

USE_HEADER = "Press the key next to an item to use it, or any other to cancel.\n"
DROP_HEADER = "Press the key next to an item to drop it, or any other to cancel.\n"

CHARACTER_SHEET = """Character information

Hunger: {hunger}  Energy: {energy}
Comfort: {comfort} Fun: {fun}
Hygiene: {hygiene} Social: {social}
Bladder: {bladder} Room: {room}"""


def _noop() -> None:
    pass


@dataclass
class UIContext:
    """What the resolver may ask of the front end: prompts and display toggles.

    Owned by the top-level loop and passed in explicitly on every call.
    """

    prompter: Prompter
    ui: UiConfig = field(default_factory=UiConfig)
    toggle_fullscreen: Callable[[], None] = _noop


class ActionResolver:
    """Applies one player command to the session and classifies the turn."""

    def __init__(self, generator: DungeonGenerator, visibility: VisibilityTracker) -> None:
        self.generator = generator
        self.visibility = visibility

    def handle(self, command: PlayerCommand, session: GameSession, context: UIContext) -> PlayerAction:
        if command is Command.QUIT:
            return PlayerAction.EXIT
        if command is Command.TOGGLE_FULLSCREEN:
            context.toggle_fullscreen()
            return PlayerAction.DIDNT_TAKE_TURN
        if command is Command.NONE:
            return PlayerAction.DIDNT_TAKE_TURN

        if not session.player.alive:
            logger.debug("Ignoring %s: player is dead", command)
            return PlayerAction.DIDNT_TAKE_TURN

        if isinstance(command, MoveCommand):
            self.move_player(session, command.dx, command.dy)
            return PlayerAction.TOOK_TURN
        if command is Command.WAIT:
            return PlayerAction.TOOK_TURN
        if command is Command.PICK_UP:
            self._pick_up(session)
        elif command is Command.USE:
            index = self.inventory_menu(session, context, USE_HEADER)
            if index is not None:
                use_item(session, index)
        elif command is Command.DROP:
            index = self.inventory_menu(session, context, DROP_HEADER)
            if index is not None:
                drop(session, index)
        elif command is Command.DESCEND:
            if session.player_on_stairs():
                session.next_level(self.generator, self.visibility)
        elif command is Command.CHARACTER_SHEET:
            self._character_sheet(session, context)
        return PlayerAction.DIDNT_TAKE_TURN

    @staticmethod
    def move_player(session: GameSession, dx: int, dy: int) -> bool:
        """Step the player unless the target is a wall or holds a blocking entity."""
        player = session.player
        x, y = player.x + dx, player.y + dy
        if session.grid.is_blocked(x, y) or session.entities.blocking_at(x, y) is not None:
            return False
        player.set_pos(x, y)
        return True

    @staticmethod
    def inventory_menu(session: GameSession, context: UIContext, header: str) -> Optional[int]:
        inventory = session.inventory
        choice = context.prompter.menu(header, inventory.menu_options(), context.ui.inventory_width)
        if len(inventory) == 0:
            return None
        return choice

    @staticmethod
    def _pick_up(session: GameSession) -> None:
        player = session.player
        for entity in session.entities.at(player.x, player.y):
            if entity.is_item and entity.id != player.id:
                pick_up(session, entity.id)
                return

    @staticmethod
    def _character_sheet(session: GameSession, context: UIContext) -> None:
        stats = session.player.stats
        if stats is None:
            return
        text = CHARACTER_SHEET.format(
            hunger=stats.hunger,
            energy=stats.energy,
            comfort=stats.comfort,
            fun=stats.fun,
            hygiene=stats.hygiene,
            social=stats.social,
            bladder=stats.bladder,
            room=stats.room,
        )
        context.prompter.message_box(text, context.ui.character_screen_width)
