from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from .. import colors
from ..exceptions import SaveError
from ..input.mapping import InputMapper
from ..ui.frame import Frame, build_frame
from .commands import PlayerAction, PlayerCommand
from .prompts import InputEvent
from .resolver import ActionResolver, UIContext
from .session import GameSession

if TYPE_CHECKING:  # pragma: no cover
    from ..persistence.manager import SaveManager

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class GameLoop:
    """Turn-synchronous driver for one game session.

    Each input event resolves at most one command; visibility is recomputed
    only when the player's position changed. On exit the session is saved;
    a failed save is reported in the message log and the loop still ends.

    Works both pulled (``run`` with an event source, used by the console) and
    pushed (``handle_event`` from a window callback, used by arcade).
    """

    def __init__(
        self,
        session: GameSession,
        resolver: ActionResolver,
        context: UIContext,
        mapper: Optional[InputMapper] = None,
        save_manager: Optional["SaveManager"] = None,
    ) -> None:
        self.session = session
        self.resolver = resolver
        self.visibility = resolver.visibility
        self.context = context
        self.mapper = mapper or InputMapper.default()
        self.save_manager = save_manager
        self.mouse: Optional[Coord] = None
        self.running = False
        self.turns = 0

    def start(self) -> None:
        self.visibility.initialise(self.session.grid)
        self.visibility.update(self.session.player.pos(), self.session.grid)
        self.running = True
        logger.info("Game loop started on level %d", self.session.dungeon_level)

    def handle_event(self, event: InputEvent) -> PlayerAction:
        if event.mouse is not None:
            self.mouse = event.mouse
        if event.key is None:
            return PlayerAction.DIDNT_TAKE_TURN
        return self.step(self.mapper.translate_key(event.key, alt=event.alt))

    def step(self, command: PlayerCommand) -> PlayerAction:
        action = self.resolver.handle(command, self.session, self.context)
        if action is PlayerAction.TOOK_TURN:
            self.turns += 1
        self.visibility.update(self.session.player.pos(), self.session.grid)
        if action is PlayerAction.EXIT:
            self.finish()
        return action

    def finish(self) -> bool:
        """Stop the loop and save. Returns False when the save failed."""
        self.running = False
        if self.save_manager is None:
            return True
        try:
            self.save_manager.save(self.session)
        except SaveError as e:
            logger.error("Could not save the game: %s", e)
            self.session.log.add(f"Could not save the game: {e}", colors.RED)
            return False
        return True

    def frame(self) -> Frame:
        return build_frame(self.session, self.visibility, self.mouse)

    def run(
        self,
        next_event: Callable[[], Optional[InputEvent]],
        render: Optional[Callable[[Frame], None]] = None,
    ) -> PlayerAction:
        """Block on ``next_event`` until the player quits or input runs out.

        Running out of input is treated as quitting, so the session is saved.
        """
        self.start()
        action = PlayerAction.DIDNT_TAKE_TURN
        while self.running:
            if render is not None:
                render(self.frame())
            event = next_event()
            if event is None:
                logger.info("Input closed; quitting")
                self.finish()
                return PlayerAction.EXIT
            action = self.handle_event(event)
        logger.info("Game loop finished after %d turns", self.turns)
        return action
