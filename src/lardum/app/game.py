from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ..config import DEFAULT_CONFIG, GameConfig
from ..dungeon.generator import DungeonGenerator
from ..engine.loop import GameLoop
from ..engine.prompts import Prompter
from ..engine.resolver import ActionResolver, UIContext
from ..engine.session import GameSession
from ..exceptions import SaveError
from ..fov.visibility import VisibilityTracker
from ..persistence.manager import SaveManager
from ..rng import RandomSource

logger = logging.getLogger(__name__)

MAIN_MENU_OPTIONS = ("Play a new game", "Continue last game", "Quit")
MAIN_MENU_WIDTH = 24
NO_SAVE_TEXT = "\nNo saved game to load.\n"
TITLE = "LARDUM"


def _noop() -> None:
    pass


@dataclass
class Game:
    """The long-lived collaborators shared by every session of one process."""

    config: GameConfig
    generator: DungeonGenerator
    visibility: VisibilityTracker
    save_manager: SaveManager

    @classmethod
    def build(
        cls,
        config: GameConfig = DEFAULT_CONFIG,
        save_dir: Optional[Path] = None,
        seed: Optional[int] = None,
    ) -> "Game":
        return cls(
            config=config,
            generator=DungeonGenerator(config.map, RandomSource(seed)),
            visibility=VisibilityTracker(config.fov),
            save_manager=SaveManager(save_dir, filename=config.save_filename),
        )

    def new_session(self) -> GameSession:
        return GameSession.new_game(self.generator, self.config)

    def load_session(self) -> GameSession:
        return self.save_manager.load(self.config)

    def make_loop(
        self,
        session: GameSession,
        prompter: Prompter,
        toggle_fullscreen: Callable[[], None] = _noop,
    ) -> GameLoop:
        context = UIContext(prompter=prompter, ui=self.config.ui, toggle_fullscreen=toggle_fullscreen)
        resolver = ActionResolver(self.generator, self.visibility)
        return GameLoop(session, resolver, context, save_manager=self.save_manager)


def main_menu(game: Game, prompter: Prompter, play: Callable[[GameSession], None]) -> None:
    """New game / continue / quit until the player quits or cancels the menu.

    A missing or unreadable save shows a notice and returns to the menu.
    """
    while True:
        choice = prompter.menu("", MAIN_MENU_OPTIONS, MAIN_MENU_WIDTH)
        if choice == 0:
            play(game.new_session())
        elif choice == 1:
            try:
                session = game.load_session()
            except SaveError as e:
                logger.warning("Continue failed: %s", e)
                prompter.message_box(NO_SAVE_TEXT, MAIN_MENU_WIDTH)
                continue
            play(session)
        else:
            logger.info("Leaving main menu")
            return
