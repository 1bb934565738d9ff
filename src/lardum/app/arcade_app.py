from __future__ import annotations

import logging
import time
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover - optional for test envs
    arcade = None

from ..engine.loop import GameLoop
from ..engine.prompts import EventPrompter, InputEvent, MenuPrompt, MouseButton
from ..engine.session import GameSession
from ..ui.frame import Frame
from .game import MAIN_MENU_WIDTH, TITLE, Game, main_menu

logger = logging.getLogger(__name__)

_FRAME_DELAY = 1 / 60


def _key_names() -> Dict[int, str]:
    """arcade key constant -> name, e.g. 65362 -> "UP". First name wins."""
    names: Dict[int, str] = {}
    for name in dir(arcade.key):
        value = getattr(arcade.key, name)
        if name.isupper() and isinstance(value, int):
            names.setdefault(value, name)
    return names


class LardumWindow(arcade.Window if arcade is not None else object):  # type: ignore[misc]
    """Character-cell window. Events are queued and consumed by the prompter.

    Note: only created when arcade is available; tests exercise the logic
    through the console front end instead.
    """

    def __init__(self, game: Game) -> None:
        ui = game.config.ui
        self.cell = ui.cell_px
        self.columns = ui.screen_width
        self.rows = ui.screen_height
        super().__init__(self.columns * self.cell, self.rows * self.cell, title="Lardum")
        arcade.set_background_color(arcade.color.BLACK)
        self.game = game
        self.events: Deque[InputEvent] = deque()
        self.key_names = _key_names()
        self.frame_data: Optional[Frame] = None
        self.overlay: List[str] = []
        logger.info("Arcade window initialized (%dx%d cells)", self.columns, self.rows)

    # ---- Coordinates -----------------------------------------------------
    def _cell_rect(self, x: int, y: int) -> Tuple[float, float, float, float]:
        left = x * self.cell
        top = self.height - y * self.cell
        return left, left + self.cell, top - self.cell, top

    def _cell_at(self, px: float, py: float) -> Tuple[int, int]:
        return int(px // self.cell), int((self.height - py) // self.cell)

    # ---- Input -----------------------------------------------------------
    def on_key_press(self, symbol: int, modifiers: int) -> None:
        name = self.key_names.get(symbol)
        if name is None:
            return
        if name == "COMMA" and modifiers & arcade.key.MOD_SHIFT:
            name = "<"
        elif len(name) == 1 and name.isalpha():
            name = name.lower()
        self.events.append(InputEvent.key_press(name, alt=bool(modifiers & arcade.key.MOD_ALT)))

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float) -> None:
        self.events.append(InputEvent.motion(*self._cell_at(x, y)))

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> None:
        which = MouseButton.RIGHT if button == arcade.MOUSE_BUTTON_RIGHT else MouseButton.LEFT
        cx, cy = self._cell_at(x, y)
        self.events.append(InputEvent.click(cx, cy, which))

    def pump(self) -> bool:
        """Process window events and redraw once. False when the window closed."""
        if self.has_exit:
            return False
        self.dispatch_events()
        self.on_draw()
        self.flip()
        time.sleep(_FRAME_DELAY)
        return not self.has_exit

    # ---- Drawing ---------------------------------------------------------
    def _text(self, x: int, y: int, text: str, color=None) -> None:
        left, _, bottom, _ = self._cell_rect(x, y)
        arcade.draw_text(text, left, bottom, color or arcade.color.WHITE, font_size=self.cell * 0.75)

    def on_draw(self) -> None:
        self.clear()
        frame = self.frame_data
        if frame is not None:
            for y in range(frame.height):
                for x in range(frame.width):
                    color = frame.tile_color(x, y)
                    if color is not None:
                        arcade.draw_lrbt_rectangle_filled(*self._cell_rect(x, y), color)
            for entity in frame.entities:
                self._text(entity.x, entity.y, entity.glyph, entity.color)
            panel_y = self.game.config.ui.panel_y
            for bar in frame.bars:
                left, _, bottom, top = self._cell_rect(bar.x, panel_y + bar.y)
                right_full = left + bar.width * self.cell
                arcade.draw_lrbt_rectangle_filled(left, right_full, bottom, top, bar.back_color)
                if bar.filled > 0:
                    arcade.draw_lrbt_rectangle_filled(left, left + bar.filled * self.cell, bottom, top, bar.bar_color)
                self._text(bar.x, panel_y + bar.y, bar.text, arcade.color.BLACK)
            ui = self.game.config.ui
            for row, msg in enumerate(frame.messages, start=1):
                self._text(ui.msg_x, panel_y + row, msg.text, msg.color)
            self._text(1, panel_y, frame.names_under_mouse, arcade.color.LIGHT_GRAY)
        else:
            self._text(self.columns // 2 - len(TITLE) // 2, self.rows // 2 - 4, TITLE, arcade.color.LIGHT_YELLOW)
        for row, line in enumerate(self.overlay):
            self._text(self.columns // 2 - MAIN_MENU_WIDTH // 2, self.rows // 2 + row, line)


class ArcadePrompter(EventPrompter):
    """Runs prompts modally by pumping the window until an event arrives."""

    def __init__(self, window: LardumWindow) -> None:
        self.window = window

    def next_event(self) -> Optional[InputEvent]:
        while not self.window.events:
            if not self.window.pump():
                return None
        return self.window.events.popleft()

    def show_menu(self, prompt: MenuPrompt) -> None:
        self.window.overlay = prompt.header.splitlines() + prompt.lines()

    def show_message(self, text: str, width: int) -> None:
        self.window.overlay = text.splitlines()

    def menu(self, header, options, width):
        try:
            return super().menu(header, options, width)
        finally:
            self.window.overlay = []

    def message_box(self, text, width):
        try:
            super().message_box(text, width)
        finally:
            self.window.overlay = []


def run_arcade(game: Game) -> int:  # pragma: no cover - manual usage
    if arcade is None:
        raise RuntimeError("Arcade is not installed. Please install 'arcade' to run the GUI.")
    window = LardumWindow(game)
    prompter = ArcadePrompter(window)

    def toggle_fullscreen() -> None:
        window.set_fullscreen(not window.fullscreen)

    def play(session: GameSession) -> None:
        loop: GameLoop = game.make_loop(session, prompter, toggle_fullscreen)

        def render(frame: Frame) -> None:
            window.frame_data = frame

        loop.run(prompter.next_event, render)
        window.frame_data = None

    try:
        logger.info("Launching Arcade window")
        main_menu(game, prompter, play)
        return 0
    finally:
        window.close()
