"""
Headless text front end.

Reads one input event per line from a text stream and draws the map as
ASCII. Lines are key names (``UP``, ``g``, ``<``, ``ESCAPE``, ``alt+enter``)
or mouse events (``click X Y``, ``rclick X Y``, ``mouse X Y``). End of input
quits, which saves the running game.
"""
from __future__ import annotations

import logging
import sys
from typing import Dict, List, Optional, TextIO

from .. import colors
from ..engine.prompts import EventPrompter, InputEvent, MenuPrompt, MouseButton
from ..entities.entity import Entity
from ..ui.frame import Frame
from .game import TITLE, Game, main_menu

logger = logging.getLogger(__name__)

_WALL_COLORS = (colors.COLOR_DARK_WALL, colors.COLOR_LIGHT_WALL)


def parse_event(line: str) -> Optional[InputEvent]:
    parts = line.split()
    if not parts:
        return None
    head = parts[0].lower()
    if head in ("click", "rclick", "mouse") and len(parts) == 3:
        try:
            x, y = int(parts[1]), int(parts[2])
        except ValueError:
            logger.warning("Bad mouse coordinates: %r", line)
            return None
        if head == "mouse":
            return InputEvent.motion(x, y)
        button = MouseButton.RIGHT if head == "rclick" else MouseButton.LEFT
        return InputEvent.click(x, y, button)
    if head.startswith("alt+"):
        return InputEvent.key_press(parts[0][4:], alt=True)
    return InputEvent.key_press(parts[0])


class ConsolePrompter(EventPrompter):
    def __init__(self, stdin: TextIO, stdout: TextIO) -> None:
        self.stdin = stdin
        self.stdout = stdout

    def next_event(self) -> Optional[InputEvent]:
        for line in self.stdin:
            event = parse_event(line)
            if event is not None:
                return event
        return None

    def show_menu(self, prompt: MenuPrompt) -> None:
        if prompt.header:
            self.stdout.write(prompt.header.rstrip("\n") + "\n")
        for line in prompt.lines():
            self.stdout.write(line + "\n")
        self.stdout.flush()

    def show_message(self, text: str, width: int) -> None:
        self.stdout.write(text.strip("\n") + "\n")
        self.stdout.flush()


class ConsoleRenderer:
    def __init__(self, stdout: TextIO) -> None:
        self.stdout = stdout

    def map_lines(self, frame: Frame) -> List[str]:
        glyphs: Dict[tuple, Entity] = {}
        # Later entries win, so blocking entities end up on top
        for entity in frame.entities:
            glyphs[(entity.x, entity.y)] = entity
        lines = []
        for y in range(frame.height):
            row = []
            for x in range(frame.width):
                entity = glyphs.get((x, y))
                color = frame.tile_color(x, y)
                if entity is not None:
                    row.append(entity.glyph)
                elif color is None:
                    row.append(" ")
                else:
                    row.append("#" if color in _WALL_COLORS else ".")
            lines.append("".join(row).rstrip())
        return lines

    def render(self, frame: Frame) -> None:
        out = self.stdout
        out.write("\n".join(self.map_lines(frame)) + "\n")
        out.write(f"Dungeon level: {frame.dungeon_level}\n")
        if frame.names_under_mouse:
            out.write(frame.names_under_mouse + "\n")
        for bar in frame.bars:
            out.write(bar.text + "\n")
        for msg in frame.messages:
            out.write(msg.text + "\n")
        out.flush()


def run_console(game: Game, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    prompter = ConsolePrompter(stdin, stdout)
    renderer = ConsoleRenderer(stdout)

    def play(session) -> None:
        loop = game.make_loop(session, prompter)
        loop.run(prompter.next_event, renderer.render)

    stdout.write(TITLE + "\n")
    main_menu(game, prompter, play)
    return 0
