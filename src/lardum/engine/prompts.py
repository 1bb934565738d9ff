"""
Blocking prompts (menus, message boxes, point targeting) expressed as small
state machines.

A prompt is fed one ``InputEvent`` at a time and reports whether it is still
``PENDING`` or has reached a terminal state. ``EventPrompter`` runs a prompt
to completion against some event source; the game logic only talks to the
``Prompter`` protocol so it can be driven without a live input device.
"""
from __future__ import annotations

import abc
import logging
import math
import string
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Deque, Iterable, List, Optional, Protocol, Sequence, Tuple

from ..exceptions import PromptError

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

MAX_MENU_OPTIONS = 26
MENU_LETTERS = string.ascii_lowercase

# Modifier presses on their own never settle a prompt
MODIFIER_KEYS = frozenset({"SHIFT", "LSHIFT", "RSHIFT", "CTRL", "LCTRL", "RCTRL", "ALT", "LALT", "RALT"})


class MouseButton(Enum):
    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class InputEvent:
    """A raw key press or mouse event as delivered by a front end.

    ``key`` is the backend's key name (a printable character such as ``"a"``
    or a named key such as ``"ESCAPE"``). Mouse events carry the cell under
    the cursor and, for clicks, the pressed button.
    """

    key: Optional[str] = None
    mouse: Optional[Coord] = None
    button: Optional[MouseButton] = None
    alt: bool = False

    @classmethod
    def key_press(cls, key: str, alt: bool = False) -> "InputEvent":
        return cls(key=key, alt=alt)

    @classmethod
    def click(cls, x: int, y: int, button: MouseButton = MouseButton.LEFT) -> "InputEvent":
        return cls(mouse=(x, y), button=button)

    @classmethod
    def motion(cls, x: int, y: int) -> "InputEvent":
        return cls(mouse=(x, y))

    @property
    def is_escape(self) -> bool:
        return self.key is not None and self.key.upper() in ("ESCAPE", "ESC")


class PromptState(Enum):
    PENDING = auto()
    CONFIRMED = auto()
    CANCELLED = auto()


class MenuPrompt:
    """Letter-addressed menu: ``a`` picks the first option, ``b`` the second...

    Any other key press cancels. Mouse events are ignored.
    """

    def __init__(self, header: str, options: Sequence[str], width: int = 50) -> None:
        if len(options) > MAX_MENU_OPTIONS:
            raise PromptError(f"Cannot have a menu with more than {MAX_MENU_OPTIONS} options.")
        self.header = header
        self.options = list(options)
        self.width = width
        self.state = PromptState.PENDING
        self.choice: Optional[int] = None

    def lines(self) -> List[str]:
        return [f"({letter}) {text}" for letter, text in zip(MENU_LETTERS, self.options)]

    def feed(self, event: InputEvent) -> PromptState:
        if self.state is not PromptState.PENDING:
            return self.state
        key = event.key
        if key is None or key.upper() in MODIFIER_KEYS:
            return self.state

        if len(key) == 1 and key.isalpha():
            index = ord(key.lower()) - ord("a")
            if 0 <= index < len(self.options):
                self.choice = index
                self.state = PromptState.CONFIRMED
                return self.state
        self.state = PromptState.CANCELLED
        return self.state


class TargetPrompt:
    """Pick a visible tile with the mouse.

    Left click on a visible tile (within ``max_range`` of ``origin`` when
    given) confirms; right click or Escape cancels; anything else keeps the
    prompt pending.
    """

    def __init__(
        self,
        is_visible: Callable[[int, int], bool],
        origin: Coord,
        max_range: Optional[float] = None,
    ) -> None:
        self.is_visible = is_visible
        self.origin = origin
        self.max_range = max_range
        self.state = PromptState.PENDING
        self.target: Optional[Coord] = None

    def _in_range(self, x: int, y: int) -> bool:
        if self.max_range is None:
            return True
        ox, oy = self.origin
        return math.hypot(x - ox, y - oy) <= self.max_range

    def feed(self, event: InputEvent) -> PromptState:
        if self.state is not PromptState.PENDING:
            return self.state
        if event.button is MouseButton.RIGHT or event.is_escape:
            self.state = PromptState.CANCELLED
        elif event.button is MouseButton.LEFT and event.mouse is not None:
            x, y = event.mouse
            if self.is_visible(x, y) and self._in_range(x, y):
                self.target = (x, y)
                self.state = PromptState.CONFIRMED
        return self.state


class Prompter(Protocol):
    def menu(self, header: str, options: Sequence[str], width: int) -> Optional[int]:
        ...

    def message_box(self, text: str, width: int) -> None:
        ...

    def target_tile(
        self, is_visible: Callable[[int, int], bool], origin: Coord, max_range: Optional[float] = None
    ) -> Optional[Coord]:
        ...


class EventPrompter(abc.ABC):
    """Runs prompts to completion against an event source.

    Subclasses supply ``next_event`` (None means the source is exhausted,
    which cancels the prompt) and may override the ``show_*`` hooks to draw.
    """

    @abc.abstractmethod
    def next_event(self) -> Optional[InputEvent]:
        """Block until the next input event; None when no more will come."""

    def show_menu(self, prompt: MenuPrompt) -> None:
        pass

    def show_message(self, text: str, width: int) -> None:
        pass

    def menu(self, header: str, options: Sequence[str], width: int) -> Optional[int]:
        prompt = MenuPrompt(header, options, width)
        self.show_menu(prompt)
        while prompt.state is PromptState.PENDING:
            event = self.next_event()
            if event is None:
                logger.debug("Input exhausted during menu; cancelling")
                return None
            prompt.feed(event)
        return prompt.choice

    def message_box(self, text: str, width: int) -> None:
        self.show_message(text, width)
        # Any key dismisses
        while True:
            event = self.next_event()
            if event is None or (event.key is not None and event.key.upper() not in MODIFIER_KEYS):
                return

    def target_tile(
        self, is_visible: Callable[[int, int], bool], origin: Coord, max_range: Optional[float] = None
    ) -> Optional[Coord]:
        prompt = TargetPrompt(is_visible, origin, max_range)
        while prompt.state is PromptState.PENDING:
            event = self.next_event()
            if event is None:
                return None
            prompt.feed(event)
        return prompt.target


class ScriptedPrompter(EventPrompter):
    """Answers prompts from a fixed queue of events and records what was shown."""

    def __init__(self, events: Iterable[InputEvent] = ()) -> None:
        self.events: Deque[InputEvent] = deque(events)
        self.menus: List[MenuPrompt] = []
        self.messages: List[str] = []

    def push(self, *events: InputEvent) -> None:
        self.events.extend(events)

    def push_keys(self, *keys: str) -> None:
        self.events.extend(InputEvent.key_press(k) for k in keys)

    def next_event(self) -> Optional[InputEvent]:
        if not self.events:
            return None
        return self.events.popleft()

    def show_menu(self, prompt: MenuPrompt) -> None:
        self.menus.append(prompt)

    def show_message(self, text: str, width: int) -> None:
        self.messages.append(text)


__all__ = [
    "EventPrompter",
    "InputEvent",
    "MenuPrompt",
    "MouseButton",
    "PromptState",
    "Prompter",
    "ScriptedPrompter",
    "TargetPrompt",
]
