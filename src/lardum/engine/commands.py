from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class Command(Enum):
    """Semantic player commands other than movement.

    Front ends translate raw keys into these (see ``lardum.input.mapping``);
    the resolver only ever sees this vocabulary.
    """

    WAIT = auto()
    PICK_UP = auto()
    USE = auto()
    DROP = auto()
    DESCEND = auto()
    CHARACTER_SHEET = auto()
    TOGGLE_FULLSCREEN = auto()
    QUIT = auto()
    NONE = auto()


@dataclass(frozen=True)
class MoveCommand:
    dx: int
    dy: int

    def __post_init__(self) -> None:
        if self.dx not in (-1, 0, 1) or self.dy not in (-1, 0, 1) or (self.dx, self.dy) == (0, 0):
            raise ValueError(f"Invalid move step ({self.dx}, {self.dy})")


PlayerCommand = Union[Command, MoveCommand]


class PlayerAction(Enum):
    """Outcome of resolving one command."""

    TOOK_TURN = auto()
    DIDNT_TAKE_TURN = auto()
    EXIT = auto()


__all__ = ["Command", "MoveCommand", "PlayerAction", "PlayerCommand"]
