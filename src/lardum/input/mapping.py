from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from ..engine.commands import Command, MoveCommand, PlayerCommand

logger = logging.getLogger(__name__)

Binding = Tuple[str, bool]


class InputMapper:
    """Rebindable mapping from backend key names to player commands.

    Keys are strings normalized to uppercase, so ``"g"`` and ``"G"`` are the
    same key; front ends translate their key constants to names first (see
    ``lardum.app``). A binding can require Alt to be held (Alt+Enter).

    Example usage:
        mapper = InputMapper.default()
        mapper.translate_key("UP")             # -> MoveCommand(0, -1)
        mapper.translate_key("ENTER", alt=True)  # -> Command.TOGGLE_FULLSCREEN
    """

    def __init__(self, bindings: Optional[Dict[str, PlayerCommand]] = None) -> None:
        self._bindings: Dict[Binding, PlayerCommand] = {}
        self._aliases: Dict[str, str] = {}
        if bindings:
            for key, command in bindings.items():
                self.bind(key, command)

    # ---------- Canonicalization ----------
    @staticmethod
    def _normalize(key: str | int | None) -> Optional[str]:
        if key is None:
            return None
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            return None
        return k.upper()

    # ---------- Binding API ----------
    def bind(self, key: str | int, command: PlayerCommand, *, alt: bool = False) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[(nk, alt)] = command

    def bind_many(self, keys: Iterable[str | int], command: PlayerCommand, *, alt: bool = False) -> None:
        for k in keys:
            self.bind(k, command, alt=alt)

    def unbind(self, key: str | int, *, alt: bool = False) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop((nk, alt), None)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Map a backend-specific key name onto a canonical one, e.g. ("PGUP", "PAGEUP")."""
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    # ---------- Translation ----------
    def translate_key(self, key: str | int, *, alt: bool = False) -> PlayerCommand:
        """Command for a key press; ``Command.NONE`` when nothing is bound."""
        nk = self._normalize(key)
        if nk is None:
            return Command.NONE
        canonical = self._aliases.get(nk, nk)
        command = self._bindings.get((canonical, alt))
        if command is None and alt:
            # Alt held with a key that has no Alt binding acts like the plain key
            command = self._bindings.get((canonical, False))
        return command if command is not None else Command.NONE

    # ---------- Defaults ----------
    @classmethod
    def default(cls) -> "InputMapper":
        """Arrows and numpad move (Home/PageUp/End/PageDown for diagonals), numpad 5 waits,
        g/i/d/</c for the player commands, Escape quits and Alt+Enter toggles fullscreen."""
        mapper = cls()

        moves = {
            (0, -1): ["UP", "KP8"],
            (0, 1): ["DOWN", "KP2"],
            (-1, 0): ["LEFT", "KP4"],
            (1, 0): ["RIGHT", "KP6"],
            (-1, -1): ["HOME", "KP7"],
            (1, -1): ["PAGEUP", "KP9"],
            (-1, 1): ["END", "KP1"],
            (1, 1): ["PAGEDOWN", "KP3"],
        }
        for (dx, dy), keys in moves.items():
            mapper.bind_many(keys, MoveCommand(dx, dy))

        mapper.bind("KP5", Command.WAIT)
        mapper.bind("G", Command.PICK_UP)
        mapper.bind("I", Command.USE)
        mapper.bind("D", Command.DROP)
        mapper.bind("<", Command.DESCEND)
        mapper.bind("C", Command.CHARACTER_SHEET)
        mapper.bind("ESCAPE", Command.QUIT)
        mapper.bind("ENTER", Command.TOGGLE_FULLSCREEN, alt=True)

        for alias, canonical in (
            ("ESC", "ESCAPE"),
            ("RETURN", "ENTER"),
            ("PGUP", "PAGEUP"),
            ("PAGE_UP", "PAGEUP"),
            ("PGDN", "PAGEDOWN"),
            ("PAGE_DOWN", "PAGEDOWN"),
            ("LESS", "<"),
            ("NUM_1", "KP1"),
            ("NUM_2", "KP2"),
            ("NUM_3", "KP3"),
            ("NUM_4", "KP4"),
            ("NUM_5", "KP5"),
            ("NUM_6", "KP6"),
            ("NUM_7", "KP7"),
            ("NUM_8", "KP8"),
            ("NUM_9", "KP9"),
        ):
            mapper.set_alias(alias, canonical)
        return mapper


__all__ = ["InputMapper"]
