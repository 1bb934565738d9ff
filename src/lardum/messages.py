from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List

from .colors import WHITE, Color, as_color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Message:
    text: str
    color: Color = WHITE


class MessageLog:
    """Chronological, append-only log of game messages.

    All user-facing notices (inventory full, cancelled, level descent, save
    failures) go through here. Nothing is ever removed; the front ends only
    show the most recent entries that fit in the panel.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def add(self, text: str, color: Color = WHITE) -> Message:
        msg = Message(text=str(text), color=color)
        self._messages.append(msg)
        logger.debug("Log: %s", msg.text)
        return msg

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageLog):
            return NotImplemented
        return self._messages == other._messages

    def messages(self) -> List[Message]:
        return list(self._messages)

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def recent(self, n: int) -> List[Message]:
        """Up to ``n`` messages, newest first."""
        if n <= 0:
            return []
        return list(reversed(self._messages[-n:]))

    def to_list(self) -> List[List[Any]]:
        return [[m.text, list(m.color)] for m in self._messages]

    @classmethod
    def from_list(cls, data: List[List[Any]]) -> "MessageLog":
        log = cls()
        for text, color in data:
            log._messages.append(Message(text=str(text), color=as_color(color)))
        return log
