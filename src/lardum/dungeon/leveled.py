"""Leveled tables: sparse step functions from dungeon level to a balance value."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

from ..entities.components import ItemKind


@dataclass(frozen=True)
class Transition:
    level: int
    value: int


def from_dungeon_level(table: Sequence[Transition], level: int) -> int:
    """Return the value of the highest threshold not exceeding ``level``; 0 if none.

    The table is expected in ascending threshold order.
    """
    for transition in reversed(table):
        if level >= transition.level:
            return transition.value
    return 0


MAX_ITEMS_PER_ROOM: Sequence[Transition] = (
    Transition(level=1, value=1),
    Transition(level=4, value=2),
)

# Healing potions show up on every level, even when everything else has weight 0
ITEM_CHANCES: Dict[ItemKind, Sequence[Transition]] = {
    ItemKind.HEAL: (Transition(level=0, value=35),),
    ItemKind.LIGHTNING: (Transition(level=4, value=25),),
    ItemKind.FIREBALL: (Transition(level=6, value=25),),
    ItemKind.CONFUSE: (Transition(level=2, value=10),),
    ItemKind.SWORD: (Transition(level=4, value=5),),
    ItemKind.SHIELD: (Transition(level=8, value=15),),
}


def max_items_per_room(level: int) -> int:
    return from_dungeon_level(MAX_ITEMS_PER_ROOM, level)


def item_weights(level: int) -> Dict[ItemKind, int]:
    return {kind: from_dungeon_level(table, level) for kind, table in ITEM_CHANCES.items()}
