from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .. import colors
from ..colors import Color
from .components import DeathCallback, Equipment, ItemKind, Slot, Stats
from .entity import Entity

PLAYER_NAME = "player"
STAIRS_NAME = "stairs"
PLAYER_MAX_STATS = 100


@dataclass(frozen=True)
class ItemTemplate:
    glyph: str
    name: str
    color: Color
    slot: Optional[Slot] = None
    defense_bonus: int = 0
    power_bonus: int = 0


ITEM_TEMPLATES: Dict[ItemKind, ItemTemplate] = {
    ItemKind.HEAL: ItemTemplate("!", "healing potion", colors.VIOLET),
    ItemKind.LIGHTNING: ItemTemplate("#", "scroll of lightning bolt", colors.LIGHT_YELLOW),
    ItemKind.FIREBALL: ItemTemplate("#", "scroll of fireball", colors.LIGHT_YELLOW),
    ItemKind.CONFUSE: ItemTemplate("#", "scroll of confusion", colors.LIGHT_YELLOW),
    ItemKind.SWORD: ItemTemplate("/", "sword", colors.SKY, slot=Slot.RIGHT_HAND, power_bonus=3),
    ItemKind.SHIELD: ItemTemplate("[", "shield", colors.DARKER_ORANGE, slot=Slot.LEFT_HAND, defense_bonus=1),
}


def make_player(x: int = 0, y: int = 0) -> Entity:
    player = Entity(x, y, "@", PLAYER_NAME, colors.WHITE, blocks=True, alive=True)
    player.add(Stats.full(PLAYER_MAX_STATS, on_death=DeathCallback.PLAYER))
    return player


def make_item(kind: ItemKind, x: int, y: int) -> Entity:
    """Build a map item; items stay drawn once their tile has been explored."""
    template = ITEM_TEMPLATES[kind]
    item = Entity(x, y, template.glyph, template.name, template.color, always_visible=True)
    item.add(kind)
    if template.slot is not None:
        item.add(
            Equipment(
                slot=template.slot,
                defense_bonus=template.defense_bonus,
                power_bonus=template.power_bonus,
            )
        )
    return item


def make_stairs(x: int, y: int) -> Entity:
    return Entity(x, y, "<", STAIRS_NAME, colors.WHITE, always_visible=True)


def make_starting_dagger() -> Entity:
    dagger = Entity(0, 0, "-", "dagger", colors.SKY)
    dagger.add(ItemKind.SWORD)
    dagger.add(Equipment(slot=Slot.LEFT_HAND, equipped=True, power_bonus=2))
    return dagger


def is_stairs(entity: Entity) -> bool:
    return entity.name == STAIRS_NAME and not entity.is_item and not entity.is_actor
