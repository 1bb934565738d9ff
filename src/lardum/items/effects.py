"""
Item use effects and the death handlers they may trigger.

Each effect takes the session and the inventory index of the item being used
and answers with a ``UseResult``; ``use_item`` acts on that answer.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, Optional

from .. import colors
from ..entities.components import AiState, DeathCallback, ItemKind, Stats
from ..entities.entity import Entity
from .inventory import UseResult

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.session import GameSession

logger = logging.getLogger(__name__)

EFFECT_AMOUNT = 20

Effect = Callable[["GameSession", int], UseResult]


def _boost(session: "GameSession", gauge: str) -> UseResult:
    stats = session.player.stats
    if stats is None:
        return UseResult.CANCELLED
    applied = stats.adjust(gauge, EFFECT_AMOUNT)
    logger.debug("Raised player %s by %d", gauge, applied)
    return UseResult.USED_UP


def cast_heal(session: "GameSession", index: int) -> UseResult:
    return _boost(session, "bladder")


def cast_lightning(session: "GameSession", index: int) -> UseResult:
    return _boost(session, "energy")


def cast_confuse(session: "GameSession", index: int) -> UseResult:
    return _boost(session, "social")


def cast_fireball(session: "GameSession", index: int) -> UseResult:
    return _boost(session, "comfort")


def toggle_equipment(session: "GameSession", index: int) -> UseResult:
    return session.inventory.toggle_equipment(index, session.log)


EFFECTS: Dict[ItemKind, Effect] = {
    ItemKind.HEAL: cast_heal,
    ItemKind.LIGHTNING: cast_lightning,
    ItemKind.CONFUSE: cast_confuse,
    ItemKind.FIREBALL: cast_fireball,
    ItemKind.SWORD: toggle_equipment,
    ItemKind.SHIELD: toggle_equipment,
}


def use_item(session: "GameSession", index: int) -> Optional[UseResult]:
    """Apply the item at ``index``; None when the entity is not usable at all."""
    item = session.inventory[index]
    kind = item.item
    if kind is None:
        session.log.add(f"The {item.name} cannot be used.", colors.WHITE)
        return None

    result = EFFECTS[kind](session, index)
    if result is UseResult.USED_UP:
        session.inventory.pop(index)
    elif result is UseResult.CANCELLED:
        session.log.add("Cancelled", colors.WHITE)
    logger.debug("Used %s (#%d): %s", item.name, item.id, result.value)
    kill_if_depleted(session.player, session)
    return result


# ---- Death ---------------------------------------------------------------
def player_death(player: Entity, session: "GameSession") -> None:
    session.log.add("You died!", colors.RED)
    player.alive = False
    player.glyph = "%"
    player.color = colors.DARK_RED


def npc_death(npc: Entity, session: "GameSession") -> None:
    session.log.add(f"Oh no! {npc.name} is dead!", colors.ORANGE)
    npc.alive = False
    npc.glyph = "%"
    npc.color = colors.DARK_RED
    npc.blocks = False
    npc.remove(Stats)
    npc.remove(AiState)
    npc.name = f"remains of {npc.name}"


DEATH_HANDLERS: Dict[DeathCallback, Callable[[Entity, "GameSession"], None]] = {
    DeathCallback.PLAYER: player_death,
    DeathCallback.NPC: npc_death,
}


def kill_if_depleted(entity: Entity, session: "GameSession") -> bool:
    """Run the entity's death handler if it is alive and any gauge hit zero."""
    stats = entity.stats
    if stats is None or not entity.alive:
        return False
    empty = stats.depleted()
    if not empty:
        return False
    logger.info("%s died (%s depleted)", entity.name, ", ".join(empty))
    DEATH_HANDLERS[stats.on_death](entity, session)
    return True
