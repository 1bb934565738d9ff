from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from .. import colors
from ..entities.components import Slot
from ..entities.entity import Entity
from ..messages import MessageLog

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.session import GameSession

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 26
EMPTY_INVENTORY_TEXT = "Inventory is empty."


class UseResult(str, Enum):
    USED_UP = "used_up"
    USED_AND_KEPT = "used_and_kept"
    CANCELLED = "cancelled"


class Inventory:
    """
    The player's carried items, in pickup order.

    Items held here are detached from the level's entity store but keep their
    ids. Slot exclusivity (at most one equipped item per Slot) is maintained
    by ``equip``/``toggle_equipment``; nothing else sets ``equipped``.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, items: Optional[List[Entity]] = None) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._items: List[Entity] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> Entity:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Inventory):
            return NotImplemented
        return self.capacity == other.capacity and self._items == other._items

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def items(self) -> List[Entity]:
        return list(self._items)

    def append(self, item: Entity) -> int:
        if self.is_full:
            raise ValueError("Inventory is full")
        self._items.append(item)
        return len(self._items) - 1

    def pop(self, index: int) -> Entity:
        return self._items.pop(index)

    def index_of(self, entity_id: int) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == entity_id:
                return i
        return None

    # ---- Equipment -------------------------------------------------------
    def equipped_in_slot(self, slot: Slot) -> Optional[int]:
        for i, item in enumerate(self._items):
            eq = item.equipment
            if eq is not None and eq.equipped and eq.slot == slot:
                return i
        return None

    def equip(self, index: int, log: MessageLog) -> None:
        """Mark the item at ``index`` equipped. Does not free the slot; see toggle_equipment."""
        item = self._items[index]
        if not item.is_item:
            log.add(f"Can't equip {item.name} because it's not an Item.", colors.RED)
            return
        eq = item.equipment
        if eq is None:
            log.add(f"Can't equip {item.name} because it's not an Equipment.", colors.RED)
            return
        if not eq.equipped:
            eq.equipped = True
            log.add(f"Equipped {item.name} on {eq.slot}.", colors.LIGHT_GREEN)

    def unequip(self, index: int, log: MessageLog) -> None:
        item = self._items[index]
        if not item.is_item:
            log.add(f"Can't unequip {item.name} because it's not an Item.", colors.RED)
            return
        eq = item.equipment
        if eq is None:
            log.add(f"Can't unequip {item.name} because it's not an Equipment.", colors.RED)
            return
        if eq.equipped:
            eq.equipped = False
            log.add(f"Unequipped {item.name} from {eq.slot}.", colors.LIGHT_YELLOW)

    def toggle_equipment(self, index: int, log: MessageLog) -> UseResult:
        eq = self._items[index].equipment
        if eq is None:
            return UseResult.CANCELLED
        if eq.equipped:
            self.unequip(index, log)
        else:
            current = self.equipped_in_slot(eq.slot)
            if current is not None:
                self.unequip(current, log)
            self.equip(index, log)
        return UseResult.USED_AND_KEPT

    # ---- Presentation ----------------------------------------------------
    def menu_options(self) -> List[str]:
        if not self._items:
            return [EMPTY_INVENTORY_TEXT]
        options = []
        for item in self._items:
            eq = item.equipment
            if eq is not None and eq.equipped:
                options.append(f"{item.name} (on {eq.slot})")
            else:
                options.append(item.name)
        return options

    # ---- Serialization ---------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "items": [item.to_dict() for item in self._items]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Inventory":
        return cls(
            capacity=int(data.get("capacity", DEFAULT_CAPACITY)),
            items=[Entity.from_dict(raw) for raw in data.get("items", [])],
        )


def pick_up(session: "GameSession", entity_id: int) -> bool:
    """Move an item from the level into the inventory. Returns True on success.

    A full inventory leaves everything in place and logs one message.
    """
    item = session.entities.get(entity_id)
    inventory = session.inventory
    if inventory.is_full:
        session.log.add(f"Your inventory is full, cannot pick up {item.name}.", colors.RED)
        return False

    session.entities.remove(entity_id)
    session.log.add(f"You picked up a {item.name}!", colors.GREEN)
    index = inventory.append(item)
    eq = item.equipment
    if eq is not None and inventory.equipped_in_slot(eq.slot) is None:
        inventory.equip(index, session.log)
    logger.debug("Picked up #%d (%s); inventory size %d", item.id, item.name, len(inventory))
    return True


def drop(session: "GameSession", index: int) -> Entity:
    inventory = session.inventory
    if inventory[index].equipment is not None:
        inventory.unequip(index, session.log)
    item = inventory.pop(index)
    player = session.player
    item.set_pos(player.x, player.y)
    session.log.add(f"You dropped a {item.name}.", colors.YELLOW)
    session.entities.add(item)
    return item
