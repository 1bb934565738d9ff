from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .entity import UNASSIGNED, Entity

logger = logging.getLogger(__name__)


class EntityStore:
    """Ordered collection of the entities physically present on the level.

    Entities are keyed by a stable integer id handed out on ``add``; removing
    one entity never changes how any other is addressed. Iteration follows
    insertion order, so the player (added first) always comes first.
    """

    def __init__(self, next_id: int = 0) -> None:
        self._entities: Dict[int, Entity] = {}
        self._next_id = next_id

    @property
    def next_id(self) -> int:
        return self._next_id

    def allocate_id(self, entity: Entity) -> int:
        """Give ``entity`` a fresh id without storing it (e.g. for inventory items)."""
        if entity.id == UNASSIGNED:
            entity.id = self._next_id
        self._next_id = max(self._next_id, entity.id + 1)
        return entity.id

    def add(self, entity: Entity) -> int:
        if entity.id == UNASSIGNED:
            entity.id = self._next_id
        elif entity.id in self._entities:
            raise ValueError(f"Entity id {entity.id} already in store")
        self._entities[entity.id] = entity
        self._next_id = max(self._next_id, entity.id + 1)
        logger.debug("Added entity #%d (%s) at (%d,%d)", entity.id, entity.name, entity.x, entity.y)
        return entity.id

    def remove(self, entity_id: int) -> Entity:
        try:
            entity = self._entities.pop(entity_id)
        except KeyError:
            raise KeyError(f"No entity with id {entity_id}") from None
        logger.debug("Removed entity #%d (%s)", entity_id, entity.name)
        return entity

    def get(self, entity_id: int) -> Entity:
        try:
            return self._entities[entity_id]
        except KeyError:
            raise KeyError(f"No entity with id {entity_id}") from None

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def __len__(self) -> int:
        return len(self._entities)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityStore):
            return NotImplemented
        return list(self._entities.items()) == list(other._entities.items())

    # ---- Spatial queries -------------------------------------------------
    def at(self, x: int, y: int) -> List[Entity]:
        return [e for e in self._entities.values() if e.x == x and e.y == y]

    def blocking_at(self, x: int, y: int) -> Optional[Entity]:
        for e in self._entities.values():
            if e.blocks and e.x == x and e.y == y:
                return e
        return None

    def first_item_at(self, x: int, y: int) -> Optional[Entity]:
        for e in self._entities.values():
            if e.is_item and e.x == x and e.y == y:
                return e
        return None

    def actors(self) -> List[Entity]:
        return [e for e in self._entities.values() if e.is_actor]

    # ---- Bulk ------------------------------------------------------------
    def retain_only(self, keep: Iterable[int]) -> None:
        """Drop every entity whose id is not in ``keep``."""
        keep_ids = set(keep)
        dropped = [eid for eid in self._entities if eid not in keep_ids]
        for eid in dropped:
            del self._entities[eid]
        logger.debug("Retained %d entities, dropped %d", len(self._entities), len(dropped))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "next_id": self._next_id,
            "entities": [e.to_dict() for e in self._entities.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntityStore":
        store = cls(next_id=int(data.get("next_id", 0)))
        for raw in data.get("entities", []):
            entity = Entity.from_dict(raw)
            if entity.id == UNASSIGNED:
                raise ValueError("Stored entity is missing its id")
            store.add(entity)
        return store
