from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from ..colors import WHITE, Color, as_color
from .components import (
    AiState,
    Equipment,
    ItemKind,
    Stats,
    ai_from_dict,
    capability_of,
)

C = TypeVar("C")

# Stable id of an entity that has not been added to a store yet
UNASSIGNED = -1


@dataclass
class Entity:
    """Any game object: the player, an item, the stairs.

    The base record carries position and presentation; behaviour comes from
    the capability components (see ``lardum.entities.components``), stored
    keyed by capability type.
    """

    x: int
    y: int
    glyph: str
    name: str
    color: Color = WHITE
    blocks: bool = False
    alive: bool = False
    always_visible: bool = False
    id: int = UNASSIGNED
    components: Dict[type, Any] = field(default_factory=dict)

    # ---- Components ------------------------------------------------------
    def add(self, component: Any) -> "Entity":
        self.components[capability_of(component)] = component
        return self

    def get(self, kind: Type[C]) -> Optional[C]:
        return self.components.get(kind)

    def has(self, kind: type) -> bool:
        return kind in self.components

    def remove(self, kind: type) -> None:
        self.components.pop(kind, None)

    @property
    def stats(self) -> Optional[Stats]:
        return self.get(Stats)

    @property
    def item(self) -> Optional[ItemKind]:
        return self.get(ItemKind)

    @property
    def equipment(self) -> Optional[Equipment]:
        return self.get(Equipment)

    @property
    def ai(self) -> Optional[AiState]:
        return self.get(AiState)

    @property
    def is_actor(self) -> bool:
        return self.has(Stats)

    @property
    def is_item(self) -> bool:
        return self.has(ItemKind)

    @property
    def is_equipment(self) -> bool:
        return self.has(ItemKind) and self.has(Equipment)

    # ---- Position --------------------------------------------------------
    def pos(self) -> Tuple[int, int]:
        return self.x, self.y

    def set_pos(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def distance(self, x: int, y: int) -> float:
        return math.hypot(x - self.x, y - self.y)

    def distance_to(self, other: "Entity") -> float:
        return self.distance(other.x, other.y)

    # ---- Serialization ---------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "glyph": self.glyph,
            "name": self.name,
            "color": list(self.color),
            "blocks": self.blocks,
            "alive": self.alive,
            "always_visible": self.always_visible,
        }
        if self.stats is not None:
            data["stats"] = self.stats.to_dict()
        if self.ai is not None:
            data["ai"] = self.ai.to_dict()
        if self.item is not None:
            data["item"] = self.item.value
        if self.equipment is not None:
            data["equipment"] = self.equipment.to_dict()
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Entity":
        entity = Entity(
            x=int(data["x"]),
            y=int(data["y"]),
            glyph=str(data["glyph"]),
            name=str(data["name"]),
            color=as_color(data.get("color", WHITE)),
            blocks=bool(data.get("blocks", False)),
            alive=bool(data.get("alive", False)),
            always_visible=bool(data.get("always_visible", False)),
            id=int(data.get("id", UNASSIGNED)),
        )
        if "stats" in data:
            entity.add(Stats.from_dict(data["stats"]))
        if "ai" in data:
            entity.add(ai_from_dict(data["ai"]))
        if "item" in data:
            entity.add(ItemKind(data["item"]))
        if "equipment" in data:
            entity.add(Equipment.from_dict(data["equipment"]))
        return entity
