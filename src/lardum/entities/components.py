"""
Capability records that can be attached to an entity.

An entity's behaviour is decided by which of these it carries: ``Stats``
makes it an actor, ``ItemKind`` makes it something that can be picked up and
used, ``Equipment`` (always alongside an ``ItemKind``) makes it wearable and
``AiState`` is the dormant hook for non-player actors.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

logger = logging.getLogger(__name__)

GAUGES: Tuple[str, ...] = (
    "hunger",
    "comfort",
    "hygiene",
    "bladder",
    "energy",
    "fun",
    "social",
    "room",
)


class DeathCallback(str, Enum):
    PLAYER = "player"
    NPC = "npc"


@dataclass
class Stats:
    """Eight need gauges, each bounded to [0, base_max_all_stats]."""

    base_max_all_stats: int
    hunger: int
    comfort: int
    hygiene: int
    bladder: int
    energy: int
    fun: int
    social: int
    room: int
    on_death: DeathCallback = DeathCallback.NPC

    def __post_init__(self) -> None:
        if self.base_max_all_stats < 0:
            raise ValueError("base_max_all_stats must be >= 0")
        for name in GAUGES:
            value = getattr(self, name)
            if not 0 <= value <= self.base_max_all_stats:
                raise ValueError(f"{name}={value} outside [0, {self.base_max_all_stats}]")

    @classmethod
    def full(cls, maximum: int, on_death: DeathCallback = DeathCallback.NPC) -> "Stats":
        return cls(maximum, *([maximum] * len(GAUGES)), on_death=on_death)

    def value(self, gauge: str) -> int:
        _check_gauge(gauge)
        return getattr(self, gauge)

    def max_of(self, gauge: str) -> int:
        _check_gauge(gauge)
        return self.base_max_all_stats

    def adjust(self, gauge: str, delta: int) -> int:
        """Change a gauge by ``delta``, clamped to its bounds.

        Returns the change actually applied.
        """
        before = self.value(gauge)
        after = max(0, min(self.base_max_all_stats, before + delta))
        setattr(self, gauge, after)
        if after - before != delta:
            logger.debug("Clamped %s %+d to %+d (%d -> %d)", gauge, delta, after - before, before, after)
        return after - before

    def depleted(self) -> List[str]:
        return [name for name in GAUGES if getattr(self, name) <= 0]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["on_death"] = self.on_death.value
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Stats":
        return Stats(
            base_max_all_stats=int(data["base_max_all_stats"]),
            on_death=DeathCallback(data.get("on_death", DeathCallback.NPC.value)),
            **{name: int(data[name]) for name in GAUGES},
        )


def _check_gauge(gauge: str) -> None:
    if gauge not in GAUGES:
        raise KeyError(f"Unknown gauge: {gauge}")


class AiState:
    """Base for AI capability variants. Nothing advances these per turn."""

    def to_dict(self) -> Dict[str, Any]:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass(frozen=True)
class BasicAi(AiState):
    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "basic"}


@dataclass(frozen=True)
class ConfusedAi(AiState):
    previous: AiState
    turns_remaining: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "confused",
            "previous": self.previous.to_dict(),
            "turns_remaining": self.turns_remaining,
        }


def ai_from_dict(data: Dict[str, Any]) -> AiState:
    kind = data.get("kind")
    if kind == "basic":
        return BasicAi()
    if kind == "confused":
        return ConfusedAi(
            previous=ai_from_dict(data["previous"]),
            turns_remaining=int(data["turns_remaining"]),
        )
    raise ValueError(f"Unknown AI kind: {kind!r}")


class ItemKind(str, Enum):
    HEAL = "heal"
    LIGHTNING = "lightning"
    CONFUSE = "confuse"
    FIREBALL = "fireball"
    SWORD = "sword"
    SHIELD = "shield"


class Slot(str, Enum):
    LEFT_HAND = "left_hand"
    RIGHT_HAND = "right_hand"
    HEAD = "head"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    def __str__(self) -> str:
        return self.label


@dataclass
class Equipment:
    slot: Slot
    equipped: bool = False
    max_hp_bonus: int = 0
    defense_bonus: int = 0
    power_bonus: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["slot"] = self.slot.value
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Equipment":
        return Equipment(
            slot=Slot(data["slot"]),
            equipped=bool(data.get("equipped", False)),
            max_hp_bonus=int(data.get("max_hp_bonus", 0)),
            defense_bonus=int(data.get("defense_bonus", 0)),
            power_bonus=int(data.get("power_bonus", 0)),
        )


Component = Union[Stats, AiState, ItemKind, Equipment]

# Capability types an entity can be keyed by, in a fixed order
CAPABILITIES: Tuple[type, ...] = (Stats, AiState, ItemKind, Equipment)


def capability_of(component: Any) -> type:
    """Return the capability type a component instance is stored under."""
    for kind in CAPABILITIES:
        if isinstance(component, kind):
            return kind
    raise TypeError(f"Not a capability component: {component!r}")
