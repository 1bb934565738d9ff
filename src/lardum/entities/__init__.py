"""
Entities: the universal game-object record, its capability components and
the level's entity store.
"""
from .components import (
    GAUGES,
    AiState,
    BasicAi,
    ConfusedAi,
    DeathCallback,
    Equipment,
    ItemKind,
    Slot,
    Stats,
)
from .entity import Entity
from .store import EntityStore

__all__ = [
    "GAUGES",
    "AiState",
    "BasicAi",
    "ConfusedAi",
    "DeathCallback",
    "Entity",
    "EntityStore",
    "Equipment",
    "ItemKind",
    "Slot",
    "Stats",
]
