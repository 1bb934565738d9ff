"""Player inventory, equipment slots and item use effects."""
from .effects import EFFECTS, kill_if_depleted, use_item
from .inventory import Inventory, UseResult, drop, pick_up

__all__ = ["EFFECTS", "Inventory", "UseResult", "drop", "kill_if_depleted", "pick_up", "use_item"]
