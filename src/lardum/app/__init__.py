"""Front ends: the headless console and the arcade window."""
from .game import Game, main_menu

__all__ = ["Game", "main_menu"]
