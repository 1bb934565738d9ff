"""Keyboard input translation."""
from .mapping import InputMapper

__all__ = ["InputMapper"]
