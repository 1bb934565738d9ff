"""
Lardum package root.

Turn-based dungeon crawler: a procedurally generated multi-level dungeon,
need-based stats instead of hit points, and an inventory of consumables and
equipment. Domain modules (dungeon, fov, entities, items, engine,
persistence) stay free of Arcade; only ``lardum.app`` touches a GUI backend.
"""
from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("lardum")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
