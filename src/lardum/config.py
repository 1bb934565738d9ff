from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MapConfig:
    """Dungeon dimensions and room placement parameters (tiles)."""

    width: int = 100
    height: int = 50
    room_min_size: int = 6
    room_max_size: int = 10
    max_rooms: int = 30
    # Resamples allowed per item before giving up on it
    placement_attempts: int = 10

    def __post_init__(self) -> None:
        if self.width < 3 or self.height < 3:
            raise ValueError("Map must be at least 3x3")
        if self.room_min_size < 3 or self.room_max_size < self.room_min_size:
            # 3 is the smallest footprint with a non-empty interior
            raise ValueError("room_min_size must be >= 3 and <= room_max_size")
        if self.room_max_size >= min(self.width, self.height):
            raise ValueError("room_max_size must be smaller than both map dimensions")
        if self.max_rooms < 0 or self.placement_attempts < 1:
            raise ValueError("max_rooms must be >= 0 and placement_attempts >= 1")


@dataclass(frozen=True)
class FovConfig:
    torch_radius: int = 10
    light_walls: bool = True

    def __post_init__(self) -> None:
        if self.torch_radius < 0:
            raise ValueError("torch_radius must be >= 0")


@dataclass(frozen=True)
class UiConfig:
    """Layout of the screen in character cells.

    The map occupies the top of the screen; the panel with stat bars and the
    message log sits below it.
    """

    screen_width: int = 100
    screen_height: int = 60
    panel_height: int = 8
    bar_width: int = 20
    bar_top_padding: int = 1
    bar_left_padding: int = 3
    inventory_width: int = 50
    character_screen_width: int = 30
    # Arcade cell size
    cell_px: int = 12

    @property
    def panel_y(self) -> int:
        return self.screen_height - self.panel_height

    @property
    def msg_x(self) -> int:
        return self.bar_width + 2

    @property
    def msg_width(self) -> int:
        return self.screen_width - self.bar_width - 2

    @property
    def msg_height(self) -> int:
        return self.panel_height - 1


@dataclass(frozen=True)
class InventoryConfig:
    # One slot per menu letter a..z
    capacity: int = 26

    def __post_init__(self) -> None:
        if not 1 <= self.capacity <= 26:
            raise ValueError("capacity must be between 1 and 26")


@dataclass(frozen=True)
class GameConfig:
    map: MapConfig = field(default_factory=MapConfig)
    fov: FovConfig = field(default_factory=FovConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    save_filename: str = "game.sav"

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GameConfig":
        """Build a config from a nested mapping; missing keys keep their defaults."""
        cfg = cls()
        sections = {
            "map": MapConfig,
            "fov": FovConfig,
            "ui": UiConfig,
            "inventory": InventoryConfig,
        }
        for key, value in raw.items():
            if key in sections:
                section_raw = value or {}
                if not isinstance(section_raw, dict):
                    raise ValueError(f"Config section '{key}' must be a mapping")
                section = _build_section(key, sections[key], getattr(cfg, key), section_raw)
                cfg = replace(cfg, **{key: section})
            elif key == "save_filename":
                cfg = replace(cfg, save_filename=_checked(key, cfg.save_filename, value))
            else:
                logger.warning("Ignoring unknown config key '%s'", key)
        return cfg

    @classmethod
    def from_yaml(cls, path: Path) -> "GameConfig":
        """Load configuration from a YAML file. Missing fields fall back to defaults."""
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Config file {path} is not valid YAML: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.info("Loaded game config from %s", path)
        return cls.from_dict(raw)


def _checked(key: str, default: Any, value: Any) -> Any:
    """Return ``value`` if it has the type of ``default``, else raise ValueError.

    No coercion: ``'false'`` is not a bool and ``true`` is not an int.
    """
    expected = type(default)
    if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
        raise ValueError(f"Config key '{key}' must be {expected.__name__}, got {value!r}")
    return value


def _build_section(section: str, kind: Type[T], current: T, raw: Dict[str, Any]) -> T:
    known = {f.name for f in fields(kind)}
    updates: Dict[str, Any] = {}
    for name, value in raw.items():
        if name not in known:
            logger.warning("Ignoring unknown %s key '%s'", kind.__name__, name)
            continue
        updates[name] = _checked(f"{section}.{name}", getattr(current, name), value)
    return replace(current, **updates)


DEFAULT_CONFIG = GameConfig()
