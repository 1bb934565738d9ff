from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "Lardum"
APP_AUTHOR = "Lardum"


def default_save_dir() -> Path:
    """Platform user data directory, e.g. ~/.local/share/Lardum on Linux."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR)
    return Path(dirs.user_data_dir)


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
