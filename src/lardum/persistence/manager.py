from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_CONFIG, GameConfig
from ..engine.session import GameSession
from ..exceptions import CorruptSaveError, NoSaveError, SaveWriteError
from .codec import decode_session, encode_session
from .paths import default_save_dir, ensure_dir

logger = logging.getLogger(__name__)


class SaveManager:
    """Reads and writes the single save slot.

    Writes are atomic: the document goes to ``<file>.tmp``, is fsynced, the
    previous save is kept as ``<file>.bak`` and the tmp file replaces the
    save. A corrupt save falls back to the backup when that one is valid.
    """

    def __init__(self, save_dir: Optional[Path] = None, filename: str = DEFAULT_CONFIG.save_filename) -> None:
        self.save_dir = Path(save_dir) if save_dir is not None else default_save_dir()
        self.path = self.save_dir / filename
        self.backup_path = self.path.with_suffix(self.path.suffix + ".bak")
        self.tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")

    def has_save(self) -> bool:
        return self.path.exists() or self.backup_path.exists()

    def save(self, session: GameSession) -> Path:
        text = encode_session(session)
        try:
            self._atomic_write(text)
        except OSError as e:
            logger.exception("Failed to write save file %s", self.path)
            raise SaveWriteError(f"Could not write save file {self.path}: {e}") from e
        logger.info("Saved game to %s (level %d)", self.path, session.dungeon_level)
        return self.path

    def load(self, config: GameConfig = DEFAULT_CONFIG) -> GameSession:
        if not self.path.exists():
            if not self.backup_path.exists():
                raise NoSaveError(f"No save file at {self.path}")
            # An interrupted write can leave only the backup behind
            logger.warning("Save %s is missing; loading backup %s", self.path, self.backup_path)
            session = self._read(self.backup_path, config)
            logger.info("Loaded game from %s (level %d)", self.backup_path, session.dungeon_level)
            return session
        try:
            session = self._read(self.path, config)
        except CorruptSaveError as primary:
            if not self.backup_path.exists():
                raise
            logger.warning("Save %s is corrupt (%s); trying backup", self.path, primary)
            try:
                session = self._read(self.backup_path, config)
            except CorruptSaveError:
                raise primary from None
        logger.info("Loaded game from %s (level %d)", self.path, session.dungeon_level)
        return session

    def _read(self, path: Path, config: GameConfig) -> GameSession:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptSaveError(f"Could not read save file {path}: {e}") from e
        return decode_session(text, config)

    def _atomic_write(self, text: str) -> None:
        ensure_dir(self.save_dir)
        try:
            with self.tmp_path.open("w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                os.replace(self.path, self.backup_path)
            os.replace(self.tmp_path, self.path)
        finally:
            # Only left over when one of the steps above failed
            self.tmp_path.unlink(missing_ok=True)
