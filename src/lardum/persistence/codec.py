from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft202012Validator

from ..config import DEFAULT_CONFIG, GameConfig
from ..engine.session import GameSession
from ..exceptions import CorruptSaveError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
SCHEMA_PATH = Path(__file__).with_name("save.schema.json")


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema = json.load(f)
    logger.debug("Loaded save schema from %s", SCHEMA_PATH)
    return Draft202012Validator(schema)


def validate_save_dict(data: Dict[str, Any]) -> None:
    """Raise CorruptSaveError listing every schema violation in ``data``."""
    errors = sorted(_validator().iter_errors(data), key=lambda e: list(e.path))
    if errors:
        for err in errors:
            logger.error("Save schema violation at %s: %s", list(err.path), err.message)
        first = errors[0]
        raise CorruptSaveError(f"Save file failed validation at {list(first.path)}: {first.message}")


def encode_session(session: GameSession) -> str:
    """Encode a session as a JSON document tagged with the schema version."""
    data = {"schema_version": SCHEMA_VERSION, "session": session.to_dict()}
    return json.dumps(data, ensure_ascii=False, sort_keys=True)


def decode_session(text: str, config: GameConfig = DEFAULT_CONFIG) -> GameSession:
    try:
        data: Dict[str, Any] = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptSaveError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CorruptSaveError("Save file root must be an object")

    validate_save_dict(data)
    version = int(data["schema_version"])
    if version != SCHEMA_VERSION:
        data = migrate_data(data, from_version=version, to_version=SCHEMA_VERSION)

    try:
        return GameSession.from_dict(data["session"], config=config)
    except (KeyError, ValueError, TypeError) as e:
        raise CorruptSaveError(f"Inconsistent save data: {e}") from e


def migrate_data(data: Dict[str, Any], from_version: int, to_version: int) -> Dict[str, Any]:
    """Step save data between schema versions. Only version 1 exists so far."""
    if from_version > to_version:
        raise CorruptSaveError(f"Save schema version {from_version} is newer than supported {to_version}.")
    data["schema_version"] = to_version
    return data
