"""Saving and restoring game sessions as schema-validated JSON."""
from ..exceptions import CorruptSaveError, NoSaveError, SaveError, SaveWriteError
from .codec import SCHEMA_VERSION, decode_session, encode_session
from .manager import SaveManager

__all__ = [
    "SCHEMA_VERSION",
    "CorruptSaveError",
    "NoSaveError",
    "SaveError",
    "SaveManager",
    "SaveWriteError",
    "decode_session",
    "encode_session",
]
