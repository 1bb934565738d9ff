class LardumError(Exception):
    """Base exception for the Lardum project."""


class GenerationError(LardumError):
    """Raised when a level cannot be generated (e.g. no room was ever placed)."""


class PromptError(LardumError, ValueError):
    """Raised for invalid prompt definitions (e.g. more than 26 menu options)."""


class SaveError(LardumError):
    """Base exception for save/load errors."""


class SaveWriteError(SaveError):
    """Raised when the session could not be written to disk."""


class NoSaveError(SaveError):
    """Raised when there is no save file to load."""


class CorruptSaveError(SaveError):
    """Raised when a save file exists but cannot be parsed or validated."""
