"""Root logger setup for the ``lardum`` command."""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"

# -v count -> level; anything above the last entry stays at DEBUG
_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def configure_logging(verbosity: int = 0, stream: Optional[TextIO] = None) -> logging.Handler:
    """Route every ``lardum`` logger to one stream handler.

    Calling it again replaces the handler installed before, so the root
    logger never ends up with duplicates. Returns the new handler.
    """
    level = _VERBOSITY_LEVELS[min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)]
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(level)
    return handler
