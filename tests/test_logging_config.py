import io
import logging

import pytest

from lardum.logging_config import LOG_FORMAT, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.mark.parametrize(
    "verbosity, level",
    [(-1, logging.WARNING), (0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
)
def test_verbosity_sets_root_level(restore_root_logger, verbosity, level):
    configure_logging(verbosity, io.StringIO())
    assert restore_root_logger.level == level


def test_configure_logging_is_idempotent(restore_root_logger):
    configure_logging(1, io.StringIO())
    handler = configure_logging(2, io.StringIO())
    assert restore_root_logger.handlers == [handler]
    assert handler.formatter._fmt == LOG_FORMAT


def test_records_go_to_given_stream(restore_root_logger):
    out = io.StringIO()
    configure_logging(1, out)
    logging.getLogger("lardum.test").info("level generated")
    assert "INFO     | lardum.test: level generated" in out.getvalue()
