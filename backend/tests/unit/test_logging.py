"""Unit tests for the Loguru logging setup."""

import logging
import sys

import pytest
from loguru import logger

from codelab.core.logging import InterceptHandler, setup_logging


@pytest.fixture
def restore_logging():
    """Undo setup_logging() so later tests keep the default sinks."""
    root_handlers = logging.root.handlers[:]
    root_level = logging.root.level
    yield
    logger.remove()
    logger.add(sys.stderr)
    logging.root.handlers = root_handlers
    logging.root.setLevel(root_level)


def test_setup_creates_log_directory(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "schema_patch.log"

    setup_logging(log_file=log_file, debug=True)

    assert log_file.parent.is_dir()
    assert isinstance(logging.root.handlers[0], InterceptHandler)
    assert logging.root.level == logging.DEBUG


def test_stdlib_records_reach_loguru(tmp_path, restore_logging):
    setup_logging(log_file=tmp_path / "patch.log", debug=False)
    messages = []
    logger.add(lambda m: messages.append(m.record["message"]), level="INFO")

    logging.getLogger("codelab.test").warning("routed through loguru")

    assert "routed through loguru" in messages
