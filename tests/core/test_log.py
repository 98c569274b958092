"""
Tests for the log module.

Tests cover:
- setup_logging: levels, Rich handler, repeated setup
- get_logger: nesting under the application logger
"""

import logging

import pytest
from rich.logging import RichHandler

from core.log import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging so other tests can still capture records."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate

    yield

    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


# ============================================================================
# Tests for setup_logging
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "verbose,quiet,expected",
    [
        (False, False, logging.WARNING),
        (True, False, logging.DEBUG),
        (False, True, logging.ERROR),
        (True, True, logging.ERROR),
    ],
)
def test_setup_logging_levels(verbose, quiet, expected):
    """quiet should win over verbose."""
    logger = setup_logging(verbose=verbose, quiet=quiet)

    assert logger.name == ROOT_LOGGER_NAME
    assert logger.level == expected


@pytest.mark.unit
def test_setup_logging_rich_handler_on_stderr():
    """Should log through a single Rich handler writing to stderr."""
    logger = setup_logging()

    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, RichHandler)
    assert handler.console.stderr is True
    assert logger.propagate is False


@pytest.mark.unit
def test_setup_logging_replaces_handlers():
    """Calling setup twice should not duplicate handlers."""
    setup_logging()
    logger = setup_logging(verbose=True)

    assert len(logger.handlers) == 1


# ============================================================================
# Tests for get_logger
# ============================================================================


@pytest.mark.unit
def test_get_logger_root():
    """Should return the application logger without a name."""
    assert get_logger().name == ROOT_LOGGER_NAME


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,expected",
    [
        ("indexer", "autoinfra.indexer"),
        ("autoinfra.classifier", "autoinfra.classifier"),
    ],
)
def test_get_logger_nested(name, expected):
    """Should nest component loggers under the application logger."""
    logger = get_logger(name)

    assert logger.name == expected
    assert logger.parent is logging.getLogger(ROOT_LOGGER_NAME)
