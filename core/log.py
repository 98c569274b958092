"""
Logging configuration for the indexer.

Provides structured logging with a Rich handler for colored terminal output.
Components never log through a module-level singleton; they accept a logger
handle and fall back to `get_logger(<component>)`.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "autoinfra"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure logging with a Rich handler writing to stderr.

    Args:
        verbose: Enable DEBUG level logging (per-file skip decisions, scores).
        quiet: Suppress everything below ERROR. Takes precedence over `verbose`.

    Returns:
        The configured root logger of the application.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger for a component of the application.

    Args:
        name: Component name (e.g., "indexer"). Names that do not already start
            with the application prefix are nested under it. If None, returns
            the application's root logger.

    Returns:
        Logger instance.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
