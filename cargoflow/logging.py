"""Logging setup for cargoflow.

Every module logs through a child of the ``cargoflow`` logger, which carries
exactly one package handler. The default handler writes to whatever
``sys.stderr`` is when a record is emitted; standard output is reserved for
analysis results printed by the CLI.

Example:
    >>> from cargoflow.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Loaded %d stations", 3)
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

ROOT_LOGGER_NAME = "cargoflow"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_package_handler: Optional[logging.Handler] = None


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to the current ``sys.stderr`` at emit time.

    Redirections of ``sys.stderr`` made after the handler was installed
    (``contextlib.redirect_stderr``, pytest capture) are honored.
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self) -> Any:
        return sys.stderr

    @stream.setter
    def stream(self, value: Any) -> None:
        # Always resolved from sys.stderr
        pass


def install_handler(
    handler: Optional[logging.Handler] = None,
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Handler:
    """Attach the package handler to the ``cargoflow`` logger.

    A handler installed by an earlier call is removed first, so the package
    logger never carries more than one.

    Args:
        handler: Handler to install; defaults to a stderr handler.
        level: Level of the ``cargoflow`` logger.
        fmt: Format string for the handler.

    Returns:
        The installed handler.
    """
    global _package_handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _package_handler is not None:
        root_logger.removeHandler(_package_handler)

    if handler is None:
        handler = _StderrHandler()
    handler.setFormatter(logging.Formatter(fmt))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    # pytest's caplog listens on the Python root logger
    root_logger.propagate = True

    _package_handler = handler
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a logger below ``cargoflow``, installing the handler on first use.

    Args:
        name: Logger name (typically ``__name__`` of the calling module).
    """
    if _package_handler is None:
        install_handler()
    return logging.getLogger(name)


def verbosity_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI's ``--verbose``/``--quiet`` switches to a logging level.

    ``verbose`` wins when both are set.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def set_global_log_level(level: int) -> None:
    """Set the level of the ``cargoflow`` logger and so of all its children."""
    if _package_handler is None:
        install_handler(level=level)
        return
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def reset_logging() -> None:
    """Detach the package handler and clear the package level.

    Used by the test suite to isolate tests from each other.
    """
    global _package_handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _package_handler is not None:
        root_logger.removeHandler(_package_handler)
        _package_handler = None
    root_logger.setLevel(logging.NOTSET)
