"""Logging helpers for tagline.

The library only ever logs through ``tagline.*`` loggers and never installs
handlers; ``configure_cli_logging`` is for the command-line entry point.

Example:
    >>> from tagline.utils.logger import get_logger
    >>> get_logger("formatter").name
    'tagline.formatter'
"""

from __future__ import annotations

import logging

_ROOT = "tagline"
_CLI_FORMAT = "%(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a stdlib logger under the ``tagline`` namespace.

    Args:
        name: Logger name (typically __name__)
    """
    if not (name == _ROOT or name.startswith(f"{_ROOT}.")):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)


def configure_cli_logging(verbose: bool) -> None:
    """Send ``tagline`` log records to stderr for command-line runs.

    Only the package logger is touched, so embedding applications keep
    their own root configuration.
    """
    logger = logging.getLogger(_ROOT)
    if not verbose:
        return
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_CLI_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
