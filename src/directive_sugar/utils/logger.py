"""Logging helpers for directive-sugar.

The library only emits debug records and never installs handlers; the
hosting pipeline decides where (and whether) they go.

Example:
    >>> from directive_sugar.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("resolved %s", "badge-v")
"""

from __future__ import annotations

import logging

_ROOT = "directive_sugar"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``directive_sugar``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("dispatch").name
        'directive_sugar.dispatch'
    """
    if not (name == _ROOT or name.startswith(f"{_ROOT}.")):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
