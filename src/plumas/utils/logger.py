"""Minimal logging utilities for Plumas.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from plumas.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering expression")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "plumas." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'plumas.mymodule'
    """
    if not (name == "plumas" or name.startswith("plumas.")):
        name = f"plumas.{name}"
    return logging.getLogger(name)
