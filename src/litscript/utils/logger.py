"""Minimal logging utilities for litscript.

Example:
    >>> from litscript.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Classified %d blocks", 4)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``litscript``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("classifier").name
        'litscript.classifier'
    """
    if not (name == "litscript" or name.startswith("litscript.")):
        name = f"litscript.{name}"
    return logging.getLogger(name)
