"""Logging setup shared by all simulator components."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Create or fetch a named logger writing to stderr.

    Calling this twice with the same name does not add a second handler,
    so components can safely create their logger in ``__init__``.

    Args:
        name: Logger name (usually the class name)
        level: Logging level name, e.g. "DEBUG" or "INFO"

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
