"""Logging setup for scripts and examples.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are attached here, by the caller.
"""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def get_logger(
    name: str = "curve_compress",
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """Return a logger with a single stream handler attached.

    Calling this repeatedly for the same name does not add duplicate
    handlers; the level is updated each time.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
