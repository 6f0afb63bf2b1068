"""Logging setup for fillerinfo.

Modules log through ``logging.getLogger(__name__)``; this helper attaches a
console handler to the package logger. Verbosity is controlled by the
FILLERINFO_DEBUG environment variable.
"""

import logging
import os

_FORMAT = "[%(levelname)s] %(asctime)s %(message)s"


def debug_enabled() -> bool:
    """Return True when FILLERINFO_DEBUG=1."""
    return os.getenv("FILLERINFO_DEBUG", "0") == "1"


def setup_logger(level: int | None = None) -> logging.Logger:
    """Configure and return the ``fillerinfo`` package logger.

    Safe to call repeatedly; the handler is only attached once.
    """
    logger = logging.getLogger("fillerinfo")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    if level is None:
        level = logging.DEBUG if debug_enabled() else logging.INFO
    logger.setLevel(level)
    return logger
