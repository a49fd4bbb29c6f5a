# src/basetree/log.py
from __future__ import annotations

import logging

_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the ``basetree`` logger tree."""
    logger = logging.getLogger("basetree")
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(h)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    return logger
