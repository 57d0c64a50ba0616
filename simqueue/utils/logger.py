"""Logging setup shared by all simulator components."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_root_level: Optional[int] = None


def setup_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Get a logger with a console handler attached.

    Args:
        name: Logger name (components pass their class name)
        level: Logging level name or number. When given it is applied to
            every simulator logger already created and becomes the default
            for loggers created afterwards.

    Returns:
        Configured logger
    """
    global _root_level

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    if level is not None:
        _root_level = level
        # Loggers created before the level was chosen follow it too
        for logger_name, existing in logging.Logger.manager.loggerDict.items():
            if logger_name.startswith("simqueue.") and isinstance(existing, logging.Logger):
                existing.setLevel(level)

    logger = logging.getLogger(f"simqueue.{name}")
    logger.setLevel(level if level is not None else (_root_level or logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
