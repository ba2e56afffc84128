from __future__ import annotations

import logging
import os
import threading
from typing import Optional, Union

LOGGER_NAME = "edgepass"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_init_lock = threading.Lock()
_initialized = False


def _level_from_env(default: str = "INFO") -> Union[int, str]:
    return os.getenv("EDGEPASS_LOG_LEVEL", default).upper()


def init_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Configure the `edgepass` logger once per process.

    Safe to call from several threads; only the first call attaches a handler.
    Later calls return the same logger unchanged.
    """
    global _initialized
    logger = logging.getLogger(LOGGER_NAME)
    with _init_lock:
        if _initialized:
            return logger

        logger.setLevel(level if level is not None else _level_from_env())
        logger.propagate = False  # avoid duplicate logs

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

        _initialized = True
    return logger


def is_initialized() -> bool:
    return _initialized
