"""Logging setup: one stderr handler, configured on first ``get_logger`` call."""

import logging
import sys
import threading

from aether_nav.config import load_settings

_configured = threading.Event()
_lock = threading.Lock()


def configure_logging() -> None:
    """Route all service loggers to stderr at the configured level."""
    level_name = load_settings().logging.level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    ))
    logging.basicConfig(level=level, handlers=[handler], force=True)
    _configured.set()


def get_logger(name: str) -> logging.Logger:
    with _lock:
        if not _configured.is_set():
            configure_logging()
    return logging.getLogger(name)
