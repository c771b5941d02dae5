"""Logging helpers for learnkit."""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``learnkit``."""
    if name.startswith("learnkit"):
        return logging.getLogger(name)
    return logging.getLogger(f"learnkit.{name}")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure basic logging and return the package logger.

    Args:
        level: Level name (DEBUG, INFO, ...). Defaults to the configured LOG_LEVEL.
    """
    if level is None:
        from .config import get_config

        level = get_config().log_level

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    root = logging.getLogger("learnkit")
    root.setLevel(level.upper())
    return root
