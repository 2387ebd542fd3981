"""Logging setup for the app factory and scripts."""

from __future__ import annotations

import logging

from .config import get_settings

ROOT_LOGGER_NAME = "portfolio"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Install a single stream handler on the package logger.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel((level or get_settings().log_level).upper())
    if not any(getattr(h, "_portfolio_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._portfolio_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
