"""Logging setup for the package logger tree."""

from __future__ import annotations

import logging

LOGGER_NAME = "link_inspector"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper() or "INFO")
        level = resolved if isinstance(resolved, int) else logging.INFO
    logger.setLevel(level)
    if not any(getattr(handler, "_link_inspector", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._link_inspector = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
