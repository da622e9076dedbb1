"""Logging helpers shared across the backend."""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "todoapp"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the application namespace."""

    if name.startswith("backend."):
        name = name[len("backend.") :]
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Install a single stream handler on the application logger."""

    global _configured
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(_coerce_level(level))
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(handler)
        _configured = True
    return root


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved
