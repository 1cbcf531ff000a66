"""Mini README: Application-wide logging helpers for Pocketledger.

Structure:
    * configure_root_logger - attach a single formatted handler to the root logger.
    * get_logger - module logger factory that guarantees baseline configuration.

Usage:
    Modules create a ``LOGGER = get_logger(__name__)`` at import time. The
    first call installs the handler; later calls only adjust the level when an
    explicit one is requested (for example from ``PocketledgerSettings``), so
    reloading modules in development never duplicates log lines.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger once, optionally updating its level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(_resolve_level(level))
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(_resolve_level(level if level is not None else logging.INFO))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
