from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from pythonjsonlogger.json import JsonFormatter

from .config import ObservabilityConfig

LOGGER_NAME = "roadnav"

# Handlers attached by configure_logging, replaced on the next call
_installed_handlers: List[logging.Handler] = []


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def installed_handlers() -> List[logging.Handler]:
    return list(_installed_handlers)


def reset_logging() -> None:
    """Detach and close the handlers installed by ``configure_logging``."""
    logger = logging.getLogger(LOGGER_NAME)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        logger.removeHandler(handler)
        handler.close()


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Attach handlers to the package logger according to ``config``.

    Calling it again replaces the handlers installed by a previous call.
    """
    config = config or ObservabilityConfig()
    logger = logging.getLogger(LOGGER_NAME)

    reset_logging()
    logger.setLevel(_parse_level(config.level))
    logger.propagate = False

    if config.structured:
        formatter: logging.Formatter = JsonFormatter(config.format)
    else:
        formatter = logging.Formatter(config.format)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.file is not None:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _installed_handlers.append(handler)

    return logger
