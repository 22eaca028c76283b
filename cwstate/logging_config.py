"""cw-state logging configuration.

cw-state logs through loguru. The TUI owns the terminal while it runs, so the
default stderr sink is removed and records go to a rotating file instead
(default: ``~/.cw-state/logs/cw-state.log``).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, get_args

from loguru import logger

from cwstate.config.schema import LogLevel, LoggingConfig

LOG_LEVEL_ENV = "CW_STATE_LOG_LEVEL"

KNOWN_LEVELS = frozenset(get_args(LogLevel))


def setup_logging(settings: Optional[LoggingConfig] = None, level: Optional[str] = None) -> Path:
    """Configure cw-state logging.

    Args:
        settings: Logging section of the loaded config.
        level: Optional override for ``CW_STATE_LOG_LEVEL`` and the config level.
            An unknown level falls back to the config level with a warning.

    Returns:
        Path of the log file sink.
    """
    settings = settings or LoggingConfig()
    requested = (level or os.getenv(LOG_LEVEL_ENV) or settings.level).upper()
    resolved_level = requested if requested in KNOWN_LEVELS else settings.level
    log_path = Path(settings.file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        log_path,
        level=resolved_level,
        rotation="5 MB",
        retention=3,
        enqueue=False,
        backtrace=False,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
    )
    if requested != resolved_level:
        logger.warning("Unknown log level {!r}; using {}", requested, resolved_level)
    logger.debug("Logging configured at {} -> {}", resolved_level, log_path)
    return log_path
