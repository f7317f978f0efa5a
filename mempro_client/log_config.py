"""Logging configuration for the MEMPRO client.

Console records go to stderr; stdout carries the MCP stdio frames.
A rotating copy of every DEBUG+ record is kept in ~/.mempro/logs/
(override with MEMPRO_LOG_DIR).

- MEMPRO_LOG_LEVEL: Console log level (default: INFO)

Records bound with ``announce=True`` reach the console whatever the level,
which keeps the startup banner visible under MEMPRO_LOG_LEVEL=WARNING.
"""

import os
import sys
from pathlib import Path

from loguru import logger

_console_log_level = os.getenv("MEMPRO_LOG_LEVEL", "INFO").upper()
_log_dir = Path(os.getenv("MEMPRO_LOG_DIR", str(Path.home() / ".mempro" / "logs")))


def _log_filter(record) -> bool:
    """Console filter: announcements always pass, the rest by MEMPRO_LOG_LEVEL."""
    if record["extra"].get("announce"):
        return True
    try:
        return record["level"].no >= logger.level(_console_log_level).no
    except ValueError:
        return True  # unknown level name


logger.remove()
logger.configure(extra={"name": "mempro"})

logger.add(
    sys.stderr,
    level=0,
    filter=_log_filter,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[name]}</cyan> - <level>{message}</level>",
    colorize=True,
)

_log_dir.mkdir(parents=True, exist_ok=True)
logger.add(
    _log_dir / "mempro.log",
    level="DEBUG",
    format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} | {message}",
    rotation="10 MB",
    retention="7 days",
    compression="zip",
    enqueue=True,
)


def get_logger(name: str):
    """Get a logger with the component name bound to context."""
    return logger.bind(name=name)


__all__ = ["logger", "get_logger"]
