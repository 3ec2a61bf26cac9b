"""Application-wide logger writing to platformdirs user_log_dir.

stdout is reserved for the protocol layer, so the core only ever logs to a
rotating file. Handlers installed by a host (or a test runner) on the
``mcp_todo`` logger are left alone; the file handler is added next to them.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "mcp_todo"
_LOG_DIR_NAME = "mcp-todo"
_LOG_FILE = "mcp-todo.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_logger: logging.Logger | None = None


def get_log_file() -> Path:
    """Path of the active log file (inside the platform log directory)."""
    return Path(user_log_dir(_LOG_DIR_NAME)) / _LOG_FILE


def _has_file_handler(logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call."""
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not _has_file_handler(logger):
        logger.addHandler(_file_handler(get_log_file()))
    logger.propagate = False

    _logger = logger
    return _logger
