"""JSON-lines log sink for the tessera server.

Every record from the ``tessera`` logger tree lands in
``<log_dir>/tessera.log`` as one JSON object per line. The file rotates at
5MB and keeps three old copies. Nothing goes to stdout, which belongs to the
stdio MCP transport.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

_LOG_FILENAME = "tessera.log"
_ROTATE_AT_BYTES = 5 * 1024 * 1024
_KEEP_ROTATED = 3
_handler_lock = threading.Lock()

# ``extra=`` attributes copied into each line, as (record attribute, JSON key).
_EXTRA_KEYS: tuple[tuple[str, str], ...] = (
    ("context", "context"),
    ("tool", "tool"),
    ("args_data", "args"),
    ("duration_ms", "duration_ms"),
    ("error", "error"),
)


class _JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for attr, key in _EXTRA_KEYS:
            if attr in record.__dict__:
                line[key] = record.__dict__[attr]
        if record.exc_info:
            exc = record.exc_info[1]
            if exc is not None:
                line["exception"] = str(exc)
                line["exc_type"] = type(exc).__name__
        return json.dumps(line, default=str)


def _file_handlers(logger: logging.Logger) -> list[RotatingFileHandler]:
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def setup_logging(log_dir: Path, *, level: int = logging.INFO) -> logging.Logger:
    """Point the ``tessera`` logger at ``<log_dir>/tessera.log``.

    The directory is created when missing. Calling again with the same
    directory keeps the existing handler and only applies *level*; a
    different directory closes the old file and opens the new one.
    """
    logger = logging.getLogger("tessera")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = os.path.abspath(log_dir / _LOG_FILENAME)

    with _handler_lock:
        logger.setLevel(level)
        current = _file_handlers(logger)
        if any(h.baseFilename == log_path for h in current):
            return logger
        for stale in current:
            logger.removeHandler(stale)
            stale.close()

        handler = RotatingFileHandler(
            log_path,
            maxBytes=_ROTATE_AT_BYTES,
            backupCount=_KEEP_ROTATED,
            encoding="utf-8",
        )
        handler.setFormatter(_JsonLineFormatter())
        logger.addHandler(handler)
    return logger
