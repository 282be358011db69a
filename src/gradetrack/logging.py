"""Logging setup shared by the CLI, the menu and the record store.

Every ``gradetrack.*`` logger writes to one size-rotated file. The terminal
belongs to the interactive menu, so stderr output is opt-in (``--verbose`` or
``logging.console`` in gradetrack.yaml).
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "gradetrack"
LOG_FILE = "gradetrack.log"
LOG_DIR_ENV = "GRADETRACK_LOG_DIR"
LOG_LEVEL_ENV = "GRADETRACK_LOG_LEVEL"

ROTATE_AT_BYTES = 1024 * 1024
KEEP_BACKUPS = 3

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: str | None) -> tuple[str, int]:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    return name, getattr(logging, name, logging.INFO)


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = LOG_FILE,
    max_bytes: int = ROTATE_AT_BYTES,
    backup_count: int = KEEP_BACKUPS,
    level: str | None = None,
    console: bool = False,
) -> logging.Logger:
    """Attach gradetrack's handlers, replacing any from an earlier call.

    Args:
        log_dir: Where the log file goes. Falls back to $GRADETRACK_LOG_DIR,
                 then ./logs. Created if missing.
        log_file: File name inside ``log_dir``.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.
        level: Level name. Falls back to $GRADETRACK_LOG_LEVEL, then INFO.
        console: Also write to stderr.

    Returns:
        The ``gradetrack`` logger.
    """
    directory = Path(log_dir or os.environ.get(LOG_DIR_ENV, "logs"))
    directory.mkdir(parents=True, exist_ok=True)
    level_name, log_level = _resolve_level(level)

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(log_level)
    for old in list(root.handlers):
        old.close()
        root.removeHandler(old)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            directory / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.info("Logging to %s at %s", directory / log_file, level_name)
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for a gradetrack component, e.g. ``get_logger("cli.menu")``."""
    prefix = f"{ROOT_LOGGER}."
    return logging.getLogger(name if name.startswith(prefix) else prefix + name)


def truncate_output(output: str, max_length: int = 200) -> str:
    """Shorten a user-supplied value before it goes into a log line."""
    if len(output) <= max_length:
        return output
    hidden = len(output) - max_length
    return f"{output[:max_length]}... [truncated, {hidden} more chars]"
