"""Logging setup for appdb: rotating log file plus an excepthook."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

from appdb.core.config import LOG_DIR

LOG_FILE = LOG_DIR / "appdb.log"
LOG_MAX_BYTES = 512 * 1024  # 512 KB
LOG_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int | str = logging.INFO, verbose: bool = False) -> None:
    """Configure logging to file and install excepthook for uncaught exceptions.

    With ``verbose`` the records are mirrored to stderr as well.
    """
    root = logging.getLogger("appdb")
    root.setLevel(level)

    # Avoid duplicate handlers
    if not root.handlers:
        try:
            from logging.handlers import RotatingFileHandler

            LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = RotatingFileHandler(
                LOG_FILE,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            handler = logging.StreamHandler(sys.stderr)
            verbose = False

        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)

        if verbose:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
            root.addHandler(console)

    sys.excepthook = _excepthook


def _excepthook(exc_type: type, exc_value: BaseException, exc_tb) -> None:
    """Log uncaught exceptions to file and stderr."""
    lines = traceback.format_exception(exc_type, exc_value, exc_tb)
    msg = "".join(lines)
    logger = logging.getLogger("appdb")
    logger.critical("Uncaught exception:\n%s", msg)
    sys.__excepthook__(exc_type, exc_value, exc_tb)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(f"appdb.{name}")


def get_log_path() -> Path:
    """Return the path to the log file."""
    return LOG_FILE
