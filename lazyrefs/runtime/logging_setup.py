"""File-based logging for the terminal session.

The UI owns stdout, so log records go to a file under the platform log dir
unless the caller names another path.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"


def configure_logging(level: str = "WARNING", log_file: Path | None = None) -> Path:
    """Attach a file handler to the ``lazyrefs`` logger and return the log path."""
    path = log_file if log_file is not None else DEFAULT_LOG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger(APP_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
        existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    package_logger.propagate = False
    return path


__all__ = ["LOG_FORMAT", "DEFAULT_LOG_PATH", "configure_logging"]
