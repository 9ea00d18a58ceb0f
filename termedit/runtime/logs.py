"""File-only logging setup.

The terminal belongs to the editor frame, so log records never go to
stdout/stderr. Without an explicit destination the package logger gets a
``NullHandler``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"
PACKAGE_LOGGER = "termedit"


def configure_logging(path: Path | None = None, level: int = logging.WARNING) -> logging.Logger:
    """Attach a single file handler (or a null handler) to the package logger."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = False
    package_logger.setLevel(level)

    if path is None:
        package_logger.addHandler(logging.NullHandler())
        return package_logger

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return package_logger
