# parkease/utils/logger.py
"""
Logging for the occupancy engine and its scripts.

The root logger writes to the console and to a rotating file under LOG_DIR.
LOG_LEVEL sets the root level. LOG_LEVELS raises or lowers single loggers,
e.g. keep SQLAlchemy's statement echo at WARNING while tracing
"parkease.services.capacity_store" at DEBUG. Handlers carry no level of their
own, so an override in either direction takes effect.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from parkease.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_DIR = settings.LOG_DIR or os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logs"
)
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_configured = False


def apply_log_levels(levels: dict[str, str]) -> None:
    """Set each named logger to its level name ("debug", "WARNING", ...)."""
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level.upper())


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setFormatter(fmt)

    # Keeps the last 10 x 5MB files
    os.makedirs(LOG_DIR, exist_ok=True)
    file_handler = RotatingFileHandler(
        filename=os.path.join(LOG_DIR, settings.LOG_FILE),
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    file_handler.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    root.addHandler(console)
    root.addHandler(file_handler)

    apply_log_levels(settings.LOG_LEVELS)


def get_logger(name: str) -> logging.Logger:
    """Named logger for a module; sets up the root logger on first use."""
    _configure_root_logger()
    return logging.getLogger(name)
