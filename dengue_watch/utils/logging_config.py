"""
Logging configuration for the Dengue Watch feature API.

Everything goes to stdout plus two rotating files under LOG_DIR: the full
application log and an errors-only log. Bulk runs emit one debug line per
area and per storage query, so those loggers are held at INFO outside
DEBUG mode.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from dengue_watch.config import settings

APPLICATION_LOG = "dengue_watch.log"
ERROR_LOG = "dengue_watch_errors.log"

MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5

DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
PRODUCTION_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are noisy at INFO
LIBRARY_LOG_LEVELS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
}

# Per-area and per-query debug output of the aggregation engine
ENGINE_LOGGERS = (
    "dengue_watch.utils.bulk",
    "dengue_watch.utils.snapshots",
    "dengue_watch.crud.weather",
)


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> logging.Logger:
    """
    Configure the root logger for the service.

    Calling it again replaces the previous handlers.

    Returns:
        The root logger
    """
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        fmt=DEBUG_FORMAT if settings.DEBUG else PRODUCTION_FORMAT,
        datefmt=DATE_FORMAT
    )

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)
    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    root.addHandler(_rotating_handler(log_dir / APPLICATION_LOG, logging.INFO, formatter))
    root.addHandler(_rotating_handler(log_dir / ERROR_LOG, logging.ERROR, formatter))

    for name, level in LIBRARY_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    engine_level = logging.DEBUG if settings.DEBUG else logging.INFO
    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel(engine_level)

    root.info("=" * 60)
    root.info(f"{settings.SERVER_NAME} - logging to {log_dir.resolve()}")
    root.info(f"Log level: {settings.LOG_LEVEL} (engine loggers at {logging.getLevelName(engine_level)})")
    root.info(
        f"Bulk runs: {settings.BULK_WORKER_COUNT} workers over "
        f"'{settings.BULK_GEOGRAPHIC_LEVEL}' areas"
    )
    root.info(f"Single-week snapshots from {settings.MIN_SNAPSHOT_YEAR}")
    root.info("=" * 60)

    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, typically ``get_logger(__name__)``."""
    return logging.getLogger(name)
