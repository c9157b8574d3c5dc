"""Logging configuration for the MU Papers Portal."""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

from app.core import config

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "hpack")


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _writable_dir(log_dir: Optional[str]) -> Optional[Path]:
    if not log_dir:
        return None
    path = Path(log_dir)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except (PermissionError, OSError):
        return None
    return path


def setup_logging(log_level: Optional[str] = None, log_dir: Optional[str] = "logs") -> None:
    """
    Configure the root logger for the portal.

    Args:
        log_level: Level name overriding the DEBUG/INFO default taken from settings
        log_dir: Directory for ``app.log`` and ``errors.log``; None logs to stdout only
    """
    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        level = logging.DEBUG if (config.settings and config.settings.DEBUG) else logging.INFO

    file_formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        fmt='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    log_path = _writable_dir(log_dir)
    if log_path:
        try:
            root_logger.addHandler(_rotating_handler(log_path / "app.log", logging.DEBUG, file_formatter))
            root_logger.addHandler(_rotating_handler(log_path / "errors.log", logging.ERROR, file_formatter))
        except (PermissionError, OSError):
            root_logger.warning("File logging not available, using console logging only")

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(f"Logging initialized at {logging.getLevelName(level)} level")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
