import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from . import settings

LOG_FILENAME = "stockroom.log"
CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def _resolve_level(log_level: Optional[int]) -> int:
    if log_level is not None:
        return log_level
    level = logging.getLevelName(settings.LOG_LEVEL)
    # getLevelName returns "Level X" for names it does not know
    return level if isinstance(level, int) else logging.INFO


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(level: int) -> logging.Handler:
    settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        settings.LOG_DIR / LOG_FILENAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logger(name: Optional[str] = None, log_level: Optional[int] = None) -> logging.Logger:
    """
    Configures a logger (the root logger by default) to write bare messages
    to stdout and timestamped records to LOG_DIR/stockroom.log.

    Calling it again for an already configured logger only updates its level.
    """
    level = _resolve_level(log_level)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.hasHandlers():
        return logger

    logger.addHandler(_console_handler(level))
    logger.addHandler(_file_handler(level))

    # urllib3 logs every webhook connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))
    return logger
