"""Logging configuration for the transaction pipeline."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "txn_pipeline"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _console_handler(level: int, log_format: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    """Rotating file handler that records every level."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the ``txn_pipeline`` logger.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Console logging level (e.g., logging.DEBUG, logging.INFO)
        log_file: Optional path to a rotating log file
        log_format: Optional console format string

    Returns:
        Package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers = [_console_handler(level, log_format or DEFAULT_FORMAT)]

    if log_file:
        logger.addHandler(_file_handler(log_file))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace; ``name`` may already carry the prefix."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def parse_level(level_name: str) -> int:
    """Convert a level name such as ``"debug"`` into a logging level, INFO if unknown."""
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO
