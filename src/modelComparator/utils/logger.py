"""
Logging utilities for modelComparator.

This module contains logging configuration and utilities.
"""

import logging
import sys
from typing import Optional, Union
from pathlib import Path

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
PACKAGE_LOGGER = "modelComparator"


def _package_logger() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    if not package_logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

        package_logger.addHandler(console_handler)
        package_logger.setLevel(logging.INFO)

        # Propagate so that pytest's caplog sees records
        package_logger.propagate = True

    return package_logger


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Component loggers carry no handler of their own and inherit the level of
    the package logger unless ``level`` is given.

    Args:
        name: Logger name
        level: Optional logging level for this logger only

    Returns:
        Logger instance
    """
    _package_logger()
    logger = logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
    if level is not None:
        logger.setLevel(level)
    return logger


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_format: Optional[str] = None
) -> None:
    """
    Setup logging configuration for the whole package.

    Args:
        level: Logging level (number or name such as "DEBUG")
        log_file: Optional log file path
        log_format: Optional custom log format
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")
    if log_format is None:
        log_format = LOG_FORMAT

    package_logger = _package_logger()
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
        package_logger.addHandler(file_handler)
