"""
Centralized logging configuration for object_migrations.

Every module obtains its logger through :func:`create_logger` so output
is formatted the same way across the package.
"""

import logging
import os
import sys
from typing import Optional, Union

import colorlog

from object_migrations import config


def create_logger(
    name: Optional[str] = None,
    log_level: Union[int, str, None] = None,
    log_dir: Optional[str] = None,
    log_file: Optional[str] = None,
):
    """
    Create a structured, color-coded logger with optional file logging.

    :param name: Name of the logger (typically __name__)
    :param log_level: Logging level (default: ``config.LOG_LEVEL``)
    :param log_dir: Directory to store log files (default: ``config.LOG_DIR``)
    :param log_file: Specific log file name (default: ``config.LOG_FILE``)
    :return: Configured logger instance
    """
    if log_level is None:
        log_level = config.LOG_LEVEL
    log_dir = log_dir or config.LOG_DIR
    log_file = log_file or config.LOG_FILE

    logger = colorlog.getLogger(name or __name__)
    logger.setLevel(log_level)
    logger.propagate = False

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = colorlog.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    formatter = colorlog.ColoredFormatter(
        "%(log_color)s[%(levelname)s]%(reset)s "
        "%(blue)s[%(name)s]%(reset)s "
        "%(message)s",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
        secondary_log_colors={},
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Optional file logging
    if log_dir or log_file:
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        if not log_file:
            log_file = f"{name or 'object_migrations'}.log"

        if log_dir:
            log_file = os.path.join(log_dir, log_file)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)

        # Plain text formatter for file logs
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def log_exception(logger, e, context=None):
    """
    Standardized exception logging with optional context.

    :param logger: Logger instance
    :param e: Exception object
    :param context: Optional additional context for the error
    """
    logger.error(f"Error Type: {type(e).__name__}")
    logger.error(f"Error Details: {str(e)}")

    cause = e.__cause__
    if cause is not None:
        logger.error(f"Caused by: {type(cause).__name__}: {cause}")

    if context:
        logger.error(f"Context: {context}")
