"""Logging configuration for slashdeck."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from slashdeck.utils.config import Config

LOGGER_NAME = "slashdeck"
LOG_FILENAME = "slashdeck.log"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Console format is simpler (no timestamp)
CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"


def setup_logging(config: Config, console_output: bool = False) -> logging.Logger:
    """
    Set up logging for slashdeck.

    Replaces whatever handlers an earlier call attached, so it is safe to
    call once per CLI invocation. Nothing is written to disk unless
    config.logging_path is set.

    Args:
        config: Application configuration
        console_output: Whether to log to stderr at config.log_level

    Returns:
        The configured "slashdeck" logger

    Raises:
        OSError: The log directory or file cannot be created
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    reset_logging(logger)

    if config.logging_path is not None:
        config.logging_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.logging_path / LOG_FILENAME,
            maxBytes=10000,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(config.log_level)
        logger.addHandler(console_handler)

    if not logger.handlers:
        # Keeps Python's last-resort stderr handler quiet
        logger.addHandler(logging.NullHandler())

    return logger


def reset_logging(logger: logging.Logger | None = None) -> None:
    """Detach and close every handler on the slashdeck logger."""
    logger = logger or logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
