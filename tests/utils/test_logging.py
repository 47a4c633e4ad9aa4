"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from slashdeck.utils.config import Config
from slashdeck.utils.logging import LOG_FILENAME, setup_logging


def _handler_types(logger):
    return [type(h) for h in logger.handlers]


def test_no_logging_path_writes_nothing(tmp_path):
    logger = setup_logging(Config(root=tmp_path))

    assert _handler_types(logger) == [logging.NullHandler]
    assert list(tmp_path.iterdir()) == []


def test_file_handler_under_logging_path(tmp_path):
    config = Config(root=tmp_path, logging_path=tmp_path / "logs")

    logger = setup_logging(config)
    logging.getLogger("slashdeck.core.loader").info("loaded")
    logger.handlers[0].flush()

    assert _handler_types(logger) == [RotatingFileHandler]
    assert "loaded" in (tmp_path / "logs" / LOG_FILENAME).read_text()


def test_console_handler_uses_configured_level(tmp_path):
    logger = setup_logging(Config(root=tmp_path, log_level="warning"), console_output=True)

    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING


def test_repeated_setup_replaces_handlers(tmp_path):
    config = Config(root=tmp_path, logging_path=tmp_path / "logs")

    setup_logging(config, console_output=True)
    first = list(logging.getLogger("slashdeck").handlers)
    logger = setup_logging(config, console_output=True)

    assert len(logger.handlers) == 2
    assert not set(first) & set(logger.handlers)
