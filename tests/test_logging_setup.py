"""Tests for ccstatus.logging_setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from ccstatus.logging_setup import configure_logging
from ccstatus.models import LogLevel


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger = logging.getLogger("ccstatus")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TestConfigureLogging:
    def test_installs_rich_handler(self) -> None:
        logger = configure_logging(LogLevel.WARNING)
        assert logger.name == "ccstatus"
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert [type(h) for h in logger.handlers] == [RichHandler]

    def test_repeated_calls_replace_handlers(self) -> None:
        configure_logging()
        logger = configure_logging(LogLevel.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_string_level(self) -> None:
        assert configure_logging("error").level == logging.ERROR

    def test_unknown_string_level_falls_back_to_info(self) -> None:
        assert configure_logging("chatty").level == logging.INFO

    def test_log_file_receives_records(self, tmp_path: Path) -> None:
        log_file = tmp_path / "ccstatus.log"
        configure_logging(LogLevel.DEBUG, log_file=str(log_file))

        logging.getLogger("ccstatus.services.status_service").debug("Cache miss: %s", "incidents")
        for handler in logging.getLogger("ccstatus").handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "DEBUG ccstatus.services.status_service: Cache miss: incidents" in text

    def test_httpx_quiet_unless_debug(self) -> None:
        configure_logging(LogLevel.INFO)
        assert logging.getLogger("httpx").level == logging.WARNING
        configure_logging(LogLevel.DEBUG)
        assert logging.getLogger("httpx").level == logging.DEBUG
