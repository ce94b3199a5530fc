"""Tests for file logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from reenter.log import LOG_FORMAT, setup_logging


@pytest.fixture
def reenter_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("reenter")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestSetupLogging:
    def test_writes_to_file(self, tmp_path: Path, reenter_logger: logging.Logger) -> None:
        log_file = tmp_path / "nested" / "reenter.log"
        setup_logging("info", log_file)

        logging.getLogger("reenter.cli").info("hello from the cli")
        for handler in reenter_logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "[INFO] reenter.cli: hello from the cli" in text

    def test_level_filters(self, tmp_path: Path, reenter_logger: logging.Logger) -> None:
        log_file = tmp_path / "reenter.log"
        setup_logging("warning", log_file)

        logging.getLogger("reenter.scout").info("quiet")
        logging.getLogger("reenter.scout").warning("loud")
        for handler in reenter_logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "quiet" not in text
        assert "loud" in text

    def test_replaces_handlers_and_stops_propagation(
        self, tmp_path: Path, reenter_logger: logging.Logger
    ) -> None:
        setup_logging("debug", tmp_path / "a.log")
        setup_logging("debug", tmp_path / "b.log")
        assert len(reenter_logger.handlers) == 1
        assert reenter_logger.propagate is False
        assert reenter_logger.handlers[0].formatter._fmt == LOG_FORMAT  # type: ignore[union-attr]
