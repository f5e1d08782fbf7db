"""
Tests for logging configuration.
"""

import json
import logging
import sys

import pytest

from server.shared.logging import (
    LOG_FORMAT,
    JsonFormatter,
    build_formatter,
    configure_logging,
)


def _record(msg: str = "Request rejected with %d", args: tuple = (400,), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="server.shared.errors.handlers",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonFormatter:
    def test_single_line_json(self) -> None:
        line = JsonFormatter().format(_record())
        entry = json.loads(line)
        assert "\n" not in line
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "server.shared.errors.handlers"
        assert entry["message"] == "Request rejected with 400"
        assert "exc_info" not in entry

    def test_traceback_included(self) -> None:
        try:
            raise RuntimeError("db down")
        except RuntimeError:
            record = _record("Request failed", (), exc_info=sys.exc_info())

        entry = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: db down" in entry["exc_info"]


class TestBuildFormatter:
    def test_text_is_default(self) -> None:
        formatter = build_formatter()
        assert not isinstance(formatter, JsonFormatter)
        assert formatter._fmt == LOG_FORMAT

    def test_json(self) -> None:
        assert isinstance(build_formatter("json"), JsonFormatter)


class TestConfigureLogging:
    def test_installs_single_stdout_handler(self, restore_root_logger) -> None:
        configure_logging(level="debug", log_format="json")

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_falls_back_to_info(self, restore_root_logger) -> None:
        configure_logging(level="chatty")
        assert restore_root_logger.level == logging.INFO

    def test_quiets_uvicorn(self, restore_root_logger) -> None:
        configure_logging()
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
