"""Unit tests for structured logging."""

import json
import logging
from pathlib import Path
import sys

import pytest

from term_search.config import Settings
from term_search.observability import JsonFormatter, configure_logging, configure_logging_from_settings


def _record(msg, level=logging.INFO, name="term_search.search.engine", exc_info=None):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="engine.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonFormatter:
    def test_core_fields(self):
        data = json.loads(JsonFormatter().format(_record("Indexed document 'a'")))

        assert data["message"] == "Indexed document 'a'"
        assert data["level"] == "INFO"
        assert data["logger"] == "term_search.search.engine"
        assert data["component"] == "engine"
        assert "timestamp" in data

    def test_includes_extra_fields(self):
        record = _record("Indexed document 'a'")
        record.distinct_terms = 4

        data = json.loads(JsonFormatter().format(record))

        assert data["distinct_terms"] == 4
        assert "pathname" not in data

    def test_truncates_and_redacts(self):
        record = _record("x" * 5000)
        record.api_key = "secret"

        data = json.loads(JsonFormatter().format(record))

        assert data["message"].endswith("...")
        assert data["api_key"] == "[REDACTED]"

    def test_includes_exception(self):
        try:
            raise OSError("disk went away")
        except OSError:
            record = _record("failed", level=logging.WARNING, exc_info=sys.exc_info())

        data = json.loads(JsonFormatter().format(record))

        assert "disk went away" in data["exception"]

    def test_json_default(self):
        formatter = JsonFormatter()

        assert formatter._json_default({3, 1, 2}) == [1, 2, 3]
        assert formatter._json_default(b"ok") == "ok"
        assert formatter._json_default(Path("/tmp/x")) == "/tmp/x"
        assert formatter._json_default(ValueError("bad")) == "bad"


class TestConfigureLogging:
    def test_installs_single_json_handler(self, restore_root_logger):
        configure_logging("debug", json_output=True, logger_levels={"noisy": "error"})

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("noisy").level == logging.ERROR

    def test_plain_text_output(self, restore_root_logger):
        configure_logging("warning", json_output=False)

        root = restore_root_logger
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_from_settings(self, restore_root_logger):
        configure_logging_from_settings(Settings(log_level="error", log_json=False))

        assert restore_root_logger.level == logging.ERROR
