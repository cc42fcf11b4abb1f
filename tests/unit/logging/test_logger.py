# tests/unit/logging/test_logger.py — v2
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging

import pytest

from glucolens.logging.context import clear_context, set_request_context, set_stage
from glucolens.logging.logger import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    yield
    root = logging.getLogger("glucolens")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
    root.setLevel(logging.NOTSET)


def _record(msg: str = "Hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_request_context(self):
        set_request_context("req123")
        set_stage("encoded")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {"request_id": "req123", "stage": "encoded"}

    def test_extra_data(self):
        parsed = json.loads(JsonFormatter().format(_record(data={"bytes": 10})))
        assert parsed["data"] == {"bytes": 10}


class TestTextFormatter:
    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_includes_request_id(self):
        set_request_context("abc")
        assert "[abc]" in TextFormatter().format(_record())


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("test_module")
        assert logger.name == "glucolens.test_module"


class TestSetupLogging:
    def test_setup_json(self):
        root = setup_logging(level="DEBUG", log_format="json")
        assert root is logging.getLogger("glucolens")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text_no_duplicate_handlers(self):
        setup_logging(level="INFO", log_format="text")
        root = setup_logging(level="INFO", log_format="text")
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_file_handler(self, tmp_path):
        root = setup_logging(log_file=str(tmp_path / "logs" / "app.log"))
        assert len(root.handlers) == 2
        assert (tmp_path / "logs").is_dir()

    def test_from_settings(self, settings):
        root = setup_logging_from_settings(settings.model_copy(update={"log_level": "WARNING"}))
        assert root.level == logging.WARNING

