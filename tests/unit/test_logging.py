"""Unit tests for the package logger configuration."""

import json
import logging
import sys

from citenet.utils.logging import ROOT_LOGGER, JSONFormatter, configure_logging, get_logger


def make_record(msg: str = "built %d nodes", args=(3,), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord("citenet.core.graph", logging.INFO, __file__, 1, msg, args, exc_info)


def test_json_formatter_fields() -> None:
    payload = json.loads(JSONFormatter().format(make_record()))
    assert set(payload) == {"timestamp", "level", "logger", "message"}
    assert payload["message"] == "built 3 nodes"
    assert payload["level"] == "INFO"


def test_json_formatter_includes_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = make_record(exc_info=sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]


def test_module_loggers_share_package_root() -> None:
    logger = get_logger("citenet.analysis.paths")
    assert logger.name.startswith(ROOT_LOGGER)
    assert logging.getLogger(ROOT_LOGGER).handlers


def test_configure_logging_replaces_handler() -> None:
    root = logging.getLogger(ROOT_LOGGER)
    configure_logging("DEBUG", "json")
    try:
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        configure_logging("INFO", "text")
