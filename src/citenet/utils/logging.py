"""Structured logging configuration."""

import logging
import json
import sys
from typing import Any, Dict

from ..config.settings import settings


class JSONFormatter(logging.Formatter):
    """Format logs as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


ROOT_LOGGER = "citenet"


def _build_handler(log_format: str) -> logging.Handler:
    # stdout is reserved for reports and exported data
    handler = logging.StreamHandler(sys.stderr)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a module logger that propagates to the ``citenet`` root logger."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.addHandler(_build_handler(settings.log_format))
        root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Reset the package root logger, e.g. for ``--verbose`` on the command line."""
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(_build_handler(log_format))
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
