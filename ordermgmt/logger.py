"""Application logging to the console and to a log file."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

LOGGER_NAME = "ordermgmt"
LOG_FILE_NAME = "app.log"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}
_LABELS = {value: key for key, value in _LEVELS.items()}


def _label(record: logging.LogRecord) -> str:
    return _LABELS.get(record.levelno, record.levelname)


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="milliseconds")


def _attrs(record: logging.LogRecord) -> dict[str, Any]:
    return dict(getattr(record, "attrs", None) or {})


def _quote(value: Any) -> str:
    text = value if isinstance(value, str) else str(value)
    if text == "" or not text.isprintable() or any(c.isspace() or c in '"=' for c in text):
        return json.dumps(text, ensure_ascii=False)
    return text


class _TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        pairs = [
            ("time", _timestamp(record)),
            ("level", _label(record)),
            ("source", f"{record.pathname}:{record.lineno}"),
            ("msg", record.getMessage()),
            *_attrs(record).items(),
        ]
        return " ".join(f"{key}={_quote(value)}" for key, value in pairs)


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": _timestamp(record),
            "level": _label(record),
            "source": {
                "function": record.funcName,
                "file": record.pathname,
                "line": record.lineno,
            },
            "msg": record.getMessage(),
        }
        entry.update(_attrs(record))
        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(
    log_dir: str | os.PathLike = "logs",
    level_name: str | None = None,
    environment: str | None = None,
) -> logging.Logger:
    """Configure the application logger and return it.

    The level comes from LOG_LEVEL and the format from ENVIRONMENT when not
    given: JSON lines in production, key=value text otherwise.
    """
    if level_name is None:
        level_name = os.environ.get("LOG_LEVEL", "")
    if environment is None:
        environment = os.environ.get("ENVIRONMENT", "")

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter: logging.Formatter = _JsonFormatter() if environment == "production" else _TextFormatter()
    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(directory / LOG_FILE_NAME, mode="a", encoding="utf-8"),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(_LEVELS.get(level_name, logging.INFO))
    logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    """Return the application logger, configuring it on first use."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        logger = setup_logging()
    return logger


def debug(msg: str, **kwargs: Any) -> None:
    get_logger().debug(msg, extra={"attrs": kwargs}, stacklevel=2)


def info(msg: str, **kwargs: Any) -> None:
    get_logger().info(msg, extra={"attrs": kwargs}, stacklevel=2)


def warn(msg: str, **kwargs: Any) -> None:
    get_logger().warning(msg, extra={"attrs": kwargs}, stacklevel=2)


def error(msg: str, **kwargs: Any) -> None:
    get_logger().error(msg, extra={"attrs": kwargs}, stacklevel=2)