"""Logging for workflow runs: workflow-command console output plus optional JSON file."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from .config import DEFAULT_CONFIG, ActionConfig


_LOGGER_NAME = "setup_phpstan"


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        if hasattr(record, "event"):
            payload["event"] = getattr(record, "event")
        return json.dumps(payload, ensure_ascii=True)


class WorkflowCommandFormatter(logging.Formatter):
    """Render records the way the Actions runner expects on stdout.

    INFO lines are plain text with the action prefix; other levels become
    ``::debug::``, ``::warning::`` and ``::error::`` commands.
    """

    def __init__(self, prefix: str) -> None:
        super().__init__()
        self.prefix = prefix

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info and record.levelno >= logging.ERROR:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if record.levelno >= logging.ERROR:
            return f"::error::{escape_data(message)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{escape_data(message)}"
        if record.levelno < logging.INFO:
            return f"::debug::{escape_data(message)}"
        return f"{self.prefix} {message}"


def configure_logging(
    config: ActionConfig = DEFAULT_CONFIG,
    environ: Mapping[str, str] | None = None,
    stream=None,
) -> logging.Logger:
    env = os.environ if environ is None else environ
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if env.get("RUNNER_DEBUG") == "1" else logging.INFO)
    logger.propagate = False

    stream_handler = logging.StreamHandler(stream or sys.stdout)
    stream_handler.setFormatter(WorkflowCommandFormatter(config.out_prefix))
    logger.addHandler(stream_handler)

    log_file = (env.get("SETUP_PHPSTAN_LOG_FILE") or "").strip()
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(path), encoding="utf-8")
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)

    logger.debug("logging configured", extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)
