# candidate_intake/core/logging/formatters.py

"""
Custom logging formatters.

  - JsonFormatter: structured JSON lines for log collectors. Never raises on
    non-serializable extras (falls back to str), and stamps every record with
    service, env, version and request_id.

  - ColorFormatter: compact ANSI-colored lines for local consoles
    (TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE).

builder.py picks one per handler based on settings.LOG_FORMAT.
"""

import json
import logging
from importlib.metadata import PackageNotFoundError, version
from logging import LogRecord
from typing import Any


def get_project_version(distribution: str = "candidate-intake") -> str:
    """Installed distribution version, or "0.0.0" when running from a bare checkout."""
    try:
        return version(distribution)
    except PackageNotFoundError:
        return "0.0.0"


PROJECT_VERSION = get_project_version()

# Attributes every LogRecord carries; anything else on the record came from `extra={...}`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Construction:
      - env: environment name ("development", "production", ...).
      - service: logical service name included in each line.
      - datefmt: forwarded to logging.Formatter (used by formatTime).

    Extras attached via `logger.info(..., extra={...})` become top-level keys.
    The translator and repositories log event names as the message and put
    details (kind, fields, error_type, duration_ms) in extras, so this is where
    they become queryable.
    """

    def __init__(self, *, env: str | None = None, service: str = "candidate-intake", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in log_record or key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly colored formatter.

    Only the level name is colored; RESET follows it so the color never bleeds
    into the rest of the line.
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",   # bold cyan on white
        "INFO": "\033[32m",         # green
        "WARNING": "\033[33m",      # yellow
        "ERROR": "\033[31m",        # red
        "CRITICAL": "\033[1;41m",   # bold on red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        base = (
            f"{timestamp} | {color}{record.levelname:<10}{reset} | "
            f"{record.name:<30} | "
            f"{getattr(record, 'request_id', '-'):<10} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base
