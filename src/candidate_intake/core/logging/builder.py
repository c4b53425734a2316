# candidate_intake/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

    make_dict_config(settings) -> dict     # pure, easy to assert on in tests
    setup_logging(settings)                # applies it

Settings used: LOG_LEVEL, LOG_FORMAT, ENV, ENABLE_SQL_LOGGING. Any object
exposing those attributes works (tests pass small stand-ins).
"""

from __future__ import annotations

import logging
import logging.config

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import get_console_handler, get_error_console_handler

SERVICE_NAME = "candidate-intake"


def make_dict_config(settings) -> dict:
    """
    Build the dictConfig mapping.

    The returned mapping includes:
      - formatters: "standard" (colored in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: "console" always. In text mode an "error_console" is added as
        well: ERROR+ records are then printed twice on stderr, once colored for
        the developer and once as a JSON line for log collectors. In json mode
        the console already emits JSON, so no second handler is added.
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": SERVICE_NAME,
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if settings.LOG_FORMAT != "json":
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL logging may contain candidate data; off unless explicitly enabled.
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings) -> None:
    """
    Apply the dictConfig and register a RequestIdFilter on the root logger as a
    safety net, so %(request_id)s never raises KeyError in custom handlers.
    """
    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
