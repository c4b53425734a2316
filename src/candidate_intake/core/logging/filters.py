# candidate_intake/core/logging/filters.py
"""
Logging filters.

RequestIdFilter
    Guarantees every LogRecord has a `request_id` attribute, so formatters that
    reference %(request_id)s never KeyError. The id lives in a ContextVar set by
    RequestIDMiddleware; it follows the request across awaits into services,
    repositories and exception handlers. Outside a request it reads "-".

RedactFilter
    Candidate payloads carry personal data (email, phone, address). Any record
    attribute, or key of a dict-valued attribute, whose name is in SENSITIVE is
    replaced with a mask before formatting.

Both filters return True: they annotate records, they never drop them.
"""

import contextvars
import logging
from logging import LogRecord
from typing import Any

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """Set the request id for the current context; returns the token for reset_request_id()."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Set `record.request_id` to, in order of preference:
      * the value passed explicitly via `extra={"request_id": ...}`
      * the contextvar value set by the middleware
      * the sentinel "-"
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """Mask personal data and secrets attached to log records."""

    MASK = "***REDACTED***"
    SENSITIVE = frozenset({
        # candidate PII
        "email", "phone", "address", "firstname", "lastname",
        "first_name", "last_name", "filepath", "file_path",
        # credentials
        "password", "secret", "token", "authorization", "database_url",
    })

    def filter(self, record: LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
            elif isinstance(value, dict):
                record.__dict__[key] = self._scrub(value)
        return True

    def _scrub(self, data: dict[str, Any]) -> dict[str, Any]:
        # Returns a copy: the dict may be the caller's live payload.
        scrubbed: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(key, str) and key.lower() in self.SENSITIVE:
                scrubbed[key] = self.MASK
            elif isinstance(value, dict):
                scrubbed[key] = self._scrub(value)
            else:
                scrubbed[key] = value
        return scrubbed
