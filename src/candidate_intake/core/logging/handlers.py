# candidate_intake/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a plain handler configuration dict; builder.py decides
which of them are wired in. Both handlers carry the "request_id" and "redact"
filters, so those must be declared in the dictConfig "filters" section.
"""


def get_console_handler(settings) -> dict:
    """
    Console handler for every record >= LOG_LEVEL.

    Uses the "json" formatter when LOG_FORMAT == "json", "standard" otherwise.
    StreamHandler writes to sys.stderr by default.
    """
    return {
        "class": "logging.StreamHandler",
        "formatter": "json" if settings.LOG_FORMAT == "json" else "standard",
        "level": settings.LOG_LEVEL,
        "filters": ["request_id", "redact"],
    }


def get_error_console_handler(settings) -> dict:
    # Structured ERROR+ stream for log collectors, regardless of LOG_FORMAT.
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": ["request_id", "redact"],
    }
