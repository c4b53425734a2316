# candidate_intake/api/v1/error_handlers.py
"""
FastAPI exception handlers that map candidate errors to HTTP responses.

- Validation and storage errors (CandidateError subclasses) produce stable JSON
  payloads via .to_payload() and status codes via .http_status().
- Unclassified storage errors are not handled here on purpose: they reach
  FastAPI's default 500 handling (and the logs) with their original details.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging
from candidate_intake.exceptions.base import (
    CandidateError,
    CandidateStorageError,
    CandidateValidationError,
    ConnectionFailureError,
)

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: CandidateValidationError) -> JSONResponse:
    """
    422 Unprocessable Entity.
    Payload: {"detail": "Invalid email", "code": "invalid_email", "fields": ["email"]}
    """
    logger.info("%s for %s %s: fields=%s", exc.kind, request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def connection_failure_handler(request: Request, exc: ConnectionFailureError) -> JSONResponse:
    # Operational issue: warn so it is visible to monitoring.
    logger.warning("ConnectionFailureError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def storage_error_handler(request: Request, exc: CandidateStorageError) -> JSONResponse:
    """409 for duplicates, 404 for missing records."""
    logger.info("%s for %s %s", type(exc).__name__, request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def candidate_error_handler(request: Request, exc: CandidateError) -> JSONResponse:
    logger.warning("CandidateError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    # Most specific first
    app.add_exception_handler(CandidateValidationError, validation_error_handler)
    app.add_exception_handler(ConnectionFailureError, connection_failure_handler)
    app.add_exception_handler(CandidateStorageError, storage_error_handler)
    app.add_exception_handler(CandidateError, candidate_error_handler)
