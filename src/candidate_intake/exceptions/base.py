"""
Custom exceptions for candidate insertion.

Two families share a common root so the API layer can handle them uniformly:

- CandidateValidationError: the payload broke one of the validator rules.
  Always recoverable by the caller correcting the payload.
- CandidateStorageError: the storage layer rejected the write and the failure
  has a stable, caller-facing meaning (duplicate e-mail, missing record,
  unreachable database).

Storage failures that are NOT classified never become one of these; they are
re-raised untouched by the translator (see translator.py).
"""

from typing import Iterable


class CandidateError(Exception):
    """
    Base exception for candidate validation/storage errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of payload field names related to the error (e.g., ['email'])
    - error_code: canonical short code (e.g., 'invalid_name', 'duplicate_email') used by clients
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "invalid_name": 422,
        "invalid_email": 422,
        "invalid_phone": 422,
        "invalid_address": 422,
        "invalid_date": 422,
        "invalid_end_date": 422,
        "invalid_cv": 422,
        "duplicate_email": 409,
        "record_not_found": 404,
        "connection_failure": 503,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        # Keep str(exc) equal to the public message; callers match on it.
        return self.message

    def __repr__(self) -> str:
        parts = [repr(self.message)]
        if self.fields:
            parts.append(f"fields={self.fields!r}")
        if self.error_code:
            parts.append(f"code={self.error_code!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    @property
    def field(self) -> str | None:
        """The first offending field, if any."""
        return self.fields[0] if self.fields else None

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.
        Standard shape:
            {
                "detail": "Invalid email",
                "code": "invalid_email",
                "fields": ["email"],
            }
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """
        Return the HTTP status code that should accompany this error.
        Falls back to 400 when the error_code is unknown or missing.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


# =================================================================================================================
# Validation errors
# =================================================================================================================

class CandidateValidationError(CandidateError):
    """Raised by the validator on the first rule the payload breaks."""

    default_message = "Invalid candidate data"
    default_code = "invalid_input"

    def __init__(self, field: str | None = None, message: str | None = None):
        super().__init__(
            message or self.default_message,
            fields=[field] if field else None,
            error_code=self.default_code,
        )

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidNameError(CandidateValidationError):
    default_message = "Invalid name"
    default_code = "invalid_name"


class InvalidEmailError(CandidateValidationError):
    default_message = "Invalid email"
    default_code = "invalid_email"


class InvalidPhoneError(CandidateValidationError):
    default_message = "Invalid phone"
    default_code = "invalid_phone"


class InvalidAddressError(CandidateValidationError):
    default_message = "Invalid address"
    default_code = "invalid_address"


class InvalidDateError(CandidateValidationError):
    default_message = "Invalid date"
    default_code = "invalid_date"


class InvalidEndDateError(CandidateValidationError):
    """Work-experience end dates only; every other date failure is InvalidDateError."""

    default_message = "Invalid end date"
    default_code = "invalid_end_date"


class InvalidCVError(CandidateValidationError):
    default_message = "Invalid CV data"
    default_code = "invalid_cv"


# =================================================================================================================
# Storage errors (classified)
# =================================================================================================================

class CandidateStorageError(CandidateError):
    """A storage failure with a stable, caller-facing meaning."""

    default_message = "Storage error"
    default_code: str | None = None

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None):
        super().__init__(message or self.default_message, fields=fields, error_code=self.default_code)


class DuplicateEmailError(CandidateStorageError):
    default_message = "The email already exists in the database"
    default_code = "duplicate_email"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = ("email",)):
        super().__init__(message, fields=fields)


class RecordNotFoundError(CandidateStorageError):
    default_message = "No se pudo encontrar el registro del candidato con el ID proporcionado."
    default_code = "record_not_found"


class ConnectionFailureError(CandidateStorageError):
    default_message = (
        "No se pudo conectar con la base de datos. "
        "Por favor, asegúrese de que el servidor de base de datos esté en ejecución."
    )
    default_code = "connection_failure"


class StorageInitializationError(Exception):
    """
    Raised by the session layer when a database connection cannot be established.

    This is the connection-initialization marker the translator keys on. It wraps
    the driver error (available as __cause__ / .orig) instead of replacing it.
    """

    def __init__(self, message: str, orig: BaseException | None = None):
        super().__init__(message)
        self.orig = orig


__all__ = [
    "CandidateError",
    "CandidateValidationError",
    "InvalidNameError",
    "InvalidEmailError",
    "InvalidPhoneError",
    "InvalidAddressError",
    "InvalidDateError",
    "InvalidEndDateError",
    "InvalidCVError",
    "CandidateStorageError",
    "DuplicateEmailError",
    "RecordNotFoundError",
    "ConnectionFailureError",
    "StorageInitializationError",
]
