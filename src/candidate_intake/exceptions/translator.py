import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from .base import (
    CandidateError,
    CandidateStorageError,
    ConnectionFailureError,
    DuplicateEmailError,
    RecordNotFoundError,
)
from .storage_classifier import StorageErrorKind, classify_storage_error

logger = logging.getLogger(__name__)

_KIND_TO_ERROR: dict[StorageErrorKind, type[CandidateStorageError]] = {
    StorageErrorKind.DUPLICATE_EMAIL: DuplicateEmailError,
    StorageErrorKind.RECORD_NOT_FOUND: RecordNotFoundError,
    StorageErrorKind.CONNECTION_FAILURE: ConnectionFailureError,
}


def translate_storage_error(exc: BaseException) -> CandidateStorageError | BaseException:
    """
    Translate a raw storage error into a domain error.

    Returns a fresh CandidateStorageError for the three classified kinds. For
    anything else the very same `exc` object is returned, so the caller can
    re-raise it with its code, message and metadata intact.
    """
    kind = classify_storage_error(exc)
    error_cls = _KIND_TO_ERROR.get(kind)

    if error_cls is None:
        logger.warning("translator.unclassified", extra={"error_type": type(exc).__name__})
        logger.debug("translator.unclassified_raw", extra={"raw": repr(exc)})
        return exc

    if kind is StorageErrorKind.CONNECTION_FAILURE:
        # Operational problem: make it noticeable.
        logger.warning("translator.connection_failure", extra={"error_type": type(exc).__name__})
    else:
        logger.info(f"translator.{kind.value}", extra={"error_type": type(exc).__name__})

    return error_cls()


def raise_translated_storage_error(exc: BaseException) -> None:
    """
    Raise the translation of `exc`.

    Classified errors are raised `from exc`; unclassified errors are re-raised
    unchanged (same object, same traceback).
    """
    translated = translate_storage_error(exc)
    if translated is exc:
        raise exc
    raise translated from exc


@asynccontextmanager
async def storage_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with storage_error_handler(self.db, "Candidate"):
            ... DB ops that may fail ...
    Rolls the session back on error and raises the translated error.
    Domain errors raised inside the block propagate untouched.
    """
    try:
        yield
    except CandidateError:
        await _safe_rollback(db, model_name)
        raise
    except Exception as exc:
        await _safe_rollback(db, model_name)
        raise_translated_storage_error(exc)


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session after storage error", extra={"model": model_name})
