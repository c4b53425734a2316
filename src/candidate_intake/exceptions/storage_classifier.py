r"""
Storage error classification.

The translator (translator.py) never looks at raw exceptions itself. It asks this
module for a `StorageErrorSignal`: the handful of facts that decide how a storage
failure is presented to callers.

| Signal                     | Read from                                                         |
| -------------------------- | ----------------------------------------------------------------- |
| `code`                     | Postgres SQLSTATE on the driver error, or a structured `.code`     |
|                            | attribute on non-SQLAlchemy errors (e.g. "P2002", "P2025")         |
| `constraint`               | IntegrityError classification (unique / not null / fk / check)     |
| `target`                   | `.meta["target"]`, the columns of the violated constraint or index |
|                            | (looked up by name in the mapped schema), or the driver message    |
| `is_initialization_failure`| `StorageInitializationError` raised by the session layer           |
| `is_not_found`             | SQLAlchemy `NoResultFound`, or the record-not-found code           |

`classify_storage_error(exc)` folds the signal into one `StorageErrorKind`.

Only three kinds are meaningful to callers. Everything else is `UNKNOWN`, and the
translator hands `UNKNOWN` errors back untouched so operators keep the original
code, message and metadata.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from candidate_intake.database.base import Base

from .base import StorageInitializationError

logger = logging.getLogger(__name__)


class StorageErrorKind(str, Enum):
    DUPLICATE_EMAIL = "duplicate_email"
    RECORD_NOT_FOUND = "record_not_found"
    CONNECTION_FAILURE = "connection_failure"
    UNKNOWN = "unknown"


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# =================================================================================================================
# Error code tables
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_CONSTRAINT_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION: ConstraintKind.UNIQUE,
    PostgresErrorCodes.NOT_NULL_VIOLATION: ConstraintKind.NOT_NULL,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ConstraintKind.FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION: ConstraintKind.CHECK,
}


class StructuredErrorCodes(str, Enum):
    """Codes carried on the `.code` attribute of structured (non-SQLAlchemy) ORM client errors."""
    UNIQUE_VIOLATION = "P2002"
    RECORD_NOT_FOUND = "P2025"


# =================================================================================================================
# Signal
# =================================================================================================================

@dataclass(frozen=True)
class StorageErrorSignal:
    code: str | None = None
    constraint: ConstraintKind | None = None
    target: tuple[str, ...] | None = None
    is_initialization_failure: bool = False
    is_not_found: bool = False

    def targets(self, column: str) -> bool:
        return self.target is not None and column in self.target


# =================================================================================================================
# Integrity error classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _postgres_code(orig) -> str | None:
    # psycopg2 exposes `pgcode`; psycopg 3 and the asyncpg adapter expose `sqlstate`.
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _classify_from_postgres_diag(orig) -> tuple[ConstraintKind | None, str | None]:
    pgcode = _postgres_code(orig)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    kind = PGCODE_CONSTRAINT_MAP.get(pgcode)
    if kind:
        logger.debug("Postgres integrity diagnostic", extra={"pgcode": pgcode, "constraint_name": constraint_name})
        return kind, constraint_name

    logger.warning(
        "Unknown Postgres integrity error code encountered",
        extra={"pgcode": pgcode, "constraint_name": constraint_name},
    )
    return ConstraintKind.UNKNOWN, constraint_name


def _classify_from_generic_message(msg: str) -> ConstraintKind:
    """Fallback for SQLite, MySQL and drivers without SQLSTATE."""
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
        return ConstraintKind.UNIQUE
    if _match_any(normalized, ["not null constraint", "not null", "null value in column"]):
        return ConstraintKind.NOT_NULL
    if _match_any(normalized, ["foreign key constraint", "foreign key", "is not present in table"]):
        return ConstraintKind.FOREIGN_KEY
    if _match_any(normalized, ["check constraint", "check failed"]):
        return ConstraintKind.CHECK

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    return ConstraintKind.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintKind, str | None]:
    """
    Heuristically classify a SQLAlchemy IntegrityError.

    Returns:
        A tuple of (ConstraintKind, constraint_name if available)
    """
    kind, constraint_name = _classify_from_postgres_diag(exc.orig)
    if kind is not None:
        return kind, constraint_name
    return _classify_from_generic_message(str(exc.orig)), None


# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    # 'null value in column "email" violates not-null constraint'
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    # 'DETAIL:  Key (email)=(ana@example.com) already exists.'
    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]
    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: candidates.email'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE | re.MULTILINE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]
    return None


def columns_for_constraint(name: str | None) -> list[str] | None:
    """
    Resolve a constraint or index name (e.g. "ix_candidates_email",
    "uq_candidates_email") to its column names using the mapped schema.
    Returns None for names the schema does not define.
    """
    if not name:
        return None
    for table in Base.metadata.tables.values():
        for item in (*table.indexes, *table.constraints):
            if item.name == name:
                return [column.name for column in item.columns]
    return None


def _extract_columns_mysql(msg: str) -> list[str] | None:
    # "Duplicate entry 'ana@example.com' for key 'candidates.ix_candidates_email'" (MySQL 8)
    # "Duplicate entry 'ana@example.com' for key 'email'" (older servers)
    m = re.search(r"Duplicate entry .* for key '?(?P<key>[^']+)'?", msg, flags=re.IGNORECASE)
    if m:
        key = m.group("key").split('.')[-1]
        return columns_for_constraint(key) or [key]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """Best-effort extraction of column names from the DB message (Postgres, SQLite, MySQL)."""
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    for extractor in (_extract_columns_postgres, _extract_columns_sqlite, _extract_columns_mysql):
        cols = extractor(msg)
        if cols:
            return cols
    return None


def _target_from_meta(meta: Any) -> tuple[str, ...] | None:
    if not isinstance(meta, dict):
        return None
    target = meta.get("target")
    if isinstance(target, str):
        return (target,)
    if isinstance(target, (list, tuple)):
        return tuple(str(t) for t in target)
    return None


# =================================================================================================================
# Public API
# =================================================================================================================

def read_signal(exc: BaseException) -> StorageErrorSignal:
    """Collect the recognized signals carried by a raw storage error. Never raises."""
    if isinstance(exc, StorageInitializationError):
        return StorageErrorSignal(is_initialization_failure=True)

    if isinstance(exc, NoResultFound):
        return StorageErrorSignal(is_not_found=True)

    if isinstance(exc, IntegrityError):
        constraint, constraint_name = classify_integrity_error(exc)
        # The constraint name (Postgres diag) is authoritative; message parsing is the fallback.
        columns = columns_for_constraint(constraint_name) or extract_columns_from_integrity(exc)
        return StorageErrorSignal(
            code=_postgres_code(exc.orig),
            constraint=constraint,
            target=tuple(columns) if columns else None,
        )

    if isinstance(exc, SQLAlchemyError):
        # SQLAlchemy's own `.code` is a documentation link id, not a storage code.
        return StorageErrorSignal()

    code = getattr(exc, "code", None)
    code = code if isinstance(code, str) else None
    target = _target_from_meta(getattr(exc, "meta", None))

    if code == StructuredErrorCodes.UNIQUE_VIOLATION:
        return StorageErrorSignal(code=code, constraint=ConstraintKind.UNIQUE, target=target)
    if code == StructuredErrorCodes.RECORD_NOT_FOUND:
        return StorageErrorSignal(code=code, is_not_found=True)
    return StorageErrorSignal(code=code, target=target)


def classify_storage_error(exc: BaseException) -> StorageErrorKind:
    """
    Fold a raw storage error into one of the StorageErrorKind values.

    A unique violation counts as a duplicate e-mail when its target includes
    `email`, or when the driver did not say which column it was (the candidates
    table has no other unique column).
    """
    signal = read_signal(exc)

    if signal.is_initialization_failure:
        return StorageErrorKind.CONNECTION_FAILURE
    if signal.is_not_found:
        return StorageErrorKind.RECORD_NOT_FOUND
    if signal.constraint is ConstraintKind.UNIQUE and (signal.target is None or signal.targets("email")):
        return StorageErrorKind.DUPLICATE_EMAIL
    return StorageErrorKind.UNKNOWN


__all__ = [
    "StorageErrorKind",
    "ConstraintKind",
    "PostgresErrorCodes",
    "StructuredErrorCodes",
    "StorageErrorSignal",
    "classify_integrity_error",
    "extract_columns_from_integrity",
    "columns_for_constraint",
    "read_signal",
    "classify_storage_error",
]
