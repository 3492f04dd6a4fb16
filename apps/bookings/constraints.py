"""Recognition of storage-level booking constraint violations and lock timeouts."""

from __future__ import annotations

from django.db import IntegrityError, OperationalError  # type: ignore

# Installed by migration 0002 as an exclusion constraint (PostgreSQL) or
# as triggers raising this name (SQLite).
EXCLUSIVE_OVERLAP_CONSTRAINT = "bookingitem_exclusive_no_overlap"

# PostgreSQL SQLSTATE for exclusion_violation.
EXCLUSION_VIOLATION = "23P01"


def is_exclusive_overlap_violation(exc: BaseException) -> bool:
    """True when ``exc`` was raised by the exclusive overlap constraint."""

    if not isinstance(exc, IntegrityError):
        return False
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate == EXCLUSION_VIOLATION:
        return True
    return EXCLUSIVE_OVERLAP_CONSTRAINT in str(exc)


# PostgreSQL lock_not_available, deadlock_detected and serialization_failure.
LOCK_CONTENTION_STATES = {"55P03", "40P01", "40001"}

SQLITE_LOCKED_MESSAGES = ("database is locked", "database table is locked")


def is_lock_contention(exc: BaseException) -> bool:
    """True when ``exc`` means a competing transaction held the locks too long."""

    if not isinstance(exc, OperationalError):
        return False
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate in LOCK_CONTENTION_STATES:
        return True
    message = str(exc)
    return any(text in message for text in SQLITE_LOCKED_MESSAGES)
