"""
Integrity error classification

Turns driver specific constraint failures into storage-neutral domain
errors so use cases can map them to caller facing conflicts.
"""

from sqlalchemy.exc import IntegrityError

from src.domain.errors import DomainError, ReferenceViolation, UniqueViolation

# SQLSTATE codes (PostgreSQL and compatible drivers)
UNIQUE_VIOLATION_SQLSTATE = "23505"
FOREIGN_KEY_VIOLATION_SQLSTATE = "23503"


def _sqlstate(exc: IntegrityError):
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        value = getattr(orig, attr, None)
        if value:
            return value
    # asyncpg wraps the driver error one level deeper
    cause = getattr(orig, "__cause__", None)
    return getattr(cause, "sqlstate", None)


def classify_integrity_error(exc: IntegrityError) -> DomainError:
    """Return UniqueViolation / ReferenceViolation, or a generic DomainError"""
    state = _sqlstate(exc)
    message = str(exc.orig)
    lowered = message.lower()

    if state == UNIQUE_VIOLATION_SQLSTATE or "unique constraint" in lowered or "duplicate key" in lowered:
        return UniqueViolation(message)
    if state == FOREIGN_KEY_VIOLATION_SQLSTATE or "foreign key constraint" in lowered:
        return ReferenceViolation(message)
    return DomainError(message, code="INTEGRITY_ERROR")
