"""
Domain Errors

Error kinds surfaced to callers of the mutation and audit use cases.
Each carries a stable code and a human readable message.
"""

from typing import Optional


class DomainError(Exception):
    code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed input or missing required field (e.g. blank reason)"""

    code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Referenced entity does not exist"""

    code = "NOT_FOUND"


class ConflictError(DomainError):
    """Uniqueness violation or redundant state transition"""

    code = "CONFLICT"


class ForbiddenError(DomainError):
    """Actor is not allowed to perform the change"""

    code = "FORBIDDEN"


class AuditWriteError(DomainError):
    """Writing the compliance record failed; the whole transaction was rolled back"""

    code = "AUDIT_WRITE_FAILED"


# Storage classifications raised by the unit of work. Use cases translate
# them into caller-facing errors with entity specific messages.


class UniqueViolation(DomainError):
    code = "UNIQUE_VIOLATION"


class ReferenceViolation(DomainError):
    code = "REFERENCE_VIOLATION"
