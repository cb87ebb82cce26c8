"""
GxP Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of an authenticated actor"""

    OPERATOR = "OPERATOR"
    MANAGER = "MANAGER"
    QUALITY_ASSURANCE = "QUALITY_ASSURANCE"
    ADMIN = "ADMIN"


class AuditAction(str, Enum):
    """Kind of change documented by an audit entry"""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    VIEW = "VIEW"


class ProductionLineStatus(str, Enum):
    """Operational status of a production line"""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    MAINTENANCE = "MAINTENANCE"


class ProcessStatus(str, Enum):
    """Lifecycle status of a process"""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_PROCESS_STATUSES


TERMINAL_PROCESS_STATUSES = frozenset({ProcessStatus.COMPLETED, ProcessStatus.CANCELLED})
