"""
GxP Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuditAction,
    ProcessStatus,
    ProductionLineStatus,
    TERMINAL_PROCESS_STATUSES,
    UserRole,
)

# Export all entities
from .user import User
from .production_line import ProductionLine
from .process import DEFAULT_PROCESS_COLOR, Process
from .audit_entry import AuditEntry

__all__ = [
    # Enums
    "AuditAction",
    "ProcessStatus",
    "ProductionLineStatus",
    "TERMINAL_PROCESS_STATUSES",
    "UserRole",
    # Entities
    "User",
    "ProductionLine",
    "Process",
    "DEFAULT_PROCESS_COLOR",
    "AuditEntry",
]
