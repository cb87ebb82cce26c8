"""
Audit Use Cases

Read access to the compliance trail.
"""

from .get_entity_audit_trail_use_case import GetEntityAuditTrailUseCase
from .get_actor_audit_trail_use_case import GetActorAuditTrailUseCase

__all__ = [
    "GetEntityAuditTrailUseCase",
    "GetActorAuditTrailUseCase",
]
