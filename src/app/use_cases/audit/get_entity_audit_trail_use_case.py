"""
Get Entity Audit Trail Use Case

Chronological history of one tracked entity instance.
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.actor import ActorContext

from .access import DEFAULT_AUDIT_QUERY_MAX_LIMIT, ensure_audit_reader, validate_page
from .dtos import AuditEntryResponse, AuditTrailResponse


class GetEntityAuditTrailUseCase:
    """
    Use case for reading the audit trail of an entity.

    Business Rules:
    - Caller must be ADMIN, MANAGER or QUALITY_ASSURANCE
    - Entries are ordered oldest first
    - limit is bounded by the configured maximum
    - Optionally narrowed to the entries of one actor
    """

    def __init__(self, uow: UnitOfWork, max_limit: int = DEFAULT_AUDIT_QUERY_MAX_LIMIT):
        self.uow = uow
        self.max_limit = max_limit

    async def execute(
        self,
        entity_type: str,
        entity_id: str,
        actor: ActorContext,
        limit: int = 100,
        offset: int = 0,
        actor_id: Optional[UUID] = None,
    ) -> AuditTrailResponse:
        ensure_audit_reader(actor)
        validate_page(limit, offset, self.max_limit)

        async with self.uow:
            entries = await self.uow.audit_entries.find_by_entity(
                entity_type, str(entity_id), limit=limit, offset=offset, actor_id=actor_id
            )
            return AuditTrailResponse(
                entries=[AuditEntryResponse.model_validate(entry) for entry in entries],
                limit=limit,
                offset=offset,
            )
