"""
Get Actor Audit Trail Use Case

Everything one actor changed, for attribution reviews.
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.actor import ActorContext

from .access import DEFAULT_AUDIT_QUERY_MAX_LIMIT, ensure_audit_reader, validate_page
from .dtos import AuditEntryResponse, AuditTrailResponse


class GetActorAuditTrailUseCase:
    """Audit entries written on behalf of one actor, oldest first"""

    def __init__(self, uow: UnitOfWork, max_limit: int = DEFAULT_AUDIT_QUERY_MAX_LIMIT):
        self.uow = uow
        self.max_limit = max_limit

    async def execute(
        self,
        actor_id: UUID,
        actor: ActorContext,
        limit: int = 100,
        offset: int = 0,
        entity_type: Optional[str] = None,
    ) -> AuditTrailResponse:
        ensure_audit_reader(actor)
        validate_page(limit, offset, self.max_limit)

        async with self.uow:
            entries = await self.uow.audit_entries.find_by_actor(
                actor_id, limit=limit, offset=offset, entity_type=entity_type
            )
            return AuditTrailResponse(
                entries=[AuditEntryResponse.model_validate(entry) for entry in entries],
                limit=limit,
                offset=offset,
            )
