"""
Audit API Routes

Read access to the compliance trail.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetActorAuditTrailUseCase, GetEntityAuditTrailUseCase
from src.app.use_cases.audit.dtos import AuditTrailResponse
from src.depends import get_current_actor, get_unit_of_work
from src.domain.actor import ActorContext

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("/entities/{entity_type}/{entity_id}", response_model=AuditTrailResponse)
async def get_entity_audit_trail(
    entity_type: str,
    entity_id: str,
    actor: ActorContext = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(100),
    offset: int = Query(0),
    actor_id: Optional[UUID] = Query(None),
):
    """
    Get the audit trail of one entity, oldest first

    Raises:
        - 400 Bad Request: limit outside 1..max or negative offset
        - 403 Forbidden: Requires ADMIN, MANAGER or QUALITY_ASSURANCE
    """
    use_case = GetEntityAuditTrailUseCase(uow, max_limit=ApplicationConfig.AUDIT_QUERY_MAX_LIMIT)
    return await use_case.execute(
        entity_type, entity_id, actor, limit=limit, offset=offset, actor_id=actor_id
    )


@router.get("/actors/{actor_id}", response_model=AuditTrailResponse)
async def get_actor_audit_trail(
    actor_id: UUID,
    actor: ActorContext = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(100),
    offset: int = Query(0),
    entity_type: Optional[str] = Query(None),
):
    use_case = GetActorAuditTrailUseCase(uow, max_limit=ApplicationConfig.AUDIT_QUERY_MAX_LIMIT)
    return await use_case.execute(
        actor_id, actor, limit=limit, offset=offset, entity_type=entity_type
    )
