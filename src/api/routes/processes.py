"""
Process API Routes
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.app.services.audit_interceptor import AuditInterceptor
from src.app.services.invalidation import InvalidationBus
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base import ReasonCommand
from src.app.use_cases.operations import UpdateProcessProgressUseCase
from src.app.use_cases.processes import (
    CreateProcessUseCase,
    DeactivateProcessUseCase,
    GetProcessUseCase,
    ListProcessesUseCase,
    UpdateProcessUseCase,
)
from src.app.use_cases.processes.dtos import (
    CreateProcessCommand,
    ProcessResponse,
    UpdateProcessCommand,
    UpdateProgressCommand,
)
from src.depends import (
    get_audit_interceptor,
    get_current_actor,
    get_invalidation_bus,
    get_unit_of_work,
    require_roles,
)
from src.domain.actor import ActorContext
from src.domain.entities import ProcessStatus, UserRole

router = APIRouter(prefix="/processes", tags=["Processes"])

process_editors = require_roles(UserRole.OPERATOR, UserRole.MANAGER, UserRole.ADMIN)
process_managers = require_roles(UserRole.MANAGER, UserRole.ADMIN)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProcessResponse)
async def create_process(
    command: CreateProcessCommand,
    actor: ActorContext = Depends(process_editors),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    """
    Create Process on a production line

    Raises:
        - 400 Bad Request: Invalid input, blank reason or inactive production line
        - 404 Not Found: Unknown production line
        - 409 Conflict: Title already used on this production line
    """
    process = await CreateProcessUseCase(uow, bus).execute(command, actor)
    return ProcessResponse.model_validate(process)


@router.get("", response_model=List[ProcessResponse])
async def list_processes(
    actor: ActorContext = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    production_line_id: Optional[UUID] = Query(None),
    is_active: Optional[bool] = Query(None),
    process_status: Optional[ProcessStatus] = Query(None, alias="status"),
):
    return await ListProcessesUseCase(uow).execute(
        limit=limit,
        offset=offset,
        production_line_id=production_line_id,
        is_active=is_active,
        status=process_status,
    )


@router.get("/{process_id}", response_model=ProcessResponse)
async def get_process(
    process_id: UUID,
    actor: ActorContext = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await GetProcessUseCase(uow).execute(process_id)


@router.patch("/{process_id}", response_model=ProcessResponse)
async def update_process(
    process_id: UUID,
    command: UpdateProcessCommand,
    actor: ActorContext = Depends(process_editors),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    process = await UpdateProcessUseCase(uow, bus).execute(process_id, command, actor)
    return ProcessResponse.model_validate(process)


@router.post("/{process_id}/progress", response_model=ProcessResponse)
async def update_process_progress(
    process_id: UUID,
    command: UpdateProgressCommand,
    actor: ActorContext = Depends(process_editors),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    """
    Report progress of a process

    Progress above 0 starts a pending process, 100 completes it.
    """
    process = await UpdateProcessProgressUseCase(interceptor).execute(process_id, command, actor)
    return ProcessResponse.model_validate(process)


@router.post("/{process_id}/deactivate", response_model=ProcessResponse)
async def deactivate_process(
    process_id: UUID,
    command: ReasonCommand,
    actor: ActorContext = Depends(process_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    process = await DeactivateProcessUseCase(uow, bus).execute(process_id, command.reason, actor)
    return ProcessResponse.model_validate(process)
