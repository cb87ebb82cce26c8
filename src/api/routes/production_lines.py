"""
Production Line API Routes
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.app.services.audit_interceptor import AuditInterceptor
from src.app.services.invalidation import InvalidationBus
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base import ReasonCommand
from src.app.use_cases.operations import ReactivateProductionLineUseCase
from src.app.use_cases.production_lines import (
    CreateProductionLineUseCase,
    DeactivateProductionLineUseCase,
    GetProductionLineUseCase,
    ListProductionLinesUseCase,
    UpdateProductionLineUseCase,
)
from src.app.use_cases.production_lines.dtos import (
    CreateProductionLineCommand,
    ProductionLineResponse,
    UpdateProductionLineCommand,
)
from src.depends import (
    get_audit_interceptor,
    get_current_actor,
    get_invalidation_bus,
    get_unit_of_work,
    require_roles,
)
from src.domain.actor import ActorContext
from src.domain.entities import ProductionLineStatus, UserRole

router = APIRouter(prefix="/production-lines", tags=["Production Lines"])

line_managers = require_roles(UserRole.MANAGER, UserRole.ADMIN)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProductionLineResponse)
async def create_production_line(
    command: CreateProductionLineCommand,
    actor: ActorContext = Depends(line_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    """
    Create Production Line

    Raises:
        - 400 Bad Request: Invalid input or blank reason
        - 403 Forbidden: Requires MANAGER or ADMIN
        - 409 Conflict: Name already in use
    """
    line = await CreateProductionLineUseCase(uow, bus).execute(command, actor)
    return ProductionLineResponse.model_validate(line)


@router.get("", response_model=List[ProductionLineResponse])
async def list_production_lines(
    actor: ActorContext = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    is_active: Optional[bool] = Query(None),
    line_status: Optional[ProductionLineStatus] = Query(None, alias="status"),
):
    return await ListProductionLinesUseCase(uow).execute(
        limit=limit, offset=offset, is_active=is_active, status=line_status
    )


@router.get("/{line_id}", response_model=ProductionLineResponse)
async def get_production_line(
    line_id: UUID,
    actor: ActorContext = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await GetProductionLineUseCase(uow).execute(line_id)


@router.patch("/{line_id}", response_model=ProductionLineResponse)
async def update_production_line(
    line_id: UUID,
    command: UpdateProductionLineCommand,
    actor: ActorContext = Depends(line_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    """
    Update Production Line

    Raises:
        - 404 Not Found: Unknown production line
        - 409 Conflict: Name already in use
    """
    line = await UpdateProductionLineUseCase(uow, bus).execute(line_id, command, actor)
    return ProductionLineResponse.model_validate(line)


@router.post("/{line_id}/deactivate", response_model=ProductionLineResponse)
async def deactivate_production_line(
    line_id: UUID,
    command: ReasonCommand,
    actor: ActorContext = Depends(line_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    """
    Deactivate Production Line (soft delete)

    Raises:
        - 404 Not Found: Unknown production line
        - 409 Conflict: Already deactivated, or unfinished processes remain
    """
    line = await DeactivateProductionLineUseCase(uow, bus).execute(line_id, command.reason, actor)
    return ProductionLineResponse.model_validate(line)


@router.post("/{line_id}/reactivate", response_model=ProductionLineResponse)
async def reactivate_production_line(
    line_id: UUID,
    command: ReasonCommand,
    actor: ActorContext = Depends(line_managers),
    interceptor: AuditInterceptor = Depends(get_audit_interceptor),
):
    line = await ReactivateProductionLineUseCase(interceptor).execute(line_id, command, actor)
    return ProductionLineResponse.model_validate(line)
