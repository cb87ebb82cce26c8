"""
User API Routes
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from src.app.services.invalidation import InvalidationBus
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base import ReasonCommand
from src.app.use_cases.users import (
    ChangePasswordUseCase,
    CreateUserUseCase,
    DeactivateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from src.app.use_cases.users.dtos import (
    ChangePasswordCommand,
    CreateUserCommand,
    UpdateUserCommand,
    UserResponse,
)
from src.depends import get_current_actor, get_invalidation_bus, get_unit_of_work, require_roles
from src.domain.actor import ActorContext
from src.domain.entities import UserRole

router = APIRouter(prefix="/users", tags=["Users"])

admins = require_roles(UserRole.ADMIN)
user_editors = require_roles(UserRole.ADMIN, UserRole.MANAGER)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    command: CreateUserCommand,
    actor: ActorContext = Depends(admins),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    """
    Create User

    Raises:
        - 400 Bad Request: Invalid email, short password or blank reason
        - 403 Forbidden: Requires ADMIN
        - 409 Conflict: Email already registered
    """
    use_case = CreateUserUseCase(uow, bus, bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS)
    user = await use_case.execute(command, actor)
    return UserResponse.model_validate(user)


@router.get("", response_model=List[UserResponse])
async def list_users(
    actor: ActorContext = Depends(user_editors),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    is_active: Optional[bool] = Query(None),
    role: Optional[UserRole] = Query(None),
):
    return await ListUsersUseCase(uow).execute(
        limit=limit, offset=offset, is_active=is_active, role=role
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    actor: ActorContext = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await GetUserUseCase(uow).execute(user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    command: UpdateUserCommand,
    actor: ActorContext = Depends(user_editors),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    """
    Update User

    Raises:
        - 403 Forbidden: Role change requested by a non-administrator
        - 404 Not Found: Unknown user
        - 409 Conflict: Email already registered
    """
    user = await UpdateUserUseCase(uow, bus).execute(user_id, command, actor)
    return UserResponse.model_validate(user)


@router.post("/{user_id}/password", response_model=UserResponse)
async def change_password(
    user_id: UUID,
    command: ChangePasswordCommand,
    actor: ActorContext = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    use_case = ChangePasswordUseCase(uow, bus, bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS)
    user = await use_case.execute(user_id, command, actor)
    return UserResponse.model_validate(user)


@router.post("/{user_id}/deactivate", response_model=UserResponse)
async def deactivate_user(
    user_id: UUID,
    command: ReasonCommand,
    actor: ActorContext = Depends(admins),
    uow: UnitOfWork = Depends(get_unit_of_work),
    bus: InvalidationBus = Depends(get_invalidation_bus),
):
    """
    Deactivate User

    Personal data (email, first and last name) is anonymized in the same
    transaction.
    """
    user = await DeactivateUserUseCase(uow, bus).execute(user_id, command.reason, actor)
    return UserResponse.model_validate(user)
