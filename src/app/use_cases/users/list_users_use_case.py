from typing import List, Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole

from .dtos import UserResponse


class ListUsersUseCase:
    """Read side: users, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        limit: int = 100,
        offset: int = 0,
        is_active: Optional[bool] = None,
        role: Optional[UserRole] = None,
    ) -> List[UserResponse]:
        async with self.uow:
            users = await self.uow.users.list(
                limit=limit, offset=offset, is_active=is_active, role=role
            )
            return [UserResponse.model_validate(user) for user in users]
