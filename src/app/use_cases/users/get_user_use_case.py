from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NotFoundError

from .dtos import UserResponse


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> UserResponse:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")
            return UserResponse.model_validate(user)
