from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NotFoundError

from .dtos import ProcessResponse


class GetProcessUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, process_id: UUID) -> ProcessResponse:
        async with self.uow:
            process = await self.uow.processes.get_by_id(process_id)
            if process is None:
                raise NotFoundError("Process not found")
            return ProcessResponse.model_validate(process)
