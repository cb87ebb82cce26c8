from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NotFoundError

from .dtos import ProductionLineResponse


class GetProductionLineUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, line_id: UUID) -> ProductionLineResponse:
        async with self.uow:
            line = await self.uow.production_lines.get_by_id(line_id)
            if line is None:
                raise NotFoundError("Production line not found")
            return ProductionLineResponse.model_validate(line)
