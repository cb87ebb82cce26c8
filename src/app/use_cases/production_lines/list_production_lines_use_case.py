from typing import List, Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ProductionLineStatus

from .dtos import ProductionLineResponse


class ListProductionLinesUseCase:
    """Read side: production lines, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        limit: int = 100,
        offset: int = 0,
        is_active: Optional[bool] = None,
        status: Optional[ProductionLineStatus] = None,
    ) -> List[ProductionLineResponse]:
        async with self.uow:
            lines = await self.uow.production_lines.list(
                limit=limit, offset=offset, is_active=is_active, status=status
            )
            return [ProductionLineResponse.model_validate(line) for line in lines]
