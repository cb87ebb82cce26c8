from typing import List, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ProcessStatus

from .dtos import ProcessResponse


class ListProcessesUseCase:
    """Read side: processes, optionally scoped to one production line"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        limit: int = 100,
        offset: int = 0,
        production_line_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        status: Optional[ProcessStatus] = None,
    ) -> List[ProcessResponse]:
        async with self.uow:
            processes = await self.uow.processes.list(
                limit=limit,
                offset=offset,
                production_line_id=production_line_id,
                is_active=is_active,
                status=status,
            )
            return [ProcessResponse.model_validate(process) for process in processes]
