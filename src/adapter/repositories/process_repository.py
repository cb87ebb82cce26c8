from typing import List, Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.process_repository import IProcessRepository
from src.domain.entities import Process, ProcessStatus, TERMINAL_PROCESS_STATUSES


class ProcessRepository(IProcessRepository):
    """Process repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, process_id: UUID) -> Optional[Process]:
        """Get process by ID"""
        stmt = select(Process).where(Process.id == process_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_for_update(self, process_id: UUID) -> Optional[Process]:
        """Get process by ID, locking the row (no-op on SQLite)"""
        stmt = select(Process).where(Process.id == process_id).with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, process: Process) -> Process:
        """Create a new process"""
        self.session.add(process)
        await self.session.flush()
        await self.session.refresh(process)
        return process

    async def update(self, process: Process) -> Process:
        """Update existing process"""
        self.session.add(process)
        await self.session.flush()
        await self.session.refresh(process)
        return process

    async def list(
        self,
        limit: int = 100,
        offset: int = 0,
        production_line_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        status: Optional[ProcessStatus] = None,
    ) -> List[Process]:
        """List processes, newest first"""
        stmt = select(Process)
        if production_line_id is not None:
            stmt = stmt.where(Process.production_line_id == production_line_id)
        if is_active is not None:
            stmt = stmt.where(Process.is_active == is_active)
        if status is not None:
            stmt = stmt.where(Process.status == status)

        stmt = stmt.order_by(Process.created_at.desc()).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_unfinished(self, production_line_id: UUID) -> int:
        """Count active processes of a line whose status is not terminal"""
        stmt = (
            select(func.count())
            .select_from(Process)
            .where(
                Process.production_line_id == production_line_id,
                Process.is_active == True,  # noqa: E712
                Process.status.not_in(list(TERMINAL_PROCESS_STATUSES)),
            )
        )
        result = await self.session.exec(stmt)
        return result.one()
