from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.production_line_repository import IProductionLineRepository
from src.domain.entities import ProductionLine, ProductionLineStatus


class ProductionLineRepository(IProductionLineRepository):
    """ProductionLine repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, line_id: UUID) -> Optional[ProductionLine]:
        """Get production line by ID"""
        stmt = select(ProductionLine).where(ProductionLine.id == line_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_for_update(self, line_id: UUID) -> Optional[ProductionLine]:
        """Get production line by ID, locking the row (no-op on SQLite)"""
        stmt = select(ProductionLine).where(ProductionLine.id == line_id).with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, line: ProductionLine) -> ProductionLine:
        """Create a new production line"""
        self.session.add(line)
        await self.session.flush()
        await self.session.refresh(line)
        return line

    async def update(self, line: ProductionLine) -> ProductionLine:
        """Update existing production line"""
        self.session.add(line)
        await self.session.flush()
        await self.session.refresh(line)
        return line

    async def list(
        self,
        limit: int = 100,
        offset: int = 0,
        is_active: Optional[bool] = None,
        status: Optional[ProductionLineStatus] = None,
    ) -> List[ProductionLine]:
        """List production lines, newest first"""
        stmt = select(ProductionLine)
        if is_active is not None:
            stmt = stmt.where(ProductionLine.is_active == is_active)
        if status is not None:
            stmt = stmt.where(ProductionLine.status == status)

        stmt = stmt.order_by(ProductionLine.created_at.desc()).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())
