from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ProductionLine, ProductionLineStatus


class IProductionLineRepository(ABC):
    """ProductionLine repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, line_id: UUID) -> Optional[ProductionLine]:
        """Get production line by ID"""
        pass

    @abstractmethod
    async def get_for_update(self, line_id: UUID) -> Optional[ProductionLine]:
        """Get production line by ID, locking the row for the rest of the transaction"""
        pass

    @abstractmethod
    async def create(self, line: ProductionLine) -> ProductionLine:
        """Create a new production line"""
        pass

    @abstractmethod
    async def update(self, line: ProductionLine) -> ProductionLine:
        """Update existing production line"""
        pass

    @abstractmethod
    async def list(
        self,
        limit: int = 100,
        offset: int = 0,
        is_active: Optional[bool] = None,
        status: Optional[ProductionLineStatus] = None,
    ) -> List[ProductionLine]:
        """List production lines, newest first"""
        pass
