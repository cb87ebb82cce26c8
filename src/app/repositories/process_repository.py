from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Process, ProcessStatus


class IProcessRepository(ABC):
    """Process repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, process_id: UUID) -> Optional[Process]:
        """Get process by ID"""
        pass

    @abstractmethod
    async def get_for_update(self, process_id: UUID) -> Optional[Process]:
        """Get process by ID, locking the row for the rest of the transaction"""
        pass

    @abstractmethod
    async def create(self, process: Process) -> Process:
        """Create a new process"""
        pass

    @abstractmethod
    async def update(self, process: Process) -> Process:
        """Update existing process"""
        pass

    @abstractmethod
    async def list(
        self,
        limit: int = 100,
        offset: int = 0,
        production_line_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        status: Optional[ProcessStatus] = None,
    ) -> List[Process]:
        """List processes, newest first"""
        pass

    @abstractmethod
    async def count_unfinished(self, production_line_id: UUID) -> int:
        """Count active processes of a line whose status is not terminal"""
        pass
