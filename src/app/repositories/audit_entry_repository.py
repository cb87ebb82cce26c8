from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import AuditEntry


class IAuditEntryRepository(ABC):
    """AuditEntry repository interface - append-only, application layer"""

    @abstractmethod
    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Persist a new audit entry inside the current transaction (immutable)"""
        pass

    @abstractmethod
    async def find_by_entity(
        self,
        entity_type: str,
        entity_id: str,
        limit: int = 100,
        offset: int = 0,
        actor_id: Optional[UUID] = None,
    ) -> List[AuditEntry]:
        """Audit trail of one entity instance, oldest first"""
        pass

    @abstractmethod
    async def find_by_actor(
        self,
        actor_id: UUID,
        limit: int = 100,
        offset: int = 0,
        entity_type: Optional[str] = None,
    ) -> List[AuditEntry]:
        """Audit entries caused by one actor, oldest first"""
        pass

    @abstractmethod
    async def count(
        self, entity_type: Optional[str] = None, entity_id: Optional[str] = None
    ) -> int:
        """Number of stored audit entries matching the filters"""
        pass
