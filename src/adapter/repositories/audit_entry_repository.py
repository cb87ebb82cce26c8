import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_entry_repository import IAuditEntryRepository
from src.domain.entities import AuditEntry
from src.domain.errors import AuditWriteError

logger = logging.getLogger(__name__)


class AuditEntryRepository(IAuditEntryRepository):
    """AuditEntry repository implementation using SQLModel (append-only)"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._closed = False

    def close(self) -> None:
        """Called by the owning unit of work when its transaction ends"""
        self._closed = True

    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Persist a new audit entry inside the current transaction (immutable)"""
        if self._closed:
            raise RuntimeError(
                "Audit entries can only be written inside an active unit of work"
            )

        try:
            self.session.add(entry)
            await self.session.flush()
            await self.session.refresh(entry)
        except SQLAlchemyError as exc:
            logger.error(
                f"Failed to write audit entry: actor_id={entry.actor_id} "
                f"entity_type={entry.entity_type} error={exc.__class__.__name__}"
            )
            raise AuditWriteError("Failed to write audit entry") from exc

        logger.debug(
            f"Audit entry written: id={entry.id} actor_id={entry.actor_id} "
            f"entity_type={entry.entity_type} entity_id={entry.entity_id}"
        )
        return entry

    async def find_by_entity(
        self,
        entity_type: str,
        entity_id: str,
        limit: int = 100,
        offset: int = 0,
        actor_id: Optional[UUID] = None,
    ) -> List[AuditEntry]:
        """Audit trail of one entity instance, oldest first"""
        stmt = select(AuditEntry).where(
            AuditEntry.entity_type == entity_type, AuditEntry.entity_id == entity_id
        )
        if actor_id is not None:
            stmt = stmt.where(AuditEntry.actor_id == actor_id)

        stmt = stmt.order_by(AuditEntry.created_at.asc()).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def find_by_actor(
        self,
        actor_id: UUID,
        limit: int = 100,
        offset: int = 0,
        entity_type: Optional[str] = None,
    ) -> List[AuditEntry]:
        """Audit entries caused by one actor, oldest first"""
        stmt = select(AuditEntry).where(AuditEntry.actor_id == actor_id)
        if entity_type is not None:
            stmt = stmt.where(AuditEntry.entity_type == entity_type)

        stmt = stmt.order_by(AuditEntry.created_at.asc()).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(
        self, entity_type: Optional[str] = None, entity_id: Optional[str] = None
    ) -> int:
        """Number of stored audit entries matching the filters"""
        stmt = select(func.count()).select_from(AuditEntry)
        if entity_type is not None:
            stmt = stmt.where(AuditEntry.entity_type == entity_type)
        if entity_id is not None:
            stmt = stmt.where(AuditEntry.entity_id == entity_id)
        result = await self.session.exec(stmt)
        return result.one()
