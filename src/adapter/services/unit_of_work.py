import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_entry_repository import AuditEntryRepository
from src.adapter.repositories.process_repository import ProcessRepository
from src.adapter.repositories.production_line_repository import ProductionLineRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.services.integrity import classify_integrity_error
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._active = False

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.production_lines = ProductionLineRepository(self.session)
        self.processes = ProcessRepository(self.session)
        self.audit_entries = AuditEntryRepository(self.session)
        self._active = True
        return self

    async def __aexit__(self, *args):
        try:
            await self.rollback()
        finally:
            self._active = False
            # Audit writes are only legal inside an open unit of work
            self.audit_entries.close()

    async def execute(self, work):
        try:
            return await super().execute(work)
        except IntegrityError as exc:
            classified = classify_integrity_error(exc)
            logger.debug(f"Transaction rolled back on integrity error: {classified.code}")
            raise classified from exc

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
