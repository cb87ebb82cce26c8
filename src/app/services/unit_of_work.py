from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

from src.app.repositories.audit_entry_repository import IAuditEntryRepository
from src.app.repositories.process_repository import IProcessRepository
from src.app.repositories.production_line_repository import IProductionLineRepository
from src.app.repositories.user_repository import IUserRepository

T = TypeVar("T")


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access and transaction management

    One logical operation = one transaction. The entity write(s) and the audit
    entry documenting them are committed together or not at all.
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    production_lines: IProductionLineRepository
    processes: IProcessRepository
    audit_entries: IAuditEntryRepository

    @property
    def active(self) -> bool:
        return getattr(self, "_active", False)

    async def execute(self, work: Callable[["UnitOfWork"], Awaitable[T]]) -> T:
        """
        Run work inside one atomic transaction and commit it.

        Any exception raised by work or by the commit rolls everything back
        and propagates unchanged. Calling execute on an already active unit of
        work joins the running transaction instead of opening a new one.
        """
        if self.active:
            return await work(self)

        async with self:
            result = await work(self)
            await self.commit()
            return result

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
