from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ProductionLine
from src.domain.errors import NotFoundError, ValidationError


async def ensure_active_production_line(uow: UnitOfWork, line_id: UUID) -> ProductionLine:
    """
    Load a production line that new child rows may attach to.

    Runs through uow.execute so that, when called from inside a running
    transaction, the read joins it instead of opening a second one.
    """

    async def check(inner: UnitOfWork) -> ProductionLine:
        line = await inner.production_lines.get_by_id(line_id)
        if line is None:
            raise NotFoundError("Production line not found")
        if not line.is_active:
            raise ValidationError("Cannot create process on inactive production line")
        return line

    return await uow.execute(check)
