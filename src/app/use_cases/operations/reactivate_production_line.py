"""
reactivateProductionLine operation

Brings a deactivated line back into service. Audited through the
interceptor with an explicit action and entity id.
"""

from uuid import UUID

from src.app.services.audit_interceptor import AuditInterceptor, AuditOptions
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base import ReasonCommand
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import AuditAction, ProductionLine, ProductionLineStatus
from src.domain.errors import ConflictError, NotFoundError

OPERATION_NAME = "reactivateProductionLine"
OPTIONS = AuditOptions(
    entity_type="ProductionLine",
    action=AuditAction.UPDATE,
    extract_entity_id=lambda args, result: args["id"],
)


async def reactivate_production_line(uow: UnitOfWork, args: dict) -> ProductionLine:
    line = await uow.production_lines.get_for_update(UUID(args["id"]))
    if line is None:
        raise NotFoundError("Production line not found")
    if line.is_active:
        raise ConflictError("Production line is already active")

    line.is_active = True
    line.status = ProductionLineStatus.ACTIVE
    line.version += 1
    line.reason = args["reason"]
    line.updated_at = utcnow()
    return await uow.production_lines.update(line)


class ReactivateProductionLineUseCase:
    def __init__(self, interceptor: AuditInterceptor):
        self.interceptor = interceptor

    async def execute(
        self, line_id: UUID, command: ReasonCommand, actor: ActorContext
    ) -> ProductionLine:
        args = {"id": str(line_id), "reason": command.reason}
        return await self.interceptor.intercept(
            OPERATION_NAME, OPTIONS, args, actor, reactivate_production_line
        )
