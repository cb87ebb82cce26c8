"""
Create Production Line Use Case
"""

from src.app.use_cases.base import MutationUseCase, build_audit_entry, snapshot
from src.domain.actor import ActorContext
from src.domain.entities import AuditAction, ProductionLine

from .dtos import CreateProductionLineCommand


class CreateProductionLineUseCase(MutationUseCase):
    """
    Use case for registering a new production line.

    Business Rules:
    - Reason is mandatory
    - Name is unique; a concurrent creation with the same name loses with ConflictError
    - Line row and CREATE audit entry are committed together
    """

    entity_type = "ProductionLine"
    conflict_message = "Production line with this name already exists"

    async def execute(self, command: CreateProductionLineCommand, actor: ActorContext) -> ProductionLine:
        reason = self._require_reason(command.reason)

        async def work(uow):
            line = await uow.production_lines.create(
                ProductionLine(
                    name=command.name,
                    status=command.status,
                    created_by=actor.actor_id,
                    reason=reason,
                )
            )
            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.CREATE,
                    self.entity_type,
                    line.id,
                    reason,
                    details=snapshot(line, ("name", "status", "version")),
                )
            )
            return line

        line = await self._commit(work)
        self.logger.info(
            f"Production line created: id={line.id} name={line.name} created_by={actor.actor_id}"
        )
        return line
