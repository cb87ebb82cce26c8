"""
Update Production Line Use Case
"""

from uuid import UUID

from src.app.use_cases.base import MutationUseCase, apply_changes, build_audit_entry
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import AuditAction, ProductionLine
from src.domain.errors import NotFoundError

from .dtos import UpdateProductionLineCommand


class UpdateProductionLineUseCase(MutationUseCase):
    """
    Use case for changing name or status of a production line.

    Only fields that actually differ are recorded. A request that changes
    nothing is still audited, with empty changes and no version bump.
    """

    entity_type = "ProductionLine"
    conflict_message = "Production line with this name already exists"

    async def execute(
        self, line_id: UUID, command: UpdateProductionLineCommand, actor: ActorContext
    ) -> ProductionLine:
        reason = self._require_reason(command.reason, line_id)
        requested = command.requested_changes()

        async def work(uow):
            line = await uow.production_lines.get_for_update(line_id)
            if line is None:
                raise NotFoundError("Production line not found")

            changes, previous = apply_changes(line, requested)
            if changes:
                line.version += 1
                line.reason = reason
                line.updated_at = utcnow()
                line = await uow.production_lines.update(line)

            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.UPDATE,
                    self.entity_type,
                    line.id,
                    reason,
                    details={"changes": changes, "previousValues": previous},
                )
            )
            return line

        line = await self._commit(work, line_id)
        self.logger.info(
            f"Production line updated: id={line.id} version={line.version} by={actor.actor_id}"
        )
        return line
