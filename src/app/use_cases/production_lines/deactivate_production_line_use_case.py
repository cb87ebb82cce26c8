"""
Deactivate Production Line Use Case

Soft delete: the row stays for traceability, is_active flips to False.
"""

from uuid import UUID

from src.app.use_cases.base import MutationUseCase, build_audit_entry
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import AuditAction, ProductionLine, ProductionLineStatus
from src.domain.errors import ConflictError, NotFoundError


class DeactivateProductionLineUseCase(MutationUseCase):
    """
    Use case for deactivating a production line.

    Business Rules:
    - Line must exist and be active
    - Line must not have unfinished processes (active and not COMPLETED/CANCELLED);
      the count is read inside the same transaction as the write
    - Status becomes INACTIVE, version is bumped
    """

    entity_type = "ProductionLine"

    async def execute(self, line_id: UUID, reason: str, actor: ActorContext) -> ProductionLine:
        reason = self._require_reason(reason, line_id)

        async def work(uow):
            line = await uow.production_lines.get_for_update(line_id)
            if line is None:
                raise NotFoundError("Production line not found")
            if not line.is_active:
                raise ConflictError("Production line is already deactivated")

            unfinished = await uow.processes.count_unfinished(line.id)
            if unfinished > 0:
                raise ConflictError(
                    f"Cannot deactivate production line with {unfinished} active processes. "
                    "Please complete or cancel all processes first."
                )

            line.is_active = False
            line.status = ProductionLineStatus.INACTIVE
            line.version += 1
            line.reason = reason
            line.updated_at = utcnow()
            line = await uow.production_lines.update(line)

            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.DELETE,
                    self.entity_type,
                    line.id,
                    reason,
                    details={
                        "action": "deactivation",
                        "previouslyActive": True,
                        "name": line.name,
                        "status": line.status.value,
                        "processCount": unfinished,
                    },
                )
            )
            return line

        line = await self._commit(work, line_id)
        self.logger.info(f"Production line deactivated: id={line.id} by={actor.actor_id}")
        return line
