"""
Deactivate Process Use Case
"""

from uuid import UUID

from src.app.use_cases.base import MutationUseCase, build_audit_entry
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import AuditAction, Process
from src.domain.errors import ConflictError, NotFoundError


class DeactivateProcessUseCase(MutationUseCase):
    """Soft delete a process; the row and its audit trail are kept"""

    entity_type = "Process"

    async def execute(self, process_id: UUID, reason: str, actor: ActorContext) -> Process:
        reason = self._require_reason(reason, process_id)

        async def work(uow):
            process = await uow.processes.get_for_update(process_id)
            if process is None:
                raise NotFoundError("Process not found")
            if not process.is_active:
                raise ConflictError("Process is already deactivated")

            process.is_active = False
            process.version += 1
            process.reason = reason
            process.updated_at = utcnow()
            process = await uow.processes.update(process)

            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.DELETE,
                    self.entity_type,
                    process.id,
                    reason,
                    details={
                        "action": "deactivation",
                        "previouslyActive": True,
                        "title": process.title,
                        "status": process.status.value,
                        "productionLineId": str(process.production_line_id),
                    },
                )
            )
            return process

        process = await self._commit(work, process_id)
        self.logger.info(f"Process deactivated: id={process.id} by={actor.actor_id}")
        return process
