"""
Update Process Use Case
"""

from uuid import UUID

from src.app.use_cases.base import MutationUseCase, apply_changes, build_audit_entry
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import AuditAction, Process
from src.domain.errors import NotFoundError

from .dtos import UpdateProcessCommand


class UpdateProcessUseCase(MutationUseCase):
    """Partial update of a process, audited with changes and previous values"""

    entity_type = "Process"
    conflict_message = "Process with this title already exists on this production line"

    async def execute(
        self, process_id: UUID, command: UpdateProcessCommand, actor: ActorContext
    ) -> Process:
        reason = self._require_reason(command.reason, process_id)
        requested = command.requested_changes()

        async def work(uow):
            process = await uow.processes.get_for_update(process_id)
            if process is None:
                raise NotFoundError("Process not found")

            changes, previous = apply_changes(process, requested)
            if changes:
                process.version += 1
                process.reason = reason
                process.updated_at = utcnow()
                process = await uow.processes.update(process)

            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.UPDATE,
                    self.entity_type,
                    process.id,
                    reason,
                    details={"changes": changes, "previousValues": previous},
                )
            )
            return process

        process = await self._commit(work, process_id)
        self.logger.info(
            f"Process updated: id={process.id} version={process.version} by={actor.actor_id}"
        )
        return process
