"""
Create Process Use Case
"""

from src.app.use_cases.base import MutationUseCase, build_audit_entry, snapshot
from src.app.use_cases.production_lines.guards import ensure_active_production_line
from src.domain.actor import ActorContext
from src.domain.entities import AuditAction, Process

from .dtos import CreateProcessCommand

CREATE_DETAIL_FIELDS = ("title", "production_line_id", "status", "progress", "duration", "version")


class CreateProcessUseCase(MutationUseCase):
    """
    Use case for adding a process to a production line.

    Business Rules:
    - Parent line must exist (NotFoundError) and be active (ValidationError);
      it is re-read inside the same transaction as the insert
    - Title is unique per production line
    """

    entity_type = "Process"
    conflict_message = "Process with this title already exists on this production line"

    async def execute(self, command: CreateProcessCommand, actor: ActorContext) -> Process:
        reason = self._require_reason(command.reason)

        async def work(uow):
            await ensure_active_production_line(uow, command.production_line_id)

            process = await uow.processes.create(
                Process(
                    **command.model_dump(exclude={"reason"}),
                    created_by=actor.actor_id,
                    reason=reason,
                )
            )
            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.CREATE,
                    self.entity_type,
                    process.id,
                    reason,
                    details=snapshot(process, CREATE_DETAIL_FIELDS),
                )
            )
            return process

        process = await self._commit(work)
        self.logger.info(
            f"Process created: id={process.id} line={process.production_line_id} "
            f"created_by={actor.actor_id}"
        )
        return process
