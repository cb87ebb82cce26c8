"""
updateProcessProgress operation

Audited through the interceptor: action derived from the operation name,
sanitized arguments and result recorded as details.
"""

from uuid import UUID

from src.app.services.audit_interceptor import AuditInterceptor, AuditOptions
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.processes.dtos import UpdateProgressCommand
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import Process, ProcessStatus
from src.domain.errors import ConflictError, NotFoundError

OPERATION_NAME = "updateProcessProgress"
OPTIONS = AuditOptions(entity_type="Process", include_details=True)

COMPLETE = 100


async def update_process_progress(uow: UnitOfWork, args: dict) -> Process:
    progress = args["input"]["progress"]

    process = await uow.processes.get_for_update(UUID(args["id"]))
    if process is None:
        raise NotFoundError("Process not found")
    if not process.is_active:
        raise ConflictError("Cannot update progress of a deactivated process")
    if process.status.is_terminal:
        raise ConflictError(f"Cannot update progress of a {process.status.value} process")

    process.progress = progress
    if progress >= COMPLETE:
        process.status = ProcessStatus.COMPLETED
    elif process.status == ProcessStatus.PENDING and progress > 0:
        process.status = ProcessStatus.IN_PROGRESS

    process.version += 1
    process.reason = args["input"]["reason"]
    process.updated_at = utcnow()
    return await uow.processes.update(process)


class UpdateProcessProgressUseCase:
    def __init__(self, interceptor: AuditInterceptor):
        self.interceptor = interceptor

    async def execute(
        self, process_id: UUID, command: UpdateProgressCommand, actor: ActorContext
    ) -> Process:
        args = {"id": str(process_id), "input": command.model_dump()}
        return await self.interceptor.intercept(
            OPERATION_NAME, OPTIONS, args, actor, update_process_progress
        )
