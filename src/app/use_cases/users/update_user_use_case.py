"""
Update User Use Case
"""

from uuid import UUID

from src.app.use_cases.base import MutationUseCase, apply_changes, build_audit_entry
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import AuditAction, User
from src.domain.errors import ForbiddenError, NotFoundError

from .dtos import UpdateUserCommand


class UpdateUserUseCase(MutationUseCase):
    """
    Use case for changing user profile fields and role.

    Business Rules:
    - Only administrators can change roles; checked before any write
    - Only changed fields are recorded in the audit entry
    """

    entity_type = "User"
    conflict_message = "User with this email already exists"

    async def execute(self, user_id: UUID, command: UpdateUserCommand, actor: ActorContext) -> User:
        reason = self._require_reason(command.reason, user_id)
        requested = command.requested_changes()

        async def work(uow):
            user = await uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User not found")
            if "role" in requested and requested["role"] != user.role and not actor.is_admin:
                raise ForbiddenError("Only administrators can change user roles")

            changes, previous = apply_changes(user, requested)
            if changes:
                user.version += 1
                user.reason = reason
                user.updated_at = utcnow()
                user = await uow.users.update(user)

            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.UPDATE,
                    self.entity_type,
                    user.id,
                    reason,
                    details={"changes": changes, "previousValues": previous},
                )
            )
            return user

        user = await self._commit(work, user_id)
        self.logger.info(f"User updated: id={user.id} version={user.version} by={actor.actor_id}")
        return user
