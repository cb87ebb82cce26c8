"""
Change Password Use Case
"""

from uuid import UUID

from src.app.services.invalidation import InvalidationEmitter
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base import MutationUseCase, build_audit_entry
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import AuditAction, User
from src.domain.errors import ConflictError, ForbiddenError, NotFoundError

from .dtos import ChangePasswordCommand
from .passwords import DEFAULT_BCRYPT_ROUNDS, hash_password


class ChangePasswordUseCase(MutationUseCase):
    """
    Use case for replacing a user's password.

    Business Rules:
    - Allowed for the user themself or an administrator
    - Deactivated users cannot get a new password
    - The audit entry only states that the password changed
    """

    entity_type = "User"

    def __init__(
        self,
        uow: UnitOfWork,
        invalidation: InvalidationEmitter,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ):
        super().__init__(uow, invalidation)
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, user_id: UUID, command: ChangePasswordCommand, actor: ActorContext) -> User:
        reason = self._require_reason(command.reason, user_id)
        if actor.actor_id != user_id and not actor.is_admin:
            raise self._reject(
                ForbiddenError("Only the user or an administrator can change this password"),
                user_id,
            )
        password_hash = hash_password(command.new_password, self.bcrypt_rounds)

        async def work(uow):
            user = await uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User not found")
            if not user.is_active:
                raise ConflictError("User is deactivated")

            user.password_hash = password_hash
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
                    details={"action": "password_change"},
                )
            )
            return user

        user = await self._commit(work, user_id)
        self.logger.info(f"Password changed: user={user.id} by={actor.actor_id}")
        return user
