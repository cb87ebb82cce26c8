"""
Create User Use Case
"""

from src.app.services.invalidation import InvalidationEmitter
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base import MutationUseCase, build_audit_entry
from src.domain.actor import ActorContext
from src.domain.entities import AuditAction, User

from .dtos import CreateUserCommand
from .passwords import DEFAULT_BCRYPT_ROUNDS, hash_password


class CreateUserUseCase(MutationUseCase):
    """
    Use case for registering a user.

    Business Rules:
    - Email is unique
    - Password is hashed with bcrypt before the transaction opens
    - The audit entry never contains the password or its hash
    """

    entity_type = "User"
    conflict_message = "User with this email already exists"

    def __init__(
        self,
        uow: UnitOfWork,
        invalidation: InvalidationEmitter,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ):
        super().__init__(uow, invalidation)
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, command: CreateUserCommand, actor: ActorContext) -> User:
        reason = self._require_reason(command.reason)
        password_hash = hash_password(command.password, self.bcrypt_rounds)

        async def work(uow):
            user = await uow.users.create(
                User(
                    email=command.email,
                    password_hash=password_hash,
                    first_name=command.first_name,
                    last_name=command.last_name,
                    role=command.role,
                    created_by=actor.actor_id,
                    reason=reason,
                )
            )
            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.CREATE,
                    self.entity_type,
                    user.id,
                    reason,
                    details={
                        "email": user.email,
                        "role": user.role.value,
                        "firstName": user.first_name,
                        "lastName": user.last_name,
                    },
                )
            )
            return user

        user = await self._commit(work)
        self.logger.info(f"User created: id={user.id} role={user.role.value} by={actor.actor_id}")
        return user
