"""
Deactivate User Use Case

Deactivation doubles as the right-to-erasure path: personal data on the
user row is replaced in the same transaction that flips is_active.
"""

from uuid import UUID

from src.app.use_cases.base import MutationUseCase, build_audit_entry
from src.domain.actor import ActorContext
from src.domain.base import utcnow
from src.domain.entities import AuditAction, User
from src.domain.errors import ConflictError, NotFoundError

ANONYMIZED_EMAIL_DOMAIN = "deleted.local"
ANONYMIZED_LAST_NAME = "ANONYMIZED"


def anonymized_identity(user_id: UUID) -> dict:
    """Replacement values derived from the first 8 characters of the id"""
    short_id = str(user_id)[:8]
    return {
        "email": f"anonymized_{short_id}@{ANONYMIZED_EMAIL_DOMAIN}",
        "first_name": f"DELETED_USER_{short_id}",
        "last_name": ANONYMIZED_LAST_NAME,
    }


class DeactivateUserUseCase(MutationUseCase):
    """
    Use case for deactivating a user and anonymizing their personal data.

    Business Rules:
    - User must exist and be active
    - email, first_name and last_name are anonymized
    - DELETE audit entry records the original and anonymized values
    """

    entity_type = "User"

    async def execute(self, user_id: UUID, reason: str, actor: ActorContext) -> User:
        reason = self._require_reason(reason, user_id)

        async def work(uow):
            user = await uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User not found")
            if not user.is_active:
                raise ConflictError("User is already deactivated")

            original = {
                "email": user.email,
                "first_name": user.first_name,
                "last_name": user.last_name,
            }
            anonymized = anonymized_identity(user.id)

            user.email = anonymized["email"]
            user.first_name = anonymized["first_name"]
            user.last_name = anonymized["last_name"]
            user.is_active = False
            user.version += 1
            user.reason = reason
            user.updated_at = utcnow()
            user = await uow.users.update(user)

            await uow.audit_entries.append(
                build_audit_entry(
                    actor,
                    AuditAction.DELETE,
                    self.entity_type,
                    user.id,
                    reason,
                    details={
                        "action": "deactivation_with_pii_anonymization",
                        "previouslyActive": True,
                        "originalEmail": original["email"],
                        "originalFirstName": original["first_name"],
                        "originalLastName": original["last_name"],
                        "anonymizedEmail": anonymized["email"],
                        "anonymizedFirstName": anonymized["first_name"],
                        "anonymizedLastName": anonymized["last_name"],
                    },
                )
            )
            return user

        user = await self._commit(work, user_id)
        self.logger.info(f"User deactivated and anonymized: id={user.id} by={actor.actor_id}")
        return user
