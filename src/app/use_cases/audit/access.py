import logging

from src.domain.actor import ActorContext
from src.domain.entities import UserRole
from src.domain.errors import ForbiddenError, ValidationError

logger = logging.getLogger(__name__)

# Roles allowed to review the audit trail
AUDIT_READER_ROLES = frozenset({UserRole.ADMIN, UserRole.MANAGER, UserRole.QUALITY_ASSURANCE})

DEFAULT_AUDIT_QUERY_MAX_LIMIT = 500


def ensure_audit_reader(actor: ActorContext) -> None:
    if actor.role not in AUDIT_READER_ROLES:
        logger.warning(f"Audit trail access denied: actor_id={actor.actor_id} role={actor.role.value}")
        raise ForbiddenError("You do not have permission to view the audit trail")


def validate_page(limit: int, offset: int, max_limit: int) -> None:
    if limit < 1 or limit > max_limit:
        raise ValidationError(f"limit must be between 1 and {max_limit}")
    if offset < 0:
        raise ValidationError("offset must not be negative")
