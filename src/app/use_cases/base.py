"""
Shared plumbing for audited mutation use cases.

Every mutation follows the same pipeline:
validate -> domain checks -> uow.execute(entity write + audit append) -> invalidate.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Awaitable, Callable, Dict, Iterable, Optional, Tuple, TypeVar
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field

from src.app.services.invalidation import InvalidationEmitter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.actor import ActorContext
from src.domain.entities import AuditAction, AuditEntry
from src.domain.errors import (
    AuditWriteError,
    ConflictError,
    DomainError,
    NotFoundError,
    ReferenceViolation,
    UniqueViolation,
    ValidationError,
)

T = TypeVar("T")

REASON_REQUIRED_MESSAGE = "Reason is required for every change (GxP compliance)"


def require_reason(reason: Optional[str]) -> str:
    """Reject missing or blank justifications before anything is written"""
    if reason is None or not str(reason).strip():
        raise ValidationError(REASON_REQUIRED_MESSAGE)
    return str(reason).strip()


def _reason_not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError(REASON_REQUIRED_MESSAGE)
    return value.strip()


# Mandatory justification field shared by all commands
Reason = Annotated[str, Field(max_length=500), AfterValidator(_reason_not_blank)]


def audit_value(value: Any) -> Any:
    """JSON friendly representation of an entity attribute"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def snapshot(entity: Any, fields: Iterable[str]) -> Dict[str, Any]:
    return {field: audit_value(getattr(entity, field)) for field in fields}


def requested_fields(command: BaseModel, nullable: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Fields explicitly sent in a partial update command.

    An explicit null clears the field only when the field is nullable;
    otherwise it is ignored like an omitted field.
    """
    requested = command.model_dump(exclude_unset=True, exclude={"reason"})
    return {
        field: value
        for field, value in requested.items()
        if value is not None or field in nullable
    }


def apply_changes(entity: Any, requested: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Apply requested field values to entity.

    Returns (changes, previous_values) holding only the fields whose value
    actually changed.
    """
    changes: Dict[str, Any] = {}
    previous: Dict[str, Any] = {}
    for field, value in requested.items():
        current = getattr(entity, field)
        if current == value:
            continue
        previous[field] = audit_value(current)
        changes[field] = audit_value(value)
        setattr(entity, field, value)
    return changes, previous


def build_audit_entry(
    actor: ActorContext,
    action: AuditAction,
    entity_type: str,
    entity_id: Any,
    reason: str,
    details: Optional[Dict[str, Any]] = None,
) -> AuditEntry:
    return AuditEntry(
        actor_id=actor.actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        reason=require_reason(reason),
        ip_address=actor.ip_address,
        user_agent=actor.user_agent,
        details=details,
    )


class MutationUseCase:
    """
    Base class for use cases that change a tracked entity.

    Subclasses set entity_type and conflict_message and call _commit with the
    transactional work.
    """

    entity_type: str = ""
    conflict_message: str = "Entity already exists"

    def __init__(self, uow: UnitOfWork, invalidation: InvalidationEmitter):
        self.uow = uow
        self.invalidation = invalidation
        self.logger = logging.getLogger(self.__class__.__module__)

    async def _commit(
        self,
        work: Callable[[UnitOfWork], Awaitable[T]],
        entity_id: Optional[Any] = None,
    ) -> T:
        """
        Execute work atomically, classify failures once, then emit invalidation.

        The entity returned by work must expose an ``id``.
        """
        context = f"entity_type={self.entity_type} entity_id={entity_id}"
        try:
            entity = await self.uow.execute(work)
        except UniqueViolation as exc:
            self.logger.warning(f"Rejected duplicate {context}")
            raise ConflictError(self.conflict_message) from exc
        except ReferenceViolation as exc:
            self.logger.warning(f"Rejected dangling reference {context}")
            raise NotFoundError(f"Referenced entity for {self.entity_type} does not exist") from exc
        except AuditWriteError:
            self.logger.error(f"Audit write failed, mutation rolled back {context}")
            raise
        except DomainError as exc:
            self.logger.warning(f"Mutation rejected {context} code={exc.code}: {exc.message}")
            raise
        except Exception as exc:
            self.logger.error(
                f"Mutation failed and was rolled back {context} error={exc.__class__.__name__}"
            )
            raise

        await self.invalidation.publish_for(self.entity_type, entity.id)
        return entity

    def _require_reason(self, reason: Optional[str], entity_id: Optional[Any] = None) -> str:
        try:
            return require_reason(reason)
        except ValidationError as exc:
            raise self._reject(exc, entity_id)

    def _reject(self, error: DomainError, entity_id: Optional[Any] = None) -> DomainError:
        """Log a rule violation detected before any transaction was opened"""
        self.logger.warning(
            f"Mutation rejected entity_type={self.entity_type} entity_id={entity_id} "
            f"code={error.code}: {error.message}"
        )
        return error


class ReasonCommand(BaseModel):
    """Command carrying only a justification (soft deletes, reactivation)"""

    reason: Reason
