"""
Audit Interceptor

Generic audit path for operations that do not build their own audit entry.
Actor, reason, entity id, action and (optionally) details are derived from
the operation's arguments and result, and the audit entry is written in the
same transaction as the operation itself.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import BaseModel

from src.app.services.invalidation import InvalidationEmitter
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base import audit_value, build_audit_entry, require_reason
from src.domain.actor import ActorContext
from src.domain.entities import AuditAction
from src.domain.errors import (
    AuditWriteError,
    ConflictError,
    DomainError,
    NotFoundError,
    ReferenceViolation,
    UniqueViolation,
    ValidationError,
)

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = ("password", "token", "secret", "key")
REDACTED = "[REDACTED]"

# Checked in order; the first keyword found in the operation name wins
ACTION_KEYWORDS = (
    (("create",), AuditAction.CREATE),
    (("update",), AuditAction.UPDATE),
    (("delete", "remove"), AuditAction.DELETE),
    (("approve",), AuditAction.APPROVE),
    (("reject",), AuditAction.REJECT),
)

Args = Dict[str, Any]
Handler = Callable[[UnitOfWork, Args], Awaitable[Any]]
EntityIdExtractor = Callable[[Args, Any], Any]


@dataclass(frozen=True)
class AuditOptions:
    """Per-operation audit configuration"""

    entity_type: str
    action: Optional[AuditAction] = None
    extract_entity_id: Optional[EntityIdExtractor] = None
    include_details: bool = False


def _field(container: Any, name: str) -> Any:
    if isinstance(container, dict):
        return container.get(name)
    if isinstance(container, BaseModel):
        return getattr(container, name, None)
    return None


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(field in lowered for field in SENSITIVE_FIELDS)


def sanitize_for_audit(data: Any) -> Any:
    """
    Deep copy of data safe to store in an audit entry.

    Values under any key containing password, token, secret or key
    (case-insensitive) are replaced at every nesting level.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    if isinstance(data, dict):
        return {
            key: REDACTED if _is_sensitive(str(key)) else sanitize_for_audit(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple, set)):
        return [sanitize_for_audit(item) for item in data]
    return audit_value(data)


def extract_reason(args: Args) -> str:
    reason = _field(args.get("input"), "reason")
    if not isinstance(reason, str) or not reason.strip():
        reason = args.get("reason")
    return require_reason(reason if isinstance(reason, str) else None)


def lookup_entity_id(args: Args, result: Any) -> Optional[Any]:
    """result.id / result["id"], then args["id"], then args["input"]["id"]"""
    for candidate in (
        getattr(result, "id", None),
        _field(result, "id"),
        args.get("id"),
        _field(args.get("input"), "id"),
    ):
        if candidate is not None:
            return candidate
    return None


def extract_entity_id(options: AuditOptions, args: Args, result: Any) -> str:
    if options.extract_entity_id is not None:
        entity_id = options.extract_entity_id(args, result)
    else:
        entity_id = lookup_entity_id(args, result)
    if entity_id is None:
        raise ValidationError(f"Cannot extract entity ID for audit entry: {options.entity_type}")
    return str(entity_id)


def determine_action(operation_name: str, options: AuditOptions, args: Args) -> AuditAction:
    if options.action is not None:
        return options.action

    requested = _field(args.get("input"), "action")
    if isinstance(requested, str) and requested in AuditAction.__members__:
        return AuditAction(requested)

    name = operation_name.lower()
    for keywords, action in ACTION_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return action
    return AuditAction.UPDATE


class AuditInterceptor:
    """
    Runs an operation handler and its derived audit entry as one transaction.

    Business Rules:
    - Reason is validated before the handler runs
    - Entity id that cannot be derived aborts and rolls back the operation
    - Without an actor the handler still runs, without an audit entry
    - Invalidation is published only after a successful commit
    """

    def __init__(self, uow: UnitOfWork, invalidation: InvalidationEmitter):
        self.uow = uow
        self.invalidation = invalidation

    async def intercept(
        self,
        operation_name: str,
        options: AuditOptions,
        args: Args,
        actor: Optional[ActorContext],
        handler: Handler,
    ) -> Any:
        context = f"operation={operation_name} entity_type={options.entity_type}"

        if actor is None:
            # TODO: decide with QA whether unattributed operations must be refused
            logger.warning(f"Audit interceptor: no actor, running without an audit entry {context}")

            async def work(uow: UnitOfWork):
                result = await handler(uow, args)
                return result, lookup_entity_id(args, result)

        else:
            try:
                reason = extract_reason(args)
            except ValidationError as exc:
                logger.warning(f"Operation rejected {context} code={exc.code}: {exc.message}")
                raise

            async def work(uow: UnitOfWork):
                result = await handler(uow, args)
                entity_id = extract_entity_id(options, args, result)
                details = None
                if options.include_details:
                    details = {"args": sanitize_for_audit(args), "result": sanitize_for_audit(result)}
                await uow.audit_entries.append(
                    build_audit_entry(
                        actor,
                        determine_action(operation_name, options, args),
                        options.entity_type,
                        entity_id,
                        reason,
                        details=details,
                    )
                )
                return result, entity_id

        try:
            result, entity_id = await self.uow.execute(work)
        except UniqueViolation as exc:
            logger.warning(f"Rejected duplicate {context}")
            raise ConflictError(f"{options.entity_type} already exists") from exc
        except ReferenceViolation as exc:
            logger.warning(f"Rejected dangling reference {context}")
            raise NotFoundError(f"Referenced entity for {options.entity_type} does not exist") from exc
        except AuditWriteError:
            logger.error(f"Audit write failed, operation rolled back {context}")
            raise
        except DomainError as exc:
            logger.warning(f"Operation rejected {context} code={exc.code}: {exc.message}")
            raise
        except Exception as exc:
            logger.error(f"Operation failed and was rolled back {context} error={exc.__class__.__name__}")
            raise

        if actor is not None:
            logger.info(f"Operation audited: {context} entity_id={entity_id} actor_id={actor.actor_id}")
        if entity_id is not None:
            await self.invalidation.publish_for(options.entity_type, entity_id)
        return result
