import logging
from uuid import uuid4

import pytest

from src.app.services.audit_interceptor import (
    REDACTED,
    AuditInterceptor,
    AuditOptions,
    determine_action,
    extract_entity_id,
    extract_reason,
    sanitize_for_audit,
)
from src.domain.entities import AuditAction
from src.domain.errors import ConflictError, UniqueViolation, ValidationError


class Result:
    def __init__(self, id):
        self.id = id


def test_sanitize_redacts_sensitive_keys_at_every_level():
    data = {
        "email": "qa@acmepharma.com",
        "Password": "hunter22",
        "input": {"refreshToken": "abc", "apiKey": "k-1", "nested": [{"client_secret": "s"}]},
    }

    sanitized = sanitize_for_audit(data)

    assert sanitized == {
        "email": "qa@acmepharma.com",
        "Password": REDACTED,
        "input": {"refreshToken": REDACTED, "apiKey": REDACTED, "nested": [{"client_secret": REDACTED}]},
    }
    assert data["Password"] == "hunter22"


def test_sanitize_converts_uuids_to_strings():
    entity_id = uuid4()
    assert sanitize_for_audit({"id": entity_id}) == {"id": str(entity_id)}


def test_reason_prefers_input_then_top_level():
    assert extract_reason({"input": {"reason": "from input"}, "reason": "top"}) == "from input"
    assert extract_reason({"reason": "top level"}) == "top level"


@pytest.mark.parametrize("args", [{}, {"reason": "   "}, {"input": {"reason": ""}}])
def test_missing_reason_is_validation_error(args):
    with pytest.raises(ValidationError):
        extract_reason(args)


def test_entity_id_precedence():
    options = AuditOptions(entity_type="Process")
    result_id = uuid4()

    assert extract_entity_id(options, {"id": "from-args"}, Result(result_id)) == str(result_id)
    assert extract_entity_id(options, {"id": "from-args"}, {"id": "from-dict"}) == "from-dict"
    assert extract_entity_id(options, {"id": "from-args"}, None) == "from-args"
    assert extract_entity_id(options, {"input": {"id": "from-input"}}, None) == "from-input"


def test_entity_id_custom_extractor_wins():
    options = AuditOptions(entity_type="Process", extract_entity_id=lambda args, result: "custom")
    assert extract_entity_id(options, {"id": "from-args"}, Result(uuid4())) == "custom"


def test_entity_id_missing_is_validation_error():
    with pytest.raises(ValidationError):
        extract_entity_id(AuditOptions(entity_type="Process"), {}, None)


@pytest.mark.parametrize(
    "operation_name, expected",
    [
        ("createProcess", AuditAction.CREATE),
        ("updateProcessProgress", AuditAction.UPDATE),
        ("removeUser", AuditAction.DELETE),
        ("deleteProductionLine", AuditAction.DELETE),
        ("approveBatch", AuditAction.APPROVE),
        ("rejectBatch", AuditAction.REJECT),
        ("reactivateProductionLine", AuditAction.UPDATE),
    ],
)
def test_action_from_operation_name(operation_name, expected):
    assert determine_action(operation_name, AuditOptions(entity_type="X"), {}) == expected


def test_explicit_action_and_input_action_take_precedence():
    explicit = AuditOptions(entity_type="X", action=AuditAction.APPROVE)
    assert determine_action("createThing", explicit, {}) == AuditAction.APPROVE

    implicit = AuditOptions(entity_type="X")
    assert determine_action("createThing", implicit, {"input": {"action": "REJECT"}}) == AuditAction.REJECT
    assert determine_action("createThing", implicit, {"input": {"action": "bogus"}}) == AuditAction.CREATE


@pytest.mark.asyncio
async def test_intercept_writes_audit_entry_in_same_transaction(
    mock_uow, mock_invalidation, operator_actor
):
    entity_id = uuid4()

    async def handler(uow, args):
        return {"id": entity_id, "status": "IN_PROGRESS"}

    args = {"id": str(entity_id), "input": {"progress": 40, "reason": "Shift report", "token": "t"}}
    options = AuditOptions(entity_type="Process", include_details=True)

    result = await AuditInterceptor(mock_uow, mock_invalidation).intercept(
        "updateProcessProgress", options, args, operator_actor, handler
    )

    assert result["status"] == "IN_PROGRESS"
    mock_uow.execute.assert_awaited_once()
    entry = mock_uow.audit_entries.append.call_args.args[0]
    assert entry.action == AuditAction.UPDATE
    assert entry.entity_type == "Process"
    assert entry.entity_id == str(entity_id)
    assert entry.reason == "Shift report"
    assert entry.actor_id == operator_actor.actor_id
    assert entry.details["args"]["input"]["token"] == REDACTED
    assert entry.details["result"] == {"id": str(entity_id), "status": "IN_PROGRESS"}
    mock_invalidation.publish_for.assert_awaited_once_with("Process", str(entity_id))


@pytest.mark.asyncio
async def test_intercept_without_details(mock_uow, mock_invalidation, operator_actor):
    async def handler(uow, args):
        return Result(uuid4())

    await AuditInterceptor(mock_uow, mock_invalidation).intercept(
        "updateProcess", AuditOptions(entity_type="Process"), {"reason": "Fix"}, operator_actor, handler
    )

    entry = mock_uow.audit_entries.append.call_args.args[0]
    assert entry.details is None


@pytest.mark.asyncio
async def test_intercept_rejects_blank_reason_before_handler(
    mock_uow, mock_invalidation, operator_actor
):
    calls = []

    async def handler(uow, args):
        calls.append(args)

    with pytest.raises(ValidationError):
        await AuditInterceptor(mock_uow, mock_invalidation).intercept(
            "updateProcess", AuditOptions(entity_type="Process"), {"id": "1"}, operator_actor, handler
        )

    assert calls == []
    mock_uow.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_intercept_without_actor_passes_through_without_audit(
    mock_uow, mock_invalidation, caplog
):
    async def handler(uow, args):
        return Result("abc")

    with caplog.at_level(logging.WARNING, logger="src.app.services.audit_interceptor"):
        result = await AuditInterceptor(mock_uow, mock_invalidation).intercept(
            "updateProcess", AuditOptions(entity_type="Process"), {}, None, handler
        )

    assert result.id == "abc"
    mock_uow.audit_entries.append.assert_not_awaited()
    assert "no actor" in caplog.text


@pytest.mark.asyncio
async def test_intercept_maps_unique_violation_to_conflict(
    mock_uow, mock_invalidation, operator_actor
):
    mock_uow.execute.side_effect = UniqueViolation("duplicate key")

    async def handler(uow, args):
        return Result(uuid4())

    with pytest.raises(ConflictError):
        await AuditInterceptor(mock_uow, mock_invalidation).intercept(
            "createProcess", AuditOptions(entity_type="Process"), {"reason": "r"}, operator_actor, handler
        )

    mock_invalidation.publish_for.assert_not_awaited()


@pytest.mark.asyncio
async def test_intercept_propagates_audit_failure_unchanged(
    mock_uow, mock_invalidation, operator_actor
):
    failure = RuntimeError("Audit service failure")
    mock_uow.audit_entries.append.side_effect = failure

    async def handler(uow, args):
        return Result(uuid4())

    with pytest.raises(RuntimeError) as exc_info:
        await AuditInterceptor(mock_uow, mock_invalidation).intercept(
            "updateProcess", AuditOptions(entity_type="Process"), {"reason": "r"}, operator_actor, handler
        )

    assert exc_info.value is failure
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_intercept_without_actor_maps_unique_violation_to_conflict(
    mock_uow, mock_invalidation, caplog
):
    mock_uow.execute.side_effect = UniqueViolation("UNIQUE constraint failed: production_lines.name")

    async def handler(uow, args):
        return Result(uuid4())

    with caplog.at_level(logging.WARNING, logger="src.app.services.audit_interceptor"):
        with pytest.raises(ConflictError) as exc_info:
            await AuditInterceptor(mock_uow, mock_invalidation).intercept(
                "createProductionLine",
                AuditOptions(entity_type="ProductionLine"),
                {"input": {"name": "Filling Line A"}},
                None,
                handler,
            )

    assert exc_info.value.message == "ProductionLine already exists"
    assert "Rejected duplicate operation=createProductionLine entity_type=ProductionLine" in caplog.text
    mock_invalidation.publish_for.assert_not_awaited()


@pytest.mark.asyncio
async def test_intercept_logs_missing_reason_with_entity_type(
    mock_uow, mock_invalidation, operator_actor, caplog
):
    async def handler(uow, args):
        return Result(args["id"])

    with caplog.at_level(logging.DEBUG, logger="src.app.services.audit_interceptor"):
        with pytest.raises(ValidationError):
            await AuditInterceptor(mock_uow, mock_invalidation).intercept(
                "updateProcessProgress",
                AuditOptions(entity_type="Process"),
                {"id": "x", "input": {}},
                operator_actor,
                handler,
            )

    records = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(records) == 1
    assert "operation=updateProcessProgress entity_type=Process" in records[0].getMessage()
    mock_uow.execute.assert_not_awaited()
