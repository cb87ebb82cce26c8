from uuid import uuid4

import pytest

from src.app.use_cases.production_lines import (
    CreateProductionLineUseCase,
    DeactivateProductionLineUseCase,
    GetProductionLineUseCase,
    UpdateProductionLineUseCase,
)
from src.app.use_cases.production_lines.dtos import (
    CreateProductionLineCommand,
    UpdateProductionLineCommand,
)
from src.domain.entities import AuditAction, ProductionLine, ProductionLineStatus
from src.domain.errors import ConflictError, NotFoundError, UniqueViolation, ValidationError


def make_line(**overrides) -> ProductionLine:
    data = {"name": "Filling Line A", "created_by": uuid4(), "reason": "Initial setup"}
    data.update(overrides)
    return ProductionLine(**data)


@pytest.mark.asyncio
async def test_create_production_line_writes_entity_and_audit(
    mock_uow, mock_invalidation, manager_actor
):
    command = CreateProductionLineCommand(name="Filling Line A", reason="New filling capacity")

    line = await CreateProductionLineUseCase(mock_uow, mock_invalidation).execute(
        command, manager_actor
    )

    assert line.name == "Filling Line A"
    assert line.created_by == manager_actor.actor_id
    assert line.version == 1
    mock_uow.execute.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()

    entry = mock_uow.audit_entries.append.call_args.args[0]
    assert entry.action == AuditAction.CREATE
    assert entry.entity_type == "ProductionLine"
    assert entry.entity_id == str(line.id)
    assert entry.actor_id == manager_actor.actor_id
    assert entry.reason == "New filling capacity"
    assert entry.ip_address == "10.0.0.7"
    assert entry.user_agent == "pytest-agent/1.0"
    assert entry.details == {"name": "Filling Line A", "status": "ACTIVE", "version": 1}

    mock_invalidation.publish_for.assert_awaited_once_with("ProductionLine", line.id)


@pytest.mark.asyncio
async def test_create_production_line_blank_reason_never_opens_transaction(
    mock_uow, mock_invalidation, manager_actor
):
    command = CreateProductionLineCommand.model_construct(
        name="Filling Line A", status=ProductionLineStatus.ACTIVE, reason="   "
    )

    with pytest.raises(ValidationError):
        await CreateProductionLineUseCase(mock_uow, mock_invalidation).execute(
            command, manager_actor
        )

    mock_uow.execute.assert_not_awaited()
    mock_uow.audit_entries.append.assert_not_awaited()
    mock_invalidation.publish_for.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_production_line_duplicate_name_is_conflict(
    mock_uow, mock_invalidation, manager_actor
):
    mock_uow.execute.side_effect = UniqueViolation("UNIQUE constraint failed: production_lines.name")
    command = CreateProductionLineCommand(name="Filling Line A", reason="Second attempt")

    with pytest.raises(ConflictError) as exc_info:
        await CreateProductionLineUseCase(mock_uow, mock_invalidation).execute(
            command, manager_actor
        )

    assert exc_info.value.message == "Production line with this name already exists"
    assert exc_info.value.code == "CONFLICT"
    mock_invalidation.publish_for.assert_not_awaited()


@pytest.mark.asyncio
async def test_audit_failure_propagates_unchanged(mock_uow, mock_invalidation, manager_actor):
    failure = RuntimeError("Audit service failure")
    mock_uow.audit_entries.append.side_effect = failure
    command = CreateProductionLineCommand(name="Filling Line A", reason="New filling capacity")

    with pytest.raises(RuntimeError) as exc_info:
        await CreateProductionLineUseCase(mock_uow, mock_invalidation).execute(
            command, manager_actor
        )

    assert exc_info.value is failure
    mock_uow.commit.assert_not_awaited()
    mock_invalidation.publish_for.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_production_line_records_only_changed_fields(
    mock_uow, mock_invalidation, manager_actor
):
    line = make_line()
    mock_uow.production_lines.get_for_update.return_value = line
    command = UpdateProductionLineCommand(
        name="Filling Line B", status=ProductionLineStatus.ACTIVE, reason="Renamed after audit"
    )

    updated = await UpdateProductionLineUseCase(mock_uow, mock_invalidation).execute(
        line.id, command, manager_actor
    )

    assert updated.name == "Filling Line B"
    assert updated.version == 2
    assert updated.reason == "Renamed after audit"
    mock_uow.production_lines.update.assert_awaited_once()

    entry = mock_uow.audit_entries.append.call_args.args[0]
    assert entry.action == AuditAction.UPDATE
    assert entry.details == {
        "changes": {"name": "Filling Line B"},
        "previousValues": {"name": "Filling Line A"},
    }


@pytest.mark.asyncio
async def test_update_production_line_without_changes_is_audited_without_version_bump(
    mock_uow, mock_invalidation, manager_actor
):
    line = make_line()
    mock_uow.production_lines.get_for_update.return_value = line
    command = UpdateProductionLineCommand(name="Filling Line A", reason="Confirmed name")

    updated = await UpdateProductionLineUseCase(mock_uow, mock_invalidation).execute(
        line.id, command, manager_actor
    )

    assert updated.version == 1
    mock_uow.production_lines.update.assert_not_awaited()
    entry = mock_uow.audit_entries.append.call_args.args[0]
    assert entry.details == {"changes": {}, "previousValues": {}}
    assert entry.reason == "Confirmed name"


@pytest.mark.asyncio
async def test_update_production_line_status_is_recorded_as_value(
    mock_uow, mock_invalidation, manager_actor
):
    line = make_line()
    mock_uow.production_lines.get_for_update.return_value = line
    command = UpdateProductionLineCommand(
        status=ProductionLineStatus.MAINTENANCE, reason="Scheduled maintenance"
    )

    await UpdateProductionLineUseCase(mock_uow, mock_invalidation).execute(
        line.id, command, manager_actor
    )

    entry = mock_uow.audit_entries.append.call_args.args[0]
    assert entry.details["changes"] == {"status": "MAINTENANCE"}
    assert entry.details["previousValues"] == {"status": "ACTIVE"}


@pytest.mark.asyncio
async def test_update_missing_production_line_is_not_found(
    mock_uow, mock_invalidation, manager_actor
):
    mock_uow.production_lines.get_for_update.return_value = None
    command = UpdateProductionLineCommand(name="Filling Line B", reason="Rename")

    with pytest.raises(NotFoundError):
        await UpdateProductionLineUseCase(mock_uow, mock_invalidation).execute(
            uuid4(), command, manager_actor
        )

    mock_uow.audit_entries.append.assert_not_awaited()
    mock_invalidation.publish_for.assert_not_awaited()


@pytest.mark.asyncio
async def test_deactivate_production_line(mock_uow, mock_invalidation, manager_actor):
    line = make_line()
    mock_uow.production_lines.get_for_update.return_value = line
    mock_uow.processes.count_unfinished.return_value = 0

    result = await DeactivateProductionLineUseCase(mock_uow, mock_invalidation).execute(
        line.id, "Line decommissioned", manager_actor
    )

    assert result.is_active is False
    assert result.status == ProductionLineStatus.INACTIVE
    assert result.version == 2

    entry = mock_uow.audit_entries.append.call_args.args[0]
    assert entry.action == AuditAction.DELETE
    assert entry.details["action"] == "deactivation"
    assert entry.details["previouslyActive"] is True
    assert entry.details["name"] == "Filling Line A"
    mock_invalidation.publish_for.assert_awaited_once_with("ProductionLine", line.id)


@pytest.mark.asyncio
async def test_deactivate_production_line_with_unfinished_processes_is_rejected(
    mock_uow, mock_invalidation, manager_actor
):
    line = make_line()
    mock_uow.production_lines.get_for_update.return_value = line
    mock_uow.processes.count_unfinished.return_value = 2

    with pytest.raises(ConflictError) as exc_info:
        await DeactivateProductionLineUseCase(mock_uow, mock_invalidation).execute(
            line.id, "Line decommissioned", manager_actor
        )

    assert "2 active processes" in exc_info.value.message
    assert line.is_active is True
    mock_uow.production_lines.update.assert_not_awaited()
    mock_uow.audit_entries.append.assert_not_awaited()


@pytest.mark.asyncio
async def test_deactivate_inactive_production_line_is_conflict(
    mock_uow, mock_invalidation, manager_actor
):
    line = make_line(is_active=False, status=ProductionLineStatus.INACTIVE)
    mock_uow.production_lines.get_for_update.return_value = line

    with pytest.raises(ConflictError) as exc_info:
        await DeactivateProductionLineUseCase(mock_uow, mock_invalidation).execute(
            line.id, "Again", manager_actor
        )

    assert exc_info.value.message == "Production line is already deactivated"


@pytest.mark.asyncio
async def test_get_missing_production_line_is_not_found(mock_uow):
    mock_uow.production_lines.get_by_id.return_value = None

    with pytest.raises(NotFoundError):
        await GetProductionLineUseCase(mock_uow).execute(uuid4())
