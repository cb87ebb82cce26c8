from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.domain.actor import ActorContext
from src.domain.entities import UserRole


def make_actor(role: UserRole = UserRole.ADMIN, **overrides) -> ActorContext:
    data = {
        "actor_id": uuid4(),
        "role": role,
        "ip_address": "10.0.0.7",
        "user_agent": "pytest-agent/1.0",
    }
    data.update(overrides)
    return ActorContext(**data)


def _mock_repository(*methods):
    repository = MagicMock()
    for method in methods:
        setattr(repository, method, AsyncMock())
    # Writes hand back the entity they were given
    for method in ("create", "update", "append"):
        if method in methods:
            getattr(repository, method).side_effect = lambda entity: entity
    return repository


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork; execute runs the work against the mock and commits"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    async def execute(work):
        result = await work(uow)
        await uow.commit()
        return result

    uow.execute = AsyncMock(side_effect=execute)

    uow.production_lines = _mock_repository(
        "get_by_id", "get_for_update", "create", "update", "list"
    )
    uow.processes = _mock_repository(
        "get_by_id", "get_for_update", "create", "update", "list", "count_unfinished"
    )
    uow.users = _mock_repository(
        "get_by_id", "get_for_update", "create", "update", "list"
    )
    uow.audit_entries = _mock_repository("append", "find_by_entity", "find_by_actor", "count")
    return uow


@pytest.fixture
def mock_invalidation():
    invalidation = MagicMock()
    invalidation.publish = AsyncMock()
    invalidation.publish_for = AsyncMock()
    return invalidation


@pytest.fixture
def actor_factory():
    return make_actor


@pytest.fixture
def admin_actor():
    return make_actor(UserRole.ADMIN)


@pytest.fixture
def manager_actor():
    return make_actor(UserRole.MANAGER)


@pytest.fixture
def operator_actor():
    return make_actor(UserRole.OPERATOR)
