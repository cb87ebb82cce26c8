from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.adapter.database import build_engine, build_session_factory, create_tables
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import generate_jwt
from src.app.services.invalidation import InvalidationBus
from src.depends import get_invalidation_bus, get_unit_of_work
from src.domain.actor import ActorContext
from src.domain.entities import UserRole


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", sqlite_busy_timeout=15)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_uow(session_factory):
    """Factory of units of work, each bound to its own session"""
    sessions = []

    def factory() -> SqlAlchemyUnitOfWork:
        session = session_factory()
        sessions.append(session)
        return SqlAlchemyUnitOfWork(session)

    yield factory

    for session in sessions:
        await session.close()


@pytest.fixture
def bus():
    return InvalidationBus()


@pytest.fixture
def published(bus):
    """Entity tags received by a subscriber on the bus"""
    tags = []

    async def subscriber(event):
        tags.append(event.entity_tag)

    bus.subscribe(subscriber)
    return tags


@pytest.fixture
def actor():
    return ActorContext(
        actor_id=uuid4(),
        role=UserRole.ADMIN,
        ip_address="192.168.10.5",
        user_agent="integration-test/1.0",
    )


@pytest.fixture
def auth_headers():
    def build(role: UserRole = UserRole.ADMIN, user_id=None, user_agent="integration-test/1.0"):
        token = generate_jwt(user_id or uuid4(), role.value)
        return {"Authorization": f"Bearer {token}", "User-Agent": user_agent}

    return build


@pytest_asyncio.fixture
async def client(session_factory, bus):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_invalidation_bus] = lambda: bus

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
