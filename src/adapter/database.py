from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# Registers every table on SQLModel.metadata
import src.domain.entities  # noqa: F401


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(db_uri: str, sqlite_busy_timeout: int = 15) -> AsyncEngine:
    """Async engine; on SQLite, foreign keys are enforced and writers wait on locks"""
    if db_uri.startswith("sqlite"):
        engine = create_async_engine(
            db_uri, echo=False, connect_args={"timeout": sqlite_busy_timeout}
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_async_engine(db_uri, echo=False, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
