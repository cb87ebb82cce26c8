from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import ApplicationConfig
from src.adapter.database import build_engine, build_session_factory, create_tables
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import verify_jwt
from src.app.services.audit_interceptor import AuditInterceptor
from src.app.services.invalidation import InvalidationBus
from src.app.services.unit_of_work import UnitOfWork
from src.domain.actor import ActorContext
from src.domain.entities import UserRole

engine = build_engine(ApplicationConfig.DB_URI, ApplicationConfig.SQLITE_BUSY_TIMEOUT)

AsyncSessionLocal = build_session_factory(engine)

invalidation_bus = InvalidationBus()

security = HTTPBearer()


async def init_db():
    await create_tables(engine)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_invalidation_bus() -> InvalidationBus:
    return invalidation_bus


def get_audit_interceptor(
    uow: UnitOfWork = Depends(get_unit_of_work),
    invalidation: InvalidationBus = Depends(get_invalidation_bus),
) -> AuditInterceptor:
    return AuditInterceptor(uow, invalidation)


def _client_ip(request: Request) -> Optional[str]:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client is not None:
        return request.client.host
    return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Returns:
        Decoded JWT payload containing user_id and role

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    payload = verify_jwt(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload


async def get_current_actor(
    request: Request,
    current_user: dict = Depends(get_current_user),
) -> ActorContext:
    """Identity every mutation is attributed to, with request provenance"""
    try:
        actor_id = UUID(current_user["user_id"])
        role = UserRole(current_user["role"])
    except (KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is missing user_id or role claims",
        )

    return ActorContext(
        actor_id=actor_id,
        role=role,
        ip_address=_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )


def require_roles(*roles: UserRole):
    """Route guard: the actor must hold one of roles"""

    async def dependency(actor: ActorContext = Depends(get_current_actor)) -> ActorContext:
        if actor.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires one of roles: {', '.join(role.value for role in roles)}",
            )
        return actor

    return dependency
