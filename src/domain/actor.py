from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities.enums import UserRole


class ActorContext(BaseModel):
    """Authenticated identity a mutation is attributed to, with request provenance"""

    actor_id: UUID
    role: UserRole
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
