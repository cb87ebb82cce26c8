from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.entities import AuditAction


class AuditEntryResponse(BaseModel):
    """One immutable audit record as exposed to reviewers"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    actor_id: UUID
    action: AuditAction
    entity_type: str
    entity_id: str
    reason: str
    ip_address: Optional[str]
    user_agent: Optional[str]
    details: Optional[Dict[str, Any]]
    created_at: datetime


class AuditTrailResponse(BaseModel):
    entries: List[AuditEntryResponse]
    limit: int
    offset: int
