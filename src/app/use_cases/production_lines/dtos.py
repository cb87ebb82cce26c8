"""
Production Line Use Case DTOs (Data Transfer Objects)

Command and Response classes for the production line domain.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.app.use_cases.base import Reason, requested_fields
from src.domain.entities import ProductionLineStatus


# ============================================================================
# Command DTOs
# ============================================================================


class CreateProductionLineCommand(BaseModel):
    """Create production line intent"""

    name: str = Field(..., min_length=2, max_length=100)
    status: ProductionLineStatus = ProductionLineStatus.ACTIVE
    reason: Reason


class UpdateProductionLineCommand(BaseModel):
    """Partial update; unset fields are left untouched"""

    name: Optional[str] = Field(None, min_length=2, max_length=100)
    status: Optional[ProductionLineStatus] = None
    reason: Reason

    def requested_changes(self) -> Dict[str, Any]:
        return requested_fields(self)


# ============================================================================
# Response DTOs
# ============================================================================


class ProductionLineResponse(BaseModel):
    """Production line representation returned by mutations and queries"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    status: ProductionLineStatus
    version: int
    is_active: bool
    created_by: UUID
    reason: str
    created_at: datetime
    updated_at: datetime
