"""
Process Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.app.use_cases.base import Reason, requested_fields
from src.domain.entities import DEFAULT_PROCESS_COLOR, ProcessStatus

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
MAX_DURATION_MINUTES = 525600  # one year
CANVAS_BOUND = 10000


# ============================================================================
# Command DTOs
# ============================================================================


class CreateProcessCommand(BaseModel):
    """Create process intent"""

    title: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    duration: Optional[int] = Field(None, ge=1, le=MAX_DURATION_MINUTES)
    progress: float = Field(0, ge=0, le=100)
    status: ProcessStatus = ProcessStatus.PENDING
    x: float = Field(0, ge=-CANVAS_BOUND, le=CANVAS_BOUND)
    y: float = Field(0, ge=-CANVAS_BOUND, le=CANVAS_BOUND)
    color: str = Field(DEFAULT_PROCESS_COLOR, pattern=COLOR_PATTERN)
    production_line_id: UUID
    reason: Reason


class UpdateProcessCommand(BaseModel):
    """Partial update; unset fields are left untouched"""

    title: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    duration: Optional[int] = Field(None, ge=1, le=MAX_DURATION_MINUTES)
    progress: Optional[float] = Field(None, ge=0, le=100)
    status: Optional[ProcessStatus] = None
    x: Optional[float] = Field(None, ge=-CANVAS_BOUND, le=CANVAS_BOUND)
    y: Optional[float] = Field(None, ge=-CANVAS_BOUND, le=CANVAS_BOUND)
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)
    reason: Reason

    def requested_changes(self) -> Dict[str, Any]:
        return requested_fields(self, nullable=("description", "duration"))


class UpdateProgressCommand(BaseModel):
    progress: float = Field(..., ge=0, le=100)
    reason: Reason


# ============================================================================
# Response DTOs
# ============================================================================


class ProcessResponse(BaseModel):
    """Process representation returned by mutations and queries"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: Optional[str]
    duration: Optional[int]
    progress: float
    status: ProcessStatus
    x: float
    y: float
    color: str
    production_line_id: UUID
    version: int
    is_active: bool
    created_by: UUID
    reason: str
    created_at: datetime
    updated_at: datetime
