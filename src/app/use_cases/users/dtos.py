"""
User Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.app.use_cases.base import Reason, requested_fields
from src.domain.entities import UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class CreateUserCommand(BaseModel):
    """Create user intent"""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)  # bcrypt input limit
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    role: UserRole = UserRole.OPERATOR
    reason: Reason


class UpdateUserCommand(BaseModel):
    """Partial update; unset fields are left untouched"""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    role: Optional[UserRole] = None
    reason: Reason

    def requested_changes(self) -> Dict[str, Any]:
        return requested_fields(self, nullable=("first_name", "last_name"))


class ChangePasswordCommand(BaseModel):
    new_password: str = Field(..., min_length=8, max_length=72)
    reason: Reason


# ============================================================================
# Response DTOs
# ============================================================================


class UserResponse(BaseModel):
    """User representation; the password hash never leaves the service"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    role: UserRole
    version: int
    is_active: bool
    created_by: Optional[UUID]
    reason: str
    created_at: datetime
    updated_at: datetime
