"""
User Entity

A person who operates or supervises production.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a person acting on production data.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash, never audited
    - Only administrators can change roles
    - Deactivation anonymizes email/first_name/last_name in the same transaction
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    role: UserRole = Field(default=UserRole.OPERATOR)

    version: int = Field(default=1)
    is_active: bool = Field(default=True)

    # None for the bootstrap administrator
    created_by: Optional[UUID] = Field(default=None)
    reason: str = Field(max_length=500)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )

    __table_args__ = (Index("idx_user_role_active", "role", "is_active"),)
