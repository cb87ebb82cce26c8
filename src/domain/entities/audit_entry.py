"""
AuditEntry Entity

Immutable compliance record of every mutation to a tracked entity.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow
from .enums import AuditAction


class AuditEntry(SQLModel, table=True):
    """
    AuditEntry entity - immutable record pairing an actor, action and reason
    with the mutation it documents.

    Business Rules:
    - Immutable (never updated or deleted)
    - Written in the same transaction as the mutation it documents
    - reason is mandatory and never blank (GxP justification)
    - details never contains credentials
    """

    __tablename__ = "audit_entries"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    actor_id: UUID = Field(nullable=False, index=True)
    action: AuditAction = Field(nullable=False)

    entity_type: str = Field(max_length=100, nullable=False)
    entity_id: str = Field(max_length=64, nullable=False)

    reason: str = Field(max_length=500, nullable=False)

    # Request provenance, absent for operations not bound to a request
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=500)

    details: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )

    __table_args__ = (
        Index("idx_audit_entity", "entity_type", "entity_id"),
        Index("idx_audit_created_at", "created_at"),
        CheckConstraint("length(trim(reason)) > 0", name="ck_audit_reason_not_blank"),
    )
