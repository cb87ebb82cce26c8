"""
ProductionLine Entity

A manufacturing line that groups processes.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow
from .enums import ProductionLineStatus

if TYPE_CHECKING:
    from .process import Process


class ProductionLine(SQLModel, table=True):
    """
    ProductionLine entity - a manufacturing line that owns processes.

    Business Rules:
    - Name must be unique across all lines
    - Soft delete only: is_active=False, the row is kept for audit history
    - Cannot be deactivated while it has active, unfinished processes
    - version increases on every mutation after creation
    """

    __tablename__ = "production_lines"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)

    status: ProductionLineStatus = Field(default=ProductionLineStatus.ACTIVE)

    version: int = Field(default=1)
    is_active: bool = Field(default=True)

    created_by: UUID = Field(nullable=False)
    reason: str = Field(max_length=500)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )

    # Relationships
    processes: list["Process"] = Relationship(back_populates="production_line")

    __table_args__ = (Index("idx_production_line_active_status", "is_active", "status"),)
