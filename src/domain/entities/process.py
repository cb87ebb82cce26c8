"""
Process Entity

A unit of work scheduled on a production line.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow
from .enums import ProcessStatus

if TYPE_CHECKING:
    from .production_line import ProductionLine


DEFAULT_PROCESS_COLOR = "#4F46E5"


class Process(SQLModel, table=True):
    """
    Process entity - a step executed on a production line.

    Business Rules:
    - (production_line_id, title) must be unique
    - Can only be created on an active production line
    - Soft delete only: is_active=False
    - COMPLETED and CANCELLED are terminal statuses
    """

    __tablename__ = "processes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)

    duration: Optional[int] = Field(default=None)  # minutes
    progress: float = Field(default=0.0)
    status: ProcessStatus = Field(default=ProcessStatus.PENDING)

    # Canvas placement
    x: float = Field(default=0.0)
    y: float = Field(default=0.0)
    color: str = Field(default=DEFAULT_PROCESS_COLOR, max_length=7)

    production_line_id: UUID = Field(
        foreign_key="production_lines.id", nullable=False, index=True
    )

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
    production_line: "ProductionLine" = Relationship(back_populates="processes")

    __table_args__ = (
        UniqueConstraint("production_line_id", "title", name="uq_process_line_title"),
        Index("idx_process_line_active_status", "production_line_id", "is_active", "status"),
    )
