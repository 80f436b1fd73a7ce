"""
ContentUnit Entity

Protected learning content owned by one publisher.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import CompetencyMappingStatus, ContentStatus


class ContentUnit(SQLModel, table=True):
    """
    ContentUnit entity - learning content gated by competency mapping.

    Business Rules:
    - Owned by exactly one publisher tenant
    - Status may enter ACTIVE only with at least one competency mapping
    - Status changes go through src.domain.content_lifecycle
    - session_expiry_minutes bounds every access grant issued for the unit
    """

    __tablename__ = "content_units"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    publisher_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    content_type: str = Field(default="BOOK", max_length=32)
    delivery_type: str = Field(default="EMBED", max_length=32)
    secure_access_url: str = Field(max_length=1024)
    estimated_duration: int = Field(default=0)  # minutes

    status: ContentStatus = Field(default=ContentStatus.pending_mapping)
    competency_mapping_status: CompetencyMappingStatus = Field(
        default=CompetencyMappingStatus.pending
    )

    watermark_enabled: bool = Field(default=True)
    session_expiry_minutes: int = Field(default=30)

    # Lifecycle attribution
    activated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    activated_by: Optional[UUID] = Field(default=None)
    deactivated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    deactivated_by: Optional[UUID] = Field(default=None)
    deactivation_reason: Optional[str] = Field(default=None, max_length=500)

    created_by: UUID = Field(nullable=False)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_content_publisher_status", "publisher_id", "status"),
    )
