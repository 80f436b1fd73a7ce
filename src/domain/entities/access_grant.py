"""
AccessGrant Entity

Immutable log of every content viewing grant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utc_now


class AccessGrant(SQLModel, table=True):
    """
    AccessGrant entity - one row per viewing attempt.

    Business Rules:
    - Immutable (never updated after creation)
    - session_id is unique per grant
    - tenant_name is a snapshot taken at issuance
    """

    __tablename__ = "access_grants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    session_id: UUID = Field(unique=True, index=True)

    content_unit_id: UUID = Field(foreign_key="content_units.id", nullable=False)
    user_id: UUID = Field(foreign_key="users.id", nullable=False)
    tenant_id: Optional[UUID] = Field(default=None)
    tenant_name: Optional[str] = Field(default=None, max_length=255)
    role: str = Field(max_length=32)

    device_type: str = Field(default="web", max_length=32)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    watermark_payload: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    issued_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_access_grant_unit", "content_unit_id"),
        Index("idx_access_grant_user", "user_id"),
    )
