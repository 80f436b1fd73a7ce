"""
User Entity

Represents an authenticated principal (owner, publisher admin, college staff,
faculty or student).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import PrincipalRole, PrincipalStatus


class User(SQLModel, table=True):
    """
    User entity - a principal bound to at most one tenant.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor from config)
    - tenant_id binds the principal to one college or publisher (or none)
    - Never physically deleted while referenced by audit rows (soft-disable)
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    full_name: str = Field(max_length=255)

    role: PrincipalRole = Field(nullable=False)
    status: PrincipalStatus = Field(default=PrincipalStatus.active)

    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id")

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_tenant_id", "tenant_id"),
        Index("idx_user_status", "status"),
    )
