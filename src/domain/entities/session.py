"""
Session Entity

Live login sessions, one per successful authentication.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Session(SQLModel, table=True):
    """
    Session entity - a device login tied to one refresh token.

    Business Rules:
    - Created on login alongside the refresh token
    - Deactivated together with its refresh token (logout, suspension,
      password change)
    - Stale sessions are expired by the maintenance sweep
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    refresh_token_id: UUID = Field(foreign_key="refresh_tokens.id", nullable=False)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    is_active: bool = Field(default=True)
    ended_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_user_active", "user_id", "is_active"),
        Index("idx_session_refresh_token", "refresh_token_id"),
    )
