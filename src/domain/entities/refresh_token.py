"""
RefreshToken Entity

Persisted, revocable refresh tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - opaque, revocable refresh credential.

    Business Rules:
    - Token is SHA-256 hash of a secure random string (raw value returned once)
    - Revoked on logout, password change, principal or tenant suspension
    - Expires after REFRESH_TOKEN_EXPIRE_DAYS
    - Validation and revocation are single conditional updates
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 output

    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_refresh_token_expires_at", "expires_at"),
        Index("idx_refresh_token_user_revoked", "user_id", "revoked"),
    )
