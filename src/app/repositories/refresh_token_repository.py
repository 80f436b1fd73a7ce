from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import RefreshToken


class IRefreshTokenRepository(ABC):
    """RefreshToken repository interface - application layer"""

    @abstractmethod
    async def create(self, refresh_token: RefreshToken) -> RefreshToken:
        """Persist a new refresh token row"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """Find a token row by SHA-256 hash of the raw token"""
        pass

    @abstractmethod
    async def mark_used_if_valid(self, token_id: UUID, now: datetime) -> bool:
        """
        Conditionally stamp last_used_at on a non-revoked, unexpired row.

        Single check-and-set statement. Returns False if the row was revoked
        or expired at the moment of the update.
        """
        pass

    @abstractmethod
    async def revoke_if_valid(self, token_id: UUID, now: datetime) -> bool:
        """Conditionally revoke a non-revoked, unexpired row (rotation)"""
        pass

    @abstractmethod
    async def revoke_for_user(self, user_id: UUID, token_hash: str, now: datetime) -> Optional[UUID]:
        """Revoke one token of a user. Returns the token id if a row was revoked."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke all tokens of a user. Returns count of revoked tokens."""
        pass

    @abstractmethod
    async def revoke_all_by_tenant_id(self, tenant_id: UUID, now: datetime) -> int:
        """Bulk-revoke tokens of every user bound to a tenant. Returns count."""
        pass
