from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def deactivate_by_refresh_token_id(self, refresh_token_id: UUID, now: datetime) -> int:
        """End the session bound to a refresh token"""
        pass

    @abstractmethod
    async def deactivate_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """End all live sessions of a user. Returns count."""
        pass

    @abstractmethod
    async def deactivate_all_by_tenant_id(self, tenant_id: UUID, now: datetime) -> int:
        """Bulk-end live sessions of every user bound to a tenant. Returns count."""
        pass

    @abstractmethod
    async def deactivate_expired(self, now: datetime) -> int:
        """End live sessions whose expires_at has passed. Returns count."""
        pass
