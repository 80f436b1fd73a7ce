from abc import ABC, abstractmethod

from src.domain.entities import AccessGrant


class IAccessGrantRepository(ABC):
    """AccessGrant repository interface - application layer"""

    @abstractmethod
    async def create(self, access_grant: AccessGrant) -> AccessGrant:
        """Create a new access grant (immutable)"""
        pass
