from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.access_grant_repository import IAccessGrantRepository
from src.domain.entities import AccessGrant


class AccessGrantRepository(IAccessGrantRepository):
    """AccessGrant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, access_grant: AccessGrant) -> AccessGrant:
        """Create a new access grant (immutable)"""
        self.session.add(access_grant)
        await self.session.flush()
        await self.session.refresh(access_grant)
        return access_grant
