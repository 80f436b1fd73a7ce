from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.content_unit_repository import IContentUnitRepository
from src.domain.entities import ContentStatus, ContentUnit


class ContentUnitRepository(IContentUnitRepository):
    """ContentUnit repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, content_unit_id: UUID) -> Optional[ContentUnit]:
        """Get content unit by ID"""
        stmt = select(ContentUnit).where(ContentUnit.id == content_unit_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, content_unit: ContentUnit) -> ContentUnit:
        """Create a new content unit"""
        self.session.add(content_unit)
        await self.session.flush()
        await self.session.refresh(content_unit)
        return content_unit

    async def update(self, content_unit: ContentUnit) -> ContentUnit:
        """Update existing content unit"""
        self.session.add(content_unit)
        await self.session.flush()
        await self.session.refresh(content_unit)
        return content_unit

    async def get_by_publisher_and_status(
        self, publisher_id: UUID, status: ContentStatus
    ) -> List[ContentUnit]:
        """Get all units of a publisher in a given status"""
        stmt = select(ContentUnit).where(
            ContentUnit.publisher_id == publisher_id,
            ContentUnit.status == status,
        )
        result = await self.session.exec(stmt)
        return list(result.all())
