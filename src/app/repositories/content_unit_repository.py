from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ContentStatus, ContentUnit


class IContentUnitRepository(ABC):
    """ContentUnit repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, content_unit_id: UUID) -> Optional[ContentUnit]:
        """Get content unit by ID"""
        pass

    @abstractmethod
    async def create(self, content_unit: ContentUnit) -> ContentUnit:
        """Create a new content unit"""
        pass

    @abstractmethod
    async def update(self, content_unit: ContentUnit) -> ContentUnit:
        """Update existing content unit"""
        pass

    @abstractmethod
    async def get_by_publisher_and_status(
        self, publisher_id: UUID, status: ContentStatus
    ) -> List[ContentUnit]:
        """Get all units of a publisher in a given status"""
        pass
