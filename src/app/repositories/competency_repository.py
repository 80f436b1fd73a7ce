from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import Competency, CompetencyMapping


class ICompetencyRepository(ABC):
    """Competency and CompetencyMapping repository interface - application layer"""

    @abstractmethod
    async def get_active_by_ids(self, competency_ids: List[UUID]) -> List[Competency]:
        """Get active competencies among the given IDs"""
        pass

    @abstractmethod
    async def get_mapped_competency_ids(self, content_unit_id: UUID) -> List[UUID]:
        """Competency IDs already mapped to a content unit"""
        pass

    @abstractmethod
    async def count_mappings(self, content_unit_id: UUID) -> int:
        """Number of competency mappings of a content unit"""
        pass

    @abstractmethod
    async def create_mapping(self, mapping: CompetencyMapping) -> CompetencyMapping:
        """Create a new mapping"""
        pass
