from typing import List
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.competency_repository import ICompetencyRepository
from src.domain.entities import Competency, CompetencyMapping, CompetencyStatus


class CompetencyRepository(ICompetencyRepository):
    """Competency repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active_by_ids(self, competency_ids: List[UUID]) -> List[Competency]:
        """Get active competencies among the given IDs"""
        if not competency_ids:
            return []
        stmt = select(Competency).where(
            Competency.id.in_(competency_ids),
            Competency.status == CompetencyStatus.active,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_mapped_competency_ids(self, content_unit_id: UUID) -> List[UUID]:
        """Competency IDs already mapped to a content unit"""
        stmt = select(CompetencyMapping.competency_id).where(
            CompetencyMapping.content_unit_id == content_unit_id
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_mappings(self, content_unit_id: UUID) -> int:
        """Number of competency mappings of a content unit"""
        stmt = select(func.count(CompetencyMapping.id)).where(
            CompetencyMapping.content_unit_id == content_unit_id
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create_mapping(self, mapping: CompetencyMapping) -> CompetencyMapping:
        """Create a new mapping"""
        self.session.add(mapping)
        await self.session.flush()
        await self.session.refresh(mapping)
        return mapping
