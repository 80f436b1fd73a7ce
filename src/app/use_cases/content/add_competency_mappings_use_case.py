"""
Add Competency Mappings Use Case

Maps a content unit to governance competencies. Never changes the unit's
publish status; activation stays an explicit request.
"""

from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    CompetencyMapping,
    CompetencyMappingStatus,
)
from .dtos import ContentUnitResponse
from .ownership import ensure_publisher_owns


class AddCompetencyMappingsUseCase:
    """
    Use case for adding competency mappings to a content unit.

    Business Rules:
    - Caller must belong to the owning publisher (or be a platform owner)
    - Every competency must be ACTIVE
    - Already-mapped competencies are skipped
    - Mapping status becomes COMPLETE when requested, otherwise PARTIAL
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: SecurityContext,
        content_unit_id: UUID,
        competency_ids: List[UUID],
        complete: bool = False,
    ) -> Result[ContentUnitResponse]:
        async with self.uow:
            unit = await self.uow.content_units.get_by_id(content_unit_id)
            if unit is None:
                return Return.err(Error(errors.CONTENT_NOT_FOUND, "Content unit not found"))

            owned = await ensure_publisher_owns(self.uow, context, unit)
            if owned.is_err():
                return owned

            requested = list(dict.fromkeys(competency_ids))
            if not requested:
                return Return.err(
                    Error(errors.INVALID_COMPETENCY, "At least one competency ID is required")
                )
            competencies = await self.uow.competencies.get_active_by_ids(requested)
            if len(competencies) != len(requested):
                return Return.err(
                    Error(
                        errors.INVALID_COMPETENCY,
                        "One or more competency IDs are invalid or not active",
                    )
                )

            existing = set(await self.uow.competencies.get_mapped_competency_ids(unit.id))
            added = [cid for cid in requested if cid not in existing]
            for competency_id in added:
                await self.uow.competencies.create_mapping(
                    CompetencyMapping(
                        content_unit_id=unit.id,
                        competency_id=competency_id,
                        created_by=context.user_id,
                    )
                )

            unit.competency_mapping_status = (
                CompetencyMappingStatus.complete if complete else CompetencyMappingStatus.partial
            )
            unit.updated_at = utc_now()
            await self.uow.content_units.update(unit)

            audit = AuditEvent(
                tenant_id=unit.publisher_id,
                user_id=context.user_id,
                action=AuditAction.content_mapped.value,
                entity_type="ContentUnit",
                entity_id=str(unit.id),
                description=f"Mapped {len(added)} competencies to: {unit.title}",
                event_metadata={
                    "added": [str(cid) for cid in added],
                    "mapping_status": unit.competency_mapping_status.value,
                },
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(ContentUnitResponse.from_entity(unit))
