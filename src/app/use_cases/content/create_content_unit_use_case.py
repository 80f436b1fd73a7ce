"""
Create Content Unit Use Case

Creates a content unit in the status the lifecycle assigns to it.
"""

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.content_lifecycle import initial_status
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    CompetencyMapping,
    CompetencyMappingStatus,
    ContentStatus,
    ContentUnit,
    TenantKind,
)
from .dtos import ContentUnitResponse, CreateContentUnitCommand


class CreateContentUnitUseCase:
    """
    Use case for publishing a new content unit.

    Business Rules:
    - Owning publisher is the caller's tenant (platform owners name it)
    - Publisher must be ACTIVE
    - Every competency id must reference an ACTIVE competency
    - Zero mappings -> PENDING_MAPPING; one or more -> ACTIVE, attributed
      to the creator; draft=True -> DRAFT
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: SecurityContext, command: CreateContentUnitCommand
    ) -> Result[ContentUnitResponse]:
        async with self.uow:
            publisher_id = command.publisher_id or context.tenant_id
            publisher = None
            if publisher_id is not None:
                publisher = await self.uow.tenants.get_by_id(publisher_id)
            if publisher is None or publisher.kind != TenantKind.publisher:
                return Return.err(Error(errors.TENANT_NOT_FOUND, "Publisher not found"))
            if not publisher.is_available(utc_now()):
                return Return.err(Error(errors.TENANT_NOT_ACTIVE, "Publisher is not active"))

            competency_ids = list(dict.fromkeys(command.competency_ids))
            competencies = await self.uow.competencies.get_active_by_ids(competency_ids)
            if len(competencies) != len(competency_ids):
                return Return.err(
                    Error(
                        errors.INVALID_COMPETENCY,
                        "One or more competency IDs are invalid or not active",
                    )
                )

            now = utc_now()
            status = initial_status(len(competency_ids), draft=command.draft)
            if not competency_ids:
                mapping_status = CompetencyMappingStatus.pending
            elif command.mapping_complete:
                mapping_status = CompetencyMappingStatus.complete
            else:
                mapping_status = CompetencyMappingStatus.partial

            unit = ContentUnit(
                publisher_id=publisher.id,
                title=command.title,
                description=command.description,
                content_type=command.content_type,
                delivery_type=command.delivery_type,
                secure_access_url=command.secure_access_url,
                estimated_duration=command.estimated_duration,
                status=status,
                competency_mapping_status=mapping_status,
                watermark_enabled=command.watermark_enabled,
                session_expiry_minutes=(
                    command.session_expiry_minutes
                    or ApplicationConfig.DEFAULT_SESSION_EXPIRY_MINUTES
                ),
                created_by=context.user_id,
                created_at=now,
                updated_at=now,
            )
            if status == ContentStatus.active:
                unit.activated_at = now
                unit.activated_by = context.user_id
            await self.uow.content_units.create(unit)

            for competency_id in competency_ids:
                await self.uow.competencies.create_mapping(
                    CompetencyMapping(
                        content_unit_id=unit.id,
                        competency_id=competency_id,
                        created_by=context.user_id,
                    )
                )

            audit = AuditEvent(
                tenant_id=publisher.id,
                user_id=context.user_id,
                action=AuditAction.content_created.value,
                entity_type="ContentUnit",
                entity_id=str(unit.id),
                description=f"Created content unit: {unit.title}",
                event_metadata={
                    "status": status.value,
                    "mapping_count": len(competency_ids),
                    "auto_activated": status == ContentStatus.active,
                },
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(ContentUnitResponse.from_entity(unit))
