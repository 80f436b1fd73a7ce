"""
Update Content Status Use Case

Single interactive entry point into the content lifecycle state machine.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.content_lifecycle import (
    TRANSITION_FOR_STATUS,
    ContentTransition,
    apply_transition,
)
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    ContentStatus,
    PrincipalRole,
)
from .dtos import ContentUnitResponse, StatusChangeResponse
from .ownership import ensure_publisher_owns

AUDIT_ACTION_FOR_TRANSITION = {
    ContentTransition.submit: AuditAction.content_submitted,
    ContentTransition.activate: AuditAction.content_activated,
    ContentTransition.deactivate: AuditAction.content_deactivated,
    ContentTransition.suspend: AuditAction.content_suspended,
}


class UpdateContentStatusUseCase:
    """
    Use case for PATCH /content-units/{id}/status.

    Business Rules:
    - Caller must belong to the owning publisher (or be a platform owner)
    - SUSPENDED may only be requested by a platform owner
    - ACTIVATE needs at least one competency mapping and an ACTIVE publisher
    - Repeating the current status is a no-op success without an audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: SecurityContext,
        content_unit_id: UUID,
        status: ContentStatus,
        reason: Optional[str] = None,
    ) -> Result[StatusChangeResponse]:
        transition = TRANSITION_FOR_STATUS.get(status)
        if transition is None:
            return Return.err(
                Error(errors.INVALID_STATUS, f"Status {status.value} cannot be requested")
            )

        async with self.uow:
            unit = await self.uow.content_units.get_by_id(content_unit_id)
            if unit is None:
                return Return.err(Error(errors.CONTENT_NOT_FOUND, "Content unit not found"))

            owned = await ensure_publisher_owns(self.uow, context, unit)
            if owned.is_err():
                return owned

            if (
                transition == ContentTransition.suspend
                and context.role != PrincipalRole.bitflow_owner
            ):
                await self.uow.audit_events.create(
                    AuditEvent(
                        tenant_id=context.tenant_id,
                        user_id=context.user_id,
                        action=AuditAction.permission_denied.value,
                        entity_type="ContentUnit",
                        entity_id=str(unit.id),
                        description=f"Role {context.role.value} cannot suspend content",
                        event_metadata={
                            "role": context.role.value,
                            "path": context.client.path,
                            "method": context.client.method,
                        },
                        ip_address=context.client.ip_address,
                        user_agent=context.client.user_agent,
                    )
                )
                await self.uow.commit()
                return Return.err(
                    Error(errors.INSUFFICIENT_ROLE, "Only platform owners can suspend content")
                )

            if transition == ContentTransition.activate:
                publisher = await self.uow.tenants.get_by_id(unit.publisher_id)
                if publisher is None or not publisher.is_available(utc_now()):
                    return Return.err(
                        Error(errors.TENANT_NOT_ACTIVE, "Publisher is not active")
                    )

            mapping_count = await self.uow.competencies.count_mappings(unit.id)
            outcome = apply_transition(
                unit, transition, mapping_count, context.user_id, utc_now(), reason
            )
            if outcome.is_err():
                return outcome

            result = outcome.value
            if result.changed:
                await self.uow.content_units.update(unit)
                audit = AuditEvent(
                    tenant_id=unit.publisher_id,
                    user_id=context.user_id,
                    action=AUDIT_ACTION_FOR_TRANSITION[transition].value,
                    entity_type="ContentUnit",
                    entity_id=str(unit.id),
                    description=f"Content status changed to {result.new_status.value}: {unit.title}",
                    event_metadata={
                        "previous_status": result.previous_status.value,
                        "new_status": result.new_status.value,
                        "reason": reason,
                    },
                    ip_address=context.client.ip_address,
                    user_agent=context.client.user_agent,
                )
                await self.uow.audit_events.create(audit)
                await self.uow.commit()

            return Return.ok(
                StatusChangeResponse(
                    content_unit=ContentUnitResponse.from_entity(unit),
                    previous_status=result.previous_status.value,
                    changed=result.changed,
                )
            )
