"""
Use Case: Update Tenant Status

Platform-owner endpoint to activate, suspend, deactivate or expire a tenant.
Leaving ACTIVE revokes every credential of the tenant's principals and, for
publishers, takes their ACTIVE content out of circulation.
"""

import logging
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.content import transition_publisher_content
from src.app.use_cases.tenants import revoke_all_for_tenant
from src.domain import errors
from src.domain.base import utc_now
from src.domain.content_lifecycle import ContentTransition
from src.domain.entities import AuditAction, AuditEvent, TenantKind, TenantStatus

logger = logging.getLogger(__name__)


class UpdateTenantStatusResponse(BaseModel):
    """Response DTO for UpdateTenantStatusUseCase"""

    tenant_id: str
    status: str
    previous_status: str
    refresh_tokens_revoked: int = 0
    sessions_ended: int = 0
    content_units_affected: int = 0


class UpdateTenantStatusUseCase:
    """
    Change a tenant's status.

    Business Logic:
    1. Validate tenant exists
    2. Update tenant status
    3. If the new status is not ACTIVE, revoke all tenant credentials
    4. For publishers: SUSPENDED bulk-suspends ACTIVE content,
       INACTIVE/EXPIRED bulk-deactivates it
    5. Create audit event and commit everything together

    Idempotent: repeating the current status succeeds and changes nothing.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: SecurityContext,
        tenant_id: UUID,
        status: TenantStatus,
        reason: Optional[str] = None,
    ) -> Result[UpdateTenantStatusResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error(errors.TENANT_NOT_FOUND, "Tenant not found"))

            previous = tenant.status
            response = UpdateTenantStatusResponse(
                tenant_id=str(tenant.id),
                status=status.value,
                previous_status=previous.value,
            )
            if previous == status:
                return Return.ok(response)

            now = utc_now()
            tenant.status = status
            tenant.updated_at = now
            await self.uow.tenants.update(tenant)

            if status != TenantStatus.active:
                revoked = await revoke_all_for_tenant(self.uow, tenant.id, now)
                response.refresh_tokens_revoked = revoked.refresh_tokens_revoked
                response.sessions_ended = revoked.sessions_ended

                if tenant.kind == TenantKind.publisher:
                    transition = (
                        ContentTransition.suspend
                        if status == TenantStatus.suspended
                        else ContentTransition.deactivate
                    )
                    response.content_units_affected = await transition_publisher_content(
                        self.uow,
                        tenant,
                        transition,
                        context.user_id,
                        reason or f"Publisher {status.value.lower()}",
                        now,
                    )

            audit_event = AuditEvent(
                tenant_id=tenant.id,
                user_id=context.user_id,
                action=AuditAction.tenant_status_changed.value,
                entity_type="Tenant",
                entity_id=str(tenant.id),
                description=f"Tenant '{tenant.name}' status changed to {status.value}",
                event_metadata={
                    "previous_status": previous.value,
                    "new_status": status.value,
                    "reason": reason,
                    "refresh_tokens_revoked": response.refresh_tokens_revoked,
                    "sessions_ended": response.sessions_ended,
                    "content_units_affected": response.content_units_affected,
                },
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(
                "Tenant %s status %s -> %s (%d tokens, %d sessions, %d content units)",
                tenant.id,
                previous.value,
                status.value,
                response.refresh_tokens_revoked,
                response.sessions_ended,
                response.content_units_affected,
            )
            return Return.ok(response)
