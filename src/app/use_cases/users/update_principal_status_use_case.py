"""
Update Principal Status Use Case

Activates, deactivates or suspends a principal. Leaving ACTIVE revokes every
refresh token and ends every session of the principal in the same
transaction.
"""

import logging
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import cross_tenant_audit_event, cross_tenant_error
from src.domain import errors
from src.domain.base import utc_now
from src.domain.entities import AuditAction, AuditEvent, PrincipalStatus
from src.domain.tenant_isolation import TenantReference, find_violation

logger = logging.getLogger(__name__)

PLATFORM_SCOPE = "platform"


class UpdatePrincipalStatusResponse(BaseModel):
    user_id: str
    status: str
    previous_status: str
    refresh_tokens_revoked: int = 0
    sessions_ended: int = 0


class UpdatePrincipalStatusUseCase:
    """
    Use case for PATCH /principals/{id}/status.

    Business Rules:
    - Target principal must exist
    - Tenant admins may only act on principals of their own tenant
    - Principals cannot change their own status
    - Non-ACTIVE status revokes all refresh tokens and ends all sessions
    - Repeating the current status is a no-op success
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: SecurityContext,
        user_id: UUID,
        status: PrincipalStatus,
        reason: Optional[str] = None,
    ) -> Result[UpdatePrincipalStatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(errors.USER_NOT_FOUND, "User not found"))

            target_tenant = str(user.tenant_id) if user.tenant_id else PLATFORM_SCOPE
            violation = find_violation(
                str(context.tenant_id) if context.tenant_id else None,
                context.has_platform_scope,
                [TenantReference("entity", "tenant_id", target_tenant)],
            )
            if violation is not None:
                await self.uow.audit_events.create(cross_tenant_audit_event(context, violation))
                await self.uow.commit()
                logger.warning(
                    "Principal %s denied status change on user %s of tenant %s",
                    context.user_id,
                    user_id,
                    target_tenant,
                )
                return Return.err(cross_tenant_error())

            if user.id == context.user_id:
                return Return.err(
                    Error(errors.INVALID_STATUS, "Principals cannot change their own status")
                )

            previous = user.status
            response = UpdatePrincipalStatusResponse(
                user_id=str(user.id),
                status=status.value,
                previous_status=previous.value,
            )
            if previous == status:
                return Return.ok(response)

            now = utc_now()
            user.status = status
            user.updated_at = now
            await self.uow.users.update(user)

            if status != PrincipalStatus.active:
                response.refresh_tokens_revoked = (
                    await self.uow.refresh_tokens.revoke_all_by_user_id(user.id, now)
                )
                response.sessions_ended = await self.uow.sessions.deactivate_all_by_user_id(
                    user.id, now
                )

            audit = AuditEvent(
                tenant_id=user.tenant_id,
                user_id=context.user_id,
                action=AuditAction.principal_status_changed.value,
                entity_type="User",
                entity_id=str(user.id),
                description=f"Status of {user.email} changed to {status.value}",
                event_metadata={
                    "target_user_id": str(user.id),
                    "previous_status": previous.value,
                    "new_status": status.value,
                    "reason": reason,
                    "refresh_tokens_revoked": response.refresh_tokens_revoked,
                    "sessions_ended": response.sessions_ended,
                },
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(response)
