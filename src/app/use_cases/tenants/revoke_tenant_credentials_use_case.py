"""
Use Case: Revoke Tenant Credentials

Invalidates every refresh token and session of every principal bound to a
tenant with two set-based updates.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.entities import AuditAction, AuditEvent


class RevokedCredentials(BaseModel):
    refresh_tokens_revoked: int
    sessions_ended: int


async def revoke_all_for_tenant(
    uow: UnitOfWork, tenant_id: UUID, now: datetime
) -> RevokedCredentials:
    """Bulk revocation inside the caller's transaction; the caller commits."""
    tokens = await uow.refresh_tokens.revoke_all_by_tenant_id(tenant_id, now)
    sessions = await uow.sessions.deactivate_all_by_tenant_id(tenant_id, now)
    return RevokedCredentials(refresh_tokens_revoked=tokens, sessions_ended=sessions)


class RevokeTenantCredentialsUseCase:
    """
    Revoke every credential of a tenant's principals.

    Idempotent: a second run revokes nothing and still succeeds.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID, actor_id: UUID = None) -> Result[RevokedCredentials]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error(errors.TENANT_NOT_FOUND, "Tenant not found"))

            revoked = await revoke_all_for_tenant(self.uow, tenant_id, utc_now())

            audit_event = AuditEvent(
                tenant_id=tenant_id,
                user_id=actor_id,
                action=AuditAction.tenant_credentials_revoked.value,
                entity_type="Tenant",
                entity_id=str(tenant_id),
                description=f"Revoked all credentials for tenant '{tenant.name}'",
                event_metadata=revoked.model_dump(),
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(revoked)
