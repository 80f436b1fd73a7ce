"""
Logout Use Case

Revokes one refresh token of the calling principal and ends its session.
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.credentials import hash_refresh_token
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditAction, AuditEvent
from .dtos import StatusResponse


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Only tokens owned by the caller can be revoked
    - Idempotent: unknown or already revoked tokens still succeed
    - The session bound to the token is ended in the same transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: SecurityContext, refresh_token: str) -> Result[StatusResponse]:
        async with self.uow:
            now = utc_now()
            token_id: UUID = await self.uow.refresh_tokens.revoke_for_user(
                context.user_id, hash_refresh_token(refresh_token), now
            )
            if token_id is not None:
                await self.uow.sessions.deactivate_by_refresh_token_id(token_id, now)

            audit = AuditEvent(
                tenant_id=context.tenant_id,
                user_id=context.user_id,
                action=AuditAction.logout.value,
                entity_type="User",
                entity_id=str(context.user_id),
                description="User logged out",
                event_metadata={"token_found": token_id is not None},
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(StatusResponse(status="logged_out", message="Logged out successfully"))
