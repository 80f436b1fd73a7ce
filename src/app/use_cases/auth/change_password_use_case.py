"""
Change Password Use Case

Rehashes the password and revokes every credential of the principal.
"""

from libs.result import Error, Result, Return
from src.app.services.credentials import hash_password, password_fits, verify_password
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.entities import AuditAction, AuditEvent
from .dtos import StatusResponse

MIN_PASSWORD_LENGTH = 8


class ChangePasswordUseCase:
    """
    Use case for changing the caller's password.

    Business Rules:
    - Current password must match (mismatch is audited)
    - New password must be 8 characters to 72 bytes long and differ from the current one
    - All refresh tokens are revoked and all sessions ended in the same
      transaction as the password update
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: SecurityContext, current_password: str, new_password: str
    ) -> Result[StatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(context.user_id)
            if user is None:
                return Return.err(Error(errors.USER_NOT_FOUND, "User not found"))

            if not verify_password(current_password, user.password_hash):
                audit = AuditEvent(
                    tenant_id=context.tenant_id,
                    user_id=user.id,
                    action=AuditAction.password_change_failed.value,
                    entity_type="User",
                    entity_id=str(user.id),
                    description="Current password is incorrect",
                    ip_address=context.client.ip_address,
                    user_agent=context.client.user_agent,
                )
                await self.uow.audit_events.create(audit)
                await self.uow.commit()
                return Return.err(
                    Error(errors.INVALID_CURRENT_PASSWORD, "Current password is incorrect")
                )

            if (
                len(new_password) < MIN_PASSWORD_LENGTH
                or not password_fits(new_password)
                or new_password == current_password
            ):
                return Return.err(
                    Error(
                        errors.INVALID_PASSWORD,
                        "New password must be 8 characters to 72 bytes long and differ from the current one",
                    )
                )

            now = utc_now()
            user.password_hash = hash_password(new_password)
            user.updated_at = now
            await self.uow.users.update(user)

            tokens_revoked = await self.uow.refresh_tokens.revoke_all_by_user_id(user.id, now)
            sessions_ended = await self.uow.sessions.deactivate_all_by_user_id(user.id, now)

            audit = AuditEvent(
                tenant_id=context.tenant_id,
                user_id=user.id,
                action=AuditAction.password_changed.value,
                entity_type="User",
                entity_id=str(user.id),
                description="Password changed successfully",
                event_metadata={
                    "tokens_revoked": tokens_revoked,
                    "sessions_ended": sessions_ended,
                },
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                StatusResponse(
                    status="password_changed",
                    message="Password changed. All sessions have been signed out.",
                )
            )
