"""
Refresh Token Use Case

Mints a new access token from a valid refresh token.
"""

from datetime import timedelta

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.credentials import hash_refresh_token, new_refresh_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    PrincipalStatus,
    RefreshToken,
)
from .dtos import RefreshTokenResponse


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Token row must exist, not be revoked and not be expired
    - Owning principal must be ACTIVE, and its tenant ACTIVE
    - Validity is re-asserted by one conditional UPDATE, so a refresh racing
      a revocation either commits before it or fails
    - By default the refresh token is NOT rotated (only a new access token is
      minted); with ROTATE_REFRESH_TOKENS the presented token is revoked and
      a new one returned
    """

    def __init__(self, uow: UnitOfWork, rotate: bool = None):
        self.uow = uow
        self.rotate = ApplicationConfig.ROTATE_REFRESH_TOKENS if rotate is None else rotate

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: Raw refresh token from login

        Returns:
            Result with RefreshTokenResponse, or Error
        """
        async with self.uow:
            token_row = await self.uow.refresh_tokens.get_by_token_hash(
                hash_refresh_token(refresh_token)
            )
            if token_row is None:
                return Return.err(Error(errors.TOKEN_INVALID, "Invalid refresh token"))

            now = utc_now()
            expired_or_revoked = Error(
                errors.TOKEN_EXPIRED_OR_REVOKED, "Invalid or expired refresh token"
            )
            if token_row.revoked or token_row.expires_at <= now:
                return Return.err(expired_or_revoked)

            user = await self.uow.users.get_by_id(token_row.user_id)
            if user is None or user.status != PrincipalStatus.active:
                return Return.err(
                    Error(errors.ACCOUNT_NOT_ACTIVE, "User account is not active")
                )

            tenant = None
            if user.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(user.tenant_id)
                if tenant is None or not tenant.is_available(now):
                    return Return.err(
                        Error(errors.TENANT_NOT_ACTIVE, "Your organization is not active")
                    )

            # Check-and-set: the row must still be valid at write time
            if self.rotate:
                still_valid = await self.uow.refresh_tokens.revoke_if_valid(token_row.id, now)
            else:
                still_valid = await self.uow.refresh_tokens.mark_used_if_valid(token_row.id, now)
            if not still_valid:
                await self.uow.rollback()
                return Return.err(expired_or_revoked)

            rotated_token = None
            if self.rotate:
                rotated_token = new_refresh_token()
                await self.uow.refresh_tokens.create(
                    RefreshToken(
                        user_id=user.id,
                        token_hash=hash_refresh_token(rotated_token),
                        expires_at=now
                        + timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS),
                    )
                )

            audit = AuditEvent(
                tenant_id=user.tenant_id,
                user_id=user.id,
                action=AuditAction.token_refreshed.value,
                entity_type="RefreshToken",
                entity_id=str(token_row.id),
                description="Access token refreshed",
                event_metadata={"rotated": self.rotate},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            access_token = generate_jwt(
                user.id,
                user.role.value,
                tenant_id=user.tenant_id,
                tenant_kind=tenant.kind.value if tenant else None,
            )
            return Return.ok(
                RefreshTokenResponse(access_token=access_token, refresh_token=rotated_token)
            )
