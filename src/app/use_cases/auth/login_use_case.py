"""
Login Use Case

Authenticates a principal and issues an access token plus a refresh token.
"""

import logging
from datetime import timedelta

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.credentials import (
    burn_password_check,
    hash_refresh_token,
    new_refresh_token,
    verify_password,
)
from src.app.services.security_context import ClientMeta
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    PrincipalStatus,
    RefreshToken,
    Session,
)
from .dtos import LoginResponse, PrincipalInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for principal login and credential issuance.

    Business Rules:
    - Unknown email still spends one bcrypt comparison
    - Password is verified before status, so status is only revealed to
      the password holder
    - Principal must be ACTIVE and its tenant (if any) must be ACTIVE
    - Every outcome writes one audit event
    - Success persists a refresh token row and a session row and updates
      last_login_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, password: str, client: ClientMeta = ClientMeta()
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: Principal email
            password: Plain text password
            client: Network metadata for the audit trail

        Returns:
            Result with LoginResponse, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                burn_password_check(password)
                return await self._fail(
                    None, None, "Failed login attempt: unknown email", client,
                    Error(errors.INVALID_CREDENTIALS, "Invalid email or password"),
                    {"email": email},
                )

            if not verify_password(password, user.password_hash):
                return await self._fail(
                    user.id, user.tenant_id, "Invalid password", client,
                    Error(errors.INVALID_CREDENTIALS, "Invalid email or password"),
                )

            if user.status != PrincipalStatus.active:
                return await self._fail(
                    user.id, user.tenant_id,
                    f"Login blocked - user status: {user.status.value}", client,
                    Error(errors.ACCOUNT_NOT_ACTIVE, "Account is not active"),
                )

            tenant = None
            if user.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(user.tenant_id)
                if tenant is None or not tenant.is_available(utc_now()):
                    return await self._fail(
                        user.id, user.tenant_id, "Login blocked - tenant not active", client,
                        Error(errors.TENANT_NOT_ACTIVE, "Your organization is not active"),
                    )

            now = utc_now()

            # Generate refresh token (raw value returned once, hash persisted)
            refresh_token = new_refresh_token()
            token_row = RefreshToken(
                user_id=user.id,
                token_hash=hash_refresh_token(refresh_token),
                expires_at=now + timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS),
            )
            await self.uow.refresh_tokens.create(token_row)

            session = Session(
                user_id=user.id,
                refresh_token_id=token_row.id,
                ip_address=client.ip_address,
                user_agent=client.user_agent,
                expires_at=now + timedelta(days=ApplicationConfig.SESSION_EXPIRE_DAYS),
            )
            await self.uow.sessions.create(session)

            user.last_login_at = now
            await self.uow.users.update(user)

            audit = AuditEvent(
                tenant_id=user.tenant_id,
                user_id=user.id,
                action=AuditAction.login_success.value,
                entity_type="User",
                entity_id=str(user.id),
                description="User logged in successfully",
                event_metadata={"session_id": str(session.id)},
                ip_address=client.ip_address,
                user_agent=client.user_agent,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            tenant_kind = tenant.kind.value if tenant else None
            access_token = generate_jwt(
                user.id, user.role.value, tenant_id=user.tenant_id, tenant_kind=tenant_kind
            )

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    refresh_token=refresh_token,
                    session_id=str(session.id),
                    principal=PrincipalInfo(
                        id=str(user.id),
                        email=user.email,
                        full_name=user.full_name,
                        role=user.role.value,
                        tenant_id=str(user.tenant_id) if user.tenant_id else None,
                        tenant_kind=tenant_kind,
                    ),
                )
            )

    async def _fail(self, user_id, tenant_id, description, client, error, metadata=None):
        audit = AuditEvent(
            tenant_id=tenant_id,
            user_id=user_id,
            action=AuditAction.login_failed.value,
            entity_type="User",
            entity_id=str(user_id) if user_id else None,
            description=description,
            event_metadata=metadata,
            ip_address=client.ip_address,
            user_agent=client.user_agent,
        )
        await self.uow.audit_events.create(audit)
        await self.uow.commit()
        logger.info(f"Login failed: {error.code}")
        return Return.err(error)
