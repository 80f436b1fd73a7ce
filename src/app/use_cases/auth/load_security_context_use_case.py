"""
Load Security Context Use Case

Turns verified access token claims into a SecurityContext, re-checking the
principal and tenant rows on every request.
"""

from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.security_context import ClientMeta, SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.entities import PrincipalStatus


class LoadSecurityContextUseCase:
    """
    Use case for loading the caller's security context.

    Business Rules:
    - User must exist and be ACTIVE
    - Token's tenant binding must match the user's current binding
    - Bound tenant must be ACTIVE (a principal of a suspended tenant is
      treated as suspended even if its own row still reads ACTIVE)
    - A publisher past its contract_end_date is denied before the expiry
      sweep has marked it EXPIRED
    - Role comes from the live row, not the token
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, claims: Dict[str, Any], client: ClientMeta = ClientMeta()
    ) -> Result[SecurityContext]:
        try:
            user_id = UUID(claims["user_id"])
        except (KeyError, TypeError, ValueError):
            return Return.err(Error(errors.TOKEN_INVALID, "Invalid or expired token"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or user.status != PrincipalStatus.active:
                return Return.err(
                    Error(errors.ACCOUNT_NOT_ACTIVE, "User account is not active")
                )

            claimed_tenant = claims.get("tenant_id")
            bound_tenant = str(user.tenant_id) if user.tenant_id else None
            if claimed_tenant != bound_tenant:
                return Return.err(Error(errors.TOKEN_INVALID, "Invalid or expired token"))

            tenant = None
            if user.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(user.tenant_id)
                if tenant is None or not tenant.is_available(utc_now()):
                    return Return.err(
                        Error(errors.TENANT_NOT_ACTIVE, "Your organization is not active")
                    )

            return Return.ok(
                SecurityContext(
                    user_id=user.id,
                    email=user.email,
                    full_name=user.full_name,
                    role=user.role,
                    tenant_id=user.tenant_id,
                    tenant_kind=tenant.kind if tenant else None,
                    tenant_name=tenant.name if tenant else None,
                    client=client,
                )
            )
