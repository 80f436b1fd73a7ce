"""
Access Policy Use Case

Role authorization and tenant isolation for the request guard chain.
"""

import logging
from typing import Iterable

from libs.result import Error, Result, Return
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.entities import AuditAction, AuditEvent, PrincipalRole
from src.domain.tenant_isolation import (
    TenantReference,
    TenantViolation,
    find_violation,
)

logger = logging.getLogger(__name__)


def cross_tenant_audit_event(context: SecurityContext, violation: TenantViolation) -> AuditEvent:
    """Audit row for a rejected cross-tenant reference (caller and requested tenant)."""
    reference = violation.reference
    return AuditEvent(
        tenant_id=context.tenant_id,
        user_id=context.user_id,
        action=AuditAction.unauthorized_access.value,
        entity_type="Tenant",
        entity_id=reference.value[:64],
        description=f"Attempted cross-tenant access to {reference.key}: {reference.value}",
        event_metadata={
            "caller_tenant_id": str(context.tenant_id) if context.tenant_id else None,
            "requested_tenant_id": reference.value,
            "source": reference.source,
            "key": reference.key,
            "path": context.client.path,
            "method": context.client.method,
        },
        ip_address=context.client.ip_address,
        user_agent=context.client.user_agent,
    )


def cross_tenant_error() -> Error:
    return Error(errors.CROSS_TENANT_ACCESS_DENIED, "Cross-tenant access denied")


class AccessPolicyUseCase:
    """
    Use case for per-request access policy checks.

    Business Rules:
    - Platform owners without a tenant binding pass tenant isolation
    - Requests without tenant identifiers pass tenant isolation
    - Any identifier different from the caller's binding is rejected
    - Every rejection (role or tenant) writes exactly one audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def authorize_role(
        self, context: SecurityContext, allowed_roles: Iterable[PrincipalRole]
    ) -> Result[None]:
        allowed = set(allowed_roles)
        if context.role in allowed:
            return Return.ok(None)

        async with self.uow:
            audit = AuditEvent(
                tenant_id=context.tenant_id,
                user_id=context.user_id,
                action=AuditAction.permission_denied.value,
                description=f"Role {context.role.value} not permitted",
                event_metadata={
                    "role": context.role.value,
                    "allowed_roles": sorted(role.value for role in allowed),
                    "caller_tenant_id": str(context.tenant_id) if context.tenant_id else None,
                    "path": context.client.path,
                    "method": context.client.method,
                },
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
            )
            await self.uow.audit_events.create(audit)
            await self.uow.commit()

        logger.warning(
            f"Permission denied: user={context.user_id} role={context.role.value} "
            f"path={context.client.path}"
        )
        return Return.err(
            Error(errors.INSUFFICIENT_ROLE, "You do not have permission to perform this action")
        )

    async def enforce_tenant_isolation(
        self, context: SecurityContext, references: Iterable[TenantReference]
    ) -> Result[None]:
        violation = find_violation(
            str(context.tenant_id) if context.tenant_id else None,
            context.has_platform_scope,
            references,
        )
        if violation is None:
            return Return.ok(None)

        async with self.uow:
            await self.uow.audit_events.create(cross_tenant_audit_event(context, violation))
            await self.uow.commit()

        logger.warning(
            f"Cross-tenant access denied: user={context.user_id} "
            f"tenant={context.tenant_id} requested={violation.reference.value}"
        )
        return Return.err(cross_tenant_error())
