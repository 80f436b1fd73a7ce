"""
Ownership checks for content managed by publishers.
"""

from libs.result import Result, Return
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import cross_tenant_audit_event, cross_tenant_error
from src.domain.entities import ContentUnit
from src.domain.tenant_isolation import TenantReference, find_violation


async def ensure_publisher_owns(
    uow: UnitOfWork, context: SecurityContext, unit: ContentUnit
) -> Result[None]:
    """
    Apply tenant isolation to the unit's owning publisher.

    Must be called inside an open unit of work; on violation the audit
    event is committed before the error is returned.
    """
    violation = find_violation(
        str(context.tenant_id) if context.tenant_id else None,
        context.has_platform_scope,
        [TenantReference("entity", "publisher_id", str(unit.publisher_id))],
    )
    if violation is None:
        return Return.ok(None)

    await uow.audit_events.create(cross_tenant_audit_event(context, violation))
    await uow.commit()
    return Return.err(cross_tenant_error())
