"""Access policy use cases (role authorization, tenant isolation)."""

from .access_policy_use_case import (
    AccessPolicyUseCase,
    cross_tenant_audit_event,
    cross_tenant_error,
)

__all__ = [
    "AccessPolicyUseCase",
    "cross_tenant_audit_event",
    "cross_tenant_error",
]
