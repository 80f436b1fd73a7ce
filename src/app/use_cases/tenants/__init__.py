"""
Tenant Management Use Cases

Credential revocation scoped to a whole tenant.
"""

from .revoke_tenant_credentials_use_case import (
    RevokedCredentials,
    RevokeTenantCredentialsUseCase,
    revoke_all_for_tenant,
)

__all__ = [
    "RevokedCredentials",
    "RevokeTenantCredentialsUseCase",
    "revoke_all_for_tenant",
]
