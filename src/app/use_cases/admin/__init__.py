"""
Admin Use Cases

Platform-owner tenant control and maintenance sweeps.
"""

from .update_tenant_status_use_case import (
    UpdateTenantStatusResponse,
    UpdateTenantStatusUseCase,
)
from .expire_publisher_contracts_use_case import (
    ExpirePublisherContractsResponse,
    ExpirePublisherContractsUseCase,
)
from .expire_stale_sessions_use_case import (
    ExpireStaleSessionsResponse,
    ExpireStaleSessionsUseCase,
)

__all__ = [
    "UpdateTenantStatusResponse",
    "UpdateTenantStatusUseCase",
    "ExpirePublisherContractsResponse",
    "ExpirePublisherContractsUseCase",
    "ExpireStaleSessionsResponse",
    "ExpireStaleSessionsUseCase",
]
