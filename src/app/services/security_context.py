"""
Security context threaded explicitly from the guard chain to use cases.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import PrincipalRole, TenantKind


class ClientMeta(BaseModel):
    """Network/client metadata recorded with audit events and grants"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    path: Optional[str] = None
    method: Optional[str] = None


class SecurityContext(BaseModel):
    """Authenticated principal with its live tenant binding"""

    user_id: UUID
    email: str
    full_name: str
    role: PrincipalRole
    tenant_id: Optional[UUID] = None
    tenant_kind: Optional[TenantKind] = None
    tenant_name: Optional[str] = None
    client: ClientMeta = ClientMeta()

    @property
    def has_platform_scope(self) -> bool:
        return self.tenant_id is None and self.role == PrincipalRole.bitflow_owner
