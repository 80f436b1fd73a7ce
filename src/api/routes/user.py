from typing import Optional

from fastapi import Depends, status
from pydantic import BaseModel

from src.api.guards import secured_router
from src.app.services.security_context import SecurityContext
from src.depends import get_security_context

router = secured_router(tags=["User"])


class MeResponse(BaseModel):
    """GET /me response payload"""

    id: str
    email: str
    full_name: str
    role: str
    tenant_id: Optional[str] = None
    tenant_kind: Optional[str] = None
    tenant_name: Optional[str] = None


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(context: SecurityContext = Depends(get_security_context)):
    """
    Current Security Context

    Returns the caller as seen by the guard chain: live role and tenant
    binding, not the claims of the token.
    """
    return MeResponse(
        id=str(context.user_id),
        email=context.email,
        full_name=context.full_name,
        role=context.role.value,
        tenant_id=str(context.tenant_id) if context.tenant_id else None,
        tenant_kind=context.tenant_kind.value if context.tenant_kind else None,
        tenant_name=context.tenant_name,
    )
