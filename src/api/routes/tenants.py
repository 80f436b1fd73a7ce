from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.guards import secured_router
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import UpdateTenantStatusResponse, UpdateTenantStatusUseCase
from src.app.use_cases.tenants import RevokedCredentials, RevokeTenantCredentialsUseCase
from src.depends import get_security_context, get_unit_of_work
from src.domain.entities import PrincipalRole, TenantStatus

router = secured_router([PrincipalRole.bitflow_owner], prefix="/tenants", tags=["Tenants"])


class UpdateTenantStatusRequest(BaseModel):
    status: TenantStatus
    reason: Optional[str] = Field(None, max_length=500)


@router.patch(
    "/{tenant_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=UpdateTenantStatusResponse,
)
async def update_tenant_status(
    tenant_id: UUID,
    request: UpdateTenantStatusRequest,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Tenant Status (platform owner)

    Leaving ACTIVE revokes every refresh token and session of the tenant's
    principals. Publisher content is suspended or deactivated with it.

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND
    """
    use_case = UpdateTenantStatusUseCase(uow)
    result = await use_case.execute(context, tenant_id, request.status, request.reason)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{tenant_id}/revoke-credentials",
    status_code=status.HTTP_200_OK,
    response_model=RevokedCredentials,
)
async def revoke_tenant_credentials(
    tenant_id: UUID,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Tenant Credentials (platform owner)

    Signs every principal of the tenant out without changing its status.

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
    """
    use_case = RevokeTenantCredentialsUseCase(uow)
    result = await use_case.execute(tenant_id, actor_id=context.user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
