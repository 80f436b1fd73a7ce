from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.guards import secured_router
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    UpdatePrincipalStatusResponse,
    UpdatePrincipalStatusUseCase,
)
from src.depends import get_security_context, get_unit_of_work
from src.domain.entities import PrincipalRole, PrincipalStatus

ADMIN_ROLES = (
    PrincipalRole.bitflow_owner,
    PrincipalRole.college_admin,
    PrincipalRole.publisher_admin,
)

router = secured_router(ADMIN_ROLES, prefix="/principals", tags=["Principals"])


class UpdatePrincipalStatusRequest(BaseModel):
    status: PrincipalStatus
    reason: Optional[str] = Field(None, max_length=500)


@router.patch(
    "/{user_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=UpdatePrincipalStatusResponse,
)
async def update_principal_status(
    user_id: UUID,
    request: UpdatePrincipalStatusRequest,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Principal Status

    Tenant admins act on their own tenant only. Leaving ACTIVE revokes the
    principal's refresh tokens and ends its sessions.

    Raises:
        - 400 Bad Request: INVALID_STATUS
        - 403 Forbidden: INSUFFICIENT_ROLE, CROSS_TENANT_ACCESS_DENIED
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = UpdatePrincipalStatusUseCase(uow)
    result = await use_case.execute(context, user_id, request.status, request.reason)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
