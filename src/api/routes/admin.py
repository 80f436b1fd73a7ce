"""
Admin API Routes - Maintenance Endpoints

Lets an external scheduler trigger the periodic sweeps.
Authentication is via Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    ExpirePublisherContractsResponse,
    ExpirePublisherContractsUseCase,
    ExpireStaleSessionsResponse,
    ExpireStaleSessionsUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(
    prefix="/admin/maintenance",
    tags=["Admin"],
    dependencies=[Depends(verify_admin_api_key)],
)


@router.post(
    "/expire-contracts",
    status_code=status.HTTP_200_OK,
    response_model=ExpirePublisherContractsResponse,
)
async def expire_contracts(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Expire Publisher Contracts

    Publishers past contract_end_date become EXPIRED, lose all credentials
    and have their ACTIVE content deactivated.

    Requires: X-Admin-API-Key header
    """
    use_case = ExpirePublisherContractsUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/expire-sessions",
    status_code=status.HTTP_200_OK,
    response_model=ExpireStaleSessionsResponse,
)
async def expire_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Expire Stale Sessions

    Requires: X-Admin-API-Key header
    """
    use_case = ExpireStaleSessionsUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise_for_error(result.error)

    return result.value
