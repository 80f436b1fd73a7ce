from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.api.guards import secured_router
from src.app.services.security_context import ClientMeta, SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ChangePasswordUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    StatusResponse,
)
from src.depends import get_client_meta, get_security_context, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])
secured = secured_router(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    client: ClientMeta = Depends(get_client_meta),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Principal Login

    Verifies credentials and opens a session with an access token and a
    refresh token.

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS or ACCOUNT_NOT_ACTIVE
        - 403 Forbidden: TENANT_NOT_ACTIVE
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password, client)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    """
    Refresh token HTTP request payload

    Validates incoming refresh request.
    """

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(request: RefreshRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Refresh Access Token

    Issues a new access token for a live refresh token. With rotation
    enabled the presented token is revoked and a new one returned.

    Raises:
        - 401 Unauthorized: TOKEN_INVALID, TOKEN_EXPIRED_OR_REVOKED, ACCOUNT_NOT_ACTIVE
        - 403 Forbidden: TENANT_NOT_ACTIVE
    """
    use_case = RefreshTokenUseCase(uow)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LogoutRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token to revoke")


@secured.post("/logout", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def logout(
    request: LogoutRequest,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the caller's refresh token and ends its session. Idempotent.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(context, request.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., description="New password (8 characters to 72 bytes)")


@secured.post("/change-password", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def change_password(
    request: ChangePasswordRequest,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Password

    Rehashes the password and revokes every refresh token and session of
    the caller.

    Raises:
        - 400 Bad Request: INVALID_PASSWORD
        - 403 Forbidden: INVALID_CURRENT_PASSWORD
    """
    use_case = ChangePasswordUseCase(uow)
    result = await use_case.execute(context, request.current_password, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
