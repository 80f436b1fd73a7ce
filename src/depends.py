from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, raise_for_error
from src.api.utils.jwt import verify_jwt
from src.app.services.security_context import ClientMeta, SecurityContext
from src.app.use_cases.auth import LoadSecurityContextUseCase
from src.domain import errors

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_client_meta(request: Request) -> ClientMeta:
    return ClientMeta(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        path=request.url.path,
        method=request.method,
    )


async def get_access_claims(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Raises:
        ClientError: 401 if the header is missing or the token is invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error(errors.TOKEN_INVALID, "Authentication required"), status_code=401
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None:
        raise ClientError(
            Error(errors.TOKEN_INVALID, "Invalid or expired token"), status_code=401
        )

    return payload


async def get_security_context(
    claims: dict = Depends(get_access_claims),
    client: ClientMeta = Depends(get_client_meta),
    uow=Depends(get_unit_of_work),
) -> SecurityContext:
    """Authenticate link of the guard chain: live principal and tenant re-check."""
    result = await LoadSecurityContextUseCase(uow).execute(claims, client)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
