from datetime import timedelta

import pytest
import pytest_asyncio
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.refresh_token_repository import RefreshTokenRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.credentials import hash_refresh_token, new_refresh_token
from src.app.use_cases.auth.refresh_token_use_case import RefreshTokenUseCase
from src.domain.base import utc_now
from src.domain.entities import RefreshToken


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def student_token(db_session, seed):
    """Raw refresh token of the seeded student, persisted and committed"""
    raw = new_refresh_token()
    db_session.add(
        RefreshToken(
            user_id=seed.ids["student"],
            token_hash=hash_refresh_token(raw),
            expires_at=utc_now() + timedelta(days=1),
        )
    )
    await db_session.commit()
    return raw


async def revoke_tenant(session_factory, tenant_id) -> int:
    async with session_factory() as session:
        revoked = await RefreshTokenRepository(session).revoke_all_by_tenant_id(
            tenant_id, utc_now()
        )
        await session.commit()
    return revoked


class RevokedDuringRefreshUnitOfWork(SqlAlchemyUnitOfWork):
    """Runs a tenant revocation in another session once the principal is loaded"""

    def __init__(self, session, on_user_loaded):
        super().__init__(session)
        self.on_user_loaded = on_user_loaded

    async def __aenter__(self):
        await super().__aenter__()
        load_user = self.users.get_by_id

        async def load_user_then_revoke(user_id):
            user = await load_user(user_id)
            await self.on_user_loaded()
            return user

        self.users.get_by_id = load_user_then_revoke
        return self


@pytest.mark.asyncio
async def test_mark_used_succeeds_on_valid_row(session_factory, student_token):
    async with session_factory() as session:
        repository = RefreshTokenRepository(session)
        row = await repository.get_by_token_hash(hash_refresh_token(student_token))

        assert await repository.mark_used_if_valid(row.id, utc_now())
        await session.commit()


@pytest.mark.asyncio
async def test_mark_used_fails_after_concurrent_tenant_revocation(
    session_factory, seed, student_token
):
    async with session_factory() as session:
        repository = RefreshTokenRepository(session)
        row = await repository.get_by_token_hash(hash_refresh_token(student_token))
        assert not row.revoked

        assert await revoke_tenant(session_factory, seed.ids["college"]) >= 1

        assert not await repository.mark_used_if_valid(row.id, utc_now())
        assert not await repository.revoke_if_valid(row.id, utc_now())
        await session.rollback()


@pytest.mark.asyncio
async def test_refresh_racing_tenant_revocation_fails(session_factory, seed, student_token):
    async def revoke():
        await revoke_tenant(session_factory, seed.ids["college"])

    async with session_factory() as session:
        uow = RevokedDuringRefreshUnitOfWork(session, revoke)
        result = await RefreshTokenUseCase(uow, rotate=False).execute(student_token)

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED_OR_REVOKED"

    # Later attempts see the revoked row directly
    async with session_factory() as session:
        again = await RefreshTokenUseCase(SqlAlchemyUnitOfWork(session)).execute(student_token)
    assert again.error.code == "TOKEN_EXPIRED_OR_REVOKED"
