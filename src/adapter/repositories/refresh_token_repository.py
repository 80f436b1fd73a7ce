from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.domain.entities import RefreshToken, User


class RefreshTokenRepository(IRefreshTokenRepository):
    """RefreshToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, refresh_token: RefreshToken) -> RefreshToken:
        """Persist a new refresh token row"""
        self.session.add(refresh_token)
        await self.session.flush()
        await self.session.refresh(refresh_token)
        return refresh_token

    async def get_by_token_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """
        Find a token row by SHA-256 hash.

        Revoked/expired rows are returned too; the use case decides the error.
        """
        stmt = select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_used_if_valid(self, token_id: UUID, now: datetime) -> bool:
        """Stamp last_used_at only while the row is still valid (check-and-set)"""
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.id == token_id,
                RefreshToken.revoked == False,
                RefreshToken.expires_at > now,
            )
            .values(last_used_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke_if_valid(self, token_id: UUID, now: datetime) -> bool:
        """Revoke only while the row is still valid (check-and-set)"""
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.id == token_id,
                RefreshToken.revoked == False,
                RefreshToken.expires_at > now,
            )
            .values(revoked=True, revoked_at=now, last_used_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke_for_user(
        self, user_id: UUID, token_hash: str, now: datetime
    ) -> Optional[UUID]:
        """Revoke one token of a user, scoped so users cannot revoke others' tokens"""
        stmt = select(RefreshToken.id).where(
            RefreshToken.user_id == user_id,
            RefreshToken.token_hash == token_hash,
        )
        result = await self.session.execute(stmt)
        token_id = result.scalar_one_or_none()
        if token_id is None:
            return None

        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id == token_id, RefreshToken.revoked == False)
            .values(revoked=True, revoked_at=now)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return token_id

    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke all active tokens of a user"""
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.revoked == False)
            .values(revoked=True, revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_all_by_tenant_id(self, tenant_id: UUID, now: datetime) -> int:
        """One set-based UPDATE over every user bound to the tenant"""
        tenant_users = select(User.id).where(User.tenant_id == tenant_id)
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.user_id.in_(tenant_users),
                RefreshToken.revoked == False,
            )
            .values(revoked=True, revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
