from datetime import datetime
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session, User


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def deactivate_by_refresh_token_id(self, refresh_token_id: UUID, now: datetime) -> int:
        """End the session bound to a refresh token"""
        stmt = (
            update(Session)
            .where(Session.refresh_token_id == refresh_token_id, Session.is_active == True)
            .values(is_active=False, ended_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def deactivate_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """End all live sessions of a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.is_active == True)
            .values(is_active=False, ended_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def deactivate_all_by_tenant_id(self, tenant_id: UUID, now: datetime) -> int:
        """One set-based UPDATE over every user bound to the tenant"""
        tenant_users = select(User.id).where(User.tenant_id == tenant_id)
        stmt = (
            update(Session)
            .where(Session.user_id.in_(tenant_users), Session.is_active == True)
            .values(is_active=False, ended_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def deactivate_expired(self, now: datetime) -> int:
        """End live sessions past expires_at"""
        stmt = (
            update(Session)
            .where(Session.is_active == True, Session.expires_at < now)
            .values(is_active=False, ended_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
