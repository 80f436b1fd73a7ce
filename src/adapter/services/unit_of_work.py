from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.access_grant_repository import AccessGrantRepository
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.competency_repository import CompetencyRepository
from src.adapter.repositories.content_unit_repository import ContentUnitRepository
from src.adapter.repositories.refresh_token_repository import RefreshTokenRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.tenant_repository import TenantRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.tenants = TenantRepository(self.session)
        self.refresh_tokens = RefreshTokenRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.content_units = ContentUnitRepository(self.session)
        self.competencies = CompetencyRepository(self.session)
        self.access_grants = AccessGrantRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
