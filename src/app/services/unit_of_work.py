from abc import ABC, abstractmethod

from src.app.repositories.access_grant_repository import IAccessGrantRepository
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.competency_repository import ICompetencyRepository
from src.app.repositories.content_unit_repository import IContentUnitRepository
from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.tenant_repository import ITenantRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    tenants: ITenantRepository
    refresh_tokens: IRefreshTokenRepository
    sessions: ISessionRepository
    content_units: IContentUnitRepository
    competencies: ICompetencyRepository
    access_grants: IAccessGrantRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
