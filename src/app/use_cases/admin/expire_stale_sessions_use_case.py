"""
Use Case: Expire Stale Sessions

Periodic sweep marking sessions past expires_at as inactive.
"""

import logging

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditAction, AuditEvent

logger = logging.getLogger(__name__)


class ExpireStaleSessionsResponse(BaseModel):
    sessions_expired: int


class ExpireStaleSessionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[ExpireStaleSessionsResponse]:
        async with self.uow:
            expired = await self.uow.sessions.deactivate_expired(utc_now())

            if expired:
                audit_event = AuditEvent(
                    tenant_id=None,
                    user_id=None,  # System action
                    action=AuditAction.sessions_expired.value,
                    entity_type="Session",
                    description=f"Expired {expired} stale sessions",
                    event_metadata={"sessions_expired": expired},
                )
                await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

        if expired:
            logger.info("Expired %d stale sessions", expired)
        return Return.ok(ExpireStaleSessionsResponse(sessions_expired=expired))
