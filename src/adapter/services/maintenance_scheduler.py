"""
Periodic maintenance sweeps: publisher contract expiry and stale sessions.

Runs inside the API process as an asyncio task started from the app lifespan.
Each sweep gets its own database session.
"""

import asyncio
import logging
from typing import Callable, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.admin import (
    ExpirePublisherContractsUseCase,
    ExpireStaleSessionsUseCase,
)

logger = logging.getLogger(__name__)


class MaintenanceScheduler:
    def __init__(self, session_factory: Callable[[], AsyncSession], interval_seconds: float):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    async def run_once(self) -> None:
        async with self.session_factory() as session:
            result = await ExpirePublisherContractsUseCase(SqlAlchemyUnitOfWork(session)).execute()
            if result.is_ok():
                logger.info(
                    "Contract sweep: %d publishers expired, %d content units deactivated",
                    result.value.publishers_expired,
                    result.value.content_units_deactivated,
                )

        async with self.session_factory() as session:
            result = await ExpireStaleSessionsUseCase(SqlAlchemyUnitOfWork(session)).execute()
            if result.is_ok():
                logger.info("Session sweep: %d sessions expired", result.value.sessions_expired)

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Maintenance sweep failed")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self._task is None:
            logger.info("Starting maintenance sweeps every %ss", self.interval_seconds)
            self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
