import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from libs.result import Return
from src.adapter.services.maintenance_scheduler import MaintenanceScheduler
from src.app.use_cases.admin import (
    ExpirePublisherContractsResponse,
    ExpireStaleSessionsResponse,
)


class FakeSessionFactory:
    def __init__(self):
        self.opened = 0

    def __call__(self):
        return self

    async def __aenter__(self):
        self.opened += 1
        return MagicMock()

    async def __aexit__(self, *args):
        return False


@pytest.mark.asyncio
async def test_run_once_runs_both_sweeps_in_separate_sessions():
    factory = FakeSessionFactory()
    contracts = MagicMock()
    contracts.return_value.execute = AsyncMock(
        return_value=Return.ok(
            ExpirePublisherContractsResponse(publishers_expired=1, content_units_deactivated=3)
        )
    )
    sessions = MagicMock()
    sessions.return_value.execute = AsyncMock(
        return_value=Return.ok(ExpireStaleSessionsResponse(sessions_expired=2))
    )

    with patch(
        "src.adapter.services.maintenance_scheduler.ExpirePublisherContractsUseCase", contracts
    ), patch("src.adapter.services.maintenance_scheduler.ExpireStaleSessionsUseCase", sessions):
        await MaintenanceScheduler(factory, 3600).run_once()

    contracts.return_value.execute.assert_awaited_once()
    sessions.return_value.execute.assert_awaited_once()
    assert factory.opened == 2


@pytest.mark.asyncio
async def test_loop_survives_a_failed_sweep():
    scheduler = MaintenanceScheduler(FakeSessionFactory(), 0.01)
    scheduler.run_once = AsyncMock(side_effect=[RuntimeError("database unavailable"), None, None, None])

    scheduler.start()
    for _ in range(50):
        if scheduler.run_once.await_count >= 2:
            break
        await asyncio.sleep(0.01)
    await scheduler.stop()

    assert scheduler.run_once.await_count >= 2
    assert scheduler._task is None
