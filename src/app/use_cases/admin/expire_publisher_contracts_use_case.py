"""
Use Case: Expire Publisher Contracts

Periodic sweep. Publishers whose contract_end_date has passed become EXPIRED,
lose every credential, and have their ACTIVE content deactivated.
"""

import logging
from typing import List

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.content import transition_publisher_content
from src.app.use_cases.tenants import revoke_all_for_tenant
from src.domain.base import utc_now
from src.domain.content_lifecycle import ContentTransition
from src.domain.entities import AuditAction, TenantStatus

logger = logging.getLogger(__name__)

CONTRACT_EXPIRED_REASON = "Publisher contract expired"


class ExpiredPublisher(BaseModel):
    publisher_id: str
    name: str
    content_units_deactivated: int


class ExpirePublisherContractsResponse(BaseModel):
    """Response DTO for ExpirePublisherContractsUseCase"""

    publishers_expired: int
    content_units_deactivated: int
    publishers: List[ExpiredPublisher] = []


class ExpirePublisherContractsUseCase:
    """
    Expire every publisher whose contract has ended.

    Each publisher is handled in its own transaction so one failure does not
    roll back the others. Running twice expires nothing the second time.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[ExpirePublisherContractsResponse]:
        now = utc_now()
        async with self.uow:
            publishers = await self.uow.tenants.get_publishers_with_expired_contracts(now)
            publisher_ids = [publisher.id for publisher in publishers]

        expired: List[ExpiredPublisher] = []
        for publisher_id in publisher_ids:
            async with self.uow:
                tenant = await self.uow.tenants.get_by_id(publisher_id)
                if tenant is None or tenant.status != TenantStatus.active:
                    continue

                tenant.status = TenantStatus.expired
                tenant.updated_at = now
                await self.uow.tenants.update(tenant)

                await revoke_all_for_tenant(self.uow, tenant.id, now)
                count = await transition_publisher_content(
                    self.uow,
                    tenant,
                    ContentTransition.deactivate,
                    None,
                    CONTRACT_EXPIRED_REASON,
                    now,
                    summary_action=AuditAction.publisher_contract_expired,
                )

                await self.uow.commit()

            expired.append(
                ExpiredPublisher(
                    publisher_id=str(tenant.id),
                    name=tenant.name,
                    content_units_deactivated=count,
                )
            )
            logger.info(
                "Publisher %s contract expired, %d content units deactivated",
                tenant.id,
                count,
            )

        return Return.ok(
            ExpirePublisherContractsResponse(
                publishers_expired=len(expired),
                content_units_deactivated=sum(p.content_units_deactivated for p in expired),
                publishers=expired,
            )
        )
