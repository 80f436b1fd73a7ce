"""
Tenant Entity

A college or publisher; the unit of data isolation.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import TenantKind, TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated college or publisher workspace.

    Business Rules:
    - Principals bound to a non-active tenant are treated as suspended
    - Suspension revokes every credential of the tenant's principals
    - Publisher contracts expire at contract_end_date: principals are denied
      from that moment, the sweep then marks the tenant EXPIRED
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    kind: TenantKind = Field(nullable=False)

    status: TenantStatus = Field(default=TenantStatus.active)

    # Publisher contract window
    contract_end_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_tenant_status", "status"),
        Index("idx_tenant_kind_status", "kind", "status"),
    )

    def contract_expired(self, now: datetime) -> bool:
        return self.contract_end_date is not None and self.contract_end_date < now

    def is_available(self, now: datetime) -> bool:
        """Active and, for publishers, still inside the contract window"""
        return self.status == TenantStatus.active and not self.contract_expired(now)
