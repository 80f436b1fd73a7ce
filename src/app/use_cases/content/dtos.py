"""
Content Use Case DTOs

Commands and responses for the content lifecycle and access grants.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import ContentUnit


class CreateContentUnitCommand(BaseModel):
    """Validated intent to create a content unit"""

    title: str
    secure_access_url: str
    description: Optional[str] = None
    content_type: str = "BOOK"
    delivery_type: str = "EMBED"
    estimated_duration: int = 0
    competency_ids: List[UUID] = []
    mapping_complete: bool = False
    watermark_enabled: bool = True
    session_expiry_minutes: Optional[int] = None
    draft: bool = False
    publisher_id: Optional[UUID] = None  # platform owners only


class ContentUnitResponse(BaseModel):
    id: str
    publisher_id: str
    title: str
    status: str
    competency_mapping_status: str
    watermark_enabled: bool
    session_expiry_minutes: int
    activated_at: Optional[datetime] = None
    activated_by: Optional[str] = None
    deactivated_at: Optional[datetime] = None
    deactivation_reason: Optional[str] = None

    @classmethod
    def from_entity(cls, unit: ContentUnit) -> "ContentUnitResponse":
        return cls(
            id=str(unit.id),
            publisher_id=str(unit.publisher_id),
            title=unit.title,
            status=unit.status.value,
            competency_mapping_status=unit.competency_mapping_status.value,
            watermark_enabled=unit.watermark_enabled,
            session_expiry_minutes=unit.session_expiry_minutes,
            activated_at=unit.activated_at,
            activated_by=str(unit.activated_by) if unit.activated_by else None,
            deactivated_at=unit.deactivated_at,
            deactivation_reason=unit.deactivation_reason,
        )


class StatusChangeResponse(BaseModel):
    content_unit: ContentUnitResponse
    previous_status: str
    changed: bool


class ContentDescriptor(BaseModel):
    """Content fields safe to render client-side"""

    id: str
    title: str
    content_type: str
    delivery_type: str
    secure_access_url: str
    estimated_duration: int
    watermark_enabled: bool


class AccessGrantResponse(BaseModel):
    access_token: str
    session_id: str
    expires_in: int  # seconds
    content: ContentDescriptor
    watermark: Optional[Dict[str, Any]] = None
