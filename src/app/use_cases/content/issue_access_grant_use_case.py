"""
Issue Access Grant Use Case

Mints a short-lived, watermark-bound viewing session for an ACTIVE
content unit.
"""

import uuid
from datetime import timedelta
from uuid import UUID

from libs.result import Error, Result, Return
from src.api.utils.jwt import create_content_access_token
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utc_now
from src.domain.entities import AccessGrant, AuditAction, AuditEvent, ContentStatus
from .dtos import AccessGrantResponse, ContentDescriptor


class IssueAccessGrantUseCase:
    """
    Use case for POST /content-units/{id}/access.

    Business Rules:
    - Tenant isolation has already passed for the request
    - Content unit must exist and be ACTIVE
    - Session id is a fresh random UUID; token lifetime is the unit's
      session_expiry_minutes
    - Grant row and audit event are written in one transaction
    - Watermark returned only when the unit has watermarking enabled
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: SecurityContext, content_unit_id: UUID, device_type: str = "web"
    ) -> Result[AccessGrantResponse]:
        async with self.uow:
            unit = await self.uow.content_units.get_by_id(content_unit_id)
            if unit is None:
                return Return.err(Error(errors.CONTENT_NOT_FOUND, "Content unit not found"))

            if unit.status != ContentStatus.active:
                return Return.err(
                    Error(errors.CONTENT_UNAVAILABLE, "Content unit is not available")
                )

            session_id = uuid.uuid4()
            issued_at = utc_now()
            lifetime = timedelta(minutes=unit.session_expiry_minutes)

            watermark = {
                "user_id": str(context.user_id),
                "name": context.full_name,
                "tenant": context.tenant_name or "N/A",
                "timestamp": issued_at.isoformat() + "Z",
                "session_id": str(session_id),
            }

            access_token = create_content_access_token(
                {
                    "session_id": str(session_id),
                    "content_unit_id": str(unit.id),
                    "user_id": str(context.user_id),
                    "tenant_id": str(context.tenant_id) if context.tenant_id else None,
                    "role": context.role.value,
                    "device_type": device_type,
                },
                lifetime,
            )

            grant = AccessGrant(
                session_id=session_id,
                content_unit_id=unit.id,
                user_id=context.user_id,
                tenant_id=context.tenant_id,
                tenant_name=context.tenant_name,
                role=context.role.value,
                device_type=device_type,
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
                watermark_payload=watermark,
                issued_at=issued_at,
                expires_at=issued_at + lifetime,
            )
            await self.uow.access_grants.create(grant)

            audit = AuditEvent(
                tenant_id=context.tenant_id,
                user_id=context.user_id,
                action=AuditAction.content_accessed.value,
                entity_type="ContentUnit",
                entity_id=str(unit.id),
                description=f"Generated access token for: {unit.title}",
                event_metadata={"device_type": device_type, "session_id": str(session_id)},
                ip_address=context.client.ip_address,
                user_agent=context.client.user_agent,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                AccessGrantResponse(
                    access_token=access_token,
                    session_id=str(session_id),
                    expires_in=unit.session_expiry_minutes * 60,
                    content=ContentDescriptor(
                        id=str(unit.id),
                        title=unit.title,
                        content_type=unit.content_type,
                        delivery_type=unit.delivery_type,
                        secure_access_url=unit.secure_access_url,
                        estimated_duration=unit.estimated_duration,
                        watermark_enabled=unit.watermark_enabled,
                    ),
                    watermark=watermark if unit.watermark_enabled else None,
                )
            )
