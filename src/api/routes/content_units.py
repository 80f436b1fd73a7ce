from typing import List, Optional
from uuid import UUID

from fastapi import Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.guards import secured_router
from src.app.services.security_context import SecurityContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.content import (
    AccessGrantResponse,
    AddCompetencyMappingsUseCase,
    ContentUnitResponse,
    CreateContentUnitCommand,
    CreateContentUnitUseCase,
    IssueAccessGrantUseCase,
    StatusChangeResponse,
    UpdateContentStatusUseCase,
)
from src.depends import get_security_context, get_unit_of_work
from src.domain.entities import ContentStatus, PrincipalRole

PUBLISHER_ROLES = (PrincipalRole.publisher_admin, PrincipalRole.bitflow_owner)

# Content management: publisher admins (own publisher) and platform owners
publisher_router = secured_router(
    PUBLISHER_ROLES, prefix="/content-units", tags=["Content Units"]
)
# Access grants: any authenticated principal
viewer_router = secured_router(prefix="/content-units", tags=["Content Units"])


class CreateContentUnitRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    secure_access_url: str = Field(..., min_length=1, max_length=1024)
    description: Optional[str] = None
    content_type: str = Field("BOOK", max_length=32)
    delivery_type: str = Field("EMBED", max_length=32)
    estimated_duration: int = Field(0, ge=0, description="Minutes")
    competency_ids: List[UUID] = Field(default_factory=list)
    mapping_complete: bool = False
    watermark_enabled: bool = True
    session_expiry_minutes: Optional[int] = Field(None, ge=5, le=24 * 60)
    draft: bool = Field(False, description="Create in DRAFT regardless of mappings")
    publisher_id: Optional[UUID] = Field(None, description="Platform owners only")


@publisher_router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=ContentUnitResponse
)
async def create_content_unit(
    request: CreateContentUnitRequest,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Content Unit

    Without competency mappings the unit waits in PENDING_MAPPING; with at
    least one mapping it is activated immediately.

    Raises:
        - 400 Bad Request: INVALID_COMPETENCY
        - 403 Forbidden: TENANT_NOT_ACTIVE, CROSS_TENANT_ACCESS_DENIED
        - 404 Not Found: TENANT_NOT_FOUND
    """
    command = CreateContentUnitCommand(
        **request.model_dump(exclude={"session_expiry_minutes"}),
        session_expiry_minutes=request.session_expiry_minutes
        or ApplicationConfig.DEFAULT_SESSION_EXPIRY_MINUTES,
    )

    use_case = CreateContentUnitUseCase(uow)
    result = await use_case.execute(context, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class AddCompetencyMappingsRequest(BaseModel):
    competency_ids: List[UUID] = Field(..., min_length=1)
    complete: bool = Field(False, description="Mark the mapping as complete")


@publisher_router.post(
    "/{content_unit_id}/competency-mappings",
    status_code=status.HTTP_200_OK,
    response_model=ContentUnitResponse,
)
async def add_competency_mappings(
    content_unit_id: UUID,
    request: AddCompetencyMappingsRequest,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Map Competencies

    Adds competency mappings. Does not activate the unit.
    """
    use_case = AddCompetencyMappingsUseCase(uow)
    result = await use_case.execute(
        context, content_unit_id, request.competency_ids, request.complete
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateContentStatusRequest(BaseModel):
    status: ContentStatus
    reason: Optional[str] = Field(None, max_length=500)


@publisher_router.patch(
    "/{content_unit_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=StatusChangeResponse,
)
async def update_content_status(
    content_unit_id: UUID,
    request: UpdateContentStatusRequest,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Content Status

    Raises:
        - 400 Bad Request: COMPETENCY_MAPPING_REQUIRED, INVALID_STATUS_TRANSITION, INVALID_STATUS
        - 403 Forbidden: CROSS_TENANT_ACCESS_DENIED, INSUFFICIENT_ROLE, TENANT_NOT_ACTIVE
        - 404 Not Found: CONTENT_NOT_FOUND
    """
    use_case = UpdateContentStatusUseCase(uow)
    result = await use_case.execute(context, content_unit_id, request.status, request.reason)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class AccessRequest(BaseModel):
    device_type: str = Field("web", max_length=32)


@viewer_router.post(
    "/{content_unit_id}/access",
    status_code=status.HTTP_200_OK,
    response_model=AccessGrantResponse,
)
async def request_access(
    content_unit_id: UUID,
    request: Optional[AccessRequest] = None,
    context: SecurityContext = Depends(get_security_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Request Content Access

    Issues a short-lived content access token bound to a new viewing
    session, with the watermark to overlay when enabled.

    Raises:
        - 403 Forbidden: CONTENT_UNAVAILABLE
        - 404 Not Found: CONTENT_NOT_FOUND
    """
    device_type = request.device_type if request else "web"

    use_case = IssueAccessGrantUseCase(uow)
    result = await use_case.execute(context, content_unit_id, device_type)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
