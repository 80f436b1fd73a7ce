"""
Content Use Cases

Content lifecycle state machine entry points and access grants.
"""

from .create_content_unit_use_case import CreateContentUnitUseCase
from .add_competency_mappings_use_case import AddCompetencyMappingsUseCase
from .update_content_status_use_case import UpdateContentStatusUseCase
from .issue_access_grant_use_case import IssueAccessGrantUseCase
from .bulk_transition import transition_publisher_content
from .dtos import (
    AccessGrantResponse,
    ContentDescriptor,
    ContentUnitResponse,
    CreateContentUnitCommand,
    StatusChangeResponse,
)

__all__ = [
    # Use Cases
    "CreateContentUnitUseCase",
    "AddCompetencyMappingsUseCase",
    "UpdateContentStatusUseCase",
    "IssueAccessGrantUseCase",
    "transition_publisher_content",
    # DTOs
    "AccessGrantResponse",
    "ContentDescriptor",
    "ContentUnitResponse",
    "CreateContentUnitCommand",
    "StatusChangeResponse",
]
