"""
Access Control Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuditAction,
    CompetencyMappingStatus,
    CompetencyStatus,
    ContentStatus,
    PrincipalRole,
    PrincipalStatus,
    TenantKind,
    TenantStatus,
)

# Export all entities
from .user import User
from .tenant import Tenant
from .refresh_token import RefreshToken
from .session import Session
from .competency import Competency, CompetencyMapping
from .content_unit import ContentUnit
from .access_grant import AccessGrant
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AuditAction",
    "CompetencyMappingStatus",
    "CompetencyStatus",
    "ContentStatus",
    "PrincipalRole",
    "PrincipalStatus",
    "TenantKind",
    "TenantStatus",
    # Entities
    "User",
    "Tenant",
    "RefreshToken",
    "Session",
    "Competency",
    "CompetencyMapping",
    "ContentUnit",
    "AccessGrant",
    "AuditEvent",
]
