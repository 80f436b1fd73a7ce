"""
Access Control Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class PrincipalStatus(str, Enum):
    """Principal (user) account status"""

    active = "ACTIVE"
    inactive = "INACTIVE"
    suspended = "SUSPENDED"


class PrincipalRole(str, Enum):
    """Fixed set of platform roles"""

    bitflow_owner = "BITFLOW_OWNER"
    publisher_admin = "PUBLISHER_ADMIN"
    college_admin = "COLLEGE_ADMIN"
    college_dean = "COLLEGE_DEAN"
    college_hod = "COLLEGE_HOD"
    faculty = "FACULTY"
    student = "STUDENT"


class TenantKind(str, Enum):
    """Unit of data isolation"""

    college = "college"
    publisher = "publisher"


class TenantStatus(str, Enum):
    """Tenant status"""

    active = "ACTIVE"
    suspended = "SUSPENDED"
    inactive = "INACTIVE"
    expired = "EXPIRED"


class ContentStatus(str, Enum):
    """Content unit publish status"""

    draft = "DRAFT"
    pending_mapping = "PENDING_MAPPING"
    active = "ACTIVE"
    inactive = "INACTIVE"
    suspended = "SUSPENDED"


class CompetencyMappingStatus(str, Enum):
    """Completeness of a content unit's competency mapping"""

    pending = "PENDING"
    partial = "PARTIAL"
    complete = "COMPLETE"


class CompetencyStatus(str, Enum):
    """Governance taxonomy entry status"""

    active = "ACTIVE"
    deprecated = "DEPRECATED"


class AuditAction(str, Enum):
    """Action kinds recorded in the audit ledger"""

    login_success = "login_success"
    login_failed = "login_failed"
    token_refreshed = "token_refreshed"
    logout = "logout"
    password_changed = "password_changed"
    password_change_failed = "password_change_failed"
    unauthorized_access = "unauthorized_access"
    permission_denied = "permission_denied"
    principal_status_changed = "principal_status_changed"
    tenant_status_changed = "tenant_status_changed"
    tenant_credentials_revoked = "tenant_credentials_revoked"
    publisher_contract_expired = "publisher_contract_expired"
    content_created = "content_created"
    content_mapped = "content_mapped"
    content_submitted = "content_submitted"
    content_activated = "content_activated"
    content_deactivated = "content_deactivated"
    content_suspended = "content_suspended"
    content_bulk_status_changed = "content_bulk_status_changed"
    content_accessed = "content_accessed"
    sessions_expired = "sessions_expired"
