"""
Error taxonomy for the access control core.

Use cases return Error(code, message); every code belongs to exactly one
kind. All kinds are terminal at the boundary; storage faults are not in
this table and surface as server errors.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    authentication_failed = "authentication_failed"
    authorization_denied = "authorization_denied"
    token_invalid = "token_invalid"
    precondition_failed = "precondition_failed"
    not_found = "not_found"
    conflict = "conflict"


# Session/Credential Manager
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
ACCOUNT_NOT_ACTIVE = "ACCOUNT_NOT_ACTIVE"
TOKEN_INVALID = "TOKEN_INVALID"
TOKEN_EXPIRED_OR_REVOKED = "TOKEN_EXPIRED_OR_REVOKED"
TENANT_NOT_ACTIVE = "TENANT_NOT_ACTIVE"
INVALID_CURRENT_PASSWORD = "INVALID_CURRENT_PASSWORD"
INVALID_PASSWORD = "INVALID_PASSWORD"

# Access policy
CROSS_TENANT_ACCESS_DENIED = "CROSS_TENANT_ACCESS_DENIED"
INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"

# Content lifecycle / grants
COMPETENCY_MAPPING_REQUIRED = "COMPETENCY_MAPPING_REQUIRED"
INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
INVALID_COMPETENCY = "INVALID_COMPETENCY"
CONTENT_UNAVAILABLE = "CONTENT_UNAVAILABLE"
INVALID_STATUS = "INVALID_STATUS"

# Lookups
USER_NOT_FOUND = "USER_NOT_FOUND"
TENANT_NOT_FOUND = "TENANT_NOT_FOUND"
CONTENT_NOT_FOUND = "CONTENT_NOT_FOUND"


ERROR_KINDS = {
    INVALID_CREDENTIALS: ErrorKind.authentication_failed,
    ACCOUNT_NOT_ACTIVE: ErrorKind.authentication_failed,
    TOKEN_INVALID: ErrorKind.token_invalid,
    TOKEN_EXPIRED_OR_REVOKED: ErrorKind.token_invalid,
    TENANT_NOT_ACTIVE: ErrorKind.authorization_denied,
    INVALID_CURRENT_PASSWORD: ErrorKind.authorization_denied,
    CROSS_TENANT_ACCESS_DENIED: ErrorKind.authorization_denied,
    INSUFFICIENT_ROLE: ErrorKind.authorization_denied,
    CONTENT_UNAVAILABLE: ErrorKind.authorization_denied,
    INVALID_PASSWORD: ErrorKind.precondition_failed,
    COMPETENCY_MAPPING_REQUIRED: ErrorKind.precondition_failed,
    INVALID_STATUS_TRANSITION: ErrorKind.precondition_failed,
    INVALID_COMPETENCY: ErrorKind.precondition_failed,
    INVALID_STATUS: ErrorKind.precondition_failed,
    USER_NOT_FOUND: ErrorKind.not_found,
    TENANT_NOT_FOUND: ErrorKind.not_found,
    CONTENT_NOT_FOUND: ErrorKind.not_found,
}


def kind_of(code: str) -> Optional[ErrorKind]:
    """Return the taxonomy kind of an error code, None for unclassified codes."""
    return ERROR_KINDS.get(code)
