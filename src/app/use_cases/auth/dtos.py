"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional
from pydantic import BaseModel


class PrincipalInfo(BaseModel):
    """Principal information in authentication responses"""

    id: str
    email: str
    full_name: str
    role: str
    tenant_id: Optional[str] = None
    tenant_kind: Optional[str] = None


class LoginResponse(BaseModel):
    """Response for login use case"""

    access_token: str
    refresh_token: str
    session_id: str
    principal: PrincipalInfo


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case

    refresh_token is only set when rotation is enabled.
    """

    access_token: str
    refresh_token: Optional[str] = None


class StatusResponse(BaseModel):
    """Generic acknowledgement for logout / change password"""

    status: str
    message: str
