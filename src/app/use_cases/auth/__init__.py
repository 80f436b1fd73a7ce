"""
Authentication Use Cases

Session/credential management business logic.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .change_password_use_case import ChangePasswordUseCase
from .load_security_context_use_case import LoadSecurityContextUseCase
from .dtos import (
    LoginResponse,
    PrincipalInfo,
    RefreshTokenResponse,
    StatusResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "LoadSecurityContextUseCase",
    # DTOs
    "LoginResponse",
    "PrincipalInfo",
    "RefreshTokenResponse",
    "StatusResponse",
]
