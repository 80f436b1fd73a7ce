"""
User Management Use Cases

Principal status administration.
"""

from .update_principal_status_use_case import (
    UpdatePrincipalStatusResponse,
    UpdatePrincipalStatusUseCase,
)

__all__ = [
    "UpdatePrincipalStatusResponse",
    "UpdatePrincipalStatusUseCase",
]
