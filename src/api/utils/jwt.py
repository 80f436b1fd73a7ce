from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig

ACCESS_TOKEN_TYPE = "access"
CONTENT_ACCESS_TOKEN_TYPE = "content_access"


def generate_jwt(
    user_id: UUID,
    role: str,
    tenant_id: Optional[UUID] = None,
    tenant_kind: Optional[str] = None,
) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        role: Principal role
        tenant_id: Bound college/publisher UUID, None for platform scope
        tenant_kind: "college" or "publisher"

    Returns:
        JWT token string (ACCESS_TOKEN_EXPIRE_MINUTES expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "type": ACCESS_TOKEN_TYPE,
        "user_id": str(user_id),
        "tenant_id": str(tenant_id) if tenant_id else None,
        "tenant_kind": tenant_kind,
        "role": role,
        "exp": now + timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES),
        "iat": now,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def create_content_access_token(claims: dict, expires_delta: timedelta) -> str:
    """
    Create a content access token with custom expiry

    Args:
        claims: session_id, content_unit_id, user_id, tenant_id, role, device_type
        expires_delta: Token expiration duration (content unit's session window)

    Returns:
        JWT token string
    """
    now = datetime.now(UTC)
    payload = {
        **claims,
        "type": CONTENT_ACCESS_TOKEN_TYPE,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string
        expected_type: Token type claim that must match

    Returns:
        Decoded payload dict or None if invalid, expired or of another type
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
    except JWTError:
        return None

    if payload.get("type") != expected_type:
        return None
    return payload
