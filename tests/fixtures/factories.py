"""Entity and context builders shared by unit tests."""

from datetime import timedelta
from uuid import uuid4

import bcrypt

from src.app.services.security_context import ClientMeta, SecurityContext
from src.domain.base import utc_now
from src.domain.entities import (
    ContentStatus,
    ContentUnit,
    PrincipalRole,
    PrincipalStatus,
    Tenant,
    TenantKind,
    TenantStatus,
    User,
)

PASSWORD = "SecurePass123!"
PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()


def make_tenant(kind=TenantKind.publisher, status=TenantStatus.active, **kwargs) -> Tenant:
    return Tenant(
        id=kwargs.pop("id", uuid4()),
        name=kwargs.pop("name", "Acme Publishing" if kind == TenantKind.publisher else "Riverside College"),
        kind=kind,
        status=status,
        **kwargs,
    )


def make_user(role=PrincipalRole.student, tenant=None, status=PrincipalStatus.active, **kwargs) -> User:
    return User(
        id=kwargs.pop("id", uuid4()),
        email=kwargs.pop("email", f"{role.value.lower()}@example.com"),
        password_hash=kwargs.pop("password_hash", PASSWORD_HASH),
        full_name=kwargs.pop("full_name", "Test Principal"),
        role=role,
        status=status,
        tenant_id=tenant.id if tenant else None,
        **kwargs,
    )


def make_context(role=PrincipalRole.student, tenant=None, user_id=None) -> SecurityContext:
    return SecurityContext(
        user_id=user_id or uuid4(),
        email="caller@example.com",
        full_name="Caller",
        role=role,
        tenant_id=tenant.id if tenant else None,
        tenant_kind=tenant.kind if tenant else None,
        tenant_name=tenant.name if tenant else None,
        client=ClientMeta(ip_address="10.0.0.1", user_agent="pytest", path="/test", method="POST"),
    )


def make_content_unit(publisher, status=ContentStatus.active, **kwargs) -> ContentUnit:
    return ContentUnit(
        id=kwargs.pop("id", uuid4()),
        publisher_id=publisher.id,
        title=kwargs.pop("title", "Clinical Anatomy"),
        secure_access_url=kwargs.pop("secure_access_url", "https://cdn.example.com/anatomy"),
        status=status,
        created_by=kwargs.pop("created_by", uuid4()),
        **kwargs,
    )


def audit_actions(uow) -> list:
    """Actions of every audit event written through a mock unit of work"""
    return [call.args[0].action for call in uow.audit_events.create.call_args_list]


def future(days: int = 1):
    return utc_now() + timedelta(days=days)


def past(days: int = 1):
    return utc_now() - timedelta(days=days)
