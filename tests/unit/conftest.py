import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.entities import TenantKind
from tests.fixtures.factories import make_tenant

REPOSITORY_METHODS = {
    "users": ["get_by_email", "get_by_id", "create", "update"],
    "tenants": ["get_by_id", "create", "update", "get_publishers_with_expired_contracts"],
    "refresh_tokens": [
        "create",
        "get_by_token_hash",
        "mark_used_if_valid",
        "revoke_if_valid",
        "revoke_for_user",
        "revoke_all_by_user_id",
        "revoke_all_by_tenant_id",
    ],
    "sessions": [
        "create",
        "deactivate_by_refresh_token_id",
        "deactivate_all_by_user_id",
        "deactivate_all_by_tenant_id",
        "deactivate_expired",
    ],
    "content_units": ["get_by_id", "create", "update", "get_by_publisher_and_status"],
    "competencies": [
        "get_active_by_ids",
        "get_mapped_competency_ids",
        "count_mappings",
        "create_mapping",
    ],
    "access_grants": ["create"],
    "audit_events": ["create"],
}


def _echo(obj):
    return obj


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for repo_name, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            setattr(repo, method, AsyncMock())
        setattr(uow, repo_name, repo)

    # Writes return their argument like the real repositories
    for repo_name in ("users", "tenants", "content_units"):
        getattr(uow, repo_name).update.side_effect = _echo
    for repo_name in ("users", "tenants", "content_units", "refresh_tokens", "sessions",
                      "access_grants", "audit_events"):
        getattr(uow, repo_name).create.side_effect = _echo
    uow.competencies.create_mapping.side_effect = _echo

    return uow


@pytest.fixture
def publisher():
    return make_tenant(TenantKind.publisher)


@pytest.fixture
def college():
    return make_tenant(TenantKind.college)
