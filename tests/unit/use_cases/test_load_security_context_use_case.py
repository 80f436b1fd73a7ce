from uuid import uuid4

import pytest

from src.app.use_cases.auth.load_security_context_use_case import LoadSecurityContextUseCase
from src.domain.entities import PrincipalRole, PrincipalStatus, TenantStatus
from tests.fixtures.factories import future, make_user, past


def claims_for(user):
    return {
        "type": "access",
        "user_id": str(user.id),
        "tenant_id": str(user.tenant_id) if user.tenant_id else None,
        "role": user.role.value,
    }


@pytest.mark.asyncio
async def test_loads_live_context(mock_uow, college):
    user = make_user(PrincipalRole.college_admin, college)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.tenants.get_by_id.return_value = college

    result = await LoadSecurityContextUseCase(mock_uow).execute(claims_for(user))

    assert result.is_ok()
    context = result.value
    assert context.user_id == user.id
    assert context.tenant_id == college.id
    assert context.tenant_name == college.name
    assert context.role == PrincipalRole.college_admin
    assert not context.has_platform_scope


@pytest.mark.asyncio
async def test_role_comes_from_live_row(mock_uow, college):
    user = make_user(PrincipalRole.student, college)
    claims = claims_for(user)
    claims["role"] = PrincipalRole.college_admin.value
    mock_uow.users.get_by_id.return_value = user
    mock_uow.tenants.get_by_id.return_value = college

    result = await LoadSecurityContextUseCase(mock_uow).execute(claims)

    assert result.value.role == PrincipalRole.student


@pytest.mark.asyncio
async def test_platform_owner_has_platform_scope(mock_uow):
    user = make_user(PrincipalRole.bitflow_owner)
    mock_uow.users.get_by_id.return_value = user

    result = await LoadSecurityContextUseCase(mock_uow).execute(claims_for(user))

    assert result.value.has_platform_scope


@pytest.mark.asyncio
async def test_suspended_tenant_blocks_active_principal(mock_uow, college):
    college.status = TenantStatus.suspended
    user = make_user(PrincipalRole.student, college)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.tenants.get_by_id.return_value = college

    result = await LoadSecurityContextUseCase(mock_uow).execute(claims_for(user))

    assert result.error.code == "TENANT_NOT_ACTIVE"


@pytest.mark.asyncio
async def test_publisher_past_contract_end_blocks_admin(mock_uow, publisher):
    publisher.contract_end_date = past(1)
    user = make_user(PrincipalRole.publisher_admin, publisher)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.tenants.get_by_id.return_value = publisher

    result = await LoadSecurityContextUseCase(mock_uow).execute(claims_for(user))

    assert result.error.code == "TENANT_NOT_ACTIVE"


@pytest.mark.asyncio
async def test_publisher_inside_contract_window(mock_uow, publisher):
    publisher.contract_end_date = future(30)
    user = make_user(PrincipalRole.publisher_admin, publisher)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.tenants.get_by_id.return_value = publisher

    result = await LoadSecurityContextUseCase(mock_uow).execute(claims_for(user))

    assert result.is_ok()


@pytest.mark.asyncio
async def test_inactive_principal(mock_uow, college):
    user = make_user(PrincipalRole.student, college, status=PrincipalStatus.inactive)
    mock_uow.users.get_by_id.return_value = user

    result = await LoadSecurityContextUseCase(mock_uow).execute(claims_for(user))

    assert result.error.code == "ACCOUNT_NOT_ACTIVE"


@pytest.mark.asyncio
async def test_tenant_claim_mismatch(mock_uow, college):
    user = make_user(PrincipalRole.student, college)
    claims = claims_for(user)
    claims["tenant_id"] = str(uuid4())
    mock_uow.users.get_by_id.return_value = user

    result = await LoadSecurityContextUseCase(mock_uow).execute(claims)

    assert result.error.code == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_malformed_user_claim(mock_uow):
    result = await LoadSecurityContextUseCase(mock_uow).execute({"user_id": "not-a-uuid"})

    assert result.error.code == "TOKEN_INVALID"
    mock_uow.users.get_by_id.assert_not_called()
