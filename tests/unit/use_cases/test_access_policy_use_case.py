from uuid import uuid4

import pytest

from src.app.use_cases.access import AccessPolicyUseCase
from src.domain.entities import AuditAction, PrincipalRole
from src.domain.tenant_isolation import TenantReference
from tests.fixtures.factories import audit_actions, make_context


@pytest.mark.asyncio
async def test_allowed_role_passes_without_audit(mock_uow, publisher):
    context = make_context(PrincipalRole.publisher_admin, publisher)

    result = await AccessPolicyUseCase(mock_uow).authorize_role(
        context, [PrincipalRole.publisher_admin, PrincipalRole.bitflow_owner]
    )

    assert result.is_ok()
    mock_uow.audit_events.create.assert_not_called()


@pytest.mark.asyncio
async def test_role_mismatch_is_denied_and_audited(mock_uow, college):
    context = make_context(PrincipalRole.student, college)

    result = await AccessPolicyUseCase(mock_uow).authorize_role(
        context, [PrincipalRole.publisher_admin]
    )

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"
    assert audit_actions(mock_uow) == [AuditAction.permission_denied.value]
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_cross_tenant_reference_is_denied_with_one_audit_event(mock_uow, college):
    context = make_context(PrincipalRole.college_admin, college)
    foreign = str(uuid4())

    result = await AccessPolicyUseCase(mock_uow).enforce_tenant_isolation(
        context,
        [
            TenantReference("path", "college_id", foreign),
            TenantReference("body", "tenant_id", str(uuid4())),
        ],
    )

    assert result.is_err()
    assert result.error.code == "CROSS_TENANT_ACCESS_DENIED"
    mock_uow.audit_events.create.assert_called_once()

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == AuditAction.unauthorized_access.value
    assert audit.event_metadata["caller_tenant_id"] == str(college.id)
    assert audit.event_metadata["requested_tenant_id"] == foreign
    assert audit.event_metadata["source"] == "path"
    assert audit.event_metadata["path"] == "/test"


@pytest.mark.asyncio
async def test_own_tenant_reference_passes(mock_uow, college):
    context = make_context(PrincipalRole.college_admin, college)

    result = await AccessPolicyUseCase(mock_uow).enforce_tenant_isolation(
        context, [TenantReference("query", "tenant_id", str(college.id))]
    )

    assert result.is_ok()
    mock_uow.audit_events.create.assert_not_called()


@pytest.mark.asyncio
async def test_platform_owner_passes_isolation(mock_uow):
    context = make_context(PrincipalRole.bitflow_owner)

    result = await AccessPolicyUseCase(mock_uow).enforce_tenant_isolation(
        context, [TenantReference("path", "tenant_id", str(uuid4()))]
    )

    assert result.is_ok()
