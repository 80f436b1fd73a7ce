import pytest

from src.app.services.credentials import verify_password
from src.app.use_cases.auth.change_password_use_case import ChangePasswordUseCase
from src.domain.entities import AuditAction, PrincipalRole
from tests.fixtures.factories import PASSWORD, audit_actions, make_context, make_user


@pytest.fixture
def principal(mock_uow, college):
    user = make_user(PrincipalRole.faculty, college)
    mock_uow.users.get_by_id.return_value = user
    return user


@pytest.mark.asyncio
async def test_change_password_revokes_all_credentials(mock_uow, college, principal):
    context = make_context(PrincipalRole.faculty, college, user_id=principal.id)
    mock_uow.refresh_tokens.revoke_all_by_user_id.return_value = 3
    mock_uow.sessions.deactivate_all_by_user_id.return_value = 2

    result = await ChangePasswordUseCase(mock_uow).execute(context, PASSWORD, "BrandNewPass456!")

    assert result.is_ok()
    assert verify_password("BrandNewPass456!", principal.password_hash)
    assert mock_uow.refresh_tokens.revoke_all_by_user_id.call_args.args[0] == principal.id
    assert mock_uow.sessions.deactivate_all_by_user_id.call_args.args[0] == principal.id

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == AuditAction.password_changed.value
    assert audit.event_metadata == {"tokens_revoked": 3, "sessions_ended": 2}
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_change_password_wrong_current(mock_uow, college, principal):
    context = make_context(PrincipalRole.faculty, college, user_id=principal.id)
    original_hash = principal.password_hash

    result = await ChangePasswordUseCase(mock_uow).execute(context, "WrongPass!", "BrandNewPass456!")

    assert result.is_err()
    assert result.error.code == "INVALID_CURRENT_PASSWORD"
    assert principal.password_hash == original_hash
    mock_uow.refresh_tokens.revoke_all_by_user_id.assert_not_called()
    assert audit_actions(mock_uow) == [AuditAction.password_change_failed.value]


@pytest.mark.asyncio
@pytest.mark.parametrize("new_password", ["short", PASSWORD, "Long-" + "x" * 80])
async def test_change_password_rejects_invalid_new_password(
    mock_uow, college, principal, new_password
):
    context = make_context(PrincipalRole.faculty, college, user_id=principal.id)

    result = await ChangePasswordUseCase(mock_uow).execute(context, PASSWORD, new_password)

    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()
