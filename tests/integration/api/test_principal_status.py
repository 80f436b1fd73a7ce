import pytest
from httpx import AsyncClient

from tests.utils.http import bearer


@pytest.mark.asyncio
async def test_college_admin_deactivates_student(client: AsyncClient, login, seed):
    student_tokens = await login("student")
    admin_tokens = await login("college_admin")

    response = await client.patch(
        f"/principals/{seed.ids['student']}/status",
        json={"status": "INACTIVE", "reason": "Withdrew from program"},
        headers=bearer(admin_tokens),
    )

    assert response.status_code == 200
    assert response.json()["refresh_tokens_revoked"] == 1

    refresh = await client.post(
        "/auth/refresh", json={"refresh_token": student_tokens["refresh_token"]}
    )
    assert refresh.status_code == 401

    me = await client.get("/me", headers=bearer(student_tokens))
    assert me.status_code == 401
    assert me.json()["error"]["code"] == "ACCOUNT_NOT_ACTIVE"


@pytest.mark.asyncio
async def test_college_admin_cannot_touch_other_college(client: AsyncClient, login, seed):
    admin_tokens = await login("college_admin")

    response = await client.patch(
        f"/principals/{seed.ids['other_student']}/status",
        json={"status": "SUSPENDED"},
        headers=bearer(admin_tokens),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CROSS_TENANT_ACCESS_DENIED"


@pytest.mark.asyncio
async def test_student_cannot_change_status(client: AsyncClient, login, seed):
    tokens = await login("student")

    response = await client.patch(
        f"/principals/{seed.ids['faculty']}/status",
        json={"status": "SUSPENDED"},
        headers=bearer(tokens),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"
