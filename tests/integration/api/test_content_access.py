from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.api.utils.jwt import CONTENT_ACCESS_TOKEN_TYPE, verify_jwt
from src.domain.entities import AccessGrant, AuditEvent
from tests.utils.http import bearer


async def publish(client, login, seed, test_data, **overrides):
    tokens = await login("publisher_admin")
    payload = test_data.get_copy("content_unit")
    payload["competency_ids"] = [seed.competencies["anatomy"]]
    payload.update(overrides)
    response = await client.post("/content-units", json=payload, headers=bearer(tokens))
    assert response.status_code == 201, response.text
    return response.json(), tokens


@pytest.mark.asyncio
async def test_college_student_gets_grant_for_active_content(
    client: AsyncClient, login, seed, test_data, db_session
):
    unit, _ = await publish(client, login, seed, test_data, session_expiry_minutes=20)
    tokens = await login("student")

    response = await client.post(
        f"/content-units/{unit['id']}/access", json={"device_type": "tablet"}, headers=bearer(tokens)
    )

    assert response.status_code == 200
    grant = response.json()
    assert grant["expires_in"] == 20 * 60
    assert grant["content"]["secure_access_url"] == test_data.get("content_unit")["secure_access_url"]
    assert grant["watermark"]["name"] == "Sam Student"
    assert grant["watermark"]["tenant"] == "Riverside Medical College"
    assert grant["watermark"]["session_id"] == grant["session_id"]

    claims = verify_jwt(grant["access_token"], expected_type=CONTENT_ACCESS_TOKEN_TYPE)
    assert claims["content_unit_id"] == unit["id"]
    assert claims["tenant_id"] == str(seed.ids["college"])

    rows = (await db_session.exec(select(AccessGrant))).all()
    assert len(rows) == 1
    assert str(rows[0].session_id) == grant["session_id"]
    assert rows[0].device_type == "tablet"

    accessed = (await db_session.exec(
        select(AuditEvent).where(AuditEvent.action == "content_accessed")
    )).all()
    assert len(accessed) == 1


@pytest.mark.asyncio
async def test_grant_without_watermark(client: AsyncClient, login, seed, test_data):
    unit, _ = await publish(client, login, seed, test_data, watermark_enabled=False)
    tokens = await login("faculty")

    response = await client.post(f"/content-units/{unit['id']}/access", headers=bearer(tokens))

    assert response.status_code == 200
    assert response.json()["watermark"] is None


@pytest.mark.asyncio
async def test_no_grant_for_pending_content(client: AsyncClient, login, seed, test_data):
    unit, _ = await publish(client, login, seed, test_data, competency_ids=[])
    tokens = await login("student")

    response = await client.post(f"/content-units/{unit['id']}/access", headers=bearer(tokens))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CONTENT_UNAVAILABLE"


@pytest.mark.asyncio
async def test_no_grant_after_deactivation(client: AsyncClient, login, seed, test_data):
    unit, publisher_tokens = await publish(client, login, seed, test_data)
    await client.patch(
        f"/content-units/{unit['id']}/status",
        json={"status": "INACTIVE"},
        headers=bearer(publisher_tokens),
    )
    tokens = await login("student")

    response = await client.post(f"/content-units/{unit['id']}/access", headers=bearer(tokens))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_no_grant_for_missing_content(client: AsyncClient, login):
    tokens = await login("student")

    response = await client.post(f"/content-units/{uuid4()}/access", headers=bearer(tokens))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CONTENT_NOT_FOUND"
