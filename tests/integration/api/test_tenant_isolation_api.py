import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent
from tests.utils.http import bearer


async def unauthorized_events(db_session):
    return (await db_session.exec(
        select(AuditEvent).where(AuditEvent.action == "unauthorized_access")
    )).all()


@pytest.mark.asyncio
async def test_foreign_tenant_in_query_is_rejected(client: AsyncClient, login, seed, db_session):
    tokens = await login("student")
    foreign = str(seed.ids["other_college"])

    response = await client.get(f"/me?college_id={foreign}", headers=bearer(tokens))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CROSS_TENANT_ACCESS_DENIED"

    events = await unauthorized_events(db_session)
    assert len(events) == 1
    assert events[0].user_id == seed.ids["student"]
    assert events[0].event_metadata["caller_tenant_id"] == str(seed.ids["college"])
    assert events[0].event_metadata["requested_tenant_id"] == foreign
    assert events[0].event_metadata["source"] == "query"
    assert events[0].event_metadata["path"] == "/me"


@pytest.mark.asyncio
async def test_own_tenant_in_query_is_allowed(client: AsyncClient, login, seed, db_session):
    tokens = await login("student")

    response = await client.get(f"/me?tenant_id={seed.ids['college']}", headers=bearer(tokens))

    assert response.status_code == 200
    assert await unauthorized_events(db_session) == []


@pytest.mark.asyncio
async def test_foreign_tenant_in_body_is_rejected(client: AsyncClient, login, seed, db_session):
    tokens = await login("publisher_admin")

    response = await client.post(
        "/content-units",
        json={
            "title": "Smuggled",
            "secure_access_url": "https://cdn.example.com/x",
            "publisherId": str(seed.ids["other_publisher"]),
        },
        headers=bearer(tokens),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CROSS_TENANT_ACCESS_DENIED"
    events = await unauthorized_events(db_session)
    assert len(events) == 1
    assert events[0].event_metadata["source"] == "body"


@pytest.mark.asyncio
async def test_platform_owner_may_name_any_tenant(client: AsyncClient, login, seed, db_session):
    tokens = await login("owner")

    response = await client.get(f"/me?tenant_id={seed.ids['other_college']}", headers=bearer(tokens))

    assert response.status_code == 200
    assert await unauthorized_events(db_session) == []


@pytest.mark.asyncio
async def test_role_mismatch_is_rejected(client: AsyncClient, login, seed, db_session):
    tokens = await login("student")

    response = await client.post(
        "/content-units",
        json={"title": "Nope", "secure_access_url": "https://cdn.example.com/x"},
        headers=bearer(tokens),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"
    denied = (await db_session.exec(
        select(AuditEvent).where(AuditEvent.action == "permission_denied")
    )).all()
    assert len(denied) == 1


@pytest.mark.asyncio
async def test_managing_another_publishers_content_is_rejected(
    client: AsyncClient, login, seed, db_session
):
    owner_tokens = await login("publisher_admin")
    created = await client.post(
        "/content-units",
        json={"title": "Acme Book", "secure_access_url": "https://cdn.example.com/acme"},
        headers=bearer(owner_tokens),
    )
    assert created.status_code == 201
    unit_id = created.json()["id"]

    rival_tokens = await login("other_publisher_admin")
    response = await client.patch(
        f"/content-units/{unit_id}/status",
        json={"status": "INACTIVE"},
        headers=bearer(rival_tokens),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CROSS_TENANT_ACCESS_DENIED"
    assert len(await unauthorized_events(db_session)) == 1
