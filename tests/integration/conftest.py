from types import SimpleNamespace

import bcrypt
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.entities import (
    Competency,
    CompetencyStatus,
    PrincipalRole,
    Tenant,
    TenantKind,
    User,
)


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def seed(db_session, test_data):
    """Tenants, principals and competencies from test_data.json; returns their ids"""
    password_hash = bcrypt.hashpw(
        test_data.get("password").encode(), bcrypt.gensalt(4)
    ).decode()

    ids = {}
    for key, data in test_data.records("tenants"):
        tenant = Tenant(name=data["name"], kind=TenantKind(data["kind"]))
        db_session.add(tenant)
        ids[key] = tenant.id

    emails = {}
    for key, data in test_data.records("users"):
        user = User(
            email=data["email"],
            password_hash=password_hash,
            full_name=data["full_name"],
            role=PrincipalRole(data["role"]),
            tenant_id=ids[data["tenant"]] if data["tenant"] else None,
        )
        db_session.add(user)
        ids[key] = user.id
        emails[key] = data["email"]

    competencies = {}
    for key, data in test_data.records("competencies"):
        competency = Competency(
            code=data["code"], title=data["title"], status=CompetencyStatus(data["status"])
        )
        db_session.add(competency)
        competencies[key] = str(competency.id)

    await db_session.commit()

    return SimpleNamespace(
        ids=ids,
        emails=emails,
        competencies=competencies,
        password=test_data.get("password"),
    )


@pytest_asyncio.fixture
async def login(client, seed):
    """Log a seeded principal in; returns the login response body"""

    async def _login(key: str) -> dict:
        response = await client.post(
            "/auth/login", json={"email": seed.emails[key], "password": seed.password}
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login
