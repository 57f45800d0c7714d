"""Shared fixtures: in-memory SQLite database and an ASGI test client.

Every test gets a fresh database; ``get_db`` is overridden so routes use it.
The app lifespan is not run, so no real database connection is attempted.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from products_api.database import Base, get_db  # noqa: E402
from products_api.main import app  # noqa: E402
import products_api.models  # noqa: E402, F401

ALLOWED_ORIGIN = os.environ["FRONTEND_URL"]


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def client(test_session_factory):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def product(client):
    """A product created through the API (id 1 on a fresh database)."""
    response = await client.post(
        "/api/products", json={"name": "Curved Monitor", "price": 300},
    )
    assert response.status_code == 201
    return response.json()["data"]
