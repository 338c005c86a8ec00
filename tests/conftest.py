import os

# settings are read at import time
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from main import app
from core import security
from core.database import Base, get_db
from domains.recipe.models import Recipe  # noqa: F401  (registers the recipe tables)
from domains.user.models import User
from domains.user.repository import UserRepository

# in-memory SQLite shared through a single connection
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PASSWORD = "password123"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory):
    # one session per request, like get_db
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session):
    user = User(
        username="chef_tester",
        email="chef@example.com",
        password=security.hash_password(PASSWORD),
    )
    return await UserRepository(db_session).save_user(user)


@pytest_asyncio.fixture
async def other_user(db_session):
    user = User(
        username="other_cook",
        email="other@example.com",
        password=security.hash_password(PASSWORD),
    )
    return await UserRepository(db_session).save_user(user)


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {security.create_jwt(user_id=str(user.id))}"}


@pytest.fixture
def auth_headers(test_user):
    return bearer(test_user)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)


@pytest_asyncio.fixture
async def authorized_client(client, auth_headers):
    client.headers.update(auth_headers)
    return client
