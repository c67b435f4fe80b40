"""
pytest configuration and fixtures for the users API test suite
In-memory SQLite for persistence, AsyncMock for layer isolation, httpx for HTTP.
"""

import os

# Settings require a database URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from unittest.mock import AsyncMock  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from faker import Faker  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from simple_example.app import create_app  # noqa: E402
from simple_example.database.connection import close_database, get_engine, init_database  # noqa: E402
from simple_example.repositories.user_repository import UserRepository  # noqa: E402
from simple_example.services.user_service import UserService, get_user_service  # noqa: E402

from factories import UserDataFactory  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def fake() -> Faker:
    return Faker()


@pytest.fixture
def user_factory(fake) -> UserDataFactory:
    return UserDataFactory(fake)


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database with the schema created"""
    await init_database(TEST_DATABASE_URL, create_schema=True)
    yield get_engine()
    await close_database()


@pytest_asyncio.fixture
async def session(database):
    async with AsyncSession(database, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def repository(session) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def mock_repository() -> AsyncMock:
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def service(mock_repository) -> UserService:
    return UserService(mock_repository)


@pytest.fixture
def mock_service() -> AsyncMock:
    return AsyncMock(spec=UserService)


@pytest.fixture
def app():
    return create_app()


@pytest_asyncio.fixture
async def client(app, mock_service):
    """HTTP client against the app with the user service replaced by a mock"""
    app.dependency_overrides[get_user_service] = lambda: mock_service
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client(app, database):
    """HTTP client against the full stack backed by the in-memory database"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
