"""Shared fixtures for the HTTP route tests."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_redis_client
from app.data.database import get_db
from app.main import app
from app.services.auth_services import get_current_user, get_optional_user


@pytest.fixture
def client(mock_db):
    """Test client with the database dependency replaced by a mock session."""
    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def authenticated(test_user):
    """Make every protected endpoint see test_user as the caller."""
    async def override_user():
        return test_user

    app.dependency_overrides[get_current_user] = override_user
    app.dependency_overrides[get_optional_user] = override_user
    return test_user


@pytest.fixture
def redis_override():
    redis_client = MagicMock()
    redis_client.get = AsyncMock(return_value=None)
    redis_client.set = AsyncMock()
    redis_client.delete = AsyncMock()

    async def override_redis():
        yield redis_client

    app.dependency_overrides[get_redis_client] = override_redis
    return redis_client
